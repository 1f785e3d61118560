#!/usr/bin/env python3
"""
Create a training course from a JSON file via the admin REST API.

The file holds the same body POST /v1/admin/courses accepts:

    {
      "title": "Childcare Cleaning",
      "description": "...",
      "category": "Childcare Cleaning",
      "sections": [
        {"title": "Introduction", "order": 0,
         "questions": [{"text": "Are you ready to begin?", "type": "boolean"}]}
      ]
    }

The body is validated locally first, so a malformed course never reaches the
server.

Usage:
    python app/scripts/import_course.py --file course.json \\
        --server http://localhost:10723 --email admin@example.com --password ...

    # Validate only:
    python app/scripts/import_course.py --file course.json --dry-run
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

if __package__ in (None, ""):
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

import httpx
from pydantic import ValidationError

from app.schemas.admin_courses import AdminCourseCreateRequest


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import a training course via the admin API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--file", required=True, type=Path, help="Path to the course JSON file")
    parser.add_argument("--server", default="http://localhost:10723", help="Backend URL")
    parser.add_argument("--email", default="", help="Admin email")
    parser.add_argument("--password", default="", help="Admin password")
    parser.add_argument("--dry-run", action="store_true", help="Validate the file without calling the API")
    return parser.parse_args()


def load_course(path: Path) -> AdminCourseCreateRequest:
    with path.open(encoding="utf-8") as f:
        return AdminCourseCreateRequest.model_validate(json.load(f))


def main() -> int:
    args = parse_args()
    if not args.file.is_file():
        print(f"Error: file not found: {args.file}", file=sys.stderr)
        return 1

    try:
        course = load_course(args.file)
    except (ValidationError, json.JSONDecodeError) as exc:
        print(f"Error: invalid course definition:\n{exc}", file=sys.stderr)
        return 1

    questions = sum(len(section.questions) for section in course.sections)
    print(f"Course : {course.title} ({course.category})")
    print(f"Sections: {len(course.sections)}  Questions: {questions}")
    for section in course.sections:
        print(f"  [{section.order}] {section.title}: {len(section.questions)} question(s)")

    if args.dry_run:
        print("\n[dry-run] No changes made.")
        return 0

    if not args.email or not args.password:
        print("Error: --email and --password are required unless --dry-run", file=sys.stderr)
        return 2

    server = args.server.rstrip("/")
    with httpx.Client(timeout=30.0) as client:
        login = client.post(f"{server}/v1/auth/login", json={"email": args.email, "password": args.password})
        if login.status_code != 200:
            print(f"Error logging in: HTTP {login.status_code}: {login.text[:200]}", file=sys.stderr)
            return 1
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        resp = client.post(f"{server}/v1/admin/courses", json=course.model_dump(), headers=headers)
        if resp.status_code != 201:
            print(f"Error creating course: HTTP {resp.status_code}: {resp.text[:300]}", file=sys.stderr)
            return 1

    print(f"\nCreated course id={resp.json()['id']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
