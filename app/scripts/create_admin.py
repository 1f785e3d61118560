from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running this file directly: `python app/scripts/create_admin.py`
if __package__ in (None, ""):
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from app.db.session import SessionLocal
from app.services.auth_service import ensure_admin


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an admin user, or promote an existing user to admin.")
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument("--password", required=True, help="Plain password (will be hashed)")
    parser.add_argument("--name", default="", help="Display name (optional)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if len(args.password) < 8:
        print("Error: password must be at least 8 characters", file=sys.stderr)
        return 2

    with SessionLocal() as db:
        user, created = ensure_admin(db, email=args.email, password=args.password, display_name=args.name)

    print(
        {
            "ok": True,
            "created": created,
            "id": str(user.id),
            "email": user.email,
            "display_name": user.display_name,
            "role": user.role,
        }
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
