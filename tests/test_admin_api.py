from uuid import uuid4

from conftest import SAMPLE_SECTIONS


def _course_payload(**overrides):
    payload = {
        "title": "Hospital Cleaning",
        "description": "Infection control for clinical areas",
        "category": "Healthcare",
        "sections": SAMPLE_SECTIONS,
    }
    payload.update(overrides)
    return payload


def test_admin_routes_reject_cleaners(client, user_headers):
    resp = client.get("/v1/admin/courses", headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "ADMIN_REQUIRED"

    assert client.get("/v1/admin/dashboard").status_code == 401


def test_create_course_and_see_it_in_catalog(client, admin_headers, user_headers):
    resp = client.post("/v1/admin/courses", headers=admin_headers, json=_course_payload())
    assert resp.status_code == 201, resp.text
    course = resp.json()
    assert course["section_count"] == 3
    assert course["question_count"] == 4
    assert course["status"] == "active"

    listed = client.get("/v1/courses", headers=user_headers, params={"category": "Healthcare"}).json()
    assert [c["id"] for c in listed["courses"]] == [course["id"]]

    detail = client.get(f"/v1/courses/{course['id']}", headers=user_headers).json()
    assert detail["sections"][1]["questions"][0]["options"] == ["Safety Data Sheet", "The bottle colour"]


def test_create_course_rejects_bad_section_order(client, admin_headers):
    sections = [dict(SAMPLE_SECTIONS[0], order=1)]
    resp = client.post("/v1/admin/courses", headers=admin_headers, json=_course_payload(sections=sections))
    assert resp.status_code == 422


def test_update_replaces_sections(client, admin_headers):
    course = client.post("/v1/admin/courses", headers=admin_headers, json=_course_payload()).json()

    resp = client.patch(
        f"/v1/admin/courses/{course['id']}",
        headers=admin_headers,
        json={"title": "Hospital Cleaning v2", "sections": SAMPLE_SECTIONS[:1]},
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["title"] == "Hospital Cleaning v2"
    assert body["section_count"] == 1
    assert body["question_count"] == 2


def test_admin_course_list_counts_learners(client, admin_headers, user_headers, signup):
    course = client.post("/v1/admin/courses", headers=admin_headers, json=_course_payload()).json()
    other_headers, _ = signup()
    client.post(f"/v1/training/{course['id']}/next", headers=user_headers, json={"answer": "true"})
    client.post(f"/v1/training/{course['id']}/next", headers=other_headers, json={"answer": "false"})

    listed = client.get("/v1/admin/courses", headers=admin_headers, params={"search": "hospital"}).json()

    assert listed["total"] == 1
    assert listed["courses"][0]["learners_started"] == 2
    assert listed["courses"][0]["learners_completed"] == 0


def test_delete_deactivates_then_hard_deletes(client, admin_headers, user_headers):
    course = client.post("/v1/admin/courses", headers=admin_headers, json=_course_payload()).json()
    client.post(f"/v1/training/{course['id']}/next", headers=user_headers, json={"answer": "true"})

    assert client.delete(f"/v1/admin/courses/{course['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/v1/admin/courses/{course['id']}", headers=admin_headers).json()["status"] == "inactive"
    assert client.get(f"/v1/courses/{course['id']}", headers=user_headers).status_code == 404

    resp = client.delete(f"/v1/admin/courses/{course['id']}", headers=admin_headers, params={"hard": True})
    assert resp.status_code == 204
    resp = client.get(f"/v1/admin/courses/{course['id']}", headers=admin_headers)
    assert resp.status_code == 404
    assert client.get("/v1/courses/in-progress", headers=user_headers).json()["items"] == []


def test_admin_manages_users_and_credentials(client, admin_headers, signup):
    headers, user = signup(display_name="Riley Clean")
    client.put("/v1/me/credentials/first_aid", headers=headers, json={"document_number": "FA-1"})

    users = client.get("/v1/admin/users", headers=admin_headers, params={"search": "riley"}).json()
    assert [u["id"] for u in users["users"]] == [user["id"]]

    detail = client.get(f"/v1/admin/users/{user['id']}", headers=admin_headers).json()
    assert detail["credentials"][0]["doc_type"] == "first_aid"

    resp = client.patch(f"/v1/admin/users/{user['id']}/credentials/first_aid", headers=admin_headers, json={"verified": True})
    assert resp.status_code == 200, resp.text
    assert resp.json()["verified"] is True

    resp = client.patch(f"/v1/admin/users/{user['id']}", headers=admin_headers, json={"status": "active"})
    assert resp.json()["status"] == "active"

    resp = client.patch(f"/v1/admin/users/{user['id']}", headers=admin_headers, json={"status": "suspended"})
    assert resp.status_code == 200
    assert client.get("/v1/me", headers=headers).status_code == 401


def test_admin_user_not_found(client, admin_headers):
    resp = client.get(f"/v1/admin/users/{uuid4()}", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "USER_NOT_FOUND"


def test_admin_dashboard_counts(client, admin_headers, signup, make_course):
    signup()
    signup()
    make_course()

    stats = client.get("/v1/admin/dashboard", headers=admin_headers).json()

    assert stats["total_cleaners"] == 2
    assert stats["total_courses"] == 1
    assert stats["total_jobs"] == 0
    assert stats["pending_applications"] == 0
