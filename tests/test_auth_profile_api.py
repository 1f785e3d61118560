from datetime import date, timedelta
from uuid import uuid4


def test_register_then_login(client):
    email = f"Cleaner_{uuid4().hex[:6]}@Example.com"
    resp = client.post("/v1/auth/register", json={"email": email, "password": "Sparkle-2026"})
    assert resp.status_code == 201, resp.text
    user = resp.json()["user"]
    assert user["email"] == email.lower()
    assert user["role"] == "cleaner"
    assert user["status"] == "pending"
    assert user["display_name"] == email.lower().split("@")[0]

    login = client.post("/v1/auth/login", json={"email": email.lower(), "password": "Sparkle-2026"})
    assert login.status_code == 200, login.text
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    assert client.get("/v1/me", headers=headers).json()["id"] == user["id"]


def test_duplicate_registration_is_rejected(client, signup):
    email = f"dup_{uuid4().hex[:6]}@example.com"
    signup(email=email)

    resp = client.post("/v1/auth/register", json={"email": email, "password": "Another-pass1"})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "EMAIL_ALREADY_REGISTERED"


def test_wrong_password_and_bad_token(client, signup):
    email = f"pw_{uuid4().hex[:6]}@example.com"
    signup(email=email, password="Correct-horse1")

    resp = client.post("/v1/auth/login", json={"email": email, "password": "Wrong-horse1"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "INVALID_CREDENTIALS"

    resp = client.get("/v1/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "INVALID_TOKEN"


def test_profile_completion_tracks_required_fields(client, user_headers):
    resp = client.patch("/v1/me/profile", headers=user_headers, json={"phone": "0400 000 000", "skills": ["mopping", " mopping ", "windows"]})
    assert resp.status_code == 200, resp.text
    profile = resp.json()
    assert profile["profile_complete"] is False
    assert profile["skills"] == ["mopping", "windows"]

    resp = client.patch(
        "/v1/me/profile",
        headers=user_headers,
        json={
            "address": "1 George St, Sydney",
            "abn": "12345678901",
            "bank_name": "Bank",
            "account_name": "Test Cleaner",
            "bsb": "062-000",
            "account_number": "12345678",
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["profile_complete"] is True
    assert client.get("/v1/me", headers=user_headers).json()["profile_complete"] is True


def test_profile_rejects_malformed_abn_and_bsb(client, user_headers):
    assert client.patch("/v1/me/profile", headers=user_headers, json={"abn": "123"}).status_code == 422
    assert client.patch("/v1/me/profile", headers=user_headers, json={"bsb": "12-34"}).status_code == 422


def test_credential_lifecycle(client, user_headers):
    expiry = (date.today() + timedelta(days=365)).isoformat()
    resp = client.put(
        "/v1/me/credentials/white_card",
        headers=user_headers,
        json={"document_number": "WC-1", "expiry_date": expiry},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["verified"] is False
    assert resp.json()["expired"] is False

    resp = client.put(
        "/v1/me/credentials/police_check",
        headers=user_headers,
        json={"document_number": "PC-9", "expiry_date": "2020-01-01"},
    )
    assert resp.json()["expired"] is True

    listed = client.get("/v1/me/credentials", headers=user_headers).json()["credentials"]
    assert [doc["doc_type"] for doc in listed] == ["police_check", "white_card"]

    assert client.put("/v1/me/credentials/passport", headers=user_headers, json={}).status_code == 422

    assert client.delete("/v1/me/credentials/white_card", headers=user_headers).status_code == 204
    resp = client.delete("/v1/me/credentials/white_card", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "CREDENTIAL_NOT_FOUND"


def test_dashboard_collects_jobs_applications_and_courses(client, user_headers, admin_headers, make_course):
    course = make_course()
    job = client.post(
        "/v1/admin/jobs",
        headers=admin_headers,
        json={
            "title": "Night clean",
            "project": "Tower A",
            "location": "Sydney",
            "category": "Office Cleaning",
            "start_date": "2026-11-01",
            "end_date": "2026-11-05",
            "pay_rate": 32.5,
            "hours_per_day": 6,
            "cleaners_needed": 2,
        },
    ).json()
    client.post(f"/v1/jobs/{job['id']}/apply", headers=user_headers, json={"message": "Available"})
    client.post(f"/v1/training/{course.id}/next", headers=user_headers, json={"answer": "true"})

    resp = client.get("/v1/me/dashboard", headers=user_headers)

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert [j["id"] for j in body["recent_jobs"]] == [job["id"]]
    assert body["applications"][0]["status"] == "pending"
    assert body["courses_in_progress"][0]["course_id"] == str(course.id)
    assert body["courses_completed"] == 0
