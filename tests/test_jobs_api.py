from uuid import uuid4

import pytest


def _job_payload(**overrides):
    payload = {
        "title": "End of lease clean",
        "project": "Harbour Apartments",
        "description": "Two bedroom units",
        "location": "Sydney",
        "category": "Residential",
        "start_date": "2026-11-10",
        "end_date": "2026-11-12",
        "pay_rate": 35.0,
        "hours_per_day": 7.5,
        "cleaners_needed": 3,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_job(client, admin_headers):
    def _create(**overrides):
        resp = client.post("/v1/admin/jobs", headers=admin_headers, json=_job_payload(**overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


def test_jobs_require_auth(client):
    assert client.get("/v1/jobs").status_code == 401


def test_list_and_filter_jobs(client, user_headers, create_job):
    create_job(title="A", location="Sydney", category="Residential", start_date="2026-11-01", end_date="2026-11-02")
    create_job(title="B", location="Melbourne", category="Office", start_date="2026-12-01", end_date="2026-12-02")

    jobs = client.get("/v1/jobs", headers=user_headers).json()["jobs"]
    assert [job["title"] for job in jobs] == ["B", "A"]

    jobs = client.get("/v1/jobs", headers=user_headers, params={"location": "Sydney"}).json()["jobs"]
    assert [job["title"] for job in jobs] == ["A"]

    jobs = client.get("/v1/jobs", headers=user_headers, params={"category": "Office"}).json()["jobs"]
    assert [job["title"] for job in jobs] == ["B"]

    assert client.get("/v1/jobs/recent", headers=user_headers, params={"limit": 1}).json()["total"] == 1


def test_get_job_not_found(client, user_headers):
    resp = client.get(f"/v1/jobs/{uuid4()}", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "JOB_NOT_FOUND"


def test_apply_once_per_job(client, user_headers, create_job):
    job = create_job()

    resp = client.post(f"/v1/jobs/{job['id']}/apply", headers=user_headers, json={"message": "  Keen  "})
    assert resp.status_code == 201, resp.text
    application = resp.json()
    assert application["status"] == "pending"
    assert application["message"] == "Keen"
    assert application["job_title"] == job["title"]

    resp = client.post(f"/v1/jobs/{job['id']}/apply", headers=user_headers)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "ALREADY_APPLIED"

    mine = client.get("/v1/jobs/applications/mine", headers=user_headers).json()
    assert mine["total"] == 1


def test_cannot_apply_to_closed_job(client, user_headers, admin_headers, create_job):
    job = create_job()
    resp = client.patch(f"/v1/admin/jobs/{job['id']}", headers=admin_headers, json={"status": "filled"})
    assert resp.status_code == 200, resp.text

    resp = client.post(f"/v1/jobs/{job['id']}/apply", headers=user_headers)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "JOB_NOT_OPEN"


def test_job_dates_are_validated(client, admin_headers, create_job):
    resp = client.post(
        "/v1/admin/jobs",
        headers=admin_headers,
        json=_job_payload(start_date="2026-11-10", end_date="2026-11-01"),
    )
    assert resp.status_code == 422

    job = create_job()
    resp = client.patch(f"/v1/admin/jobs/{job['id']}", headers=admin_headers, json={"end_date": "2026-01-01"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "JOB_INVALID"


def test_admin_reviews_applications(client, signup, admin_headers, create_job):
    job = create_job()
    applicant_headers, applicant = signup(display_name="Jordan")
    client.post(f"/v1/jobs/{job['id']}/apply", headers=applicant_headers)

    listed = client.get(f"/v1/admin/jobs/{job['id']}/applications", headers=admin_headers).json()
    assert listed["total"] == 1
    application = listed["applications"][0]
    assert application["user_id"] == applicant["id"]
    assert application["applicant_name"] == "Jordan"

    resp = client.patch(
        f"/v1/admin/jobs/applications/{application['id']}",
        headers=admin_headers,
        json={"status": "approved", "admin_notes": "Start Monday"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "approved"

    mine = client.get("/v1/jobs/applications/mine", headers=applicant_headers).json()["applications"]
    assert mine[0]["status"] == "approved"
    assert mine[0]["admin_notes"] == "Start Monday"


def test_admin_job_search(client, admin_headers, create_job):
    create_job(title="Hospital deep clean", project="St Mary")
    create_job(title="Office vacuum", project="Tower B")

    jobs = client.get("/v1/admin/jobs", headers=admin_headers, params={"search": "hospital"}).json()["jobs"]

    assert [job["title"] for job in jobs] == ["Hospital deep clean"]
