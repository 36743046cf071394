"""
HTTP tests for the /workouts endpoints.

Runs the real app (SQLite in a temp dir) with the shared-secret verifier.
"""

from fastapi.testclient import TestClient

from treino.errors import StorageError
from treino.web import create_app

TEMPLATE_BODY = {
    "title": "Push Day",
    "description": "Chest and shoulders",
    "intensity": "HIGH",
    "durationSeconds": 3600,
    "exercises": [
        {"name": "Bench Press", "sets": 4, "reps": 6, "weight": 80, "rpe": 8.5},
        {"name": "Dips", "sets": 3, "reps": 10, "notes": "bodyweight"},
    ],
    "tags": ["push", "strength"],
}


class TestHealth:
    def test_health_is_public(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    def test_missing_header(self, client: TestClient):
        response = client.get("/workouts/templates")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing Authorization header"

    def test_invalid_token(self, client: TestClient):
        response = client.get(
            "/workouts/posts", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_expired_token(self, client: TestClient, make_token):
        token = make_token(expires_in=-30)
        response = client.get("/workouts/templates", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_auth_checked_before_body(self, client: TestClient):
        response = client.post(
            "/workouts/templates",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 401

    def test_rejected_request_touches_no_storage(self, client: TestClient, auth_headers):
        client.post("/workouts/templates", json=TEMPLATE_BODY)

        response = client.get("/workouts/templates", headers=auth_headers)
        assert response.json() == []


class TestTemplates:
    def test_create_returns_camel_case(self, client: TestClient, auth_headers):
        response = client.post("/workouts/templates", json=TEMPLATE_BODY, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == "user-1"
        assert data["title"] == "Push Day"
        assert data["intensity"] == "HIGH"
        assert data["durationSeconds"] == 3600
        assert [(e["name"], e["orderIndex"]) for e in data["exercises"]] == [
            ("Bench Press", 0),
            ("Dips", 1),
        ]
        assert data["exercises"][0]["weight"] == 80.0
        assert sorted(t["name"] for t in data["tags"]) == ["push", "strength"]
        assert "updatedAt" in data and "createdAt" in data

    def test_list_returns_own_templates(self, client: TestClient, auth_headers, make_token):
        client.post("/workouts/templates", json=TEMPLATE_BODY, headers=auth_headers)
        other = {"Authorization": f"Bearer {make_token('user-2')}"}
        client.post(
            "/workouts/templates",
            json={"title": "Other", "intensity": "LOW"},
            headers=other,
        )

        response = client.get("/workouts/templates", headers=auth_headers)

        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Push Day"]

    def test_validation_error(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/templates",
            json={"title": "", "intensity": "EXTREME"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        locs = [tuple(err["loc"]) for err in response.json()["detail"]]
        assert ("title",) in locs
        assert ("intensity",) in locs

    def test_malformed_json(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/templates",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 422


class TestPosts:
    def test_create_from_template(self, client: TestClient, auth_headers):
        template = client.post(
            "/workouts/templates", json=TEMPLATE_BODY, headers=auth_headers
        ).json()

        response = client.post(
            "/workouts/posts", json={"templateId": template["id"]}, headers=auth_headers
        )

        assert response.status_code == 201
        post = response.json()
        assert post["templateId"] == template["id"]
        assert post["title"] == "Push Day"
        assert post["intensity"] == "HIGH"
        assert post["durationSeconds"] == 3600
        assert [e["name"] for e in post["exercises"]] == ["Bench Press", "Dips"]
        assert post["exercises"][0]["completedSets"] is None
        assert sorted(t["name"] for t in post["tags"]) == ["push", "strength"]
        assert post["media"] == []

    def test_create_with_defaults(self, client: TestClient, auth_headers):
        response = client.post("/workouts/posts", json={}, headers=auth_headers)

        assert response.status_code == 201
        post = response.json()
        assert post["title"] == "Treino"
        assert post["intensity"] == "MEDIUM"
        assert post["templateId"] is None

    def test_create_with_unknown_template(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/posts", json={"templateId": 9999}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["title"] == "Treino"

    def test_create_with_media(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/posts",
            json={
                "title": "Evening lift",
                "date": "2024-05-01T18:00:00Z",
                "exercises": [{"name": "Squat", "sets": 5, "completedSets": 5}],
                "media": [{"url": "https://cdn/s.mp4", "type": "video", "sizeBytes": 1000}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        post = response.json()
        assert post["date"].startswith("2024-05-01T18:00:00")
        assert post["exercises"][0]["completedSets"] == 5
        assert post["media"][0] == {
            "id": post["media"][0]["id"],
            "url": "https://cdn/s.mp4",
            "type": "video",
            "sizeBytes": 1000,
        }

    def test_pagination(self, client: TestClient, auth_headers):
        for day in range(1, 13):
            client.post(
                "/workouts/posts",
                json={"title": f"Day {day}", "date": f"2024-03-{day:02d}T07:00:00Z"},
                headers=auth_headers,
            )

        response = client.get(
            "/workouts/posts", params={"page": 2, "pageSize": 5}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 12
        assert data["page"] == 2
        assert data["pageSize"] == 5
        assert [p["title"] for p in data["items"]] == [f"Day {d}" for d in range(7, 2, -1)]

    def test_pagination_defaults(self, client: TestClient, auth_headers):
        response = client.get("/workouts/posts", headers=auth_headers)

        assert response.json() == {"items": [], "total": 0, "page": 1, "pageSize": 10}

    def test_invalid_paging(self, client: TestClient, auth_headers):
        response = client.get(
            "/workouts/posts", params={"page": 0}, headers=auth_headers
        )

        assert response.status_code == 422

    def test_page_far_past_end(self, client: TestClient, auth_headers):
        client.post("/workouts/posts", json={"title": "Only"}, headers=auth_headers)

        response = client.get(
            "/workouts/posts",
            params={"page": 2**62, "pageSize": 1000},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 1

    def test_page_beyond_integer_range(self, client: TestClient, auth_headers):
        response = client.get(
            "/workouts/posts",
            params={"page": "99999999999999999999", "pageSize": 10},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert ["page"] in [err["loc"] for err in response.json()["detail"]]

    def test_template_id_beyond_integer_range(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/posts",
            json={"templateId": 99999999999999999999},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert ["templateId"] in [err["loc"] for err in response.json()["detail"]]

    def test_oversized_exercise_count(self, client: TestClient, auth_headers):
        response = client.post(
            "/workouts/templates",
            json={
                "title": "Huge",
                "intensity": "LOW",
                "exercises": [{"name": "Squat", "sets": 99999999999999999999}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 422
        locs = [err["loc"] for err in response.json()["detail"]]
        assert ["exercises", 0, "sets"] in locs
        assert client.get("/workouts/templates", headers=auth_headers).json() == []


class _FailingService:
    async def list_templates(self, user_id):
        raise StorageError("database is locked")


def test_storage_failure_is_500(test_settings, auth_headers):
    app = create_app(test_settings, service=_FailingService())

    with TestClient(app) as client:
        response = client.get("/workouts/templates", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Storage failure"}
