"""
API tests through the FastAPI TestClient.

Checks routing, authentication and role checks, request validation and the
notification payloads the front-end displays. The database connection is a
mock and the auth API is an httpx.MockTransport.
"""

from typing import Any, Dict
from uuid import uuid4

import httpx
import pytest

from faculty_rating.core.auth import SupabaseAuthClient
from faculty_rating.core.dependencies import get_auth_client
from faculty_rating.main import app
from faculty_rating.tests.conftest import SECTION_ID, STUDENT_USER_ID, scores, utc


def faculty_row(**overrides: Any) -> Dict[str, Any]:
    row = {
        "id": uuid4(),
        "name": "Dr. Alice Smith",
        "email": "alice@university.edu",
        "department": "Computer Science",
        "position": "Professor",
        "created_at": utc(2024, 1, 1),
    }
    row.update(overrides)
    return row


FACULTY_FORM = {
    "name": "Dr. Alice Smith",
    "email": "alice@university.edu",
    "department": "Computer Science",
    "position": "Professor",
}


@pytest.fixture
def auth_api(client):
    """Route auth API calls to a handler the test installs."""
    handlers = {}

    def dispatch(request: httpx.Request) -> httpx.Response:
        return handlers[request.url.path](request)

    app.dependency_overrides[get_auth_client] = lambda: SupabaseAuthClient(
        base_url="http://supabase.test/auth/v1",
        api_key="test-anon-key",
        transport=httpx.MockTransport(dispatch),
    )
    return handlers


class TestServiceEndpoints:

    def test_health(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client) -> None:
        assert client.get("/").json()["name"] == "Faculty Rating API"


class TestAcademics:

    def test_years_are_public(self, client, mock_conn) -> None:
        year_id = uuid4()
        mock_conn.fetch.return_value = [{"id": year_id, "name": "2024"}]

        response = client.get("/academics/years")

        assert response.status_code == 200
        assert response.json() == [{"id": str(year_id), "name": "2024"}]

    def test_registration_number_search(self, client, mock_conn) -> None:
        mock_conn.fetch.return_value = [{"id": uuid4(), "registration_number": "21CS001"}]

        response = client.get("/academics/registration-numbers", params={"search": "21cs"})

        assert response.status_code == 200
        assert mock_conn.fetch.await_args.args[1] == "%21cs%"

    @pytest.mark.parametrize('term, pattern', [
        ("21_A", "%21\\_A%"),
        ("50%", "%50\\%%"),
        ("a\\b", "%a\\\\b%"),
    ])
    def test_registration_number_search_is_literal(self, client, mock_conn, term, pattern) -> None:
        response = client.get("/academics/registration-numbers", params={"search": term})

        assert response.status_code == 200
        sql, arg = mock_conn.fetch.await_args.args[:2]
        assert "ESCAPE '\\'" in sql
        assert arg == pattern

    def test_database_failure_becomes_notification(self, client, mock_conn) -> None:
        mock_conn.fetch.side_effect = OSError("connection refused")

        response = client.get("/academics/subjects")

        assert response.status_code == 500
        assert response.json()["detail"]["variant"] == "destructive"


class TestAuthentication:

    def test_missing_token(self, client) -> None:
        response = client.get("/faculty")

        assert response.status_code == 401
        assert response.json()["detail"] == {
            "title": "Not authenticated",
            "description": "Please log in to continue",
            "variant": "destructive",
        }

    def test_garbage_token(self, client) -> None:
        response = client.get("/faculty", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_login(self, client, auth_api) -> None:
        auth_api["/auth/v1/token"] = lambda request: httpx.Response(200, json={
            "access_token": "tok",
            "refresh_token": "ref",
            "token_type": "bearer",
            "expires_in": 3600,
            "user": {"id": str(STUDENT_USER_ID), "email": "asha@university.edu"},
        })

        response = client.post("/auth/login", json={"email": "asha@university.edu", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["notification"]["title"] == "Login successful"
        assert body["session"]["access_token"] == "tok"
        assert body["user"]["email"] == "asha@university.edu"

    def test_login_failure(self, client, auth_api) -> None:
        auth_api["/auth/v1/token"] = lambda request: httpx.Response(
            400, json={"error_description": "Invalid login credentials"}
        )

        response = client.post("/auth/login", json={"email": "asha@university.edu", "password": "bad"})

        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Login Failed"
        assert response.json()["detail"]["description"] == "Invalid login credentials"

    def test_signup_asks_for_email_verification(self, client, auth_api) -> None:
        auth_api["/auth/v1/signup"] = lambda request: httpx.Response(
            200, json={"id": str(uuid4()), "email": "new@university.edu"}
        )

        response = client.post("/auth/signup", json={"email": "new@university.edu", "password": "pw123456"})

        assert response.status_code == 200
        assert response.json()["notification"] == {
            "title": "Sign Up successful",
            "description": "Please check your email for verification instructions.",
            "variant": "default",
        }

    def test_session(self, client, auth_api, admin_headers) -> None:
        auth_api["/auth/v1/user"] = lambda request: httpx.Response(
            200, json={"id": str(uuid4()), "email": "admin@university.edu", "aud": "authenticated"}
        )

        response = client.get("/auth/session", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["is_admin"] is True
        assert body["details"]["email"] == "admin@university.edu"

    def test_session_requires_token(self, client) -> None:
        assert client.get("/auth/session").status_code == 401

    def test_logout(self, client, auth_api, student_headers) -> None:
        auth_api["/auth/v1/logout"] = lambda request: httpx.Response(204)

        response = client.post("/auth/logout", headers=student_headers)

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Logged out successfully"


class TestFacultyEndpoints:

    def test_list_requires_login_only(self, client, mock_conn, student_headers) -> None:
        mock_conn.fetch.return_value = [faculty_row()]

        response = client.get("/faculty", headers=student_headers)

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Dr. Alice Smith"

    def test_students_cannot_add_faculty(self, client, student_headers) -> None:
        response = client.post("/faculty", json=FACULTY_FORM, headers=student_headers)

        assert response.status_code == 403
        assert response.json()["detail"]["title"] == "Access denied"

    def test_admin_adds_faculty(self, client, mock_conn, admin_headers) -> None:
        mock_conn.fetchrow.return_value = faculty_row()

        response = client.post("/faculty", json=FACULTY_FORM, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["notification"]["title"] == "Faculty added successfully"

    def test_invalid_form(self, client, admin_headers) -> None:
        response = client.post(
            "/faculty", json=dict(FACULTY_FORM, name="A", email="not-an-email"), headers=admin_headers
        )
        assert response.status_code == 422

    def test_update_missing_faculty(self, client, admin_headers) -> None:
        response = client.put(f"/faculty/{uuid4()}", json={"position": "Dean"}, headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"]["description"] == "Faculty member not found"

    def test_delete(self, client, mock_conn, admin_headers) -> None:
        mock_conn.execute.return_value = "DELETE 1"

        response = client.delete(f"/faculty/{uuid4()}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Faculty deleted successfully"


class TestStudentEndpoints:

    def test_dashboard_without_profile(self, client, student_headers) -> None:
        response = client.get("/students/me", headers=student_headers)

        assert response.status_code == 404
        assert response.json()["detail"]["title"] == "Profile not found"

    def test_dashboard(self, client, mock_conn, student_headers, student_profile_row) -> None:
        mock_conn.fetchrow.return_value = student_profile_row
        mock_conn.fetch.return_value = [
            dict(scores(4), id=uuid4(), created_at=utc(2024, 3, 1), feedback=None,
                 faculty_name="Dr. Alice Smith", subject_name="Algorithms"),
        ]

        response = client.get("/students/me", headers=student_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total_ratings"] == 1
        assert body["average_rating"] == 4.0
        assert body["profile"]["section_name"] == "A"

    def test_rating_out_of_range(self, client, student_headers) -> None:
        payload = dict(scores(4), faculty_assignment_id=str(uuid4()), engagement=6)

        response = client.post("/students/ratings", json=payload, headers=student_headers)

        assert response.status_code == 422

    def test_submit_rating(self, client, mock_conn, student_headers, student_profile_row) -> None:
        assignment_id = uuid4()
        subject_id = uuid4()
        mock_conn.fetchrow.side_effect = [
            student_profile_row,
            {
                "faculty_assignment_id": assignment_id,
                "faculty_id": uuid4(),
                "subject_id": subject_id,
                "section_id": SECTION_ID,
                "faculty_name": "Dr. Alice Smith",
                "subject_name": "Algorithms",
                "section_name": "A",
            },
            dict(
                scores(4),
                id=uuid4(),
                faculty_assignment_id=assignment_id,
                student_id=STUDENT_USER_ID,
                subject_id=subject_id,
                section_id=SECTION_ID,
                feedback="",
                created_at=utc(2024, 3, 1),
            ),
        ]

        response = client.post(
            "/students/ratings",
            json=dict(scores(4), faculty_assignment_id=str(assignment_id), feedback=""),
            headers=student_headers,
        )

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Rating submitted successfully"
        assert response.json()["rating"]["engagement"] == 4

    def test_register_incomplete_form(self, client) -> None:
        response = client.post("/students/register", json={"name": "Asha Rao"})

        assert response.status_code == 400
        assert response.json()["detail"]["description"] == "Please fill in all fields"


class TestStarRatingEndpoints:

    def test_rating_requires_selection(self, client, student_headers) -> None:
        response = client.post("/ratings", json={"faculty_id": str(uuid4()), "rating": 0},
                               headers=student_headers)

        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Please select faculty and rating"

    def test_faculty_stats(self, client, mock_conn, student_headers) -> None:
        mock_conn.fetch.return_value = []
        response = client.get("/ratings/faculty-stats", headers=student_headers)
        assert response.status_code == 200
        assert response.json() == []


class TestAdminEndpoints:

    def test_dashboard_requires_admin(self, client, student_headers) -> None:
        assert client.get("/admin/dashboard", headers=student_headers).status_code == 403

    def test_empty_dashboard(self, client, mock_conn, admin_headers) -> None:
        mock_conn.fetchval.return_value = 0

        response = client.get("/admin/dashboard", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["kpis"]["total_ratings"] == 0
        assert body["faculty"] == []
        assert len(body["distribution"]) == 4

    def test_dashboard_charts(self, client, mock_conn, admin_headers) -> None:
        mock_conn.fetchval.return_value = 0

        response = client.get("/admin/dashboard/charts", headers=admin_headers)

        assert response.status_code == 200
        assert set(response.json()) == {
            "faculty_comparison", "performance_trends",
            "performance_distribution", "department_performance",
        }

    def test_faculty_detail_not_found(self, client, admin_headers) -> None:
        response = client.get(f"/admin/faculty/{uuid4()}", headers=admin_headers)
        assert response.status_code == 404

    def test_faculty_detail(self, client, mock_conn, admin_headers) -> None:
        faculty = faculty_row()
        mock_conn.fetchrow.return_value = faculty
        mock_conn.fetch.return_value = [
            dict(scores(5), id=uuid4(), created_at=utc(2024, 1, 10), feedback="Great",
                 subject_name="Algorithms", section_name="A"),
        ]

        response = client.get(f"/admin/faculty/{faculty['id']}", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["band"] == "Excellent"
        assert body["badge"] == "Excellent"
        assert body["best_criterion"]["key"] == "engagement"
        assert body["overall_average"] == 5.0
        assert body["timeline"][0]["date"] == "2024-01-10"

    def test_form_options(self, client, admin_headers) -> None:
        response = client.get("/admin/form-options", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"years": [], "semesters": [], "sections": [], "subjects": []}
