import pytest
from bson import ObjectId

from conftest import STUDENT, TEACHER, login, register_student, register_teacher


@pytest.mark.parametrize("path, login_path", [
    ("/student/dashboard", "/student/login"),
    ("/student/update", "/student/login"),
    ("/teacher/dashboard", "/teacher/login"),
    ("/add-placement-drive", "/teacher/login"),
    ("/view_student", "/teacher/login"),
])
def test_gated_routes_redirect_without_session(client, path, login_path):
    response = client.get(path, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == login_path


def test_stale_student_session_is_not_found(client, db):
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")
    db.students.delete_many({})

    for path in ["/student/dashboard", "/student/update"]:
        response = client.get(path)
        assert response.status_code == 404
        assert response.text == "Student not found"


def test_stale_teacher_session_is_not_found(client, db):
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")
    db.teachers.delete_many({})

    response = client.get("/teacher/dashboard")

    assert response.status_code == 404
    assert response.text == "Teacher not found"


def test_malformed_session_id_is_not_found(client, store):
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")
    session_id = client.cookies.get(client.app.state.settings.session_cookie_name)
    store.sessions.save(session_id, {"student_id": "not-an-object-id"})

    assert client.get("/student/dashboard").status_code == 404


def test_student_dashboard(client):
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")

    response = client.get("/student/dashboard")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    body = response.json()
    assert body["view"] == "student_dashboard"
    student = body["student"]
    assert ObjectId.is_valid(student["_id"])
    assert student["roll"] == "CS101"
    assert student["placementStatus"] == "Not Placed"
    assert student["tenthPercentage"] == 91.5
    assert "password" not in student


def test_student_update_form(client):
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")

    response = client.get("/student/update")

    assert response.headers["cache-control"] == "no-store"
    assert response.json()["view"] == "update_registration_form"
    assert response.json()["student"]["college"] == STUDENT["college"]


def test_teacher_dashboard(client):
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")

    response = client.get("/teacher/dashboard")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    assert response.json()["teacher"]["name"] == TEACHER["name"]
    assert "password" not in response.json()["teacher"]


def test_student_cannot_open_teacher_pages(client):
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")

    for path in ["/teacher/dashboard", "/add-placement-drive", "/view_student"]:
        assert client.get(path, follow_redirects=False).headers["location"] == "/teacher/login"


def test_add_placement_drive_form(client):
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")

    response = client.get("/add-placement-drive")

    assert response.json() == {"view": "add_placement_drive", "success": None}
    assert response.headers["cache-control"] == "no-store"


def test_view_students_hides_passwords(client):
    register_student(client)
    register_student(client, email="ravi@example.com", roll="CS102", name="Ravi")
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")

    response = client.get("/view_student")

    body = response.json()
    assert body["view"] == "view_student"
    assert body["total"] == 2
    assert {s["roll"] for s in body["students"]} == {"CS101", "CS102"}
    assert all("password" not in s for s in body["students"])


def test_ungated_pages(client):
    assert client.get("/").json()["view"] == "home"
    assert client.get("/dashboard").json()["view"] == "student_dashboard"
