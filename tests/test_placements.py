from datetime import datetime

from conftest import PLACEMENT, STUDENT, TEACHER, login, register_student, register_teacher


def add_placement(client, **overrides):
    return client.post(
        "/add_placement_drive", json={**PLACEMENT, **overrides}, follow_redirects=False
    )


def test_add_placement_redirects_to_listing(client, db):
    response = add_placement(client)

    assert response.status_code == 303
    assert response.headers["location"] == "/view-placement-details"
    assert db.placements.count_documents({}) == 1


def test_teacher_sees_created_placement_verbatim(client):
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")
    add_placement(client)

    response = client.get("/view-placement-details")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    body = response.json()
    assert body["view"] == "view_placement_details"
    assert body["total"] == 1
    placement = body["placements"][0]
    placement.pop("_id")
    assert placement == PLACEMENT


def test_student_sees_placements_in_own_view(client):
    add_placement(client)
    add_placement(client, companyName="Globex", jobProfile="Data Analyst", location="Austin")
    register_student(client)
    login(client, "student", STUDENT["email"], "abc123")

    body = client.get("/view-placement-details").json()

    assert body["view"] == "stud_placement"
    assert body["total"] == 2
    assert {p["companyName"] for p in body["placements"]} == {"Acme", "Globex"}


def test_listing_without_session_goes_home(client):
    add_placement(client)

    response = client.get("/view-placement-details", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/"


def test_empty_listing(client):
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")

    body = client.get("/view-placement-details").json()

    assert body["placements"] == []
    assert body["total"] == 0


def test_bson_dates_listed_as_iso_dates(client, db):
    db.placements.insert_one({
        "companyName": "Initech",
        "jobProfile": "QA",
        "description": "Testing",
        "location": "Remote",
        "date": datetime(2023, 6, 15),
    })
    register_teacher(client)
    login(client, "teacher", TEACHER["email"], "abc123")

    placement = client.get("/view-placement-details").json()["placements"][0]

    assert placement["date"] == "2023-06-15"


def test_add_placement_accepts_form_post(client, db):
    response = client.post("/add_placement_drive", data=PLACEMENT, follow_redirects=False)

    assert response.status_code == 303
    stored = db.placements.find_one()
    assert stored["companyName"] == "Acme"
    assert stored["date"] == "2024-01-01"
