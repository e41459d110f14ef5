import mongomock
import pytest
from fastapi.testclient import TestClient

from placement_portal.core.config import Settings
from placement_portal.db.mongodb import init_mongo_indexes
from placement_portal.main import create_app

STUDENT = {
    "roll": "CS101",
    "name": "Asha Rao",
    "email": "asha@example.com",
    "password": "abc123",
    "age": 21,
    "college": "City Engineering College",
    "placementStatus": "Not Placed",
    "graduation": 8.2,
    "pgraduation": 8.9,
    "experience": "AWS Cloud Practitioner",
    "phoneNumber": "9876543210",
    "placeOfBirth": "Pune",
    "tenthPercentage": 91.5,
    "twelfthPercentage": 88.0,
}

TEACHER = {
    "name": "Meera Iyer",
    "email": "meera@example.com",
    "password": "abc123",
}

PLACEMENT = {
    "companyName": "Acme",
    "jobProfile": "SWE",
    "description": "...",
    "location": "NY",
    "date": "2024-01-01",
}


def make_settings(**overrides) -> Settings:
    overrides.setdefault("bcrypt_rounds", 4)
    return Settings(_env_file=None, **overrides)


def make_client(settings: Settings, db) -> TestClient:
    init_mongo_indexes(db)
    return TestClient(create_app(settings, db))


@pytest.fixture
def db():
    return mongomock.MongoClient()["placement_test"]


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings, db):
    return make_client(settings, db)


@pytest.fixture
def store(client):
    return client.app.state.store


def register_student(client, **overrides):
    return client.post(
        "/student/register", json={**STUDENT, **overrides}, follow_redirects=False
    )


def register_teacher(client, **overrides):
    return client.post("/teacher/register", json={**TEACHER, **overrides})


def login(client, kind, email, password):
    return client.post(
        f"/{kind}/login",
        json={"email": email, "password": password},
        follow_redirects=False
    )
