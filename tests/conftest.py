"""
Shared fixtures: in-memory Supabase, session store and API client.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from drivingschool.auth.dependencies import get_session_store
from drivingschool.auth.session import SessionStore
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.main import app
from drivingschool.schemas.user import UserPublic

from tests.fakes import FakeSupabase

PARIS = ZoneInfo("Europe/Paris")


def at(day: int, hour: int, minute: int = 0, month: int = 10, year: int = 2026) -> datetime:
    """Heure locale de l'auto-école (semaine du lundi 19 octobre 2026)"""
    return datetime(year, month, day, hour, minute, tzinfo=PARIS)


@pytest.fixture
def fake_db():
    return FakeSupabase(unique={"users": ["email"], "vehicles": ["registration"]})


@pytest.fixture
def db(fake_db):
    return SupabaseClient(client=fake_db)


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def client(db, store):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def people(fake_db):
    """Un administrateur, deux moniteurs, deux élèves et deux véhicules"""
    fake_db.seed("users", [
        {"id": "admin-1", "name": "Admin", "email": "admin@autoecole.fr", "password": "admin123", "role": "admin"},
        {"id": "inst-1", "name": "Pierre Martin", "email": "pierre@autoecole.fr", "password": "pierre123",
         "role": "instructor", "specialty": "Conduite accompagnée", "years_experience": 8},
        {"id": "inst-2", "name": "Claire Petit", "email": "claire@autoecole.fr", "password": "claire123",
         "role": "instructor", "years_experience": 3},
        {"id": "stud-1", "name": "Jean Dupont", "email": "jean@email.fr", "password": "jean123", "role": "student",
         "progress": {"driving_hours": 15, "target_hours": 20, "code_score": 36,
                      "maneuvers": {"parking": True, "city": True}}},
        {"id": "stud-2", "name": "Marie Durand", "email": "marie@email.fr", "password": "marie123", "role": "student"},
    ])
    fake_db.seed("vehicles", [
        {"id": "veh-1", "model": "Peugeot 208", "year": 2022, "registration": "AB-123-CD",
         "transmission": "manual", "fuel": "petrol", "status": "available"},
        {"id": "veh-2", "model": "Renault Clio", "year": 2021, "registration": "EF-456-GH",
         "transmission": "automatic", "fuel": "diesel", "status": "maintenance"},
    ])
    return fake_db


@pytest.fixture
def login(people, store):
    """Ouvrir une session pour un utilisateur existant et renvoyer les en-têtes"""
    def _login(user_id: str) -> dict:
        row = next(r for r in people.rows("users") if r["id"] == user_id)
        user = UserPublic(id=row["id"], name=row["name"], email=row["email"], role=row["role"])
        session = store.open(user)
        return {"Authorization": f"Bearer {session.token}"}
    return _login


@pytest.fixture
def seed_lesson(fake_db):
    """Insérer directement une leçon dans la base"""
    def _seed(lesson_id, starts_at, ends_at, instructor_id="inst-1", student_id="stud-1",
              vehicle_id="veh-1", status="scheduled", type="driving"):
        fake_db.seed("lessons", [{
            "id": lesson_id,
            "starts_at": starts_at.isoformat(),
            "ends_at": ends_at.isoformat(),
            "instructor_id": instructor_id,
            "student_id": student_id,
            "vehicle_id": vehicle_id,
            "status": status,
            "type": type,
            "notes": None,
        }])
    return _seed
