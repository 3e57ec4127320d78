"""
Unit tests for the database schema and the Supabase wrapper.
"""

import asyncio

import pytest
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from drivingschool.db import session as db_session
from drivingschool.db.supabase import SupabaseClient
from drivingschool.errors import BackendError, DuplicateEmailError
from drivingschool.models import Lesson, User, Vehicle


def ddl(model) -> str:
    return str(CreateTable(model.__table__).compile(dialect=postgresql.dialect()))


class TestSchema:
    """DDL generated for PostgreSQL."""

    def test_lessons_exclusion_constraints(self):
        sql = ddl(Lesson)

        assert sql.count("EXCLUDE USING gist") == 3
        assert "tstzrange(starts_at, ends_at) WITH &&" in sql
        for column in ("instructor_id", "student_id", "vehicle_id"):
            assert f"{column} WITH =" in sql
        assert "status != 'cancelled'" in sql

    def test_lessons_window_check(self):
        assert "starts_at < ends_at" in ddl(Lesson)

    def test_unique_columns(self):
        assert "UNIQUE (email)" in ddl(User)
        assert "UNIQUE (registration)" in ddl(Vehicle)

    def test_engine_requires_url(self, monkeypatch):
        monkeypatch.setattr(db_session.settings, "DATABASE_URL", "")
        monkeypatch.setattr(db_session, "_engine", None)

        with pytest.raises(RuntimeError):
            db_session.get_engine()

    def test_connection_check(self):
        assert db_session.test_connection(create_engine("sqlite://")) is True

    def test_connection_check_failure(self, tmp_path):
        missing = tmp_path / "missing" / "db.sqlite"
        engine = create_engine(f"sqlite:///{missing}")

        assert db_session.test_connection(engine) is False


class TestSupabaseClient:
    """Error normalization of the Supabase wrapper."""

    def test_unconfigured_client(self):
        client = SupabaseClient(client=None)
        client.client = None

        assert not client.enabled
        with pytest.raises(BackendError):
            client.table("users")

    def test_mapped_error(self, db, fake_db):
        fake_db.fail_next("users", "insert", "23505")

        with pytest.raises(DuplicateEmailError):
            asyncio.run(db.execute(
                db.table("users").insert({"email": "x@y.fr"}),
                "test",
                errors={"23505": DuplicateEmailError()},
            ))

    def test_unmapped_error_uses_message(self, db, fake_db):
        fake_db.fail_next("users", "select", "42P01")

        with pytest.raises(BackendError) as exc:
            asyncio.run(db.execute(db.table("users").select("*"), "test", message="Erreur lors du chargement"))

        assert exc.value.message == "Erreur lors du chargement"

    def test_count(self, db, fake_db):
        fake_db.seed("users", [{"role": "student"}, {"role": "student"}, {"role": "admin"}])

        total = asyncio.run(db.count(db.table("users").select("id", count="exact").eq("role", "student"), "test"))

        assert total == 2


class TestHealth:
    """GET /health reports the schema connection when DATABASE_URL is set."""

    def test_without_database_url(self, client, monkeypatch):
        monkeypatch.setattr(db_session.settings, "DATABASE_URL", "")

        body = client.get("/health").json()

        assert "schema_connection" not in body

    def test_with_database_url(self, client, monkeypatch):
        monkeypatch.setattr(db_session.settings, "DATABASE_URL", "sqlite://")
        monkeypatch.setattr(db_session, "_engine", None)

        body = client.get("/health").json()

        assert body["schema_connection"] is True
