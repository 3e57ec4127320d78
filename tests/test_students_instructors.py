"""
API tests for student and instructor management.
"""


class TestStudents:
    """Test cases for /students."""

    def test_create_returns_temporary_password(self, client, login, people):
        response = client.post("/students", json={
            "name": "Lucas Bernard",
            "email": "lucas@email.fr",
            "progress": {"driving_hours": 4},
        }, headers=login("admin-1"))

        assert response.status_code == 201
        body = response.json()
        assert len(body["temporary_password"]) == 12
        assert body["progress"]["driving_hours"] == 4
        assert body["progress"]["target_hours"] == 20
        row = next(u for u in people.rows("users") if u["email"] == "lucas@email.fr")
        assert row["role"] == "student"
        assert row["password"] == body["temporary_password"]

    def test_duplicate_email(self, client, login):
        response = client.post("/students", json={"name": "Jean", "email": "jean@email.fr"}, headers=login("admin-1"))

        assert response.status_code == 409

    def test_list_only_students(self, client, login):
        body = client.get("/students", headers=login("admin-1")).json()

        assert {s["id"] for s in body} == {"stud-1", "stud-2"}

    def test_update_progress_is_merged(self, client, login):
        response = client.put("/students/stud-1", json={
            "progress": {"code_score": 38, "maneuvers": {"highway": True}},
        }, headers=login("admin-1"))

        progress = response.json()["progress"]
        assert progress["code_score"] == 38
        assert progress["driving_hours"] == 15
        assert progress["maneuvers"]["highway"] is True
        assert progress["maneuvers"]["parking"] is True

    def test_get_instructor_as_student_is_not_found(self, client, login):
        assert client.get("/students/inst-1", headers=login("admin-1")).status_code == 404

    def test_delete(self, client, login, people):
        assert client.delete("/students/stud-2", headers=login("admin-1")).status_code == 200
        assert "stud-2" not in {u["id"] for u in people.rows("users")}


class TestInstructors:
    """Test cases for /instructors."""

    def test_create(self, client, login):
        response = client.post("/instructors", json={
            "name": "Sophie Leroy",
            "email": "sophie@autoecole.fr",
            "specialty": "Boîte automatique",
            "years_experience": 5,
        }, headers=login("admin-1"))

        assert response.status_code == 201
        assert response.json()["temporary_password"]
        assert response.json()["years_experience"] == 5

    def test_update(self, client, login):
        response = client.put("/instructors/inst-2", json={"specialty": "Permis moto"}, headers=login("admin-1"))

        assert response.json()["specialty"] == "Permis moto"

    def test_list(self, client, login):
        body = client.get("/instructors", headers=login("admin-1")).json()

        assert {i["id"] for i in body} == {"inst-1", "inst-2"}

    def test_delete_student_through_instructor_route(self, client, login):
        assert client.delete("/instructors/stud-1", headers=login("admin-1")).status_code == 404
