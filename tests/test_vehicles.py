"""
API tests for the vehicle fleet.
"""


class TestVehicles:
    """Test cases for /vehicles."""

    def test_list_and_search(self, client, login):
        headers = login("admin-1")

        assert len(client.get("/vehicles", headers=headers).json()) == 2
        found = client.get("/vehicles", params={"search": "clio"}, headers=headers).json()
        assert [v["id"] for v in found] == ["veh-2"]
        by_plate = client.get("/vehicles", params={"search": "ab-123"}, headers=headers).json()
        assert [v["id"] for v in by_plate] == ["veh-1"]

    def test_status_filter(self, client, login):
        found = client.get("/vehicles", params={"status": "maintenance"}, headers=login("admin-1")).json()

        assert [v["id"] for v in found] == ["veh-2"]

    def test_create_normalizes_registration(self, client, login):
        response = client.post("/vehicles", json={
            "model": "Toyota Yaris",
            "year": 2023,
            "registration": "ij-789-kl",
            "transmission": "automatic",
            "fuel": "hybrid",
        }, headers=login("admin-1"))

        assert response.status_code == 201
        body = response.json()
        assert body["registration"] == "IJ-789-KL"
        assert body["status"] == "available"

    def test_duplicate_registration(self, client, login, people):
        response = client.post("/vehicles", json={
            "model": "Peugeot 208",
            "year": 2022,
            "registration": "ab-123-cd",
        }, headers=login("admin-1"))

        assert response.status_code == 409
        assert response.json()["error"] == "Ce numéro d'immatriculation existe déjà"
        assert len(people.rows("vehicles")) == 2

    def test_update_keeps_own_registration(self, client, login):
        response = client.put("/vehicles/veh-1", json={"registration": "AB-123-CD", "fuel_level": 60},
                              headers=login("admin-1"))

        assert response.status_code == 200
        assert response.json()["fuel_level"] == 60

    def test_update_to_taken_registration(self, client, login):
        response = client.put("/vehicles/veh-1", json={"registration": "EF-456-GH"}, headers=login("admin-1"))

        assert response.status_code == 409

    def test_set_status(self, client, login):
        response = client.patch("/vehicles/veh-2/status", json={"status": "available"}, headers=login("admin-1"))

        assert response.json()["status"] == "available"

    def test_delete(self, client, login, people):
        headers = login("admin-1")

        assert client.delete("/vehicles/veh-2", headers=headers).status_code == 200
        assert client.get("/vehicles/veh-2", headers=headers).status_code == 404
        assert len(people.rows("vehicles")) == 1

    def test_admin_only(self, client, login):
        assert client.get("/vehicles", headers=login("inst-1")).status_code == 403
