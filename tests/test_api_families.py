"""Integration tests for the family routes: CRUD, pagination and auth requirement."""

import unittest

from fastapi.testclient import TestClient

from kinship.core.config import Settings
from kinship.main import create_app

SECRET = "unit-test-signing-secret-0123456789abcdef"


def _authorized_client() -> tuple[TestClient, dict[str, str]]:
    app = create_app(
        Settings(_env_file=None, JWT_SECRET=SECRET, DATABASE_URL="sqlite://", BCRYPT_ROUNDS=4)
    )
    app.state.database.create_all()
    client = TestClient(app)
    client.post("/user/register", json={"Name": "alice", "Password": "secret123"})
    token = client.post("/user/login", json={"username": "alice", "password": "secret123"}).json()["token"]
    return client, {"Authorization": token}


def _family(name: str = "Windsor", **kwargs: object) -> dict[str, object]:
    body: dict[str, object] = {
        "Name": name,
        "Description": "A family",
        "Notes": "",
        "HistoricalNames": ["Saxe-Coburg and Gotha"],
    }
    body.update(kwargs)
    return body


class TestFamilyCrud(unittest.TestCase):
    """create → show → update (merge) → delete."""

    def setUp(self) -> None:
        self.client, self.headers = _authorized_client()

    def _create(self, name: str = "Windsor", **kwargs: object) -> dict:
        response = self.client.post("/family", json=_family(name, **kwargs), headers=self.headers)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def test_create_and_show(self) -> None:
        created = self._create()
        self.assertIsInstance(created["Id"], int)
        self.assertEqual(created["Name"], "Windsor")
        self.assertEqual(created["HistoricalNames"], ["Saxe-Coburg and Gotha"])

        response = self.client.get(f"/family/{created['Id']}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_update_merges_fields(self) -> None:
        created = self._create()
        response = self.client.put(
            f"/family/{created['Id']}",
            json={"Notes": "Renamed in 1917"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        updated = response.json()
        self.assertEqual(updated["Notes"], "Renamed in 1917")
        self.assertEqual(updated["Name"], "Windsor")
        self.assertEqual(updated["Description"], "A family")

    def test_delete(self) -> None:
        created = self._create()
        response = self.client.delete(f"/family/{created['Id']}", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["message"],
            f"Family Windsor with id {created['Id']} deleted successfully",
        )
        response = self.client.get(f"/family/{created['Id']}", headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_missing_family(self) -> None:
        self.assertEqual(self.client.get("/family/999", headers=self.headers).status_code, 404)
        self.assertEqual(
            self.client.put("/family/999", json={"Notes": "x"}, headers=self.headers).status_code,
            404,
        )
        self.assertEqual(self.client.delete("/family/999", headers=self.headers).status_code, 404)

    def test_create_requires_name(self) -> None:
        response = self.client.post("/family", json={"Description": "nameless"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)

    def test_routes_require_token(self) -> None:
        self.assertEqual(self.client.get("/familys").status_code, 401)
        self.assertEqual(self.client.get("/family/1").status_code, 401)
        self.assertEqual(self.client.post("/family", json=_family()).status_code, 401)
        self.assertEqual(self.client.delete("/family/1").status_code, 401)


class TestFamilyPaging(unittest.TestCase):
    """Paged listing and page counts over five families."""

    def setUp(self) -> None:
        self.client, self.headers = _authorized_client()
        for i in range(5):
            self.client.post("/family", json=_family(f"Family {i}"), headers=self.headers)

    def test_list_all(self) -> None:
        response = self.client.get("/familys", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 5)

    def test_page_count(self) -> None:
        response = self.client.get("/familys/pageCount/2", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"pageCount": 3})

    def test_pages(self) -> None:
        response = self.client.get("/familys/2/1", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        page = response.json()
        self.assertIsInstance(page, list)
        self.assertEqual([f["Name"] for f in page], ["Family 0", "Family 1"])

        last = self.client.get("/familys/2/3", headers=self.headers).json()
        self.assertEqual([f["Name"] for f in last], ["Family 4"])

        past_end = self.client.get("/familys/2/4", headers=self.headers).json()
        self.assertEqual(past_end, [])

    def test_invalid_page_size(self) -> None:
        response = self.client.get("/familys/0/1", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        response = self.client.get("/familys/pageCount/0", headers=self.headers)
        self.assertEqual(response.status_code, 400)
