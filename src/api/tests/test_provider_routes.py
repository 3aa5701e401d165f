"""Unit tests for provider routes."""

import unittest
import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_provider_repo
from api.security import DELETE_PROVIDER_CLAIM, create_access_token
from adapter.fake.provider_repository import FakeProviderRepository
from domain.model.provider import Provider
from domain.model.user import User


def _token(claims: dict | None = None) -> str:
    now = datetime.now(timezone.utc)
    user = User(
        id='user-123',
        email='test@example.com',
        created_at=now,
        updated_at=now,
        claims=claims or {},
    )
    return create_access_token(user)


class ProviderRouteTestCase(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeProviderRepository()
        app.dependency_overrides[get_provider_repo] = lambda: self.repo
        self.auth = {"Authorization": f"Bearer {_token()}"}
        self.admin = {"Authorization": f"Bearer {_token({DELETE_PROVIDER_CLAIM: 'true'})}"}

    def tearDown(self):
        """Clean up dependency overrides."""
        app.dependency_overrides.clear()

    def _seed(self, name='Acme Inc', document='12345678901234') -> Provider:
        return self.repo.add(Provider.create(name=name, document=document))


class TestListAndGet(ProviderRouteTestCase):

    def test_list_empty(self):
        response = self.client.get("/provider")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_list_is_anonymous(self):
        provider = self._seed()

        response = self.client.get("/provider")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [{"id": provider.id, "name": "Acme Inc", "document": "12345678901234"}])

    def test_get_by_id(self):
        provider = self._seed()

        response = self.client.get(f"/provider/{provider.id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Acme Inc")

    def test_get_unknown_id_is_404(self):
        response = self.client.get(f"/provider/{uuid.uuid4()}")
        self.assertEqual(response.status_code, 404)

    def test_get_malformed_id_is_400(self):
        response = self.client.get("/provider/not-a-uuid")

        self.assertEqual(response.status_code, 400)
        self.assertIn("provider_id", response.json()["errors"])


class TestCreate(ProviderRouteTestCase):

    def test_create_returns_201_with_location(self):
        response = self.client.post(
            "/provider", json={"name": "Acme Inc", "document": "12345678901234"}, headers=self.auth
        )

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(str(uuid.UUID(data["id"])), data["id"])
        self.assertTrue(response.headers["location"].endswith(f"/provider/{data['id']}"))
        self.assertIn(data["id"], self.repo.store)

    def test_create_requires_authentication(self):
        response = self.client.post("/provider", json={"name": "Acme", "document": "1"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.repo.store, {})

    def test_create_rejects_invalid_token(self):
        response = self.client.post(
            "/provider", json={"name": "Acme", "document": "1"},
            headers={"Authorization": "Bearer not.a.token"},
        )
        self.assertEqual(response.status_code, 401)

    def test_create_validation_errors_are_field_mapped(self):
        response = self.client.post(
            "/provider", json={"name": "", "document": "123456789012345"}, headers=self.auth
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()["errors"]), {"name", "document"})
        self.assertEqual(self.repo.store, {})

    def test_create_missing_fields(self):
        response = self.client.post("/provider", json={}, headers=self.auth)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()["errors"]), {"name", "document"})

    def test_create_write_failure_is_400(self):
        repo = MagicMock()
        repo.add.return_value = None
        app.dependency_overrides[get_provider_repo] = lambda: repo

        response = self.client.post("/provider", json={"name": "Acme", "document": "1"}, headers=self.auth)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "An error occurred while saving the record")


class TestUpdate(ProviderRouteTestCase):

    def test_update_returns_204(self):
        provider = self._seed()

        response = self.client.put(
            f"/provider/{provider.id}", json={"name": "Acme Ltd", "document": "1"}, headers=self.auth
        )

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.repo.get_by_id(provider.id).name, "Acme Ltd")

    def test_update_unknown_id_is_404_even_with_invalid_body(self):
        response = self.client.put(
            f"/provider/{uuid.uuid4()}", json={"name": "", "document": ""}, headers=self.auth
        )
        self.assertEqual(response.status_code, 404)

    def test_update_invalid_body_is_400(self):
        provider = self._seed()

        response = self.client.put(
            f"/provider/{provider.id}", json={"name": "Acme", "document": "x" * 15}, headers=self.auth
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("document", response.json()["errors"])

    def test_update_requires_authentication(self):
        provider = self._seed()

        response = self.client.put(f"/provider/{provider.id}", json={"name": "X", "document": "1"})

        self.assertEqual(response.status_code, 401)


class TestDelete(ProviderRouteTestCase):

    def test_delete_with_claim_returns_204(self):
        provider = self._seed()

        response = self.client.delete(f"/provider/{provider.id}", headers=self.admin)

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.repo.store, {})

    def test_delete_without_claim_is_forbidden_for_existing_target(self):
        provider = self._seed()

        response = self.client.delete(f"/provider/{provider.id}", headers=self.auth)

        self.assertEqual(response.status_code, 403)
        self.assertIn(provider.id, self.repo.store)

    def test_delete_without_claim_is_forbidden_for_missing_target(self):
        response = self.client.delete(f"/provider/{uuid.uuid4()}", headers=self.auth)
        self.assertEqual(response.status_code, 403)

    def test_delete_anonymous_is_401(self):
        response = self.client.delete(f"/provider/{uuid.uuid4()}")
        self.assertEqual(response.status_code, 401)

    def test_delete_unknown_id_is_404(self):
        response = self.client.delete(f"/provider/{uuid.uuid4()}", headers=self.admin)
        self.assertEqual(response.status_code, 404)


class TestProviderLifecycle(ProviderRouteTestCase):

    def test_create_get_delete_get(self):
        created = self.client.post(
            "/provider", json={"name": "Acme Inc", "document": "12345678901234"}, headers=self.auth
        )
        self.assertEqual(created.status_code, 201)
        provider_id = created.json()["id"]

        fetched = self.client.get(f"/provider/{provider_id}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json(), {"id": provider_id, "name": "Acme Inc", "document": "12345678901234"})

        deleted = self.client.delete(f"/provider/{provider_id}", headers=self.admin)
        self.assertEqual(deleted.status_code, 204)

        gone = self.client.get(f"/provider/{provider_id}")
        self.assertEqual(gone.status_code, 404)
