"""Tests for the SQLAlchemy repositories against in-memory SQLite."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from adapter.sql.provider_repository import SqlProviderRepository
from adapter.sql.tables import create_all_tables
from adapter.sql.user_repository import SqlUserRepository
from domain.model.provider import Provider


def _memory_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    return engine


class TestSqlProviderRepository(unittest.TestCase):

    def setUp(self):
        self.engine = _memory_engine()
        self.repo = SqlProviderRepository(self.engine)

    def tearDown(self):
        self.engine.dispose()

    def test_list_all_empty(self):
        self.assertEqual(self.repo.list_all(), [])

    def test_add_then_get_by_id(self):
        provider = Provider.create(name="Acme Inc", document="12345678901234")

        stored = self.repo.add(provider)

        self.assertEqual(stored, provider)
        self.assertEqual(self.repo.get_by_id(provider.id), provider)

    def test_get_by_id_missing_returns_none(self):
        self.assertIsNone(self.repo.get_by_id("00000000-0000-0000-0000-000000000000"))

    def test_add_duplicate_id_returns_none(self):
        provider = Provider.create(name="Acme Inc", document="1")
        self.repo.add(provider)

        self.assertIsNone(self.repo.add(Provider(id=provider.id, name="Other", document="2")))
        self.assertEqual(len(self.repo.list_all()), 1)

    def test_list_all_returns_every_row(self):
        for i in range(3):
            self.repo.add(Provider.create(name=f"Provider {i}", document=str(i)))

        names = sorted(p.name for p in self.repo.list_all())
        self.assertEqual(names, ["Provider 0", "Provider 1", "Provider 2"])

    def test_update_overwrites_fields_and_keeps_id(self):
        provider = self.repo.add(Provider.create(name="Acme Inc", document="1"))

        changed = self.repo.update(Provider(id=provider.id, name="Acme Ltd", document="2"))

        self.assertTrue(changed)
        self.assertEqual(self.repo.get_by_id(provider.id), Provider(id=provider.id, name="Acme Ltd", document="2"))

    def test_update_missing_returns_false(self):
        self.assertFalse(self.repo.update(Provider(id="missing", name="x", document="y")))

    def test_delete(self):
        provider = self.repo.add(Provider.create(name="Acme Inc", document="1"))

        self.assertTrue(self.repo.delete(provider.id))
        self.assertIsNone(self.repo.get_by_id(provider.id))
        self.assertFalse(self.repo.delete(provider.id))

    def test_database_error_on_add_returns_none(self):
        with patch("adapter.sql.provider_repository.Session.commit",
                   side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
            self.assertIsNone(self.repo.add(Provider.create(name="Acme", document="1")))


class TestSqlUserRepository(unittest.TestCase):

    def setUp(self):
        self.engine = _memory_engine()
        self.repo = SqlUserRepository(self.engine)

    def tearDown(self):
        self.engine.dispose()

    def test_create_and_lookup(self):
        user = self.repo.create(email="alice@example.com", password_hash="hash")

        self.assertIsNotNone(user)
        self.assertTrue(user.email_confirmed)
        self.assertEqual(user.claims, {})
        self.assertEqual(user.roles, [])
        self.assertEqual(self.repo.get_by_email("alice@example.com").id, user.id)
        self.assertEqual(self.repo.get_by_email("alice@example.com").email, "alice@example.com")

    def test_create_duplicate_email_returns_none(self):
        self.repo.create(email="alice@example.com", password_hash="hash")
        self.assertIsNone(self.repo.create(email="alice@example.com", password_hash="other"))

    def test_duplicate_differing_only_in_case_returns_none(self):
        self.repo.create(email="Alice@example.com", password_hash="hash")

        self.assertIsNone(self.repo.create(email="alice@example.com", password_hash="other"))

    def test_lookup_ignores_case_and_keeps_registered_spelling(self):
        user = self.repo.create(email="Alice@Example.com", password_hash="hash")

        found = self.repo.get_by_email("ALICE@example.COM")
        self.assertEqual(found.id, user.id)
        self.assertEqual(found.email, "Alice@Example.com")

    def test_lookup_missing_returns_none(self):
        self.assertIsNone(self.repo.get_by_email("nobody@example.com"))

    def test_failed_and_successful_login_bookkeeping(self):
        user = self.repo.create(email="alice@example.com", password_hash="hash")
        lockout_end = datetime.now(timezone.utc) + timedelta(minutes=5)

        self.assertTrue(self.repo.record_failed_login(user.id, 0, lockout_end))
        locked = self.repo.get_by_email("alice@example.com")
        self.assertTrue(locked.is_locked_out())

        self.assertTrue(self.repo.record_successful_login(user.id))
        reset = self.repo.get_by_email("alice@example.com")
        self.assertEqual(reset.access_failed_count, 0)
        self.assertIsNone(reset.lockout_end)
        self.assertIsNotNone(reset.last_login)

    def test_record_failed_login_missing_user(self):
        self.assertFalse(self.repo.record_failed_login("missing", 1, None))

    def test_claims_and_roles(self):
        user = self.repo.create(email="alice@example.com", password_hash="hash")

        self.assertTrue(self.repo.set_claim(user.id, "DeleteProvider", "true"))
        self.assertTrue(self.repo.add_role(user.id, "admin"))
        self.assertTrue(self.repo.add_role(user.id, "admin"))

        stored = self.repo.get_by_email("alice@example.com")
        self.assertEqual(stored.claims, {"DeleteProvider": "true"})
        self.assertEqual(stored.roles, ["admin"])

        self.assertTrue(self.repo.remove_claim(user.id, "DeleteProvider"))
        self.assertFalse(self.repo.remove_claim(user.id, "DeleteProvider"))
        self.assertEqual(self.repo.get_by_email("alice@example.com").claims, {})
