"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.user import User, normalize_email


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str) -> User | None:
        if self.get_by_email(email):
            return None

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
            email_confirmed=True,
        )
        self.store[user_id] = user
        return user

    def record_failed_login(self, user_id: str, count: int, lockout_end: datetime | None) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.access_failed_count = count
        user.lockout_end = lockout_end
        user.updated_at = datetime.now(timezone.utc)
        return True

    def record_successful_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        now = datetime.now(timezone.utc)
        user.access_failed_count = 0
        user.lockout_end = None
        user.last_login = now
        user.updated_at = now
        return True

    def set_claim(self, user_id: str, claim_type: str, value: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False
        user.claims[claim_type] = value
        return True

    def remove_claim(self, user_id: str, claim_type: str) -> bool:
        user = self.store.get(user_id)
        if not user or claim_type not in user.claims:
            return False
        del user.claims[claim_type]
        return True

    def add_role(self, user_id: str, role: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False
        if role not in user.roles:
            user.roles.append(role)
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        key = normalize_email(email)
        for user in self.store.values():
            if normalize_email(user.email) == key:
                return user
        return None
