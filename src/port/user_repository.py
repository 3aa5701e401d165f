from datetime import datetime
from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user credential access."""
    def create(self, email: str, password_hash: str) -> User | None:
        """Create a confirmed user. Return User or None if creation failed."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case. Return User or None if not found."""
        ...

    def record_failed_login(self, user_id: str, count: int, lockout_end: datetime | None) -> bool:
        """Store the failed-access counter and lockout deadline. Return True if successful."""
        ...

    def record_successful_login(self, user_id: str) -> bool:
        """Reset the failed-access counter and stamp last_login. Return True if successful."""
        ...

    def set_claim(self, user_id: str, claim_type: str, value: str) -> bool:
        """Add or replace a user claim. Return True if successful."""
        ...

    def remove_claim(self, user_id: str, claim_type: str) -> bool:
        """Drop a user claim. Return True if the claim existed."""
        ...

    def add_role(self, user_id: str, role: str) -> bool:
        """Attach a role to the user. Return True if successful."""
        ...
