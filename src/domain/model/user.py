from dataclasses import dataclass, field
from datetime import datetime, timezone


def normalize_email(email: str) -> str:
    """Lookup key for an email: surrounding whitespace dropped, case folded."""
    return email.strip().lower()


@dataclass
class User:
    """Domain model representing a user credential record."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    email_confirmed: bool = False
    claims: dict[str, str] = field(default_factory=dict)
    roles: list[str] = field(default_factory=list)
    access_failed_count: int = 0
    lockout_end: datetime | None = None
    last_login: datetime | None = None

    def is_locked_out(self, now: datetime | None = None) -> bool:
        """True while ``lockout_end`` lies in the future."""
        if self.lockout_end is None:
            return False
        now = now or datetime.now(timezone.utc)
        lockout_end = self.lockout_end
        # SQLite hands back naive datetimes
        if lockout_end.tzinfo is None:
            lockout_end = lockout_end.replace(tzinfo=timezone.utc)
        return lockout_end > now
