"""SQLAlchemy implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from adapter.sql.tables import UserRow
from domain.model.user import User, normalize_email

logger = getLogger(__name__)


class SqlUserRepository:
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_domain(self, row: UserRow) -> User:
        """Convert a table row to the User domain model."""
        return User(
            id=row.id,
            email=row.email,
            created_at=row.created_at,
            updated_at=row.updated_at,
            password_hash=row.password_hash,
            email_confirmed=row.email_confirmed,
            claims=dict(row.claims or {}),
            roles=list(row.roles or []),
            access_failed_count=row.access_failed_count,
            lockout_end=row.lockout_end,
            last_login=row.last_login,
        )

    def create(self, email: str, password_hash: str) -> User | None:
        """Create a new confirmed user and return the User object."""
        try:
            with Session(self.engine) as session:
                now = datetime.now(timezone.utc)
                row = UserRow(
                    id=uuid.uuid4().hex,
                    email=email,
                    normalized_email=normalize_email(email),
                    password_hash=password_hash,
                    email_confirmed=True,
                    claims={},
                    roles=[],
                    access_failed_count=0,
                    created_at=now,
                    updated_at=now,
                )
                session.add(row)
                session.commit()
                user = self._to_domain(row)
                logger.info("User created", extra={"userId": user.id, "email": email})
                return user
        except IntegrityError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            return None
        except SQLAlchemyError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case. Return User or None if not found."""
        try:
            with Session(self.engine) as session:
                stmt = select(UserRow).where(UserRow.normalized_email == normalize_email(email))
                row = session.scalars(stmt).first()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            return None

    def _modify(self, user_id: str, action: str, mutate) -> bool:
        """Load the row, apply ``mutate(row)`` and commit. Return False if missing or failed."""
        try:
            with Session(self.engine) as session:
                row = session.get(UserRow, user_id)
                if row is None:
                    return False
                if mutate(row) is False:
                    return False
                row.updated_at = datetime.now(timezone.utc)
                session.commit()
                return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}", extra={"userId": user_id, "error": str(e)})
            return False

    def record_failed_login(self, user_id: str, count: int, lockout_end: datetime | None) -> bool:
        def mutate(row: UserRow):
            row.access_failed_count = count
            row.lockout_end = lockout_end

        return self._modify(user_id, "record failed login", mutate)

    def record_successful_login(self, user_id: str) -> bool:
        def mutate(row: UserRow):
            row.access_failed_count = 0
            row.lockout_end = None
            row.last_login = datetime.now(timezone.utc)

        return self._modify(user_id, "record successful login", mutate)

    def set_claim(self, user_id: str, claim_type: str, value: str) -> bool:
        def mutate(row: UserRow):
            # JSON columns are not mutation-tracked; assign a new dict
            row.claims = {**(row.claims or {}), claim_type: value}

        return self._modify(user_id, "set claim", mutate)

    def remove_claim(self, user_id: str, claim_type: str) -> bool:
        def mutate(row: UserRow):
            claims = dict(row.claims or {})
            if claim_type not in claims:
                return False
            del claims[claim_type]
            row.claims = claims

        return self._modify(user_id, "remove claim", mutate)

    def add_role(self, user_id: str, role: str) -> bool:
        def mutate(row: UserRow):
            roles = list(row.roles or [])
            if role not in roles:
                roles.append(role)
            row.roles = roles

        return self._modify(user_id, "add role", mutate)
