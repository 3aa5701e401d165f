"""SQLAlchemy table mappings.

Rows are persistence shapes only; repositories convert them to domain models.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from domain.model.provider import DOCUMENT_MAX_LENGTH, NAME_MAX_LENGTH

PROVIDERS_TABLE_NAME = 'providers'
USERS_TABLE_NAME = 'users'


class Base(DeclarativeBase):
    pass


class ProviderRow(Base):
    __tablename__ = PROVIDERS_TABLE_NAME

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    document: Mapped[str] = mapped_column(String(DOCUMENT_MAX_LENGTH), nullable=False)


class UserRow(Base):
    __tablename__ = USERS_TABLE_NAME

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False)
    # Uniqueness and lookups go through the case-folded form
    normalized_email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(128))
    email_confirmed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    claims: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    roles: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    access_failed_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


def create_all_tables(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(engine)
