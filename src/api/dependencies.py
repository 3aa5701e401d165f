from fastapi import HTTPException

from adapter.sql.connection import get_engine
from adapter.sql.provider_repository import SqlProviderRepository
from adapter.sql.user_repository import SqlUserRepository
from port.provider_repository import ProviderRepository
from port.user_repository import UserRepository


def _get_engine():
    """Get the database engine, raising 503 if unavailable."""
    engine = get_engine()
    if engine is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return engine


def get_provider_repo() -> ProviderRepository:
    return SqlProviderRepository(_get_engine())


def get_user_repo() -> UserRepository:
    return SqlUserRepository(_get_engine())
