"""SQLAlchemy implementation of ProviderRepository."""

from logging import getLogger
from sqlalchemy import delete, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from adapter.sql.tables import ProviderRow
from domain.model.provider import Provider

logger = getLogger(__name__)


class SqlProviderRepository:
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_domain(self, row: ProviderRow) -> Provider:
        """Convert a table row to the Provider domain model."""
        return Provider(id=row.id, name=row.name, document=row.document)

    def list_all(self) -> list[Provider]:
        """Return every provider in storage order."""
        try:
            with Session(self.engine) as session:
                rows = session.scalars(select(ProviderRow)).all()
                return [self._to_domain(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Failed to list providers", extra={"error": str(e)})
            return []

    def get_by_id(self, provider_id: str) -> Provider | None:
        """Find a provider by ID. Return Provider or None if not found."""
        try:
            with Session(self.engine) as session:
                row = session.get(ProviderRow, provider_id)
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get provider", extra={"providerId": provider_id, "error": str(e)})
            return None

    def add(self, provider: Provider) -> Provider | None:
        """Insert a new provider row and return the stored Provider."""
        try:
            with Session(self.engine) as session:
                row = ProviderRow(id=provider.id, name=provider.name, document=provider.document)
                session.add(row)
                session.commit()
                logger.debug("Provider row inserted", extra={"providerId": provider.id})
                return self._to_domain(row)
        except SQLAlchemyError as e:
            logger.error("Failed to insert provider", extra={"providerId": provider.id, "error": str(e)})
            return None

    def update(self, provider: Provider) -> bool:
        """Overwrite name and document. Return True if a row matched."""
        try:
            with Session(self.engine) as session:
                result = session.execute(
                    update(ProviderRow)
                    .where(ProviderRow.id == provider.id)
                    .values(name=provider.name, document=provider.document)
                )
                session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Failed to update provider", extra={"providerId": provider.id, "error": str(e)})
            return False

    def delete(self, provider_id: str) -> bool:
        """Remove a provider row. Return True if a row was deleted."""
        try:
            with Session(self.engine) as session:
                result = session.execute(delete(ProviderRow).where(ProviderRow.id == provider_id))
                session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Failed to delete provider", extra={"providerId": provider_id, "error": str(e)})
            return False
