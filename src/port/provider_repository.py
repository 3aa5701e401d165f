"""Port definition for ProviderRepository."""

from typing import Protocol

from domain.model.provider import Provider


class ProviderRepository(Protocol):
    def list_all(self) -> list[Provider]: ...

    def get_by_id(self, provider_id: str) -> Provider | None: ...

    def add(self, provider: Provider) -> Provider | None:
        """Persist a new provider. Return it, or None if nothing was written."""
        ...

    def update(self, provider: Provider) -> bool:
        """Overwrite name/document of the row with ``provider.id``. Return True if a row changed."""
        ...

    def delete(self, provider_id: str) -> bool: ...
