"""In-memory implementation of ProviderRepository for testing."""

from dataclasses import replace

from domain.model.provider import Provider


class FakeProviderRepository:
    def __init__(self):
        self.store: dict[str, Provider] = {}

    # ── write operations ─────────────────────────────────────

    def add(self, provider: Provider) -> Provider | None:
        if provider.id in self.store:
            return None
        self.store[provider.id] = replace(provider)
        return replace(provider)

    def update(self, provider: Provider) -> bool:
        if provider.id not in self.store:
            return False
        self.store[provider.id] = replace(provider)
        return True

    def delete(self, provider_id: str) -> bool:
        return self.store.pop(provider_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def list_all(self) -> list[Provider]:
        return [replace(p) for p in self.store.values()]

    def get_by_id(self, provider_id: str) -> Provider | None:
        provider = self.store.get(provider_id)
        return replace(provider) if provider else None
