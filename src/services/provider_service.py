"""Provider service — lifecycle and validation of Provider records.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

from domain.model.errors import NotFoundError, PersistenceError, ValidationError
from domain.model.provider import Provider, validate_provider_fields
from port.provider_repository import ProviderRepository

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "An error occurred while saving the record"


def _validate(name: str | None, document: str | None) -> None:
    errors = validate_provider_fields(name, document)
    if errors:
        raise ValidationError("One or more validation errors occurred.", errors)


def list_providers(repo: ProviderRepository) -> list[Provider]:
    return repo.list_all()


def get_provider(repo: ProviderRepository, provider_id: str) -> Provider:
    """Raises NotFoundError if the id is unknown."""
    provider = repo.get_by_id(provider_id)
    if not provider:
        raise NotFoundError("Provider not found")
    return provider


def create_provider(repo: ProviderRepository, name: str | None, document: str | None) -> Provider:
    """Validate and persist a new provider.

    Returns the stored Provider with its generated id.

    Raises:
        ValidationError: name/document missing or too long
        PersistenceError: the store wrote nothing
    """
    _validate(name, document)

    provider = repo.add(Provider.create(name=name, document=document))
    if not provider:
        raise PersistenceError(SAVE_FAILED_MESSAGE)

    logger.info("Provider created", extra={"providerId": provider.id})
    return provider


def update_provider(
    repo: ProviderRepository,
    provider_id: str,
    name: str | None,
    document: str | None,
) -> Provider:
    """Overwrite name/document of an existing provider.

    The lookup happens before validation, so an unknown id is reported
    as not found whatever the payload holds.

    Raises:
        NotFoundError: unknown id
        ValidationError: name/document missing or too long
        PersistenceError: the store wrote nothing
    """
    get_provider(repo, provider_id)
    _validate(name, document)

    provider = Provider(id=provider_id, name=name, document=document)
    if not repo.update(provider):
        raise PersistenceError(SAVE_FAILED_MESSAGE)

    logger.info("Provider updated", extra={"providerId": provider_id})
    return provider


def delete_provider(repo: ProviderRepository, provider_id: str) -> None:
    """Raises NotFoundError for an unknown id, PersistenceError if nothing was removed."""
    get_provider(repo, provider_id)

    if not repo.delete(provider_id):
        raise PersistenceError(SAVE_FAILED_MESSAGE)

    logger.info("Provider deleted", extra={"providerId": provider_id})
