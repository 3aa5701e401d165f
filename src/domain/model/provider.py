"""Provider domain model."""

import uuid
from dataclasses import dataclass

NAME_MAX_LENGTH = 200
DOCUMENT_MAX_LENGTH = 14


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_provider_fields(name: str | None, document: str | None) -> dict[str, list[str]]:
    """Check presence and maximum length of every Provider field.

    Returns a field -> messages map; empty when the input is valid.
    """
    errors: dict[str, list[str]] = {}

    if _is_blank(name):
        errors.setdefault("name", []).append("The name field is required.")
    elif len(name) > NAME_MAX_LENGTH:
        errors.setdefault("name", []).append(
            f"The name field must have at most {NAME_MAX_LENGTH} characters."
        )

    if _is_blank(document):
        errors.setdefault("document", []).append("The document field is required.")
    elif len(document) > DOCUMENT_MAX_LENGTH:
        errors.setdefault("document", []).append(
            f"The document field must have at most {DOCUMENT_MAX_LENGTH} characters."
        )

    return errors


@dataclass
class Provider:
    """An organization identified by name and tax document."""
    id: str
    name: str
    document: str

    @staticmethod
    def create(name: str, document: str) -> 'Provider':
        """Factory method — assigns a fresh identifier."""
        return Provider(
            id=str(uuid.uuid4()),
            name=name,
            document=document,
        )
