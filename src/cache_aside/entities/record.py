"""Record domain entity."""

from dataclasses import dataclass

from cache_aside.errors import ValidationError


@dataclass(frozen=True)
class Record:
    """Domain entity for one row of the users table.

    Attributes:
        id: Identifier assigned by the store on creation
        name: Display name, never empty
        email: Email address, never empty and unique across records
    """

    id: int
    name: str
    email: str


def validate_record_fields(name: str | None, email: str | None) -> None:
    """Ensure both name and email are present and non-empty.

    Raises:
        ValidationError: naming every missing field
    """
    missing = [field for field, value in (("name", name), ("email", email)) if not value]
    if missing:
        raise ValidationError(
            "Name and email are required.",
            details={"missing": missing},
        )
