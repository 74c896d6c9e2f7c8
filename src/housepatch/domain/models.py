"""Aggregate models — House with an optional Address and ordered Rooms.

These are the persisted shapes. Instances are loaded per request by the
repository and mutated in place by the service layer, so the models are
not frozen. Creation invariants are enforced by the ``create`` factories:

- ids are never the nil UUID;
- house name and color are non-empty;
- an Address carries non-empty street, house number, city and country.

Later updates may leave reference-shaped members empty (a patch ``remove``
resets a member rather than failing), so field types stay optional.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Self

from pydantic import BaseModel, Field

from housepatch.domain.ids import is_empty_id, new_id


def _require_id(value: uuid.UUID | None, field_name: str) -> uuid.UUID:
    if value is None:
        return new_id()
    if is_empty_id(value):
        raise ValueError(f"{field_name} must not be empty")
    return value


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    return value


class Address(BaseModel):
    """Postal address owned by a single house."""

    id: uuid.UUID
    street: str | None = None
    house_number: str | None = None
    flat_number: str | None = None
    city: str | None = None
    country: str | None = None

    @classmethod
    def create(
        cls,
        street: str,
        house_number: str,
        city: str,
        country: str,
        *,
        flat_number: str | None = None,
        id: uuid.UUID | None = None,  # noqa: A002
    ) -> Self:
        return cls(
            id=_require_id(id, "address id"),
            street=_require_text(street, "street"),
            house_number=_require_text(house_number, "house_number"),
            city=_require_text(city, "city"),
            country=_require_text(country, "country"),
            flat_number=flat_number,
        )


class Room(BaseModel):
    """A room inside a house. Rooms keep their order."""

    id: uuid.UUID
    name: str | None = None
    color: str | None = None
    area: Decimal = Decimal(0)

    @classmethod
    def create(
        cls,
        name: str,
        color: str,
        area: Decimal | int | str = 0,
        *,
        id: uuid.UUID | None = None,  # noqa: A002
    ) -> Self:
        return cls(id=_require_id(id, "room id"), name=name, color=color, area=Decimal(area))


class House(BaseModel):
    """The House aggregate root."""

    id: uuid.UUID
    name: str | None = None
    color: str | None = None
    area: Decimal = Decimal(0)
    address: Address | None = None
    rooms: list[Room] = Field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        color: str,
        area: Decimal | int | str,
        address: Address | None = None,
        rooms: list[Room] | None = None,
        *,
        id: uuid.UUID | None = None,  # noqa: A002
    ) -> Self:
        """Build a new house, validating the creation invariants.

        Raises:
            ValueError: if the id is the nil UUID or name/color are empty.
        """
        return cls(
            id=_require_id(id, "house id"),
            name=_require_text(name, "name"),
            color=_require_text(color, "color"),
            area=Decimal(area),
            address=address,
            rooms=list(rooms or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (ids and decimals as strings)."""
        return self.model_dump(mode="json")

    def to_list_item(self) -> dict[str, Any]:
        return {"id": str(self.id), "name": self.name, "color": self.color}
