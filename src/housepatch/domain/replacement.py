"""Whole-field documents: replacement updates and creation requests."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from housepatch.domain.models import Address, House, Room


class HouseUpdate(BaseModel):
    """Replacement document: every field is overwritten on the aggregate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    area: Decimal


class AddressRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    street: str = Field(min_length=1)
    house_number: str = Field(min_length=1, alias="houseNumber")
    flat_number: str | None = Field(default=None, alias="flatNumber")
    city: str = Field(min_length=1)
    country: str = Field(min_length=1)


class RoomRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    color: str
    area: Decimal = Decimal(0)


class HouseRequest(BaseModel):
    """Creation document for a new house."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    area: Decimal
    address: AddressRequest | None = None
    rooms: list[RoomRequest] = Field(default_factory=list)

    def build(self) -> House:
        """Create the aggregate with fresh identities."""
        address = None
        if self.address is not None:
            address = Address.create(
                self.address.street,
                self.address.house_number,
                self.address.city,
                self.address.country,
                flat_number=self.address.flat_number,
            )
        rooms = [Room.create(r.name, r.color, r.area) for r in self.rooms]
        return House.create(self.name, self.color, self.area, address, rooms)


def apply_replacement(update: HouseUpdate, house: House) -> House:
    """Overwrite the replaceable fields of *house*; identity, address and rooms are kept."""
    house.name = update.name
    house.color = update.color
    house.area = update.area
    return house
