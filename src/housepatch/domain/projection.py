"""Patchable projection — the externally patchable surface of a House.

The projection mirrors ``name``, ``color``, ``area``, ``address`` and
``rooms`` but carries no identities: rooms inside a patch document are
addressed purely by position, never by id.

Each projection type publishes an explicit member table (wire name ->
:class:`Member`) that the path resolver walks instead of reflecting over
attributes. Wire names follow the public contract (camelCase) and are
matched case-insensitively.

A projection is derived fresh per patch request by :func:`to_projection`,
mutated in memory, and written back field-by-field by
:func:`merge_projection`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar

from housepatch.domain.ids import new_id
from housepatch.domain.models import Address, House, Room

# ---------------------------------------------------------------------------
# Member shapes and tables
# ---------------------------------------------------------------------------


class ShapeKind(StrEnum):
    """Declared type of a projection member."""

    TEXT = "text"
    DECIMAL = "decimal"
    COMPOSITE = "composite"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class Shape:
    """Declared type of a member: a scalar, a composite, or a sequence of shapes."""

    kind: ShapeKind
    composite: type[Patchable] | None = None
    element: Shape | None = None

    @property
    def is_reference(self) -> bool:
        """Reference-shaped members reset to absent; value-shaped ones to zero."""
        return self.kind in (ShapeKind.TEXT, ShapeKind.COMPOSITE)

    def describe(self) -> str:
        if self.kind is ShapeKind.COMPOSITE and self.composite is not None:
            return self.composite.__name__
        if self.kind is ShapeKind.SEQUENCE and self.element is not None:
            return f"list[{self.element.describe()}]"
        return self.kind.value


TEXT = Shape(ShapeKind.TEXT)
DECIMAL = Shape(ShapeKind.DECIMAL)


def composite_of(cls: type[Patchable]) -> Shape:
    return Shape(ShapeKind.COMPOSITE, composite=cls)


def sequence_of(element: Shape) -> Shape:
    return Shape(ShapeKind.SEQUENCE, element=element)


@dataclass(frozen=True)
class Member:
    """One entry of a projection member table: wire name, shape, accessors."""

    name: str
    shape: Shape
    get: Callable[[Any], Any]
    set: Callable[[Any, Any], None]


def _attr(wire_name: str, attr: str, shape: Shape) -> Member:
    return Member(
        name=wire_name,
        shape=shape,
        get=lambda node: getattr(node, attr),
        set=lambda node, value: setattr(node, attr, value),
    )


class Patchable:
    """Base for projection types. Subclasses fill ``MEMBERS`` after definition."""

    MEMBERS: ClassVar[dict[str, Member]] = {}

    @classmethod
    def member(cls, name: str) -> Member | None:
        """Look up a member by wire name (case-insensitive)."""
        return cls.MEMBERS.get(name.lower())

    @classmethod
    def members(cls) -> list[Member]:
        return list(cls.MEMBERS.values())


def _table(*members: Member) -> dict[str, Member]:
    return {m.name.lower(): m for m in members}


# ---------------------------------------------------------------------------
# Projection types
# ---------------------------------------------------------------------------


@dataclass
class AddressPatch(Patchable):
    street: str | None = None
    house_number: str | None = None
    flat_number: str | None = None
    city: str | None = None
    country: str | None = None


@dataclass
class RoomPatch(Patchable):
    name: str | None = None
    color: str | None = None
    area: Decimal = Decimal(0)


@dataclass
class HousePatch(Patchable):
    name: str | None = None
    color: str | None = None
    area: Decimal = Decimal(0)
    address: AddressPatch | None = None
    rooms: list[RoomPatch] = field(default_factory=list)


AddressPatch.MEMBERS = _table(
    _attr("street", "street", TEXT),
    _attr("houseNumber", "house_number", TEXT),
    _attr("flatNumber", "flat_number", TEXT),
    _attr("city", "city", TEXT),
    _attr("country", "country", TEXT),
)

RoomPatch.MEMBERS = _table(
    _attr("name", "name", TEXT),
    _attr("color", "color", TEXT),
    _attr("area", "area", DECIMAL),
)

HousePatch.MEMBERS = _table(
    _attr("name", "name", TEXT),
    _attr("color", "color", TEXT),
    _attr("area", "area", DECIMAL),
    _attr("address", "address", composite_of(AddressPatch)),
    _attr("rooms", "rooms", sequence_of(composite_of(RoomPatch))),
)

HOUSE_SHAPE = composite_of(HousePatch)


# ---------------------------------------------------------------------------
# Aggregate <-> projection mapping
# ---------------------------------------------------------------------------


def to_projection(house: House) -> HousePatch:
    """Derive a fresh projection from *house*. Nothing is shared with the aggregate."""
    address = None
    if house.address is not None:
        address = AddressPatch(
            street=house.address.street,
            house_number=house.address.house_number,
            flat_number=house.address.flat_number,
            city=house.address.city,
            country=house.address.country,
        )
    return HousePatch(
        name=house.name,
        color=house.color,
        area=house.area,
        address=address,
        rooms=[RoomPatch(name=r.name, color=r.color, area=r.area) for r in house.rooms],
    )


def merge_projection(projection: HousePatch, house: House) -> House:
    """Overwrite *house* field-by-field from *projection* and return it.

    Identities survive: the house id is untouched, an existing address
    keeps its id, and rooms are merged by position (existing positions
    keep their id, extra positions become new rooms, surplus rooms are
    dropped).
    """
    house.name = projection.name
    house.color = projection.color
    house.area = projection.area

    if projection.address is None:
        house.address = None
    else:
        if house.address is None:
            house.address = Address(id=new_id())
        _merge_address(projection.address, house.address)

    merged: list[Room] = []
    for position, room_patch in enumerate(projection.rooms):
        if position < len(house.rooms):
            room = house.rooms[position]
        else:
            room = Room(id=new_id())
        room.name = room_patch.name
        room.color = room_patch.color
        room.area = room_patch.area
        merged.append(room)
    house.rooms = merged
    return house


def _merge_address(source: AddressPatch, target: Address) -> None:
    target.street = source.street
    target.house_number = source.house_number
    target.flat_number = source.flat_number
    target.city = source.city
    target.country = source.country


def projection_to_dict(node: Any, shape: Shape = HOUSE_SHAPE) -> Any:
    """Render a projection node as plain JSON-ready data using wire names."""
    if node is None:
        return None
    if shape.kind is ShapeKind.COMPOSITE:
        return {m.name: projection_to_dict(m.get(node), m.shape) for m in type(node).members()}
    if shape.kind is ShapeKind.SEQUENCE:
        assert shape.element is not None
        return [projection_to_dict(item, shape.element) for item in node]
    return node
