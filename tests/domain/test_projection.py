"""Tests for the patchable projection and its merge back onto the aggregate."""

from decimal import Decimal

from housepatch.domain.models import Address, House, Room
from housepatch.domain.projection import (
    DECIMAL,
    TEXT,
    AddressPatch,
    HousePatch,
    RoomPatch,
    ShapeKind,
    composite_of,
    merge_projection,
    projection_to_dict,
    sequence_of,
    to_projection,
)


def _house() -> House:
    return House.create(
        "Second House",
        "Red",
        25,
        Address.create("Street2", "2", "City1", "Country1"),
        [Room.create("Restroom", "Green", 11), Room.create("Kids Room", "Pink", 20)],
    )


class TestMemberTables:
    def test_lookup_is_case_insensitive(self) -> None:
        assert HousePatch.member("NAME") is HousePatch.member("name")
        assert AddressPatch.member("housenumber") is AddressPatch.member("houseNumber")

    def test_wire_names_are_camel_case(self) -> None:
        names = [m.name for m in AddressPatch.members()]
        assert names == ["street", "houseNumber", "flatNumber", "city", "country"]

    def test_unknown_member(self) -> None:
        assert HousePatch.member("id") is None
        assert RoomPatch.member("house_number") is None

    def test_shapes(self) -> None:
        assert HousePatch.member("name").shape == TEXT  # type: ignore[union-attr]
        assert HousePatch.member("area").shape == DECIMAL  # type: ignore[union-attr]
        rooms = HousePatch.member("rooms").shape  # type: ignore[union-attr]
        assert rooms.kind is ShapeKind.SEQUENCE
        assert rooms.element == composite_of(RoomPatch)

    def test_reference_shapes(self) -> None:
        assert TEXT.is_reference
        assert composite_of(AddressPatch).is_reference
        assert not DECIMAL.is_reference
        assert not sequence_of(TEXT).is_reference

    def test_describe(self) -> None:
        assert composite_of(AddressPatch).describe() == "AddressPatch"
        assert sequence_of(composite_of(RoomPatch)).describe() == "list[RoomPatch]"
        assert DECIMAL.describe() == "decimal"


class TestToProjection:
    def test_copies_fields(self) -> None:
        projection = to_projection(_house())
        assert projection.name == "Second House"
        assert projection.address is not None
        assert projection.address.street == "Street2"
        assert [r.name for r in projection.rooms] == ["Restroom", "Kids Room"]

    def test_no_identities(self) -> None:
        projection = to_projection(_house())
        assert not hasattr(projection, "id")
        assert not hasattr(projection.rooms[0], "id")

    def test_shares_nothing_with_aggregate(self) -> None:
        house = _house()
        projection = to_projection(house)
        projection.rooms[0].name = "Changed"
        projection.rooms.pop()
        assert house.rooms[0].name == "Restroom"
        assert len(house.rooms) == 2

    def test_absent_address(self) -> None:
        assert to_projection(House.create("H", "Red", 1)).address is None


class TestMergeProjection:
    def test_keeps_identities(self) -> None:
        house = _house()
        ids = (house.id, house.address.id, [r.id for r in house.rooms])  # type: ignore[union-attr]
        projection = to_projection(house)
        projection.name = "Renamed"
        projection.address.street = "Elm"  # type: ignore[union-attr]
        projection.rooms[1].area = Decimal("21.5")

        merge_projection(projection, house)

        assert house.name == "Renamed"
        assert house.address.street == "Elm"  # type: ignore[union-attr]
        assert house.rooms[1].area == Decimal("21.5")
        assert house.address is not None
        assert (house.id, house.address.id, [r.id for r in house.rooms]) == ids

    def test_rooms_merge_by_position(self) -> None:
        house = _house()
        first_id = house.rooms[0].id
        projection = to_projection(house)
        projection.rooms = [RoomPatch("Office", "White", Decimal(9))]

        merge_projection(projection, house)

        assert len(house.rooms) == 1
        assert house.rooms[0].id == first_id
        assert house.rooms[0].name == "Office"

    def test_extra_rooms_get_new_ids(self) -> None:
        house = _house()
        projection = to_projection(house)
        projection.rooms.append(RoomPatch("Attic", "Brown", Decimal(5)))

        merge_projection(projection, house)

        assert len(house.rooms) == 3
        assert len({r.id for r in house.rooms}) == 3

    def test_address_created_and_cleared(self) -> None:
        house = House.create("H", "Red", 1)
        projection = to_projection(house)
        projection.address = AddressPatch(street="New", house_number="3", city="C", country="X")
        merge_projection(projection, house)
        assert house.address is not None
        assert house.address.street == "New"

        projection.address = None
        merge_projection(projection, house)
        assert house.address is None


class TestProjectionToDict:
    def test_uses_wire_names(self) -> None:
        data = projection_to_dict(to_projection(_house()))
        assert data["address"]["houseNumber"] == "2"
        assert data["rooms"][0] == {"name": "Restroom", "color": "Green", "area": Decimal(11)}

    def test_none(self) -> None:
        assert projection_to_dict(None) is None
