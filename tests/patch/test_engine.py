"""Tests for ordered, all-or-nothing patch application."""

from decimal import Decimal

import pytest

from housepatch.domain.models import Address, House, Room
from housepatch.domain.projection import HousePatch, to_projection
from housepatch.patch import Operation, PatchEngine, PatchError, PatchErrorKind, apply_patch


@pytest.fixture
def projection() -> HousePatch:
    house = House.create(
        "First House",
        "Red",
        25,
        Address.create("Street1", "1", "City1", "Country1"),
        [Room.create("Restroom", "Green", 11)],
    )
    return to_projection(house)


class TestApplyPatch:
    def test_empty_batch_is_identity(self, projection: HousePatch) -> None:
        result = apply_patch([], projection)
        assert result == projection
        assert result is not projection

    def test_applies_in_order(self, projection: HousePatch) -> None:
        result = apply_patch(
            [
                Operation.replace("/name", "A"),
                Operation.test("/name", "A"),
                Operation.replace("/name", "B"),
            ],
            projection,
        )
        assert result.name == "B"

    def test_later_ops_see_earlier_effects(self, projection: HousePatch) -> None:
        result = apply_patch(
            [
                Operation.add("/rooms/-", {"name": "Hall", "area": 4}),
                Operation.replace("/rooms/1/color", "White"),
            ],
            projection,
        )
        assert result.rooms[1].color == "White"
        assert result.rooms[1].area == Decimal(4)

    def test_input_never_mutated(self, projection: HousePatch) -> None:
        apply_patch([Operation.replace("/address/street", "Elm")], projection)
        assert projection.address.street == "Street1"  # type: ignore[union-attr]

    def test_failure_leaves_input_untouched(self, projection: HousePatch) -> None:
        with pytest.raises(PatchError):
            apply_patch(
                [
                    Operation.replace("/name", "Changed"),
                    Operation.test("/color", "Blue"),
                ],
                projection,
            )
        assert projection.name == "First House"

    def test_first_failure_aborts(self, projection: HousePatch) -> None:
        with pytest.raises(PatchError) as exc_info:
            apply_patch(
                [
                    Operation.replace("/name", "Changed"),
                    Operation.replace("/rooms/7/name", "Nope"),
                    Operation.test("/color", "Blue"),
                ],
                projection,
            )
        err = exc_info.value
        assert err.kind is PatchErrorKind.UNRESOLVABLE
        assert err.index == 1
        assert err.op == "replace"
        assert err.path == "/rooms/7/name"

    def test_error_path_names_failing_path(self, projection: HousePatch) -> None:
        with pytest.raises(PatchError) as exc_info:
            apply_patch([Operation.move("/address/flatNumber", "/name")], projection)
        assert exc_info.value.path == "/address/flatNumber"
        assert exc_info.value.op == "move"


class TestPatchEngine:
    def test_delegates(self, projection: HousePatch) -> None:
        result = PatchEngine().apply([Operation.remove("/area")], projection)
        assert result.area == Decimal(0)
        assert projection.area == Decimal(25)
