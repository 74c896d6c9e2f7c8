"""Tests for PatchError."""

from housepatch.patch.errors import (
    PatchError,
    PatchErrorKind,
    precondition_failed,
    structural,
    type_mismatch,
    unresolvable,
)


class TestPatchError:
    def test_factories_set_kind(self) -> None:
        assert structural("x").kind is PatchErrorKind.STRUCTURAL
        assert unresolvable("x").kind is PatchErrorKind.UNRESOLVABLE
        assert type_mismatch("x").kind is PatchErrorKind.TYPE_MISMATCH
        assert precondition_failed("x").kind is PatchErrorKind.PRECONDITION_FAILED

    def test_str_includes_kind_and_path(self) -> None:
        err = unresolvable("no such member", path="/garage")
        assert str(err) == "unresolvable at '/garage': no such member"

    def test_str_without_path(self) -> None:
        assert str(structural("bad")) == "structural: bad"

    def test_located_keeps_existing_values(self) -> None:
        err = unresolvable("x", path="/from")
        err.located(op="move", index=3, path="/to")
        assert (err.op, err.index, err.path) == ("move", 3, "/from")

    def test_located_fills_missing_path(self) -> None:
        err = structural("x").located(op="add", index=0, path="/name")
        assert err.path == "/name"

    def test_to_detail(self) -> None:
        err = PatchError(PatchErrorKind.TYPE_MISMATCH, "m", path="/area", op="replace", index=1)
        assert err.to_detail() == {
            "kind": "type_mismatch",
            "path": "/area",
            "op": "replace",
            "index": 1,
        }
