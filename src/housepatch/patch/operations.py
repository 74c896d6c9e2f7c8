"""Patch operations and patch-document parsing.

A patch document is an ordered JSON array of ``{op, path, from?, value?}``
objects. Parsing validates the envelope only (known ``op``, string paths,
required members present); paths are checked when each operation runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from housepatch.patch.errors import PatchError, structural
from housepatch.patch.values import PatchValue, from_json, to_json


class OperationKind(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


_NEEDS_VALUE = frozenset({OperationKind.ADD, OperationKind.REPLACE, OperationKind.TEST})
_NEEDS_FROM = frozenset({OperationKind.MOVE, OperationKind.COPY})


@dataclass(frozen=True)
class Operation:
    """One path-addressed patch operation."""

    kind: OperationKind
    path: str
    from_path: str | None = None
    value: PatchValue | None = None

    @classmethod
    def add(cls, path: str, value: Any) -> Operation:
        return cls(OperationKind.ADD, path, value=from_json(value))

    @classmethod
    def remove(cls, path: str) -> Operation:
        return cls(OperationKind.REMOVE, path)

    @classmethod
    def replace(cls, path: str, value: Any) -> Operation:
        return cls(OperationKind.REPLACE, path, value=from_json(value))

    @classmethod
    def move(cls, from_path: str, path: str) -> Operation:
        return cls(OperationKind.MOVE, path, from_path=from_path)

    @classmethod
    def copy(cls, from_path: str, path: str) -> Operation:
        return cls(OperationKind.COPY, path, from_path=from_path)

    @classmethod
    def test(cls, path: str, value: Any) -> Operation:
        return cls(OperationKind.TEST, path, value=from_json(value))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"op": self.kind.value, "path": self.path}
        if self.from_path is not None:
            data["from"] = self.from_path
        if self.value is not None:
            data["value"] = to_json(self.value)
        return data


def _malformed(
    message: str, *, index: int | None, path: str | None = None, op: str | None = None
) -> PatchError:
    err = structural(message, path=path)
    err.op = op
    err.index = index
    return err


def parse_operation(raw: Any, *, index: int | None = None) -> Operation:
    """Parse one ``{op, path, from?, value?}`` record.

    Raises:
        PatchError: ``structural`` for an unknown ``op`` or a malformed record.
    """
    if not isinstance(raw, dict):
        raise _malformed("Operation must be an object", index=index)

    path = raw.get("path")
    op_name = raw.get("op")
    try:
        kind = OperationKind(op_name)
    except ValueError:
        raise _malformed(
            f"Unknown operation {op_name!r}",
            index=index,
            path=path if isinstance(path, str) else None,
        ) from None

    if not isinstance(path, str):
        raise _malformed("Operation 'path' must be a string", index=index, op=kind.value)

    from_path: str | None = None
    if kind in _NEEDS_FROM:
        from_path = raw.get("from")
        if not isinstance(from_path, str):
            raise _malformed(
                f"'{kind.value}' requires a string 'from'", index=index, path=path, op=kind.value
            )

    value: PatchValue | None = None
    if kind in _NEEDS_VALUE:
        if "value" not in raw:
            raise _malformed(
                f"'{kind.value}' requires a 'value'", index=index, path=path, op=kind.value
            )
        try:
            value = from_json(raw["value"])
        except PatchError as exc:
            raise exc.located(op=kind.value, index=index, path=path) from None

    return Operation(kind, path, from_path=from_path, value=value)


def parse_document(raw: Any) -> list[Operation]:
    """Parse a decoded patch document into operations, in document order."""
    if not isinstance(raw, list):
        raise structural("Patch document must be a JSON array of operations")
    return [parse_operation(item, index=i) for i, item in enumerate(raw)]
