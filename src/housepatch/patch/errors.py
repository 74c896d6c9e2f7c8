"""PatchError and its four kinds.

INVARIANT: every failure raised by parsing, resolution or execution is a
PatchError. Callers map all kinds uniformly to "patch semantically invalid".
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class PatchErrorKind(StrEnum):
    """Why a patch operation was rejected."""

    STRUCTURAL = "structural"
    UNRESOLVABLE = "unresolvable"
    TYPE_MISMATCH = "type_mismatch"
    PRECONDITION_FAILED = "precondition_failed"


class PatchError(Exception):
    """A patch operation could not be parsed, resolved, or applied.

    Attributes:
        kind: The failure category.
        path: The pointer path that triggered the failure, if known.
        op: The operation kind (``"add"``, ``"test"``, ...), if known.
        index: Position of the failing operation in the batch, if known.
    """

    def __init__(
        self,
        kind: PatchErrorKind,
        message: str,
        *,
        path: str | None = None,
        op: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.path = path
        self.op = op
        self.index = index

    def located(self, *, op: str, index: int, path: str | None = None) -> PatchError:
        """Fill in the operation context without overwriting what is already set."""
        if self.op is None:
            self.op = op
        if self.index is None:
            self.index = index
        if self.path is None:
            self.path = path
        return self

    def to_detail(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "path": self.path,
            "op": self.op,
            "index": self.index,
        }

    def __str__(self) -> str:
        where = f" at {self.path!r}" if self.path is not None else ""
        return f"{self.kind.value}{where}: {self.message}"


def structural(message: str, *, path: str | None = None) -> PatchError:
    return PatchError(PatchErrorKind.STRUCTURAL, message, path=path)


def unresolvable(message: str, *, path: str | None = None) -> PatchError:
    return PatchError(PatchErrorKind.UNRESOLVABLE, message, path=path)


def type_mismatch(message: str, *, path: str | None = None) -> PatchError:
    return PatchError(PatchErrorKind.TYPE_MISMATCH, message, path=path)


def precondition_failed(message: str, *, path: str | None = None) -> PatchError:
    return PatchError(PatchErrorKind.PRECONDITION_FAILED, message, path=path)
