"""Patch application engine — ordered, all-or-nothing application.

The engine deep-copies the projection, applies operations strictly in
document order, and raises on the first failure. The caller's projection
is never touched, so discarding the exception is enough to guarantee that
nothing was applied.
"""

from __future__ import annotations

import copy
from collections.abc import Sequence
from typing import TypeVar

import structlog

from housepatch.patch.errors import PatchError
from housepatch.patch.executor import apply_operation
from housepatch.patch.operations import Operation

log = structlog.get_logger(__name__)

_T = TypeVar("_T")


def apply_patch(operations: Sequence[Operation], projection: _T) -> _T:
    """Apply *operations* to a copy of *projection* and return the copy.

    Raises:
        PatchError: for the first failing operation, annotated with its
            position in the batch and its kind.
    """
    working = copy.deepcopy(projection)
    for index, operation in enumerate(operations):
        try:
            apply_operation(operation, working)
        except PatchError as exc:
            exc.located(op=operation.kind.value, index=index, path=operation.path)
            log.debug(
                "patch.rejected",
                index=index,
                op=operation.kind.value,
                path=exc.path,
                kind=exc.kind.value,
            )
            raise
        log.debug("patch.applied", index=index, op=operation.kind.value, path=operation.path)
    return working


class PatchEngine:
    """Stateless engine object handed to the service layer."""

    def apply(self, operations: Sequence[Operation], projection: _T) -> _T:
        return apply_patch(operations, projection)
