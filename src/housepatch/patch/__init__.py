"""Patch application engine — pointer paths, operations, and the error taxonomy.

The engine depends on the domain projection only. It is synchronous and
stateless: every :func:`apply_patch` call works on its own deep copy.
"""

from housepatch.patch.engine import PatchEngine, apply_patch
from housepatch.patch.errors import PatchError, PatchErrorKind
from housepatch.patch.operations import Operation, OperationKind, parse_document

__all__ = [
    "Operation",
    "OperationKind",
    "PatchEngine",
    "PatchError",
    "PatchErrorKind",
    "apply_patch",
    "parse_document",
]
