"""ServiceResult and ServiceError — the outward result of every use case.

INVARIANT: expected failures come back as ``ok=False`` with one of the
error codes below. Anything else (persistence failures, bugs) is raised
and never disguised as a result.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, Field

MALFORMED_REQUEST: Final = "MALFORMED_REQUEST"
NOT_FOUND: Final = "NOT_FOUND"
SEMANTICALLY_INVALID: Final = "SEMANTICALLY_INVALID"
UNEXPECTED: Final = "UNEXPECTED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of all service operations.

    Attributes:
        ok: Whether the operation was applied.
        op: Name of the operation (e.g. ``"update_by_patch"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry when verbose).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, detail: dict[str, Any] | None = None
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
