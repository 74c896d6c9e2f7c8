"""HouseService — partial updates, replacements, and basic house management.

Patch pipeline: VALIDATE → LOAD → PROJECT → APPLY → MERGE → PERSIST → RESPOND

- Malformed requests (empty id, missing document) are rejected before the
  store is touched.
- A missing house is NOT_FOUND, checked before any patch is attempted.
- Any engine failure is SEMANTICALLY_INVALID and nothing is persisted:
  the engine works on a copy that is simply dropped.
- Unexpected exceptions (persistence errors, bugs) propagate unchanged.
  Nothing is retried.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from housepatch.domain.ids import parse_house_id
from housepatch.domain.projection import merge_projection, to_projection
from housepatch.domain.replacement import HouseRequest, HouseUpdate, apply_replacement
from housepatch.patch import Operation, PatchEngine, PatchError, parse_document
from housepatch.services.base import BaseService
from housepatch.services.result import (
    MALFORMED_REQUEST,
    NOT_FOUND,
    SEMANTICALLY_INVALID,
    ServiceResult,
)
from housepatch.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from housepatch.infrastructure.repository import HouseStore

log = structlog.get_logger(__name__)

PatchInput = Sequence[Operation] | Sequence[dict[str, Any]]


class HouseService(BaseService):
    """Use cases over the House aggregate."""

    def __init__(self, store: HouseStore, engine: PatchEngine | None = None) -> None:
        super().__init__(store)
        self._engine = engine or PatchEngine()

    # ------------------------------------------------------------------
    # Partial updates
    # ------------------------------------------------------------------

    @traced
    def update_by_patch(self, patch: PatchInput | None, house_id: uuid.UUID | str) -> ServiceResult:
        """Apply a patch document to the house with *house_id*.

        *patch* is either parsed :class:`Operation` objects or the decoded
        JSON document (a list of ``{op, path, from?, value?}`` dicts).
        """
        op = "update_by_patch"

        # ── VALIDATE ─────────────────────────────────────────
        parsed_id, failure = _check_id(op, house_id)
        if failure is not None:
            return failure
        if patch is None:
            return ServiceResult.failure(op, MALFORMED_REQUEST, "Patch document is required")

        # ── LOAD ─────────────────────────────────────────────
        house = self._store.find_by_id(parsed_id)
        if house is None:
            return _not_found(op, parsed_id)

        # ── PROJECT → APPLY ──────────────────────────────────
        try:
            operations = _as_operations(patch)
            with trace_span("apply_patch") as span:
                patched = self._engine.apply(operations, to_projection(house))
                if span is not None:
                    span.annotate("operations", len(operations))
        except PatchError as exc:
            log.info("house.patch_rejected", house_id=str(parsed_id), **exc.to_detail())
            return ServiceResult.failure(op, SEMANTICALLY_INVALID, str(exc), exc.to_detail())

        # ── MERGE → PERSIST ──────────────────────────────────
        merge_projection(patched, house)
        with trace_span("persist"):
            self._store.persist(house)
        log.info("house.patched", house_id=str(parsed_id), operations=len(operations))

        # ── RESPOND ──────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": str(house.id), "operations": len(operations), "house": house.to_dict()},
        )

    @traced
    def update_by_replacement(
        self, update: HouseUpdate | dict[str, Any] | None, house_id: uuid.UUID | str
    ) -> ServiceResult:
        """Overwrite name, color and area of the house with *house_id*."""
        op = "update_by_replacement"

        parsed_id, failure = _check_id(op, house_id)
        if failure is not None:
            return failure
        if update is None:
            return ServiceResult.failure(op, MALFORMED_REQUEST, "Update document is required")
        if not isinstance(update, HouseUpdate):
            try:
                update = HouseUpdate.model_validate(update)
            except ValidationError as exc:
                return _invalid_document(op, exc)

        house = self._store.find_by_id(parsed_id)
        if house is None:
            return _not_found(op, parsed_id)

        apply_replacement(update, house)
        with trace_span("persist"):
            self._store.persist(house)
        log.info("house.replaced", house_id=str(parsed_id))

        return ServiceResult(
            ok=True,
            op=op,
            data={"id": str(house.id), "house": house.to_dict()},
        )

    # ------------------------------------------------------------------
    # Reads and lifecycle
    # ------------------------------------------------------------------

    @traced
    def get_house(self, house_id: uuid.UUID | str) -> ServiceResult:
        op = "get_house"
        parsed_id, failure = _check_id(op, house_id)
        if failure is not None:
            return failure

        house = self._store.find_by_id(parsed_id)
        if house is None:
            return _not_found(op, parsed_id)
        return ServiceResult(ok=True, op=op, data=house.to_dict())

    @traced
    def list_houses(self) -> ServiceResult:
        houses = self._store.list_houses()
        items = [h.to_list_item() for h in houses]
        return ServiceResult(ok=True, op="list_houses", data={"count": len(items), "items": items})

    @traced
    def create_house(self, request: HouseRequest | dict[str, Any] | None) -> ServiceResult:
        op = "create_house"
        if request is None:
            return ServiceResult.failure(op, MALFORMED_REQUEST, "Create document is required")
        try:
            if not isinstance(request, HouseRequest):
                request = HouseRequest.model_validate(request)
            house = request.build()
        except ValidationError as exc:
            return _invalid_document(op, exc)
        except ValueError as exc:
            return ServiceResult.failure(op, MALFORMED_REQUEST, str(exc))

        with trace_span("persist"):
            self._store.add(house)
        log.info("house.created", house_id=str(house.id))
        return ServiceResult(ok=True, op=op, data=house.to_dict())

    @traced
    def remove_house(self, house_id: uuid.UUID | str) -> ServiceResult:
        op = "remove_house"
        parsed_id, failure = _check_id(op, house_id)
        if failure is not None:
            return failure

        house = self._store.find_by_id(parsed_id)
        if house is None:
            return _not_found(op, parsed_id)

        self._store.remove(house)
        log.info("house.removed", house_id=str(parsed_id))
        return ServiceResult(ok=True, op=op, data={"id": str(parsed_id)})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_id(
    op: str, house_id: uuid.UUID | str | None
) -> tuple[uuid.UUID, None] | tuple[None, ServiceResult]:
    try:
        return parse_house_id(house_id), None  # type: ignore[arg-type]
    except (ValueError, AttributeError) as exc:
        return None, ServiceResult.failure(op, MALFORMED_REQUEST, str(exc))


def _not_found(op: str, house_id: uuid.UUID) -> ServiceResult:
    return ServiceResult.failure(
        op, NOT_FOUND, f"There is no house with id: {house_id}", {"id": str(house_id)}
    )


def _invalid_document(op: str, exc: ValidationError) -> ServiceResult:
    errors = [
        f"{'.'.join(str(p) for p in err['loc']) or 'document'}: {err['msg']}"
        for err in exc.errors()
    ]
    return ServiceResult.failure(op, MALFORMED_REQUEST, "; ".join(errors), {"errors": errors})


def _as_operations(patch: PatchInput) -> list[Operation]:
    if isinstance(patch, (list, tuple)) and all(isinstance(item, Operation) for item in patch):
        return list(patch)  # type: ignore[arg-type]
    return parse_document(patch)
