"""Tagged patch values and explicit, fallible coercion into member shapes.

Inbound patch values are loosely typed (whatever JSON decoded to). They
are wrapped once into a small tagged union by :func:`from_json` and only
turned into typed projection values by :func:`coerce`, which dispatches on
the *declared* shape of the target member.

INVARIANT: coercion never silently defaults. A value whose shape cannot
be converted raises a ``type_mismatch`` PatchError.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from housepatch.domain.projection import Shape, ShapeKind
from housepatch.patch.errors import structural, type_mismatch

# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: Decimal


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class SequenceValue:
    items: tuple[PatchValue, ...]


@dataclass(frozen=True)
class CompositeValue:
    members: tuple[tuple[str, PatchValue], ...]


PatchValue = TextValue | NumberValue | BooleanValue | NullValue | SequenceValue | CompositeValue

NULL = NullValue()


def from_json(raw: Any) -> PatchValue:
    """Wrap decoded JSON data into a tagged value.

    Floats go through ``repr`` so ``12.2`` becomes ``Decimal("12.2")``.
    """
    if raw is None:
        return NULL
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, str):
        return TextValue(raw)
    if isinstance(raw, int):
        return NumberValue(Decimal(raw))
    if isinstance(raw, float):
        return NumberValue(Decimal(repr(raw)))
    if isinstance(raw, Decimal):
        return NumberValue(raw)
    if isinstance(raw, (list, tuple)):
        return SequenceValue(tuple(from_json(item) for item in raw))
    if isinstance(raw, dict):
        members: list[tuple[str, PatchValue]] = []
        for key, item in raw.items():
            if not isinstance(key, str):
                raise structural(f"Object keys must be strings, got {key!r}")
            members.append((key, from_json(item)))
        return CompositeValue(tuple(members))
    raise structural(f"Unsupported value type: {type(raw).__name__}")


def to_json(value: PatchValue) -> Any:
    """Unwrap a tagged value back into plain data (numbers stay Decimal)."""
    match value:
        case NullValue():
            return None
        case TextValue(v) | NumberValue(v) | BooleanValue(v):
            return v
        case SequenceValue(items):
            return [to_json(item) for item in items]
        case CompositeValue(members):
            return {key: to_json(item) for key, item in members}
    raise TypeError(f"Not a patch value: {value!r}")


def describe(value: PatchValue) -> str:
    """Short name of the value's tag for error messages."""
    return {
        TextValue: "text",
        NumberValue: "number",
        BooleanValue: "boolean",
        NullValue: "null",
        SequenceValue: "array",
        CompositeValue: "object",
    }[type(value)]


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def coerce(value: PatchValue, shape: Shape, *, path: str | None = None) -> Any:
    """Convert *value* into the Python value a member of *shape* holds."""
    match shape.kind:
        case ShapeKind.TEXT:
            return coerce_text(value, path=path)
        case ShapeKind.DECIMAL:
            return coerce_decimal(value, path=path)
        case ShapeKind.COMPOSITE:
            return coerce_composite(value, shape, path=path)
        case ShapeKind.SEQUENCE:
            return coerce_sequence(value, shape, path=path)
    raise TypeError(f"Unknown shape: {shape!r}")


def coerce_text(value: PatchValue, *, path: str | None = None) -> str | None:
    match value:
        case NullValue():
            return None
        case TextValue(v):
            return v
        case NumberValue(v):
            return str(v)
        case BooleanValue(v):
            return "true" if v else "false"
    raise type_mismatch(f"Cannot convert {describe(value)} to text", path=path)


def coerce_decimal(value: PatchValue, *, path: str | None = None) -> Decimal:
    match value:
        case NumberValue(v):
            if not v.is_finite():
                raise type_mismatch(f"{v} is not a finite decimal number", path=path)
            return v
        case TextValue(v):
            try:
                number = Decimal(v.strip())
            except InvalidOperation:
                raise type_mismatch(f"{v!r} is not a decimal number", path=path) from None
            if not number.is_finite():
                raise type_mismatch(f"{v!r} is not a finite decimal number", path=path)
            return number
    raise type_mismatch(f"Cannot convert {describe(value)} to decimal", path=path)


def coerce_composite(value: PatchValue, shape: Shape, *, path: str | None = None) -> Any:
    if isinstance(value, NullValue):
        return None
    if not isinstance(value, CompositeValue):
        raise type_mismatch(f"Cannot convert {describe(value)} to {shape.describe()}", path=path)

    cls = shape.composite
    assert cls is not None
    node = cls()
    for key, item in value.members:
        member = cls.member(key)
        if member is None:
            raise type_mismatch(f"{shape.describe()} has no member {key!r}", path=path)
        member.set(node, coerce(item, member.shape, path=path))
    return node


def coerce_sequence(value: PatchValue, shape: Shape, *, path: str | None = None) -> list[Any]:
    if not isinstance(value, SequenceValue):
        raise type_mismatch(f"Cannot convert {describe(value)} to {shape.describe()}", path=path)
    element = shape.element
    assert element is not None
    return [coerce_element(item, element, path=path) for item in value.items]


def coerce_element(value: PatchValue, shape: Shape, *, path: str | None = None) -> Any:
    """Coerce one sequence element. Elements are never absent, so null is rejected."""
    if isinstance(value, NullValue):
        raise type_mismatch(f"{shape.describe()} elements cannot be null", path=path)
    return coerce(value, shape, path=path)
