"""Operation executor — applies one operation to a projection root.

Semantics per operation kind:

- ``add``: inserts into a sequence (shifting later elements) or sets a
  composite member. Adding to a member does not require a current value,
  but its parent composite must exist.
- ``remove``: deletes a sequence element, or resets a member to its
  neutral state (absent for text and composites, empty for sequences,
  zero for decimals). Removing a present scalar member never fails.
- ``replace``: the target must currently hold a value.
- ``move``: read ``from``, remove it, add at ``path``. Identical paths
  validate both and change nothing.
- ``copy``: read ``from``, add a deep copy at ``path``. Move and copy
  re-coerce the value into the target member's shape.
- ``test``: coerce the supplied value to the target's shape and compare
  for deep equality.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from housepatch.domain.projection import Shape, ShapeKind, projection_to_dict
from housepatch.patch.errors import precondition_failed, structural, unresolvable
from housepatch.patch.operations import Operation, OperationKind
from housepatch.patch.pointer import (
    IndexLocation,
    Location,
    MemberLocation,
    parse_pointer,
    resolve,
)
from housepatch.patch.values import PatchValue, coerce, coerce_element, from_json


def neutral_value(shape: Shape) -> Any:
    """The reset state of a member of *shape*."""
    match shape.kind:
        case ShapeKind.DECIMAL:
            return Decimal(0)
        case ShapeKind.SEQUENCE:
            return []
    return None


def apply_operation(operation: Operation, root: Any) -> None:
    """Apply *operation* to *root* in place.

    Raises:
        PatchError: on any resolution, coercion or comparison failure.
    """
    match operation.kind:
        case OperationKind.ADD:
            _add_value(root, operation.path, _value_of(operation))
        case OperationKind.REMOVE:
            _remove(resolve(root, operation.path))
        case OperationKind.REPLACE:
            _replace(resolve(root, operation.path), _value_of(operation), operation.path)
        case OperationKind.MOVE:
            _move(root, _from_of(operation), operation.path)
        case OperationKind.COPY:
            from_path = _from_of(operation)
            source = resolve(root, from_path)
            _transfer(_read_existing(source, from_path), source, root, operation.path)
        case OperationKind.TEST:
            _test(resolve(root, operation.path), _value_of(operation), operation.path)


def _value_of(operation: Operation) -> PatchValue:
    if operation.value is None:
        raise structural(f"'{operation.kind.value}' requires a 'value'", path=operation.path)
    return operation.value


def _from_of(operation: Operation) -> str:
    if operation.from_path is None:
        raise structural(f"'{operation.kind.value}' requires a 'from'", path=operation.path)
    return operation.from_path


# ---------------------------------------------------------------------------
# Primitive writes on a resolved location
# ---------------------------------------------------------------------------


def _coerce_into(location: Location, value: PatchValue, path: str) -> Any:
    if isinstance(location, IndexLocation):
        return coerce_element(value, location.shape, path=path)
    return coerce(value, location.shape, path=path)


def _add_value(root: Any, path: str, value: PatchValue) -> None:
    location = resolve(root, path)
    _add_native(location, _coerce_into(location, value, path))


def _add_native(location: Location, native: Any) -> None:
    if isinstance(location, IndexLocation):
        if location.is_append:
            location.sequence.append(native)
        else:
            location.sequence.insert(location.position(), native)
    else:
        location.write(native)


def _remove(location: Location) -> None:
    if isinstance(location, IndexLocation):
        del location.sequence[location.position()]
    else:
        location.write(neutral_value(location.shape))


def _replace(location: Location, value: PatchValue, path: str) -> None:
    if isinstance(location, MemberLocation) and location.read() is None:
        raise unresolvable(f"Nothing to replace: {location.member.name!r} is absent", path=path)
    native = _coerce_into(location, value, path)
    if isinstance(location, IndexLocation):
        location.sequence[location.position()] = native
    else:
        location.write(native)


def _read_existing(location: Location, path: str) -> Any:
    value = location.read()
    if value is None:
        raise unresolvable("Nothing to read: the source is absent", path=path)
    return value


def _transfer(value: Any, source: Location, root: Any, path: str) -> None:
    """Add *value* read at *source* to *path*, re-coerced to the target's shape.

    Going through the tagged form both deep-copies the value and rejects
    moves between incompatible members (``/name`` -> ``/area``).
    """
    tagged = from_json(projection_to_dict(value, source.shape))
    _add_value(root, path, tagged)


def _move(root: Any, from_path: str, path: str) -> None:
    source = resolve(root, from_path)
    value = _read_existing(source, from_path)
    if from_path == path:
        resolve(root, path)
        return

    source_tokens = parse_pointer(from_path)
    if parse_pointer(path)[: len(source_tokens)] == source_tokens:
        raise unresolvable(f"Cannot move {from_path!r} into its own child", path=path)

    _remove(source)
    _transfer(value, source, root, path)


def _test(location: Location, value: PatchValue, path: str) -> None:
    shape = location.shape
    expected = projection_to_dict(coerce(value, shape, path=path), shape)
    actual = projection_to_dict(location.read(), shape)
    if expected != actual:
        raise precondition_failed(f"Expected {expected!r}, found {actual!r}", path=path)
