"""House identity helpers.

INVARIANT: an aggregate id is never the nil UUID once created.
"""

from __future__ import annotations

import uuid

EMPTY_ID = uuid.UUID(int=0)


def new_id() -> uuid.UUID:
    """Generate a fresh random identity."""
    return uuid.uuid4()


def is_empty_id(value: uuid.UUID | str | None) -> bool:
    """Return True for ``None``, blank strings and the nil UUID."""
    if value is None:
        return True
    if isinstance(value, uuid.UUID):
        return value == EMPTY_ID
    text = value.strip()
    if not text:
        return True
    try:
        return uuid.UUID(text) == EMPTY_ID
    except ValueError:
        return False


def parse_house_id(value: uuid.UUID | str) -> uuid.UUID:
    """Parse *value* into a UUID.

    Raises:
        ValueError: if *value* is empty, the nil UUID, or not a UUID at all.
    """
    if is_empty_id(value):
        raise ValueError("id must not be empty")
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid id: {value!r}") from exc
