"""Path resolver — pointer-style paths against the projection graph.

A path is a ``/``-separated list of tokens with ``~1`` -> ``/`` and
``~0`` -> ``~`` escapes. Parsing only checks syntax; whether a token is a
member step or an index step is decided while walking, from the shape of
the node it is applied to:

- composite node: the token names a member in the node's member table;
- sequence node: the token is a non-negative integer literal, or ``-``
  (append, one past the end).

Every walking failure is ``unresolvable``; only syntax errors are
``structural``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final

from housepatch.domain.projection import HOUSE_SHAPE, Member, Shape, ShapeKind
from housepatch.patch.errors import structural, unresolvable

APPEND: Final = "-"

_INDEX_RE = re.compile(r"^(0|[1-9][0-9]*)$")
_BAD_ESCAPE_RE = re.compile(r"~(?![01])")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_pointer(path: str) -> tuple[str, ...]:
    """Split *path* into decoded tokens.

    Raises:
        PatchError: ``structural`` for an empty path, a missing leading
            ``/``, or an escape other than ``~0``/``~1``.
    """
    if not path:
        raise structural("Path must not be empty", path=path)
    if not path.startswith("/"):
        raise structural("Path must start with '/'", path=path)
    if _BAD_ESCAPE_RE.search(path):
        raise structural("Invalid '~' escape; only '~0' and '~1' are allowed", path=path)
    return tuple(token.replace("~1", "/").replace("~0", "~") for token in path[1:].split("/"))


def format_pointer(tokens: tuple[str, ...]) -> str:
    return "".join("/" + t.replace("~", "~0").replace("/", "~1") for t in tokens)


# ---------------------------------------------------------------------------
# Steps and locations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MemberLocation:
    """A named member on a composite node."""

    owner: Any
    member: Member

    @property
    def shape(self) -> Shape:
        return self.member.shape

    def read(self) -> Any:
        return self.member.get(self.owner)

    def write(self, value: Any) -> None:
        self.member.set(self.owner, value)


@dataclass(frozen=True)
class IndexLocation:
    """A position in a sequence. ``index`` may equal ``len`` or be APPEND."""

    sequence: list[Any]
    index: int | str
    shape: Shape
    path: str

    @property
    def is_append(self) -> bool:
        return self.index == APPEND or self.index == len(self.sequence)

    def position(self) -> int:
        """Existing element position; fails for the one-past-the-end slot."""
        if self.is_append:
            raise unresolvable(
                f"Index {self.index} is past the end of a sequence of {len(self.sequence)}",
                path=self.path,
            )
        assert isinstance(self.index, int)
        return self.index

    def read(self) -> Any:
        return self.sequence[self.position()]


Location = MemberLocation | IndexLocation


def _index_step(token: str, sequence: list[Any], path: str) -> int | str:
    if token == APPEND:
        return APPEND
    if not _INDEX_RE.match(token):
        raise unresolvable(f"{token!r} is not a sequence position", path=path)
    index = int(token)
    if index > len(sequence):
        raise unresolvable(
            f"Index {index} is out of range for a sequence of {len(sequence)}", path=path
        )
    return index


def _member_step(token: str, shape: Shape, path: str) -> Member:
    cls = shape.composite
    assert cls is not None
    member = cls.member(token)
    if member is None:
        raise unresolvable(f"{shape.describe()} has no member {token!r}", path=path)
    return member


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve(root: Any, path: str, *, root_shape: Shape = HOUSE_SHAPE) -> Location:
    """Walk *root* along *path* and return the final location.

    Intermediate nodes must be present: traversing through an absent
    composite, a scalar, or a one-past-the-end index is ``unresolvable``.
    """
    tokens = parse_pointer(path)
    node: Any = root
    shape = root_shape
    location: Location | None = None

    for depth, token in enumerate(tokens):
        if depth > 0:
            assert location is not None
            node = location.read()
            shape = location.shape
            if node is None:
                raise unresolvable(
                    f"Cannot traverse through absent {shape.describe()} "
                    f"at {format_pointer(tokens[:depth])!r}",
                    path=path,
                )

        if shape.kind is ShapeKind.COMPOSITE:
            location = MemberLocation(node, _member_step(token, shape, path))
        elif shape.kind is ShapeKind.SEQUENCE:
            assert shape.element is not None
            location = IndexLocation(node, _index_step(token, node, path), shape.element, path)
        else:
            raise unresolvable(
                f"Cannot traverse into {shape.describe()} value with {token!r}", path=path
            )

    assert location is not None
    return location
