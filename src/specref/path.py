"""Breadcrumb paths for reporting where a node sits inside a document.

A :class:`LocationPath` is an ordered list of segments plus a separator used
only for display. Walkers such as :func:`specref.validation.validate_document`
derive a child path with :meth:`LocationPath.extend` for every nested slot so
that sibling branches never see each other's segments; code that manages its
own scope can :meth:`~LocationPath.push` and :meth:`~LocationPath.pop` in
place instead.

Example::

    root = LocationPath()
    pet = root.extend("components").extend("schemas").extend("Pet")
    str(pet)          # "components/schemas/Pet"
    pet.to_pointer()  # "#/components/schemas/Pet"
"""

from __future__ import annotations

from typing import Iterator, Optional


class LocationPath:
    """An ordered sequence of string segments with a display separator.

    Two paths are equal when their segments are equal; the separator is a
    formatting concern and does not take part in comparisons.

    Args:
        separator: Character placed between segments by ``str()``.
    """

    __slots__ = ("_parts", "_separator")

    def __init__(self, separator: str = "/") -> None:
        self._parts: list[str] = []
        self._separator = separator

    @property
    def separator(self) -> str:
        """The display separator."""
        return self._separator

    @property
    def segments(self) -> tuple[str, ...]:
        """The segments, root first."""
        return tuple(self._parts)

    def is_root(self) -> bool:
        """Return True when the path has no segments."""
        return not self._parts

    def push(self, segment: str) -> None:
        """Append *segment* in place."""
        self._parts.append(str(segment))

    def pop(self) -> Optional[str]:
        """Remove and return the last segment, or ``None`` if the path is empty."""
        if not self._parts:
            return None
        return self._parts.pop()

    def extend(self, segment: str) -> LocationPath:
        """Return a new path with *segment* appended, leaving this one unchanged."""
        child = self._copy()
        child._parts.append(str(segment))
        return child

    def parent(self) -> LocationPath:
        """Return a new path without the last segment (the root is its own parent)."""
        parent = self._copy()
        if parent._parts:
            parent._parts.pop()
        return parent

    def to_pointer(self) -> str:
        """Render the path as an RFC 6901 JSON Pointer fragment (``#/a/b``)."""
        escaped = (p.replace("~", "~0").replace("/", "~1") for p in self._parts)
        return "#/" + "/".join(escaped) if self._parts else "#"

    def _copy(self) -> LocationPath:
        new = LocationPath(self._separator)
        new._parts = list(self._parts)
        return new

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocationPath):
            return NotImplemented
        return self._parts == other._parts

    def __str__(self) -> str:
        return self._separator.join(self._parts)

    def __repr__(self) -> str:
        return f"LocationPath({self._parts!r}, separator={self._separator!r})"
