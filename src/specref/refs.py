"""Parse ``$ref`` pointer strings into structured references.

OpenAPI documents point at reusable components with JSON Pointer fragments
such as ``#/components/schemas/Pet``. Only the trailing ``<kind>/<name>``
pair carries meaning here: the kind selects a component collection and the
name is the key inside it. The leading container segment is stripped
without being checked.

Two parsers coexist:

* :meth:`Ref.parse` -- the strict form. The kind must be a member of the
  closed :class:`RefKind` enumeration; anything else raises
  :class:`~specref.exceptions.RefParseError`.
* :meth:`LooseRef.parse` -- the loose form. The kind is kept as a plain
  string and malformed input yields ``None``. Callers compare the kind
  themselves and treat a mismatch as "not mine".

Only internal references (``#/...``) are understood; external file or URL
references fail strict parsing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from specref.exceptions import RefParseError

_POINTER_PREFIX = "#/"
_COMPONENTS = "components"


class RefKind(str, enum.Enum):
    """Component collections a reference can point into.

    Values are the collection keys used under ``components`` in an OpenAPI
    3.x document.
    """

    SCHEMA = "schemas"
    RESPONSE = "responses"
    PARAMETER = "parameters"
    EXAMPLE = "examples"
    REQUEST_BODY = "requestBodies"
    HEADER = "headers"
    SECURITY_SCHEME = "securitySchemes"
    LINK = "links"
    CALLBACK = "callbacks"
    PATH_ITEM = "pathItems"

    @classmethod
    def from_segment(cls, segment: str, path: str = "") -> RefKind:
        """Map a pointer segment to its kind.

        Raises:
            RefParseError: If *segment* names no known collection.
        """
        try:
            return cls(segment)
        except ValueError:
            raise RefParseError(
                path or segment, f"unknown component kind '{segment}'"
            ) from None


def _unescape(segment: str) -> str:
    # RFC 6901: '~1' must be decoded before '~0'
    return segment.replace("~1", "/").replace("~0", "~")


def _split(raw: str) -> Optional[tuple[str, str]]:
    """Return the raw ``(kind, name)`` pair, or ``None`` if *raw* has no such shape."""
    if not raw.startswith(_POINTER_PREFIX):
        return None
    segments = raw[len(_POINTER_PREFIX):].split("/")
    if len(segments) < 2:
        return None
    kind, name = segments[-2], segments[-1]
    if not kind or not name:
        return None
    return kind, _unescape(name)


@dataclass(frozen=True)
class Ref:
    """A strictly parsed reference: a known collection plus a key.

    A ``Ref`` carries no value of its own; it only means something when
    looked up against a :class:`~specref.models.Document`.
    """

    kind: RefKind
    name: str

    @classmethod
    def parse(cls, raw: str) -> Ref:
        """Parse *raw* into a :class:`Ref`.

        Args:
            raw: A pointer such as ``"#/components/schemas/Pet"``.

        Returns:
            The structured reference.

        Raises:
            RefParseError: If the pointer is external, has fewer than two
                segments, has an empty kind or name, or names an unknown
                collection.
        """
        if not raw.startswith(_POINTER_PREFIX):
            raise RefParseError(
                raw, "only internal references starting with '#/' are supported"
            )
        parts = _split(raw)
        if parts is None:
            raise RefParseError(raw, "expected '#/components/<kind>/<name>'")
        kind, name = parts
        return cls(kind=RefKind.from_segment(kind, raw), name=name)

    def __str__(self) -> str:
        name = self.name.replace("~", "~0").replace("/", "~1")
        return f"{_POINTER_PREFIX}{_COMPONENTS}/{self.kind.value}/{name}"


@dataclass(frozen=True)
class LooseRef:
    """A reference whose kind is an unchecked string."""

    kind: str
    name: str

    @classmethod
    def parse(cls, raw: str) -> Optional[LooseRef]:
        """Parse *raw*, returning ``None`` instead of raising on malformed input."""
        parts = _split(raw)
        if parts is None:
            return None
        return cls(kind=parts[0], name=parts[1])
