"""Exception hierarchy for specref.

All exceptions inherit from :class:`SpecrefError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specref.exit_codes`.
The top-level error handler in :func:`specref.app.main` catches
``SpecrefError`` and exits with the appropriate code.

Library callers mostly care about two branches:

* :class:`RefError` -- raised by reference parsing and resolution. The
  subclasses keep "the pointer names the wrong collection"
  (:class:`MismatchedTypeError`) apart from "the collection has no such
  entry" (:class:`UnresolvableError`).
* :class:`SchemaError` -- raised by the validation pass in
  :mod:`specref.validation`, never by resolution.

Subclass hierarchy::

    SpecrefError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- ConfigError                    (exit 1)
    +-- SpecParseError                 (exit 7)
    +-- RefError                       (exit 8)
    |   +-- RefParseError
    |   +-- MismatchedTypeError
    |   +-- UnresolvableError          (exit 4)
    |   +-- ReferenceCycleError
    +-- SchemaError                    (exit 9)
        +-- NoTypeError
        +-- UnknownTypeError
        +-- RequiredSpecifiedOnNonObjectError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from specref.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REF_ERROR,
    EXIT_SCHEMA_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)

if TYPE_CHECKING:
    from specref.refs import RefKind


class SpecrefError(Exception):
    """Base exception for all specref errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specref.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecrefError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SpecrefError):
    """Raised for configuration problems (invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


class SpecParseError(SpecrefError):
    """Raised when an OpenAPI document cannot be loaded, parsed, or validated."""

    exit_code = EXIT_SPEC_PARSE_ERROR


# --- Reference errors ---


class RefError(SpecrefError):
    """Base class for every failure to parse or follow a ``$ref`` pointer."""

    exit_code = EXIT_REF_ERROR


class RefParseError(RefError):
    """Raised when a raw pointer does not decompose into a known ``(kind, name)`` pair.

    Args:
        path: The raw reference string.
        reason: Why parsing failed.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid reference '{path}': {reason}")
        self.path = path
        self.reason = reason


class MismatchedTypeError(RefError):
    """Raised when a pointer names a different collection than the one being resolved.

    Args:
        found: The kind parsed from the pointer.
        expected: The kind owned by the entity type doing the resolution.
    """

    def __init__(self, found: RefKind, expected: RefKind):
        super().__init__(
            f"Mismatched reference type: found '{found.value}', "
            f"expected '{expected.value}'"
        )
        self.found = found
        self.expected = expected


class UnresolvableError(RefError):
    """Raised when the pointer's kind matches but the document has no entry under its name.

    Args:
        path: The raw reference string, exactly as given by the caller.
    """

    exit_code = EXIT_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Unresolvable reference: {path}")
        self.path = path


class ReferenceCycleError(RefError):
    """Raised when following a chain of references revisits a pointer.

    Args:
        chain: The pointers followed, in order, ending with the repeated one.
    """

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__("Reference cycle: " + " -> ".join(self.chain))


# --- Schema validation errors ---


class SchemaError(SpecrefError):
    """Base class for errors emitted by the schema validation pass."""

    exit_code = EXIT_SCHEMA_ERROR


class NoTypeError(SchemaError):
    """Raised when a schema that needs a ``type`` keyword does not declare one."""

    def __init__(self, message: str = "Missing type property"):
        super().__init__(message)


class UnknownTypeError(SchemaError):
    """Raised when a ``type`` keyword is not one of the JSON Schema primitive types.

    Args:
        type_name: The offending value, rendered as a string.
    """

    def __init__(self, type_name: str):
        super().__init__(f"Unknown type: {type_name}")
        self.type_name = type_name


class RequiredSpecifiedOnNonObjectError(SchemaError):
    """Raised when ``required`` is set on a schema whose type is not ``object``."""

    def __init__(
        self, message: str = "Required fields specified on a non-object schema"
    ):
        super().__init__(message)
