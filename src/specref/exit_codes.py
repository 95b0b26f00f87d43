"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specref.exceptions.SpecrefError` subclass.
Scripts wrapping ``specref validate`` can inspect the exit code to tell a
broken document apart from a broken reference without parsing stderr.

Example::

    $ specref resolve openapi.yaml '#/components/schemas/Dog'
    $ echo $?
    4   # EXIT_NOT_FOUND -- no such component
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""A reference pointed at a component that does not exist."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded or parsed."""

EXIT_REF_ERROR = 8
"""A ``$ref`` pointer was malformed, of the wrong kind, or cyclic."""

EXIT_SCHEMA_ERROR = 9
"""A schema failed the validation pass."""
