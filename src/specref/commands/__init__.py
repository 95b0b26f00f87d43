"""Built-in CLI commands for specref.

* :mod:`~specref.commands.resolve` -- ``resolve`` a single pointer and
  ``inline`` a component schema.
* :mod:`~specref.commands.inspect` -- list ``schemas`` and ``validate``
  a document.

Each module exports plain callback functions registered directly on the
root app in :mod:`specref.app`.
"""
