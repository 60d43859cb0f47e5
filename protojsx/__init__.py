"""Translate declarative proto files into React JSX source.

This package exposes the CLI entry points used by the ``protojsx`` console
script to render view modules and the router module from YAML descriptions of
a site's pages, layouts, component presets, and media assets.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from protojsx import main
>>> main()  # doctest: +SKIP
>>> from protojsx import app
>>> app.name  # doctest: +SKIP
('protojsx',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
