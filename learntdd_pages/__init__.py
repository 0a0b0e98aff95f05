"""Static site generator for the Learn TDD tutorial site.

This package exposes the CLI entry points used by ``uv run learntdd`` to
render the home page and tutorial pages, check links, and list routes.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from learntdd_pages import main
>>> main()  # doctest: +SKIP
>>> from learntdd_pages import app
>>> app(["routes"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
