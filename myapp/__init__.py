"""
MyApp starter API service.

The package is split along the same seams as the process layout:

* `myapp.server` - FastAPI application factory and the HTTP entrypoint.
* `myapp.migrations` - Alembic-backed schema migrations and their CLI.
* `myapp.config` - environment-driven settings shared by both entrypoints.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
