"""
MyApp Schema Migrations

Narrow interface over Alembic for evolving the database schema:

* `up(url)` - apply every pending revision
* `down(url, steps)` - roll back `steps` revisions (at least one)
* `redo(url)` - roll back the latest revision, then upgrade to head
* `status(url)` - list revisions with their applied/pending state

Revisions live in `myapp/migrations/versions` and ship inside the package.
"""

from myapp.migrations.exceptions import MigrationError, MigrationExecutionError
from myapp.migrations.runner import MigrationState, down, redo, status, up

__all__ = [
    "MigrationError",
    "MigrationExecutionError",
    "MigrationState",
    "down",
    "redo",
    "status",
    "up",
]
