"""
Exceptions raised by the migration runner.

`DatabaseUnavailableError` (from `myapp.db`) covers failures to open or ping
the database; everything that goes wrong once Alembic is running is wrapped
in `MigrationExecutionError`.
"""


class MigrationError(Exception):
    """
    Base exception for migration failures.

    Catch this (together with `myapp.db.DatabaseError`) to handle any
    failure of an `up`/`down`/`redo`/`status` call.
    """


class MigrationExecutionError(MigrationError):
    """
    Raised when Alembic fails while applying, rolling back or inspecting
    revisions.

    Attributes:
        action: The runner operation that failed ("up", "down", ...)
    """

    def __init__(self, message: str, action: str):
        super().__init__(message)
        self.action = action


__all__ = ["MigrationError", "MigrationExecutionError"]
