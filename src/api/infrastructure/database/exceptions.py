"""Database-specific exceptions shared by all repositories."""


class DatabaseError(Exception):
    """Base exception for database operations.

    Repositories wrap driver and ORM failures in this type so the
    application layer never depends on SQLAlchemy exception classes.
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class DatabaseConnectionError(DatabaseError):
    """Raised when the database cannot be reached."""

    pass


class QueryError(DatabaseError):
    """Raised when a SQL statement fails to execute."""

    pass
