"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can
catch database failures with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Empty or malformed database URL
    - Database file not accessible
    - Operation attempted before init_database()
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised on constraint violations or stored data that cannot be decoded.

    Examples:
    - Unique constraint violation on skill names
    - A work_types column that is not a JSON array of known work types
    """

    pass
