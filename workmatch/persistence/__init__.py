"""Persistence adapter for workers and jobs using SQLAlchemy.

This module provides the public API for database operations including:
- Database initialization and connection management
- Repository classes that return frozen domain models
- Dataset loading and seeding
- Custom exceptions for error handling

Example usage:
    >>> from workmatch.persistence import init_database, get_session, WorkerRepository
    >>>
    >>> init_database("sqlite:///./data/workmatch.db")
    >>>
    >>> with get_session() as session:
    ...     workers = WorkerRepository(session).list_available()
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
)
from .repositories import JobRepository, SkillRepository, WorkerRepository
from .seed import Dataset, DatasetError, SeedSummary, load_dataset, seed_database

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Repositories
    "JobRepository",
    "SkillRepository",
    "WorkerRepository",
    # Seeding
    "Dataset",
    "DatasetError",
    "SeedSummary",
    "load_dataset",
    "seed_database",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
