"""Errors raised by the repository layer."""
from typing import Optional


class ProjectManagerError(Exception):
    """Base class for errors raised by this package."""


class StorageError(ProjectManagerError):
    """The store failed for a reason other than a constraint violation."""

    def __init__(self, operation: str, original: Optional[Exception] = None):
        self.operation = operation
        self.original = original
        message = f"Storage failure during {operation}"
        if original is not None:
            message = f"{message}: {original}"
        super().__init__(message)
