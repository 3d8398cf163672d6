"""Exceptions raised by depotfs adapters.

Each error also derives from the closest builtin exception, so callers
that already handle ``FileNotFoundError`` or ``OSError`` keep working.
"""

from __future__ import annotations

import errno


class DepotError(Exception):
    """Base error for all filesystem adapter failures."""


class NotFoundError(DepotError, FileNotFoundError):
    """Path does not resolve to a file."""

    def __init__(self, path: str):
        super().__init__(errno.ENOENT, "No such file", path)


class DirectoryNotEmptyError(DepotError, OSError):
    """Non-recursive delete of a directory that still has children."""

    def __init__(self, path: str):
        super().__init__(errno.ENOTEMPTY, "Directory not empty", path)


class PathConflictError(DepotError, NotADirectoryError):
    """Path shape conflicts with the existing tree.

    Raised when a write would descend through a file, replace a directory
    with a file (or the root), or create a directory where a file lives.
    """

    def __init__(self, path: str, reason: str = "Not a directory"):
        super().__init__(errno.ENOTDIR, reason, path)


class UnsupportedError(DepotError, NotImplementedError):
    """Operation is not supported between the given filesystems."""


class ProcessUnavailableError(DepotError, LookupError):
    """The targeted backend instance is not running or not registered."""


class AlreadyStartedError(DepotError):
    """A backend instance with the same name is already running."""


class OperationTimeoutError(DepotError, TimeoutError):
    """The owning worker did not answer within the configured timeout."""
