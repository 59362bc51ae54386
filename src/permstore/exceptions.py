"""Custom exception hierarchy for permstore."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from permstore.store.policy import Action


class StoreError(Exception):
    """Base exception for all permstore errors."""


class StoreConfigError(StoreError):
    """Invalid configuration value (constructor argument or environment)."""


class InvalidPathError(StoreError, ValueError):
    """Path string could not be split into usable segments."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid store path {path!r}: {reason}")


class PermissionDeniedError(StoreError):
    """A traversed or terminal key failed its permission check.

    ``key`` is the single offending key for reads and the cumulative path
    up to the offending segment for writes.
    """

    def __init__(self, message: str, *, key: str, action: Action) -> None:
        self.key = key
        self.action = action
        super().__init__(message)


class StoreStructureError(StoreError):
    """A path runs through a slot that is not a nested store."""

    def __init__(self, path: str, *, found: str) -> None:
        self.path = path
        self.found = found
        super().__init__(f'Key "{path}" holds a {found} value, not a nested store.')


class RestrictionDeclarationError(StoreError, TypeError):
    """A node kind declared an unusable ``RESTRICTIONS`` table."""


PermissionDenied = PermissionDeniedError
