"""Access policy model.

This module intentionally contains *no* traversal logic. A policy check looks
at exactly one key of one node kind and never mutates anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from permstore._constants import PERMISSION_ALIASES
from permstore.exceptions import RestrictionDeclarationError


class Action(StrEnum):
    READ = "r"
    WRITE = "w"


class Permission(StrEnum):
    """Capability set attached to a key.

    Accepts the short values (``"r"``, ``"w"``, ``"rw"``, ``"none"``) as well
    as the long spellings ``"read"``, ``"write"`` and ``"read-write"``.
    """

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @classmethod
    def _missing_(cls, value: object) -> Permission | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        normalized = PERMISSION_ALIASES.get(normalized, normalized)
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def capabilities(self) -> frozenset[Action]:
        return _CAPABILITIES[self]

    def permits(self, action: Action) -> bool:
        """Capability containment: ``rw`` satisfies both actions, ``none`` neither."""
        return action in _CAPABILITIES[self]


_CAPABILITIES: dict[Permission, frozenset[Action]] = {
    Permission.READ: frozenset({Action.READ}),
    Permission.WRITE: frozenset({Action.WRITE}),
    Permission.READ_WRITE: frozenset({Action.READ, Action.WRITE}),
    Permission.NONE: frozenset(),
}


def effective_permission(
    restrictions: Mapping[str, Permission],
    default_policy: Permission,
    key: str,
) -> Permission:
    """Explicit per-kind entry if present, else the node's default policy."""
    return restrictions.get(key, default_policy)


def is_allowed(
    restrictions: Mapping[str, Permission],
    default_policy: Permission,
    key: str,
    action: Action,
) -> bool:
    return effective_permission(restrictions, default_policy, key).permits(action)


def normalize_restrictions(
    table: Mapping[str, Permission | str],
    *,
    owner: str,
) -> dict[str, Permission]:
    """Validate a declared ``RESTRICTIONS`` table and coerce its permissions.

    Raises :class:`RestrictionDeclarationError` naming *owner* when the table
    is not a mapping, a key is not a non-empty string, or a permission cannot
    be parsed.
    """
    if not isinstance(table, Mapping):
        raise RestrictionDeclarationError(
            f"{owner}.RESTRICTIONS must be a mapping of key -> permission, got {type(table).__name__}"
        )

    normalized: dict[str, Permission] = {}
    for key, permission in table.items():
        if not isinstance(key, str) or not key:
            raise RestrictionDeclarationError(f"{owner}.RESTRICTIONS keys must be non-empty strings, got {key!r}")
        try:
            normalized[key] = Permission(permission)
        except ValueError as exc:
            raise RestrictionDeclarationError(
                f"{owner}.RESTRICTIONS[{key!r}] is not a valid permission: {permission!r}"
            ) from exc
    return normalized
