"""Hierarchical permissioned store node.

A :class:`Store` maps string keys to *slots*. A slot is a primitive, a raw
JSON container, a nested :class:`Store`, or a zero-argument resolver. Every
key is gated by the node kind's ``RESTRICTIONS`` table, falling back to the
node's ``default_policy``.

Node kinds are subclasses. Besides restrictions, a subclass may declare
public members on its class body (methods, properties, constants, nested
stores). Those members form the kind's accessor table and shadow slots of
the same name when a path is read.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from permstore._constants import REDACTED
from permstore._redact import summarize_for_log
from permstore._types import JSONObject, StoreValue
from permstore.config import StoreConfig
from permstore.exceptions import PermissionDeniedError, StoreStructureError
from permstore.store.paths import StorePath
from permstore.store.policy import Action, Permission, is_allowed, normalize_restrictions

_logger = logging.getLogger(__name__)

_MISSING: Any = object()


class SlotKind(enum.Enum):
    PRIMITIVE = "primitive"
    RAW_JSON = "raw_json"
    STORE = "store"
    RESOLVER = "resolver"


def classify(value: Any) -> SlotKind:
    """Tag a slot (or member) value."""
    if isinstance(value, Store):
        return SlotKind.STORE
    if callable(value):
        return SlotKind.RESOLVER
    if isinstance(value, (Mapping, list, tuple)):
        return SlotKind.RAW_JSON
    return SlotKind.PRIMITIVE


def _serialize(value: Any) -> Any:
    """Expand stores and invoke resolvers for :meth:`Store.entries`."""
    kind = classify(value)
    if kind is SlotKind.RESOLVER:
        value = value()
        kind = SlotKind.STORE if isinstance(value, Store) else SlotKind.PRIMITIVE
    if kind is SlotKind.STORE:
        return value.entries()
    return value


class Store:
    """In-memory, permission-gated hierarchical key/value store.

    Subclasses pin individual keys to fixed permissions with a class-level
    table shared by every instance of the kind::

        class Account(Store):
            RESTRICTIONS = {"secret": "none", "owner": "r"}

    Tables are merged along the MRO when the subclass is defined; a subclass
    entry overrides its base's entry for the same key.
    """

    RESTRICTIONS: ClassVar[Mapping[str, Permission | str]] = {}
    DEFAULT_POLICY: ClassVar[Permission | str | None] = None

    _restrictions: ClassVar[Mapping[str, Permission]] = MappingProxyType({})
    _members: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        merged: dict[str, Permission] = {}
        for klass in reversed(cls.__mro__):
            declared = klass.__dict__.get("RESTRICTIONS")
            if declared:
                merged.update(normalize_restrictions(declared, owner=klass.__name__))
        cls._restrictions = MappingProxyType(merged)

        members: set[str] = set()
        for klass in cls.__mro__:
            if klass is Store:
                break
            members.update(name for name in vars(klass) if _is_member_name(name))
        cls._members = frozenset(members)

    def __init__(
        self,
        *,
        default_policy: Permission | str | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        self._config = config or StoreConfig()
        self._slots: dict[str, StoreValue] = {}
        if default_policy is None:
            default_policy = type(self).DEFAULT_POLICY
        if default_policy is None:
            default_policy = self._config.default_policy
        self.default_policy = default_policy

    @property
    def default_policy(self) -> Permission:
        return self._default_policy

    @default_policy.setter
    def default_policy(self, value: Permission | str) -> None:
        self._default_policy = Permission(value)

    @property
    def config(self) -> StoreConfig:
        return self._config

    def __repr__(self) -> str:
        return f"<{type(self).__name__} default_policy={self._default_policy.value} slots={len(self._slots)}>"

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    def allowed_to_read(self, key: str) -> bool:
        return is_allowed(type(self)._restrictions, self._default_policy, key, Action.READ)

    def allowed_to_write(self, key: str) -> bool:
        return is_allowed(type(self)._restrictions, self._default_policy, key, Action.WRITE)

    # ------------------------------------------------------------------
    # Accessor table
    # ------------------------------------------------------------------

    def _member(self, key: str) -> tuple[SlotKind | None, Any]:
        """Look *key* up among declared members; ``(None, None)`` if absent."""
        if not _is_member_name(key):
            return None, None
        if key not in type(self)._members and key not in vars(self):
            return None, None
        value = getattr(self, key)
        return classify(value), value

    def _lookup(self, key: str) -> tuple[bool, Any]:
        """Resolve one readable segment on this node.

        Precedence: member resolver, member store, member constant, then the
        slot mapping. Resolvers (member or slot) are invoked every time.
        """
        kind, value = self._member(key)
        if kind is None:
            value = self._slots.get(key, _MISSING)
            if value is _MISSING:
                return False, None
            kind = classify(value)
        if kind is SlotKind.RESOLVER:
            value = value()
        return True, value

    # ------------------------------------------------------------------
    # Read / write
    # ------------------------------------------------------------------

    def _parse(self, path: str) -> StorePath:
        return StorePath.parse(path, separator=self._config.path_separator)

    def read(self, path: str) -> Any:
        """Read the value at *path*.

        Returns ``None`` when some segment does not exist. A nested store at
        the end of the path is returned as its :meth:`entries`.

        Raises
        ------
        PermissionDeniedError
            A traversed segment is not readable on its node.
        StoreStructureError
            Segments remain after reaching a value that is not a store.
        """
        store_path = self._parse(path)
        cursor: Any = self

        for index, key in enumerate(store_path.segments):
            if cursor is None:
                return None
            if not isinstance(cursor, Store):
                raise StoreStructureError(store_path.prefix(index), found=classify(cursor).value)
            if not cursor.allowed_to_read(key):
                _logger.debug("Read denied key=%s path=%s kind=%s", key, store_path, type(cursor).__name__)
                raise PermissionDeniedError(f'Reading "{key}" is not allowed.', key=key, action=Action.READ)
            found, cursor = cursor._lookup(key)
            if not found:
                return None

        if isinstance(cursor, Store):
            return cursor.entries()
        return cursor

    def write(self, path: str, value: StoreValue) -> StoreValue:
        """Store *value* at *path*, creating intermediate stores as needed.

        The terminal slot is replaced unconditionally. Returns *value*.

        Raises
        ------
        PermissionDeniedError
            An intermediate or the terminal segment is not writable.
        StoreStructureError
            An intermediate segment holds a non-store value and the config
            does not allow replacing it.
        """
        store_path = self._parse(path)
        cursor: Store = self

        for index, key in enumerate(store_path.intermediate):
            cumulative = store_path.prefix(index + 1)
            if not cursor.allowed_to_write(key):
                _logger.debug("Write denied path=%s kind=%s", cumulative, type(cursor).__name__)
                raise PermissionDeniedError(
                    f"Write access denied for key: {cumulative}", key=cumulative, action=Action.WRITE
                )
            cursor = cursor._child_for_write(key, cumulative, replace=self._config.replace_non_store_intermediates)

        terminal = store_path.terminal
        if not cursor.allowed_to_write(terminal):
            _logger.debug("Write denied path=%s kind=%s", store_path, type(cursor).__name__)
            raise PermissionDeniedError(
                f"Write access denied for key: {store_path}", key=str(store_path), action=Action.WRITE
            )

        cursor._slots[terminal] = value
        if _logger.isEnabledFor(logging.DEBUG):
            shown = summarize_for_log(value) if cursor.allowed_to_read(terminal) else REDACTED
            _logger.debug("Stored path=%s value=%s", store_path, shown)
        return value

    def _child_for_write(self, key: str, path: str, *, replace: bool) -> Store:
        existing = self._slots.get(key, _MISSING)
        if isinstance(existing, Store):
            return existing
        if existing is not _MISSING:
            if not replace:
                raise StoreStructureError(path, found=classify(existing).value)
            _logger.warning("Replacing %s value at %s with a nested store", classify(existing).value, path)

        child = Store()
        self._slots[key] = child
        _logger.debug("Created nested store at %s", path)
        return child

    def write_entries(self, entries: Mapping[str, StoreValue]) -> None:
        """Write each top-level pair of *entries* in order.

        Not transactional: if one write fails, earlier writes stay applied and
        later ones are never attempted.
        """
        for key, value in entries.items():
            self.write(key, value)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def entries(self) -> JSONObject:
        """Plain dict of every readable key, nested stores and resolvers expanded.

        Slot keys come first in insertion order, then restricted members of
        the node kind in declaration order. A restricted member sharing its
        name with a slot overwrites the slot's value in the output.
        """
        result: JSONObject = {}
        for key, slot in list(self._slots.items()):
            if self.allowed_to_read(key):
                result[key] = _serialize(slot)

        for key in type(self)._restrictions:
            if not self.allowed_to_read(key):
                continue
            kind, member = self._member(key)
            if kind is not None:
                result[key] = _serialize(member)

        return result


# Names of the base API never act as members, even if a subclass overrides them.
_RESERVED: frozenset[str] = frozenset(name for name in vars(Store) if not name.startswith("_")) | {"default_policy"}


def _is_member_name(name: str) -> bool:
    return bool(name) and not name.startswith("_") and name not in _RESERVED


