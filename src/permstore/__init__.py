"""permstore - Hierarchical, permission-gated in-memory key/value store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("permstore")
except PackageNotFoundError:
    __version__ = "0+local"
from permstore._types import StoreProtocol
from permstore.config import StoreConfig
from permstore.exceptions import (
    InvalidPathError,
    PermissionDenied,
    PermissionDeniedError,
    RestrictionDeclarationError,
    StoreConfigError,
    StoreError,
    StoreStructureError,
)
from permstore.store.node import SlotKind, Store, classify
from permstore.store.paths import StorePath
from permstore.store.policy import Action, Permission, effective_permission, is_allowed

__all__ = [
    "__version__",
    "Action",
    "InvalidPathError",
    "Permission",
    "PermissionDenied",
    "PermissionDeniedError",
    "RestrictionDeclarationError",
    "SlotKind",
    "Store",
    "StoreConfig",
    "StoreConfigError",
    "StoreError",
    "StorePath",
    "StoreProtocol",
    "StoreStructureError",
    "classify",
    "effective_permission",
    "is_allowed",
]
