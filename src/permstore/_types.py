"""JSON type aliases and the structural interface every store node satisfies."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

from permstore.store.policy import Permission

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = "JSONPrimitive | JSONObject | JSONArray"
JSONObject: TypeAlias = dict[str, Any]
JSONArray: TypeAlias = list[Any]

# What a resolver may hand back: a primitive, nothing, or another store node.
StoreResult: TypeAlias = "StoreProtocol | JSONPrimitive"
Resolver: TypeAlias = Callable[[], StoreResult]
StoreValue: TypeAlias = "JSONObject | JSONArray | StoreResult | Resolver"


@runtime_checkable
class StoreProtocol(Protocol):
    """Operations exposed by a hierarchical permissioned store node."""

    @property
    def default_policy(self) -> Permission: ...

    def allowed_to_read(self, key: str) -> bool: ...

    def allowed_to_write(self, key: str) -> bool: ...

    def read(self, path: str) -> Any: ...

    def write(self, path: str, value: StoreValue) -> StoreValue: ...

    def write_entries(self, entries: Mapping[str, StoreValue]) -> None: ...

    def entries(self) -> JSONObject: ...
