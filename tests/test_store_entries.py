from __future__ import annotations

from typing import Any

from permstore.store.node import SlotKind, Store, classify


class _CountingResolver:
    def __init__(self, value: Any) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> Any:
        self.calls += 1
        return self.value


class _Account(Store):
    RESTRICTIONS = {"secret": "none", "balance": "r", "audit": "w"}

    def __init__(self) -> None:
        super().__init__()
        self._balance = 10

    @property
    def balance(self) -> int:
        return self._balance

    def audit(self) -> str:
        return "audit-log"


def test_entries_of_empty_store() -> None:
    assert Store().entries() == {}


def test_entries_preserve_insertion_order_and_nesting() -> None:
    store = Store()
    store.write("z", 1)
    store.write("a:b", 2)
    store.write("m", [1, 2])

    entries = store.entries()
    assert entries == {"z": 1, "a": {"b": 2}, "m": [1, 2]}
    assert list(entries) == ["z", "a", "m"]


def test_entries_invoke_resolvers_each_time() -> None:
    store = Store()
    resolver = _CountingResolver(42)
    store.write("computed", resolver)

    assert store.entries() == {"computed": 42}
    assert store.entries() == {"computed": 42}
    assert resolver.calls == 2


def test_entries_expand_resolver_returning_store() -> None:
    child = Store()
    child.write("x", 1)
    store = Store()
    store.write("lazy", lambda: child)

    assert store.entries() == {"lazy": {"x": 1}}


def test_entries_skip_secret_key_even_with_stored_value() -> None:
    account = _Account()
    account._slots["secret"] = "hunter2"  # noqa: SLF001
    account.write("name", "alice")

    entries = account.entries()

    assert "secret" not in entries
    assert entries["name"] == "alice"


def test_entries_surface_readable_restricted_members_after_slots() -> None:
    account = _Account()
    account.write("name", "alice")

    entries = account.entries()

    assert entries == {"name": "alice", "balance": 10}
    assert list(entries) == ["name", "balance"]
    assert "audit" not in entries


def test_restricted_member_reflects_live_value() -> None:
    account = _Account()
    assert account.entries()["balance"] == 10
    account._balance = 25  # noqa: SLF001
    assert account.entries()["balance"] == 25


def test_restricted_key_without_member_is_not_emitted() -> None:
    class Tagged(Store):
        RESTRICTIONS = {"tag": "r"}

    assert Tagged().entries() == {}


def test_restricted_member_overrides_slot_of_same_name() -> None:
    class Overlay(Store):
        RESTRICTIONS = {"status": "rw"}

        def status(self) -> str:
            return "live"

    overlay = Overlay()
    overlay.write("status", "stored")

    assert overlay.entries() == {"status": "live"}
    assert overlay.read("status") == "live"


def test_nested_store_applies_its_own_policy() -> None:
    root = Store()
    child = Store(default_policy="w")
    child.write("hidden", 1)
    root.write("child", child)
    root.write("visible", 2)

    assert root.entries() == {"child": {}, "visible": 2}


def test_unreadable_nested_store_skipped_entirely() -> None:
    root = Store(default_policy="w")
    root.write("a:b", 1)
    assert root.entries() == {}


def test_resolver_may_write_during_serialization() -> None:
    store = Store()

    def _touch() -> str:
        store.write("touched", True)
        return "ok"

    store.write("lazy", _touch)

    assert store.entries() == {"lazy": "ok"}
    assert store.entries() == {"lazy": "ok", "touched": True}


def test_classify_tags() -> None:
    assert classify(1) is SlotKind.PRIMITIVE
    assert classify(None) is SlotKind.PRIMITIVE
    assert classify("s") is SlotKind.PRIMITIVE
    assert classify({"a": 1}) is SlotKind.RAW_JSON
    assert classify([1]) is SlotKind.RAW_JSON
    assert classify(Store()) is SlotKind.STORE
    assert classify(lambda: 1) is SlotKind.RESOLVER
