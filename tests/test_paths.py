from __future__ import annotations

import pytest
from pydantic import ValidationError

from permstore.exceptions import InvalidPathError
from permstore.store.paths import StorePath


def test_parse_splits_segments() -> None:
    path = StorePath.parse("a:b:c")

    assert path.segments == ("a", "b", "c")
    assert path.intermediate == ("a", "b")
    assert path.terminal == "c"
    assert len(path) == 3
    assert str(path) == "a:b:c"


def test_single_segment_has_no_intermediates() -> None:
    path = StorePath.parse("key")
    assert path.intermediate == ()
    assert path.terminal == "key"


def test_prefix_is_cumulative() -> None:
    path = StorePath.parse("a:b:c")
    assert path.prefix(1) == "a"
    assert path.prefix(2) == "a:b"
    assert path.prefix(3) == "a:b:c"


def test_custom_separator() -> None:
    path = StorePath.parse("a/b", separator="/")
    assert path.segments == ("a", "b")
    assert path.prefix(1) == "a"
    assert str(path) == "a/b"


@pytest.mark.parametrize("raw", ["", ":", "a::b", ":a", "a:"])
def test_empty_segments_rejected(raw: str) -> None:
    with pytest.raises(InvalidPathError) as exc_info:
        StorePath.parse(raw)
    assert exc_info.value.path == raw


def test_non_string_path_rejected() -> None:
    with pytest.raises(InvalidPathError, match="expected str"):
        StorePath.parse(42)  # type: ignore[arg-type]


def test_invalid_path_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        StorePath.parse("")


def test_path_is_frozen() -> None:
    path = StorePath.parse("a:b")
    with pytest.raises(ValidationError):
        path.segments = ("c",)  # type: ignore[misc]
