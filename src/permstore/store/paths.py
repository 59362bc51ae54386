"""Colon-delimited store paths."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from permstore._constants import DEFAULT_SEPARATOR
from permstore.exceptions import InvalidPathError


class StorePath(BaseModel):
    """A parsed path: an ordered, non-empty tuple of non-empty segments."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...]
    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1)

    @field_validator("segments")
    @classmethod
    def _segments_non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("path must contain at least one segment")
        for index, segment in enumerate(value):
            if not segment:
                raise ValueError(f"segment {index} is empty")
        return value

    @classmethod
    def parse(cls, path: str, *, separator: str = DEFAULT_SEPARATOR) -> StorePath:
        """Split *path* on *separator*.

        Empty strings and empty segments (``"a::b"``, ``":a"``, ``"a:"``) are
        rejected with :class:`InvalidPathError` rather than treated as a key
        named ``""``.
        """
        if not isinstance(path, str):
            raise InvalidPathError(path, f"expected str, got {type(path).__name__}")
        if not separator:
            raise InvalidPathError(path, "separator is empty")
        if not path:
            raise InvalidPathError(path, "path is empty")
        try:
            return cls(segments=tuple(path.split(separator)), separator=separator)
        except ValidationError as exc:
            reason = "; ".join(str(error["msg"]) for error in exc.errors())
            raise InvalidPathError(path, reason) from exc

    @property
    def intermediate(self) -> tuple[str, ...]:
        return self.segments[:-1]

    @property
    def terminal(self) -> str:
        return self.segments[-1]

    def prefix(self, count: int) -> str:
        """Cumulative path made of the first *count* segments."""
        return self.separator.join(self.segments[:count])

    def __str__(self) -> str:
        return self.separator.join(self.segments)

    def __len__(self) -> int:
        return len(self.segments)
