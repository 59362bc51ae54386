"""Store configuration for permstore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from permstore._constants import DEFAULT_SEPARATOR, ENV_PREFIX
from permstore.exceptions import StoreConfigError
from permstore.store.policy import Permission


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    Parameters
    ----------
    default_policy : Permission
        Policy applied to keys the node kind does not restrict. Accepts any
        spelling :class:`Permission` accepts. Defaults to ``"rw"``.
    path_separator : str
        Delimiter between path segments. Defaults to ``":"``.
    replace_non_store_intermediates : bool
        What ``write`` does when an intermediate segment already holds a
        non-store value. ``False`` (default) raises
        :class:`~permstore.exceptions.StoreStructureError`; ``True`` discards
        the old value and puts a fresh nested store in its place.
    """

    default_policy: Permission = Permission.READ_WRITE
    path_separator: str = DEFAULT_SEPARATOR
    replace_non_store_intermediates: bool = False

    def __post_init__(self) -> None:
        try:
            policy = Permission(self.default_policy)
        except ValueError as exc:
            raise StoreConfigError(f"Invalid default_policy: {self.default_policy!r}") from exc
        object.__setattr__(self, "default_policy", policy)

        if not isinstance(self.path_separator, str) or not self.path_separator:
            raise StoreConfigError(f"path_separator must be a non-empty string, got {self.path_separator!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``PERMSTORE_DEFAULT_POLICY``, ``PERMSTORE_PATH_SEPARATOR`` and
        ``PERMSTORE_REPLACE_NON_STORE_INTERMEDIATES``. Explicit keyword
        arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        policy_env = env.get(f"{ENV_PREFIX}DEFAULT_POLICY")
        if policy_env is not None:
            config_kwargs["default_policy"] = policy_env

        separator_env = env.get(f"{ENV_PREFIX}PATH_SEPARATOR")
        if separator_env is not None:
            config_kwargs["path_separator"] = separator_env

        if "replace_non_store_intermediates" not in overrides:
            config_kwargs["replace_non_store_intermediates"] = _env_bool(
                env.get(f"{ENV_PREFIX}REPLACE_NON_STORE_INTERMEDIATES"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
