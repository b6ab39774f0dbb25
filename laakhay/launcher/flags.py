"""Feature flag providers.

The launcher never reads process-wide flag state directly. A provider is
injected at construction and queried on every launch, so tests can pin
values and long-running workers still see flags flipped in the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .core.metadata import AUTO_DETECT_SCHEMA, USE_STREAM_CAPABLE_STATE

__all__ = [
    "FeatureFlags",
    "EnvVariableFeatureFlags",
    "StaticFeatureFlags",
    "coerce_bool",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def coerce_bool(value: Any) -> bool | None:
    """Parse a flag value. Returns None when the value is not recognised."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in _TRUE_VALUES:
            return True
        if normalised in _FALSE_VALUES:
            return False
    return None


@runtime_checkable
class FeatureFlags(Protocol):
    """Feature flags propagated to connectors."""

    def use_stream_capable_state(self) -> bool:
        """Whether connectors may emit per-stream state."""
        ...

    def auto_detect_schema(self) -> bool:
        """Whether schema changes are detected automatically."""
        ...


class EnvVariableFeatureFlags:
    """Flags read from environment variables on every query.

    Unset or unparseable values mean ``False``.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        # None means os.environ, looked up lazily so later changes are seen
        self._env = env

    def _lookup(self, name: str) -> bool:
        env = os.environ if self._env is None else self._env
        return coerce_bool(env.get(name)) or False

    def use_stream_capable_state(self) -> bool:
        return self._lookup(USE_STREAM_CAPABLE_STATE)

    def auto_detect_schema(self) -> bool:
        return self._lookup(AUTO_DETECT_SCHEMA)


@dataclass(frozen=True)
class StaticFeatureFlags:
    """Fixed flag values."""

    stream_capable_state: bool = False
    detect_schema: bool = False

    def use_stream_capable_state(self) -> bool:
        return self.stream_capable_state

    def auto_detect_schema(self) -> bool:
        return self.detect_schema
