"""Launcher settings loaded from environment variables.

Settings cover the execution backend and the launch defaults a worker
applies to every job. Feature flags are not part of settings:
they are read per launch through a FeatureFlags provider.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.context import ResourceRequirements
from .core.exceptions import ConfigError
from .flags import coerce_bool

BACKEND_URL_ENV = "LAUNCHER_BACKEND_URL"
BACKEND_TIMEOUT_ENV = "LAUNCHER_BACKEND_TIMEOUT"
BACKEND_TOKEN_ENV = "LAUNCHER_BACKEND_TOKEN"
ISOLATED_POOL_ENV = "LAUNCHER_USE_ISOLATED_POOL"

_RESOURCE_ENV = {
    "cpu_request": "LAUNCHER_CPU_REQUEST",
    "cpu_limit": "LAUNCHER_CPU_LIMIT",
    "memory_request": "LAUNCHER_MEMORY_REQUEST",
    "memory_limit": "LAUNCHER_MEMORY_LIMIT",
}

DEFAULT_BACKEND_TIMEOUT = 30.0


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid float for {key}: {value!r}") from e


def _as_bool(value: Any, *, key: str) -> bool:
    parsed = coerce_bool(value)
    if parsed is None:
        raise ConfigError(f"Invalid boolean for {key}: {value!r}")
    return parsed


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


class LauncherSettings(BaseModel):
    """Worker-level launcher settings.

    Attributes:
        backend_url: Launcher service base URL; None means dry run
        backend_timeout: HTTP timeout in seconds
        backend_token: Bearer token for the launcher service
        use_isolated_pool: Default pool routing for launched jobs
        resource_requirements: Default CPU/memory bounds, if any
    """

    backend_url: str | None = None
    backend_timeout: float = Field(default=DEFAULT_BACKEND_TIMEOUT, gt=0)
    backend_token: str | None = None
    use_isolated_pool: bool = False
    resource_requirements: ResourceRequirements | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def dry_run(self) -> bool:
        return self.backend_url is None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> LauncherSettings:
        """Load settings from ``env`` (defaults to ``os.environ``).

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if env is None else env

        timeout_raw = _blank_to_none(env.get(BACKEND_TIMEOUT_ENV))
        timeout = (
            _as_float(timeout_raw, key=BACKEND_TIMEOUT_ENV)
            if timeout_raw is not None
            else DEFAULT_BACKEND_TIMEOUT
        )

        isolated_raw = _blank_to_none(env.get(ISOLATED_POOL_ENV))
        isolated = (
            _as_bool(isolated_raw, key=ISOLATED_POOL_ENV) if isolated_raw is not None else False
        )

        resources = ResourceRequirements(
            **{field: env.get(name) for field, name in _RESOURCE_ENV.items()}
        )

        try:
            return cls(
                backend_url=_blank_to_none(env.get(BACKEND_URL_ENV)),
                backend_timeout=timeout,
                backend_token=_blank_to_none(env.get(BACKEND_TOKEN_ENV)),
                use_isolated_pool=isolated,
                resource_requirements=None if resources.is_empty() else resources,
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid launcher settings: {e}") from e
