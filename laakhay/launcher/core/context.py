"""Launch context: the per-launcher identity shared by every operation.

Architecture:
    A LaunchContext is fixed when a launcher is constructed and never changes
    afterwards. It names the job and attempt being served, the connector
    image, the resource bounds the backend should apply and which execution
    pool to use. Every LaunchRequest the launcher builds copies these values.

Design Decisions:
    - Frozen dataclass: a launcher can be shared across concurrent callers
    - Validation at construction: an incomplete context fails before any
      operation is attempted, not halfway through one
    - ResourceRequirements is a frozen pydantic model: it is passed through
      to the backend verbatim and serialized to JSON
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import LaunchContextError


class ResourceRequirements(BaseModel):
    """CPU and memory bounds applied by the execution backend.

    Values are opaque strings in the backend's own units (for example
    ``"0.5"`` CPUs or ``"1Gi"`` of memory). Unset bounds are left to the
    backend's defaults.
    """

    cpu_request: str | None = None
    cpu_limit: str | None = None
    memory_request: str | None = None
    memory_limit: str | None = None

    @field_validator("cpu_request", "cpu_limit", "memory_request", "memory_limit")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank strings as unset."""
        if v is None or not v.strip():
            return None
        return v

    def is_empty(self) -> bool:
        """True when no bound is set."""
        return all(value is None for value in self.model_dump().values())

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


@dataclass(frozen=True)
class LaunchContext:
    """Immutable identity of the job a launcher serves.

    Attributes:
        job_id: Orchestrator-assigned job identifier
        attempt: Retry ordinal of the job, starting at 0
        image: Connector image reference (e.g. ``airbyte/source-faker:0.1.0``)
        resource_requirements: Optional CPU/memory bounds
        use_isolated_pool: Route launches to a dedicated execution pool

    Raises:
        LaunchContextError: If any field is missing or malformed
    """

    job_id: str
    attempt: int
    image: str
    resource_requirements: ResourceRequirements | None = None
    use_isolated_pool: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.job_id, str) or not self.job_id.strip():
            raise LaunchContextError("job_id is required")
        if not isinstance(self.image, str) or not self.image.strip():
            raise LaunchContextError("image is required")
        # bool is an int subclass; True is not an attempt number
        if isinstance(self.attempt, bool) or not isinstance(self.attempt, int):
            raise LaunchContextError(f"attempt must be an integer, got {self.attempt!r}")
        if self.attempt < 0:
            raise LaunchContextError(f"attempt must be non-negative, got {self.attempt}")
        if not isinstance(self.use_isolated_pool, bool):
            raise LaunchContextError(
                f"use_isolated_pool must be a bool, got {self.use_isolated_pool!r}"
            )
        if self.resource_requirements is not None and not isinstance(
            self.resource_requirements, ResourceRequirements
        ):
            raise LaunchContextError(
                "resource_requirements must be a ResourceRequirements instance"
            )
