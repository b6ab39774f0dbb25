"""Launch request: the complete description of one connector launch.

Architecture:
    A LaunchRequest is what the launcher hands to an execution backend. It
    replaces a long positional call with one value object, so builders can be
    tested field by field and backends can serialize it without knowing the
    argument order.

Design Decisions:
    - Frozen dataclass with read-only mappings: a request is built once per
      call and never shared or mutated afterwards
    - Reserved fields: ``reserved`` and ``extra_environment`` are always
      ``None`` and empty; backends must accept them but they carry nothing
    - to_dict(): JSON-compatible rendering for remote backends and the CLI

See Also:
    - builders: The only place requests are constructed
    - ProcessFactory: Backend protocol consuming requests
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .context import ResourceRequirements
from .enums import CATALOG_OPTION, CONFIG_OPTION, STATE_OPTION, OperationKind

_FILE_OPTIONS = (CONFIG_OPTION, CATALOG_OPTION, STATE_OPTION)


def _frozen(mapping: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class LaunchRequest:
    """Fully specified launch of a connector image.

    Attributes:
        operation: Operation kind; also the label reported to the backend
        job_id: Job identifier
        attempt: Attempt number
        job_root: Job-scoped working directory for staged files
        image: Connector image reference
        use_isolated_pool: Route to the dedicated execution pool
        stream_input: Connector reads a record stream on stdin
        files: Staged files, filename to verbatim contents
        resource_requirements: CPU/memory bounds, passed through
        labels: Labels attached to the launched process
        worker_metadata: Environment variables describing the worker
        arguments: Connector command-line arguments, in order
        reserved: Unused slot, always None
        extra_environment: Unused environment map, always empty
    """

    operation: OperationKind
    job_id: str
    attempt: int
    job_root: Path
    image: str
    use_isolated_pool: bool
    stream_input: bool
    files: Mapping[str, str]
    resource_requirements: ResourceRequirements | None
    labels: Mapping[str, str]
    worker_metadata: Mapping[str, str]
    arguments: tuple[str, ...]
    reserved: None = None
    extra_environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to normalize fields
        object.__setattr__(self, "job_root", Path(self.job_root))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "files", _frozen(self.files))
        object.__setattr__(self, "labels", _frozen(self.labels))
        object.__setattr__(self, "worker_metadata", _frozen(self.worker_metadata))
        object.__setattr__(self, "extra_environment", _frozen(self.extra_environment))

    def referenced_files(self) -> set[str]:
        """Filenames named by ``--config``, ``--catalog`` and ``--state``."""
        referenced: set[str] = set()
        args = self.arguments
        for index, arg in enumerate(args[:-1]):
            if arg in _FILE_OPTIONS:
                referenced.add(args[index + 1])
        return referenced

    @property
    def has_state(self) -> bool:
        return STATE_OPTION in self.arguments

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-compatible dict."""
        resources = (
            self.resource_requirements.model_dump()
            if self.resource_requirements is not None
            else None
        )
        return {
            "operation": self.operation.value,
            "job_id": self.job_id,
            "attempt": self.attempt,
            "job_root": str(self.job_root),
            "image": self.image,
            "use_isolated_pool": self.use_isolated_pool,
            "stream_input": self.stream_input,
            "files": dict(self.files),
            "reserved": self.reserved,
            "resource_requirements": resources,
            "labels": dict(self.labels),
            "worker_metadata": dict(self.worker_metadata),
            "extra_environment": dict(self.extra_environment),
            "arguments": list(self.arguments),
        }
