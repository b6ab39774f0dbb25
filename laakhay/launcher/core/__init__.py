"""Core components."""

from .context import LaunchContext, ResourceRequirements
from .enums import (
    CATALOG_OPTION,
    CONFIG_OPTION,
    JOB_TYPE,
    STATE_OPTION,
    SYNC_STEP,
    JobType,
    OperationKind,
    SyncStep,
)
from .exceptions import (
    ConfigError,
    LaunchContextError,
    LaunchError,
    LauncherError,
    PreconditionError,
)
from .metadata import (
    AUTO_DETECT_SCHEMA,
    USE_STREAM_CAPABLE_STATE,
    WORKER_CONNECTOR_IMAGE,
    WORKER_JOB_ATTEMPT,
    WORKER_JOB_ID,
    WORKER_METADATA_KEYS,
    build_worker_metadata,
)
from .request import LaunchRequest

__all__ = [
    # Vocabulary
    "OperationKind",
    "JobType",
    "SyncStep",
    "JOB_TYPE",
    "SYNC_STEP",
    "CONFIG_OPTION",
    "CATALOG_OPTION",
    "STATE_OPTION",
    # Values
    "LaunchContext",
    "ResourceRequirements",
    "LaunchRequest",
    # Worker metadata
    "WORKER_CONNECTOR_IMAGE",
    "WORKER_JOB_ID",
    "WORKER_JOB_ATTEMPT",
    "USE_STREAM_CAPABLE_STATE",
    "AUTO_DETECT_SCHEMA",
    "WORKER_METADATA_KEYS",
    "build_worker_metadata",
    # Errors
    "LauncherError",
    "LaunchContextError",
    "PreconditionError",
    "LaunchError",
    "ConfigError",
]
