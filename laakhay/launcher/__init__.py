"""Laakhay Launcher - connector launch protocol for containerized data connectors."""

from .backends import (
    HttpProcessFactory,
    ProcessFactory,
    ProcessHandle,
    RecordingProcessFactory,
)
from .config import LauncherSettings
from .core import (
    ConfigError,
    JobType,
    LaunchContext,
    LaunchContextError,
    LaunchError,
    LauncherError,
    LaunchRequest,
    OperationKind,
    PreconditionError,
    ResourceRequirements,
    SyncStep,
    build_worker_metadata,
)
from .flags import EnvVariableFeatureFlags, FeatureFlags, StaticFeatureFlags
from .runtime import ConnectorLauncher, IntegrationLauncher

__version__ = "0.1.0"

__all__ = [
    # Launcher
    "IntegrationLauncher",
    "ConnectorLauncher",
    # Values
    "OperationKind",
    "JobType",
    "SyncStep",
    "LaunchContext",
    "LaunchRequest",
    "ResourceRequirements",
    "build_worker_metadata",
    # Feature flags
    "FeatureFlags",
    "EnvVariableFeatureFlags",
    "StaticFeatureFlags",
    # Backends
    "ProcessFactory",
    "ProcessHandle",
    "RecordingProcessFactory",
    "HttpProcessFactory",
    # Settings
    "LauncherSettings",
    # Errors
    "LauncherError",
    "LaunchContextError",
    "PreconditionError",
    "LaunchError",
    "ConfigError",
]
