"""Runtime components: request builders, the launcher and launch telemetry."""

from .builders import (
    build_check_request,
    build_discover_request,
    build_read_request,
    build_spec_request,
    build_write_request,
    labels_for,
)
from .launcher import ConnectorLauncher, IntegrationLauncher
from .telemetry import trace_tags

__all__ = [
    "ConnectorLauncher",
    "IntegrationLauncher",
    "build_spec_request",
    "build_check_request",
    "build_discover_request",
    "build_read_request",
    "build_write_request",
    "labels_for",
    "trace_tags",
]
