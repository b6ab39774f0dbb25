"""Execution backend protocol.

Architecture:
    An execution backend (a "process factory") receives a LaunchRequest and
    starts the connector: it stages files under the job root, pulls the
    image, applies resource bounds, schedules the process in the requested
    pool and wires stdin when ``stream_input`` is set. The launcher knows
    none of that; it only awaits ``create`` and returns whatever handle
    comes back.

Design Decision:
    Protocol rather than a base class: any object with an async
    ``create`` works, including mocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..core.request import LaunchRequest


@runtime_checkable
class ProcessFactory(Protocol):
    """Backend that launches connector processes."""

    async def create(self, request: LaunchRequest) -> Any:
        """Launch the connector described by ``request``.

        Returns:
            A handle to the running process. Opaque to the launcher.

        Raises:
            LaunchError: If the backend could not launch the process
        """
        ...


@dataclass(frozen=True)
class ProcessHandle:
    """Handle returned by the backends shipped with this package.

    Attributes:
        handle_id: Backend-assigned identifier of the launched process
        request: The request that was launched
        details: Extra backend-specific fields
    """

    handle_id: str
    request: LaunchRequest
    details: dict[str, Any] = field(default_factory=dict)
