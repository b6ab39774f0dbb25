"""Connector launcher translating lifecycle operations into launch requests.

The launcher is the contract boundary between a job orchestrator and an
execution backend. For each connector operation it:
1. Computes worker metadata from the launch context and current flags
2. Builds a LaunchRequest (validating call inputs first)
3. Submits the request to the backend
4. Returns the backend's process handle, or tags and re-raises its failure

Architecture:
    IntegrationLauncher is the abstract interface orchestrators depend on.
    ConnectorLauncher implements it on top of the pure builders in
    ``builders`` and an injected ProcessFactory.

Design Decisions:
    - Immutable after construction: one launcher may serve concurrent calls
    - Flags injected, read per call: no hidden global state
    - No retries: retry policy belongs to the orchestrator
    - Backend LaunchErrors are re-raised as the same object, tagged with
      job id, job root and image when the backend left them unset

See Also:
    - builders: Per-operation request policy
    - ProcessFactory: Backend protocol
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.context import LaunchContext, ResourceRequirements
from ..core.enums import OperationKind
from ..core.exceptions import LaunchContextError, LaunchError
from ..core.metadata import build_worker_metadata
from ..core.request import LaunchRequest
from ..flags import EnvVariableFeatureFlags, FeatureFlags
from . import builders, telemetry

if TYPE_CHECKING:
    from ..backends.base import ProcessFactory

_BUILDERS: dict[OperationKind, Callable[..., LaunchRequest]] = {
    OperationKind.SPEC: builders.build_spec_request,
    OperationKind.CHECK: builders.build_check_request,
    OperationKind.DISCOVER: builders.build_discover_request,
    OperationKind.READ: builders.build_read_request,
    OperationKind.WRITE: builders.build_write_request,
}


class IntegrationLauncher(ABC):
    """Interface for launching connector operations."""

    @abstractmethod
    async def spec(self, job_root: Path) -> Any:
        """Launch ``spec``: report the connector's configuration schema."""

    @abstractmethod
    async def check(self, job_root: Path, config_filename: str, config_contents: str) -> Any:
        """Launch ``check``: validate a connector config."""

    @abstractmethod
    async def discover(self, job_root: Path, config_filename: str, config_contents: str) -> Any:
        """Launch ``discover``: list the streams a source exposes."""

    @abstractmethod
    async def read(
        self,
        job_root: Path,
        config_filename: str,
        config_contents: str,
        catalog_filename: str,
        catalog_contents: str,
        state_filename: str | None = None,
        state_contents: str | None = None,
    ) -> Any:
        """Launch ``read``: extract records from a source."""

    @abstractmethod
    async def write(
        self,
        job_root: Path,
        config_filename: str,
        config_contents: str,
        catalog_filename: str,
        catalog_contents: str,
    ) -> Any:
        """Launch ``write``: load records from stdin into a destination."""


class ConnectorLauncher(IntegrationLauncher):
    """Launcher for one job attempt of one connector image."""

    def __init__(
        self,
        job_id: str,
        attempt: int,
        image: str,
        process_factory: ProcessFactory,
        resource_requirements: ResourceRequirements | None = None,
        use_isolated_pool: bool = False,
        *,
        feature_flags: FeatureFlags | None = None,
    ) -> None:
        """Initialize the launcher.

        Args:
            job_id: Job identifier
            attempt: Attempt number, starting at 0
            image: Connector image reference
            process_factory: Execution backend
            resource_requirements: Optional CPU/memory bounds
            use_isolated_pool: Route launches to the dedicated pool
                (custom connector images run there)
            feature_flags: Flag provider (defaults to environment variables)

        Raises:
            LaunchContextError: If the context is incomplete or no backend
                is given
        """
        if process_factory is None:
            raise LaunchContextError("process_factory is required")
        self._context = LaunchContext(
            job_id=job_id,
            attempt=attempt,
            image=image,
            resource_requirements=resource_requirements,
            use_isolated_pool=use_isolated_pool,
        )
        self._process_factory = process_factory
        self._feature_flags = (
            feature_flags if feature_flags is not None else EnvVariableFeatureFlags()
        )

    @classmethod
    def from_context(
        cls,
        context: LaunchContext,
        process_factory: ProcessFactory,
        *,
        feature_flags: FeatureFlags | None = None,
    ) -> ConnectorLauncher:
        """Create a launcher for an existing LaunchContext."""
        return cls(
            context.job_id,
            context.attempt,
            context.image,
            process_factory,
            context.resource_requirements,
            context.use_isolated_pool,
            feature_flags=feature_flags,
        )

    @property
    def context(self) -> LaunchContext:
        return self._context

    def worker_metadata(self) -> dict[str, str]:
        """Worker environment variables, computed from current flag values."""
        return build_worker_metadata(self._context, self._feature_flags)

    def build_request(
        self, operation: OperationKind | str, job_root: Path | str, **inputs: Any
    ) -> LaunchRequest:
        """Build the request for ``operation`` without submitting it.

        ``inputs`` are the operation's keyword arguments (``config_filename``,
        ``config_contents``, ...).

        Raises:
            PreconditionError: If an input is missing or malformed
            TypeError: If ``inputs`` do not match the operation
        """
        if not isinstance(operation, OperationKind):
            operation = OperationKind.from_str(operation)
        builder = _BUILDERS[operation]
        return builder(self._context, self.worker_metadata(), job_root, **inputs)

    async def _submit(self, request: LaunchRequest) -> Any:
        telemetry.log_launch_requested(request)
        try:
            handle = await self._process_factory.create(request)
        except LaunchError as exc:
            exc.tag(job_id=request.job_id, job_root=request.job_root, image=request.image)
            telemetry.log_launch_failed(request, exc)
            raise
        except Exception as exc:
            telemetry.log_launch_failed(request, exc)
            raise
        telemetry.log_launch_submitted(request)
        return handle

    async def spec(self, job_root: Path) -> Any:
        return await self._submit(self.build_request(OperationKind.SPEC, job_root))

    async def check(self, job_root: Path, config_filename: str, config_contents: str) -> Any:
        request = self.build_request(
            OperationKind.CHECK,
            job_root,
            config_filename=config_filename,
            config_contents=config_contents,
        )
        return await self._submit(request)

    async def discover(self, job_root: Path, config_filename: str, config_contents: str) -> Any:
        request = self.build_request(
            OperationKind.DISCOVER,
            job_root,
            config_filename=config_filename,
            config_contents=config_contents,
        )
        return await self._submit(request)

    async def read(
        self,
        job_root: Path,
        config_filename: str,
        config_contents: str,
        catalog_filename: str,
        catalog_contents: str,
        state_filename: str | None = None,
        state_contents: str | None = None,
    ) -> Any:
        request = self.build_request(
            OperationKind.READ,
            job_root,
            config_filename=config_filename,
            config_contents=config_contents,
            catalog_filename=catalog_filename,
            catalog_contents=catalog_contents,
            state_filename=state_filename,
            state_contents=state_contents,
        )
        return await self._submit(request)

    async def write(
        self,
        job_root: Path,
        config_filename: str,
        config_contents: str,
        catalog_filename: str,
        catalog_contents: str,
    ) -> Any:
        request = self.build_request(
            OperationKind.WRITE,
            job_root,
            config_filename=config_filename,
            config_contents=config_contents,
            catalog_filename=catalog_filename,
            catalog_contents=catalog_contents,
        )
        return await self._submit(request)

    def __repr__(self) -> str:
        ctx = self._context
        return f"ConnectorLauncher(job_id={ctx.job_id!r}, attempt={ctx.attempt}, image={ctx.image!r})"
