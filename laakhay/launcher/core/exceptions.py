"""Custom exception hierarchy."""

from __future__ import annotations

from pathlib import Path


class LauncherError(Exception):
    """Base exception for all launcher errors."""

    pass


class LaunchContextError(LauncherError):
    """Launch context is incomplete or malformed.

    Raised at launcher construction time, before any operation can run.
    """

    pass


class PreconditionError(LauncherError, ValueError):
    """A call input violates the operation's contract.

    Raised before any request is submitted, so nothing is staged or
    launched. ``field`` names the offending input.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class LaunchError(LauncherError):
    """Execution backend failed to launch the connector.

    Backends raise this for image resolution, resource allocation and
    scheduling failures. The launcher tags it with job context and
    re-raises it unchanged otherwise.
    """

    def __init__(
        self,
        message: str,
        *,
        job_id: str | None = None,
        job_root: Path | str | None = None,
        image: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.job_id = job_id
        self.job_root = job_root
        self.image = image
        self.status_code = status_code

    def tag(
        self,
        *,
        job_id: str | None = None,
        job_root: Path | str | None = None,
        image: str | None = None,
    ) -> LaunchError:
        """Fill in job context the backend did not set. Returns self."""
        if self.job_id is None:
            self.job_id = job_id
        if self.job_root is None:
            self.job_root = job_root
        if self.image is None:
            self.image = image
        return self

    def __str__(self) -> str:
        message = super().__str__()
        context = [
            f"{name}={value}"
            for name, value in (
                ("job_id", self.job_id),
                ("job_root", self.job_root),
                ("image", self.image),
            )
            if value is not None
        ]
        if not context:
            return message
        return f"{message} ({', '.join(context)})"


class ConfigError(LauncherError):
    """Invalid launcher settings."""

    pass
