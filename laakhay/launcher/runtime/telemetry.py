"""Structured logging for connector launches.

This module emits one structured log record per launch phase. Records carry
the job identity as ``extra`` fields so log pipelines can index them.
Staged file contents are never logged, only filenames: configs carry
connector credentials.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..core.exceptions import LaunchError
from ..core.request import LaunchRequest

logger = logging.getLogger(__name__)

JOB_ID_KEY = "job_id"
JOB_ROOT_KEY = "job_root"
DOCKER_IMAGE_KEY = "docker_image"


def trace_tags(*, job_id: str, job_root: Path | str, image: str) -> dict[str, str]:
    """Diagnostic tags identifying a launch.

    Args:
        job_id: Job identifier
        job_root: Job working directory
        image: Connector image reference
    """
    return {
        JOB_ID_KEY: job_id,
        JOB_ROOT_KEY: str(job_root),
        DOCKER_IMAGE_KEY: image,
    }


def _request_fields(request: LaunchRequest) -> dict[str, Any]:
    fields: dict[str, Any] = trace_tags(
        job_id=request.job_id, job_root=request.job_root, image=request.image
    )
    fields.update(
        {
            "operation": request.operation.value,
            "attempt": request.attempt,
            "use_isolated_pool": request.use_isolated_pool,
            "stream_input": request.stream_input,
            "staged_files": sorted(request.files),
        }
    )
    return fields


def log_launch_requested(request: LaunchRequest) -> None:
    """Log a built request before it is handed to the backend.

    Args:
        request: The request about to be submitted
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    fields = _request_fields(request)
    fields["arguments"] = list(request.arguments)
    fields["labels"] = dict(request.labels)
    logger.debug("launch_requested", extra=fields)


def log_launch_submitted(request: LaunchRequest) -> None:
    """Log a launch the backend accepted.

    Args:
        request: The submitted request
    """
    logger.info("launch_submitted", extra=_request_fields(request))


def log_launch_failed(request: LaunchRequest, error: BaseException) -> None:
    """Log a launch the backend rejected.

    Backend launch failures are expected operational events and log at
    WARNING; anything else is a bug in a backend and logs at ERROR.

    Args:
        request: The request that failed
        error: The exception raised by the backend
    """
    fields = _request_fields(request)
    fields["error_type"] = type(error).__name__
    fields["error_message"] = str(error)
    if isinstance(error, LaunchError):
        fields["status_code"] = error.status_code
        logger.warning("launch_failed", extra=fields)
    else:
        logger.error("launch_failed", extra=fields)
