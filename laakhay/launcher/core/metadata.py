"""Worker metadata exposed to connector processes as environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..flags import FeatureFlags
    from .context import LaunchContext

WORKER_CONNECTOR_IMAGE = "WORKER_CONNECTOR_IMAGE"
WORKER_JOB_ID = "WORKER_JOB_ID"
WORKER_JOB_ATTEMPT = "WORKER_JOB_ATTEMPT"
USE_STREAM_CAPABLE_STATE = "USE_STREAM_CAPABLE_STATE"
AUTO_DETECT_SCHEMA = "AUTO_DETECT_SCHEMA"

WORKER_METADATA_KEYS = (
    WORKER_CONNECTOR_IMAGE,
    WORKER_JOB_ID,
    WORKER_JOB_ATTEMPT,
    USE_STREAM_CAPABLE_STATE,
    AUTO_DETECT_SCHEMA,
)


def encode_bool(value: bool) -> str:
    """Encode a flag the way connectors parse it: ``"true"`` or ``"false"``."""
    return "true" if value else "false"


def build_worker_metadata(context: LaunchContext, flags: FeatureFlags) -> dict[str, str]:
    """Build the five worker environment variables for a launch.

    Depends only on the launch context and the current flag values, never
    on call inputs. Flags are queried on every call so a flipped flag is
    picked up by the next launch.
    """
    return {
        WORKER_CONNECTOR_IMAGE: context.image,
        WORKER_JOB_ID: context.job_id,
        WORKER_JOB_ATTEMPT: str(context.attempt),
        USE_STREAM_CAPABLE_STATE: encode_bool(flags.use_stream_capable_state()),
        AUTO_DETECT_SCHEMA: encode_bool(flags.auto_detect_schema()),
    }
