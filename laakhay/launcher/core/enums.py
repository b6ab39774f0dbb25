"""Core enumerations for connector operations and launch labels.

Architecture:
    This module defines the vocabulary shared by request builders, the
    launcher and execution backends. Every value here ends up on the wire:
    as the first command-line argument of a connector, as a label on the
    launched process, or as the operation kind handed to the backend.

Design Decisions:
    - String enums: values serialize directly into arguments and labels
    - Separate JobType and SyncStep: a sync job is split into steps, and
      labels name both so operators can tell a read from a write
    - Reserved steps: NORMALIZE and CUSTOM are part of the label vocabulary
      but are produced by other collaborators, never by this package

See Also:
    - LaunchRequest: Carries the operation kind and labels
    - builders: Maps each OperationKind to its labels
"""

from enum import Enum

# Label keys attached to every launched process
JOB_TYPE = "job_type"
SYNC_STEP = "sync_step"

# Connector CLI options
CONFIG_OPTION = "--config"
CATALOG_OPTION = "--catalog"
STATE_OPTION = "--state"


class OperationKind(str, Enum):
    """Connector lifecycle operation.

    The value is the canonical operation name: it is the first argument
    passed to the connector and the operation kind reported to the backend.
    """

    SPEC = "spec"
    CHECK = "check"
    DISCOVER = "discover"
    READ = "read"
    WRITE = "write"

    @property
    def is_sync_step(self) -> bool:
        """True for operations that run as one step of a sync job."""
        return self in (OperationKind.READ, OperationKind.WRITE)

    @property
    def uses_stdin(self) -> bool:
        """True when the connector consumes a record stream on stdin."""
        return self is OperationKind.WRITE

    @classmethod
    def from_str(cls, value: str) -> "OperationKind":
        """Parse an operation name, case-insensitively.

        Raises:
            ValueError: If the name is not a known operation
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(op.value for op in cls)
            raise ValueError(f"Unknown operation {value!r}; expected one of: {valid}") from None


class JobType(str, Enum):
    """Value of the ``job_type`` label."""

    SPEC = "spec"
    CHECK = "check"
    DISCOVER = "discover"
    SYNC = "sync"


class SyncStep(str, Enum):
    """Value of the ``sync_step`` label.

    Only READ and WRITE are produced by the launcher. NORMALIZE and CUSTOM
    are reserved for other collaborators.
    """

    READ = "read"
    WRITE = "write"
    NORMALIZE = "normalize"
    CUSTOM = "custom"
