"""Request builders for the five connector operations.

Each builder turns a launch context, freshly computed worker metadata and
the call's inputs into a LaunchRequest. Builders are pure: they validate
inputs, compose arguments, labels and staged files, and do no I/O.

Operation policy:
    spec      no files, no options, stdin closed
    check     stages the config, ``--config``
    discover  same shape as check
    read      stages config + catalog (+ state), ``--config --catalog [--state]``
    write     stages config + catalog, reads records from stdin
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from ..core.context import LaunchContext
from ..core.enums import (
    CATALOG_OPTION,
    CONFIG_OPTION,
    JOB_TYPE,
    STATE_OPTION,
    SYNC_STEP,
    JobType,
    OperationKind,
    SyncStep,
)
from ..core.exceptions import PreconditionError
from ..core.request import LaunchRequest

__all__ = [
    "build_spec_request",
    "build_check_request",
    "build_discover_request",
    "build_read_request",
    "build_write_request",
    "labels_for",
]

_LABELS: dict[OperationKind, dict[str, str]] = {
    OperationKind.SPEC: {JOB_TYPE: JobType.SPEC.value},
    OperationKind.CHECK: {JOB_TYPE: JobType.CHECK.value},
    OperationKind.DISCOVER: {JOB_TYPE: JobType.DISCOVER.value},
    OperationKind.READ: {JOB_TYPE: JobType.SYNC.value, SYNC_STEP: SyncStep.READ.value},
    OperationKind.WRITE: {JOB_TYPE: JobType.SYNC.value, SYNC_STEP: SyncStep.WRITE.value},
}


def labels_for(operation: OperationKind) -> dict[str, str]:
    """Labels attached to a launch of ``operation``. Returns a fresh dict."""
    return dict(_LABELS[operation])


def _require_job_root(job_root: Path | str | None) -> Path:
    if job_root is None or (isinstance(job_root, str) and not job_root.strip()):
        raise PreconditionError("job_root is required", field="job_root")
    return Path(job_root)


def _require_filename(value: str | None, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PreconditionError(f"{field} must be a non-empty filename, got {value!r}", field=field)
    return value


def _require_contents(value: str | None, field: str) -> str:
    if value is None:
        raise PreconditionError(f"{field} is required", field=field)
    if not isinstance(value, str):
        raise PreconditionError(
            f"{field} must be a string, got {type(value).__name__}", field=field
        )
    return value


def _stage(*entries: tuple[str, str]) -> dict[str, str]:
    """Build a staged file map, rejecting duplicate filenames."""
    files: dict[str, str] = {}
    for filename, contents in entries:
        if filename in files:
            raise PreconditionError(
                f"filename {filename!r} is staged twice in one request", field=filename
            )
        files[filename] = contents
    return files


def _config_arguments(operation: OperationKind, config_filename: str) -> list[str]:
    return [operation.value, CONFIG_OPTION, config_filename]


def _sync_arguments(
    operation: OperationKind, config_filename: str, catalog_filename: str
) -> list[str]:
    return _config_arguments(operation, config_filename) + [CATALOG_OPTION, catalog_filename]


def _request(
    operation: OperationKind,
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path,
    *,
    files: dict[str, str],
    arguments: list[str],
) -> LaunchRequest:
    return LaunchRequest(
        operation=operation,
        job_id=context.job_id,
        attempt=context.attempt,
        job_root=job_root,
        image=context.image,
        use_isolated_pool=context.use_isolated_pool,
        stream_input=operation.uses_stdin,
        files=files,
        resource_requirements=context.resource_requirements,
        labels=labels_for(operation),
        worker_metadata=worker_metadata,
        arguments=tuple(arguments),
    )


def build_spec_request(
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
) -> LaunchRequest:
    """Build a ``spec`` launch: no staged files, no options."""
    root = _require_job_root(job_root)
    return _request(
        OperationKind.SPEC,
        context,
        worker_metadata,
        root,
        files={},
        arguments=[OperationKind.SPEC.value],
    )


def _build_config_only(
    operation: OperationKind,
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
    config_filename: str,
    config_contents: str,
) -> LaunchRequest:
    root = _require_job_root(job_root)
    config_filename = _require_filename(config_filename, "config_filename")
    config_contents = _require_contents(config_contents, "config_contents")
    return _request(
        operation,
        context,
        worker_metadata,
        root,
        files=_stage((config_filename, config_contents)),
        arguments=_config_arguments(operation, config_filename),
    )


def build_check_request(
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
    config_filename: str,
    config_contents: str,
) -> LaunchRequest:
    """Build a ``check`` launch staging the connector config."""
    return _build_config_only(
        OperationKind.CHECK, context, worker_metadata, job_root, config_filename, config_contents
    )


def build_discover_request(
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
    config_filename: str,
    config_contents: str,
) -> LaunchRequest:
    """Build a ``discover`` launch staging the connector config."""
    return _build_config_only(
        OperationKind.DISCOVER,
        context,
        worker_metadata,
        job_root,
        config_filename,
        config_contents,
    )


def build_read_request(
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
    config_filename: str,
    config_contents: str,
    catalog_filename: str,
    catalog_contents: str,
    state_filename: str | None = None,
    state_contents: str | None = None,
) -> LaunchRequest:
    """Build a ``read`` launch.

    Config and catalog are always staged. The state file is staged and
    ``--state`` appended only when ``state_filename`` is given; a state
    filename without contents is a caller bug and fails instead of being
    skipped. State contents without a filename are ignored.

    Raises:
        PreconditionError: If a required input is missing or malformed
    """
    root = _require_job_root(job_root)
    config_filename = _require_filename(config_filename, "config_filename")
    config_contents = _require_contents(config_contents, "config_contents")
    catalog_filename = _require_filename(catalog_filename, "catalog_filename")
    catalog_contents = _require_contents(catalog_contents, "catalog_contents")

    arguments = _sync_arguments(OperationKind.READ, config_filename, catalog_filename)
    entries = [(config_filename, config_contents), (catalog_filename, catalog_contents)]

    if state_filename is not None:
        state_filename = _require_filename(state_filename, "state_filename")
        state_contents = _require_contents(state_contents, "state_contents")
        arguments += [STATE_OPTION, state_filename]
        entries.append((state_filename, state_contents))

    return _request(
        OperationKind.READ,
        context,
        worker_metadata,
        root,
        files=_stage(*entries),
        arguments=arguments,
    )


def build_write_request(
    context: LaunchContext,
    worker_metadata: Mapping[str, str],
    job_root: Path | str,
    config_filename: str,
    config_contents: str,
    catalog_filename: str,
    catalog_contents: str,
) -> LaunchRequest:
    """Build a ``write`` launch.

    The only operation whose connector reads records from stdin, so the
    request has ``stream_input`` set.
    """
    root = _require_job_root(job_root)
    config_filename = _require_filename(config_filename, "config_filename")
    config_contents = _require_contents(config_contents, "config_contents")
    catalog_filename = _require_filename(catalog_filename, "catalog_filename")
    catalog_contents = _require_contents(catalog_contents, "catalog_contents")

    return _request(
        OperationKind.WRITE,
        context,
        worker_metadata,
        root,
        files=_stage((config_filename, config_contents), (catalog_filename, catalog_contents)),
        arguments=_sync_arguments(OperationKind.WRITE, config_filename, catalog_filename),
    )
