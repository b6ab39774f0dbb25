"""Command-line entry point: build or submit a single connector launch.

Usage:
    # Print the request a read would submit (dry run)
    laakhay-launcher read --job-id 42 --attempt 0 \\
        --image airbyte/source-faker:0.1.0 --job-root /tmp/jobs/42/0 \\
        --config source_config.json --catalog catalog.json --state state.json

    # Submit a check to the launcher service in LAUNCHER_BACKEND_URL
    laakhay-launcher check --job-id 42 --attempt 0 \\
        --image airbyte/source-faker:0.1.0 --job-root /tmp/jobs/42/0 \\
        --config source_config.json --submit
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .backends import HttpProcessFactory, ProcessHandle, RecordingProcessFactory
from .config import BACKEND_URL_ENV, LauncherSettings
from .core.enums import OperationKind
from .core.exceptions import ConfigError, LaunchContextError, LaunchError, PreconditionError
from .runtime.launcher import ConnectorLauncher

EXIT_OK = 0
EXIT_LAUNCH_FAILED = 1
EXIT_USAGE = 2

# Files each operation requires; option name doubles as the input prefix
_REQUIRED_FILES: dict[OperationKind, tuple[str, ...]] = {
    OperationKind.SPEC: (),
    OperationKind.CHECK: ("config",),
    OperationKind.DISCOVER: ("config",),
    OperationKind.READ: ("config", "catalog"),
    OperationKind.WRITE: ("config", "catalog"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="laakhay-launcher",
        description="Build or submit a connector launch request",
    )
    parser.add_argument(
        "operation",
        choices=[op.value for op in OperationKind],
        help="Connector operation to launch",
    )
    parser.add_argument("--job-id", required=True, help="Job identifier")
    parser.add_argument("--attempt", type=int, default=0, help="Attempt number (default: 0)")
    parser.add_argument("--image", required=True, help="Connector image reference")
    parser.add_argument("--job-root", required=True, type=Path, help="Job working directory")
    parser.add_argument("--config", type=Path, help="Connector config file")
    parser.add_argument("--catalog", type=Path, help="Configured catalog file (read/write)")
    parser.add_argument("--state", type=Path, help="State file (read only)")
    parser.add_argument(
        "--isolated", action="store_true", help="Route the launch to the isolated pool"
    )
    parser.add_argument(
        "--submit",
        action="store_true",
        help=f"Submit to the launcher service in {BACKEND_URL_ENV} instead of printing",
    )
    parser.add_argument(
        "--show-contents",
        action="store_true",
        help="Print staged file contents in dry-run output",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def _read_file(path: Path, field: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PreconditionError(f"Cannot read {field} file {path}: {e}", field=field) from e


def collect_inputs(operation: OperationKind, args: argparse.Namespace) -> dict[str, Any]:
    """Read the files ``operation`` needs and map them to launcher inputs.

    Files are staged under their base names.

    Raises:
        PreconditionError: If a required file is missing or unreadable
    """
    inputs: dict[str, Any] = {}
    for option in _REQUIRED_FILES[operation]:
        path = getattr(args, option)
        if path is None:
            raise PreconditionError(
                f"{operation.value} requires --{option}", field=f"{option}_filename"
            )
        inputs[f"{option}_filename"] = path.name
        inputs[f"{option}_contents"] = _read_file(path, option)

    if args.state is not None:
        if operation is not OperationKind.READ:
            raise PreconditionError("--state is only valid for read", field="state_filename")
        inputs["state_filename"] = args.state.name
        inputs["state_contents"] = _read_file(args.state, "state")
    return inputs


def _redact(rendered: dict[str, Any]) -> dict[str, Any]:
    rendered["files"] = {
        name: f"<{len(contents)} chars>" for name, contents in rendered["files"].items()
    }
    return rendered


async def run(args: argparse.Namespace, settings: LauncherSettings) -> dict[str, Any]:
    """Launch ``args.operation`` and return the JSON document to print."""
    operation = OperationKind.from_str(args.operation)
    inputs = collect_inputs(operation, args)

    if args.submit:
        if settings.dry_run:
            raise ConfigError(f"--submit requires {BACKEND_URL_ENV} to be set")
        async with HttpProcessFactory(
            settings.backend_url,
            timeout=settings.backend_timeout,
            api_token=settings.backend_token,
        ) as factory:
            handle = await _launch(operation, args, settings, factory, inputs)
        return {"handle_id": handle.handle_id, "details": handle.details}

    handle = await _launch(operation, args, settings, RecordingProcessFactory(), inputs)
    rendered = handle.request.to_dict()
    return rendered if args.show_contents else _redact(rendered)


async def _launch(
    operation: OperationKind,
    args: argparse.Namespace,
    settings: LauncherSettings,
    factory: Any,
    inputs: dict[str, Any],
) -> ProcessHandle:
    launcher = ConnectorLauncher(
        args.job_id,
        args.attempt,
        args.image,
        factory,
        settings.resource_requirements,
        args.isolated or settings.use_isolated_pool,
    )
    return await getattr(launcher, operation.value)(args.job_root, **inputs)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        settings = LauncherSettings.from_env()
        document = asyncio.run(run(args, settings))
    except (PreconditionError, LaunchContextError, ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except LaunchError as e:
        print(f"launch failed: {e}", file=sys.stderr)
        return EXIT_LAUNCH_FAILED

    print(json.dumps(document, indent=2, sort_keys=True))
    return EXIT_OK
