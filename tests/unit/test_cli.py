"""Unit tests for the launcher CLI."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.launcher import cli
from laakhay.launcher.backends import HttpProcessFactory, ProcessHandle
from laakhay.launcher.core import LaunchError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LAUNCHER_BACKEND_URL",
        "LAUNCHER_BACKEND_TIMEOUT",
        "LAUNCHER_BACKEND_TOKEN",
        "LAUNCHER_USE_ISOLATED_POOL",
        "LAUNCHER_CPU_REQUEST",
        "LAUNCHER_CPU_LIMIT",
        "LAUNCHER_MEMORY_REQUEST",
        "LAUNCHER_MEMORY_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def files(tmp_path):
    config = tmp_path / "source_config.json"
    config.write_text('{"password": "hunter2"}', encoding="utf-8")
    catalog = tmp_path / "configured_catalog.json"
    catalog.write_text('{"streams": []}', encoding="utf-8")
    state = tmp_path / "state.json"
    state.write_text('{"cursor": 10}', encoding="utf-8")
    return {"config": config, "catalog": catalog, "state": state}


def _base_args(operation: str, tmp_path) -> list[str]:
    return [
        operation,
        "--job-id",
        "42",
        "--attempt",
        "1",
        "--image",
        "airbyte/source-faker:0.1.0",
        "--job-root",
        str(tmp_path / "jobs" / "42"),
    ]


def test_dry_run_read_prints_request(tmp_path, files, capsys):
    """Without --submit the request is printed with contents redacted."""
    argv = _base_args("read", tmp_path) + [
        "--config",
        str(files["config"]),
        "--catalog",
        str(files["catalog"]),
        "--state",
        str(files["state"]),
    ]

    assert cli.main(argv) == cli.EXIT_OK

    document = json.loads(capsys.readouterr().out)
    assert document["arguments"] == [
        "read",
        "--config",
        "source_config.json",
        "--catalog",
        "configured_catalog.json",
        "--state",
        "state.json",
    ]
    assert set(document["files"]) == {"source_config.json", "configured_catalog.json", "state.json"}
    assert "hunter2" not in json.dumps(document)
    assert document["labels"] == {"job_type": "sync", "sync_step": "read"}
    assert document["worker_metadata"]["WORKER_JOB_ATTEMPT"] == "1"


def test_dry_run_show_contents(tmp_path, files, capsys):
    argv = _base_args("check", tmp_path) + ["--config", str(files["config"]), "--show-contents"]

    assert cli.main(argv) == cli.EXIT_OK

    document = json.loads(capsys.readouterr().out)
    assert document["files"] == {"source_config.json": '{"password": "hunter2"}'}


def test_spec_needs_no_files(tmp_path, capsys):
    assert cli.main(_base_args("spec", tmp_path) + ["--isolated"]) == cli.EXIT_OK

    document = json.loads(capsys.readouterr().out)
    assert document["arguments"] == ["spec"]
    assert document["use_isolated_pool"] is True


def test_missing_required_file_is_usage_error(tmp_path, capsys):
    assert cli.main(_base_args("write", tmp_path)) == cli.EXIT_USAGE
    assert "write requires --config" in capsys.readouterr().err


def test_unreadable_file_is_usage_error(tmp_path, capsys):
    argv = _base_args("check", tmp_path) + ["--config", str(tmp_path / "missing.json")]
    assert cli.main(argv) == cli.EXIT_USAGE


def test_undecodable_file_is_usage_error(tmp_path, capsys):
    """Files must be UTF-8 text."""
    config = tmp_path / "config.bin"
    config.write_bytes(b"\xff\xfe\x00bad")
    argv = _base_args("check", tmp_path) + ["--config", str(config)]

    assert cli.main(argv) == cli.EXIT_USAGE
    assert "Cannot read config file" in capsys.readouterr().err


def test_state_rejected_outside_read(tmp_path, files):
    argv = _base_args("discover", tmp_path) + [
        "--config",
        str(files["config"]),
        "--state",
        str(files["state"]),
    ]
    assert cli.main(argv) == cli.EXIT_USAGE


def test_negative_attempt_is_usage_error(tmp_path):
    argv = _base_args("spec", tmp_path)
    argv[argv.index("--attempt") + 1] = "-1"
    assert cli.main(argv) == cli.EXIT_USAGE


def test_submit_requires_backend_url(tmp_path, capsys):
    assert cli.main(_base_args("spec", tmp_path) + ["--submit"]) == cli.EXIT_USAGE
    assert "LAUNCHER_BACKEND_URL" in capsys.readouterr().err


def test_submit_prints_handle(tmp_path, files, capsys, monkeypatch):
    """--submit sends the request through the HTTP backend."""
    monkeypatch.setenv("LAUNCHER_BACKEND_URL", "https://launcher.internal")

    async def fake_create(self, request):
        return ProcessHandle(handle_id="pod-9", request=request, details={"handle_id": "pod-9"})

    monkeypatch.setattr(HttpProcessFactory, "create", fake_create)
    argv = _base_args("check", tmp_path) + ["--config", str(files["config"]), "--submit"]

    assert cli.main(argv) == cli.EXIT_OK
    assert json.loads(capsys.readouterr().out) == {
        "handle_id": "pod-9",
        "details": {"handle_id": "pod-9"},
    }


def test_submit_launch_failure_exit_code(tmp_path, files, capsys, monkeypatch):
    monkeypatch.setenv("LAUNCHER_BACKEND_URL", "https://launcher.internal")
    monkeypatch.setattr(
        HttpProcessFactory, "create", AsyncMock(side_effect=LaunchError("image not found"))
    )
    argv = _base_args("check", tmp_path) + ["--config", str(files["config"]), "--submit"]

    assert cli.main(argv) == cli.EXIT_LAUNCH_FAILED
    err = capsys.readouterr().err
    assert "image not found" in err
    assert "job_id=42" in err


def test_submit_timeout_exit_code(tmp_path, files, capsys, monkeypatch):
    """A launcher service that never answers is a launch failure."""
    monkeypatch.setenv("LAUNCHER_BACKEND_URL", "https://launcher.internal")
    session = MagicMock()
    session.closed = False
    session.post = MagicMock(side_effect=asyncio.TimeoutError())
    monkeypatch.setattr(HttpProcessFactory, "session", property(lambda self: session))
    argv = _base_args("check", tmp_path) + ["--config", str(files["config"]), "--submit"]

    assert cli.main(argv) == cli.EXIT_LAUNCH_FAILED
    assert "timed out" in capsys.readouterr().err
