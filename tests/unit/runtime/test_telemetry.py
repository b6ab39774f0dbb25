"""Unit tests for launch telemetry."""

from __future__ import annotations

import logging

import pytest

from laakhay.launcher.core import LaunchError
from laakhay.launcher.runtime.telemetry import (
    log_launch_failed,
    log_launch_requested,
    log_launch_submitted,
    trace_tags,
)

LOGGER = "laakhay.launcher.runtime.telemetry"
SECRET = '{"password": "hunter2"}'


@pytest.fixture
def request_with_secret(launcher, job_root):
    return launcher.build_request(
        "check", job_root, config_filename="config.json", config_contents=SECRET
    )


def test_trace_tags(job_root):
    assert trace_tags(job_id="42", job_root=job_root, image="img:1") == {
        "job_id": "42",
        "job_root": str(job_root),
        "docker_image": "img:1",
    }


def test_submitted_record_carries_job_identity(caplog, request_with_secret):
    """Structured fields identify the launch."""
    with caplog.at_level(logging.INFO, logger=LOGGER):
        log_launch_submitted(request_with_secret)

    (record,) = caplog.records
    assert record.getMessage() == "launch_submitted"
    assert record.job_id == request_with_secret.job_id
    assert record.docker_image == request_with_secret.image
    assert record.operation == "check"
    assert record.staged_files == ["config.json"]


def test_requested_record_never_contains_contents(caplog, request_with_secret):
    """Config contents carry credentials and must not be logged."""
    with caplog.at_level(logging.DEBUG, logger=LOGGER):
        log_launch_requested(request_with_secret)

    (record,) = caplog.records
    assert record.arguments == ["check", "--config", "config.json"]
    assert "hunter2" not in repr(record.__dict__)


def test_requested_skipped_above_debug(caplog, request_with_secret):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        log_launch_requested(request_with_secret)
    assert caplog.records == []


def test_launch_error_logs_warning(caplog, request_with_secret):
    """Backend launch failures are operational events."""
    with caplog.at_level(logging.INFO, logger=LOGGER):
        log_launch_failed(request_with_secret, LaunchError("pull failed", status_code=404))

    (record,) = caplog.records
    assert record.levelno == logging.WARNING
    assert record.error_type == "LaunchError"
    assert record.status_code == 404


def test_unexpected_error_logs_error(caplog, request_with_secret):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        log_launch_failed(request_with_secret, RuntimeError("bug"))

    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.error_message == "bug"
