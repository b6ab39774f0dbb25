"""Shared fixtures for launcher unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from laakhay.launcher.backends import RecordingProcessFactory
from laakhay.launcher.core import LaunchContext, ResourceRequirements
from laakhay.launcher.flags import StaticFeatureFlags
from laakhay.launcher.runtime import ConnectorLauncher

JOB_ID = "1337"
ATTEMPT = 2
IMAGE = "airbyte/source-faker:0.1.0"


@pytest.fixture
def job_root(tmp_path) -> Path:
    """Job working directory (never written to by the launcher)."""
    return tmp_path / "jobs" / JOB_ID / str(ATTEMPT)


@pytest.fixture
def resources() -> ResourceRequirements:
    return ResourceRequirements(cpu_request="0.5", cpu_limit="1", memory_limit="1Gi")


@pytest.fixture
def context(resources) -> LaunchContext:
    return LaunchContext(
        job_id=JOB_ID,
        attempt=ATTEMPT,
        image=IMAGE,
        resource_requirements=resources,
        use_isolated_pool=False,
    )


@pytest.fixture
def flags() -> StaticFeatureFlags:
    return StaticFeatureFlags(stream_capable_state=True, detect_schema=False)


@pytest.fixture
def factory() -> RecordingProcessFactory:
    return RecordingProcessFactory()


@pytest.fixture
def launcher(context, factory, flags) -> ConnectorLauncher:
    return ConnectorLauncher.from_context(context, factory, feature_flags=flags)
