"""Unit tests for worker metadata."""

from __future__ import annotations

from laakhay.launcher.core import LaunchContext
from laakhay.launcher.core.metadata import (
    WORKER_METADATA_KEYS,
    build_worker_metadata,
    encode_bool,
)
from laakhay.launcher.flags import StaticFeatureFlags


def test_metadata_has_exactly_five_entries():
    context = LaunchContext(job_id="42", attempt=3, image="img:1")
    metadata = build_worker_metadata(context, StaticFeatureFlags())

    assert set(metadata) == set(WORKER_METADATA_KEYS)
    assert len(metadata) == 5


def test_metadata_values_are_strings():
    """Every value is string-encoded for the process environment."""
    context = LaunchContext(job_id="42", attempt=3, image="img:1")
    metadata = build_worker_metadata(
        context, StaticFeatureFlags(stream_capable_state=True, detect_schema=True)
    )

    assert metadata == {
        "WORKER_CONNECTOR_IMAGE": "img:1",
        "WORKER_JOB_ID": "42",
        "WORKER_JOB_ATTEMPT": "3",
        "USE_STREAM_CAPABLE_STATE": "true",
        "AUTO_DETECT_SCHEMA": "true",
    }


def test_metadata_ignores_resources_and_pool():
    """Only identity and flags are exposed to the connector."""
    plain = LaunchContext(job_id="42", attempt=0, image="img:1")
    isolated = LaunchContext(job_id="42", attempt=0, image="img:1", use_isolated_pool=True)
    flags = StaticFeatureFlags()
    assert build_worker_metadata(plain, flags) == build_worker_metadata(isolated, flags)


def test_metadata_built_fresh_each_call():
    """Callers get independent dicts."""
    context = LaunchContext(job_id="42", attempt=0, image="img:1")
    first = build_worker_metadata(context, StaticFeatureFlags())
    second = build_worker_metadata(context, StaticFeatureFlags())
    assert first == second
    assert first is not second


def test_encode_bool():
    assert encode_bool(True) == "true"
    assert encode_bool(False) == "false"
