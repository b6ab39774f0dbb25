"""Execution backends."""

from .base import ProcessFactory, ProcessHandle
from .http import HttpProcessFactory
from .memory import RecordingProcessFactory

__all__ = [
    "ProcessFactory",
    "ProcessHandle",
    "HttpProcessFactory",
    "RecordingProcessFactory",
]
