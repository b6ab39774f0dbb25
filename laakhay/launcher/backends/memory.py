"""In-memory backend recording launch requests.

Useful for dry runs, where the request is printed instead of launched, and
for tests that assert on exactly what a backend would have received.
"""

from __future__ import annotations

import asyncio
import copy
import itertools

from ..core.request import LaunchRequest
from .base import ProcessHandle


class RecordingProcessFactory:
    """Backend that records requests instead of launching them.

    Args:
        fail_with: Exception raised by every ``create`` call, after the
            request has been recorded. Simulates backend failures. Each
            call raises a shallow copy, so tagging one failure never
            leaks job context into the next.
    """

    def __init__(self, *, fail_with: BaseException | None = None) -> None:
        self._requests: list[LaunchRequest] = []
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self.fail_with = fail_with

    async def create(self, request: LaunchRequest) -> ProcessHandle:
        """Record ``request`` and return a handle for it."""
        async with self._lock:
            self._requests.append(request)
            handle_id = f"{request.job_id}-{request.attempt}-{next(self._ids)}"
        if self.fail_with is not None:
            raise copy.copy(self.fail_with)
        return ProcessHandle(handle_id=handle_id, request=request)

    @property
    def requests(self) -> list[LaunchRequest]:
        """Recorded requests, oldest first. Returns a copy."""
        return list(self._requests)

    @property
    def last_request(self) -> LaunchRequest | None:
        return self._requests[-1] if self._requests else None

    def clear(self) -> None:
        self._requests.clear()

    def __len__(self) -> int:
        return len(self._requests)
