"""Backend submitting launch requests to a remote launcher service."""

from __future__ import annotations

import logging
from typing import Any, Optional

import aiohttp

from ..core.exceptions import LaunchError
from ..core.request import LaunchRequest
from .base import ProcessHandle

logger = logging.getLogger(__name__)

DEFAULT_LAUNCH_PATH = "/api/v1/launch"


class HttpProcessFactory:
    """Async HTTP backend.

    POSTs each request as JSON to ``base_url + path``. The service answers
    with a JSON object naming the launched process (``handle_id``, or
    ``id``); that object becomes the handle's ``details``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        api_token: Optional[str] = None,
        path: str = DEFAULT_LAUNCH_PATH,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path = path if path.startswith("/") else f"/{path}"
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._api_token = api_token
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    async def create(self, request: LaunchRequest) -> ProcessHandle:
        """Submit ``request`` to the launcher service.

        Raises:
            LaunchError: On HTTP status >= 400, transport failure, or a
                response without a process identifier
        """
        try:
            async with self.session.post(
                self.url, json=request.to_dict(), headers=self._headers()
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise LaunchError(
                        f"Launcher service rejected {request.operation.value} launch: "
                        f"HTTP {response.status} {body[:200]}",
                        status_code=response.status,
                    )
                payload: Any = await response.json()
        except TimeoutError as exc:
            # aiohttp raises the builtin TimeoutError when ClientTimeout expires
            raise LaunchError(f"Launch request to {self.url} timed out") from exc
        except (aiohttp.ClientError, ValueError) as exc:
            # ValueError: body advertised as JSON but failed to decode
            raise LaunchError(f"Launch request to {self.url} failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise LaunchError("Launcher service returned a non-object response")
        handle_id = payload.get("handle_id")
        if handle_id is None:
            handle_id = payload.get("id")
        if handle_id is None or handle_id == "":
            raise LaunchError("Launcher service response carries no process id")

        logger.debug("launch_accepted", extra={"handle_id": handle_id, "url": self.url})
        return ProcessHandle(handle_id=str(handle_id), request=request, details=payload)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HttpProcessFactory":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
