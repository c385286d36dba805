"""
HTTP client for the upstream random-identity API.

Wraps a synchronous httpx.Client. Every failure (transport error, HTTP error
status, unparsable body, or an `error` member in the body) surfaces as
UpstreamTransportError; a body without a `results` list surfaces as
UpstreamDataShapeError. Nothing is retried.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Dict, List, Mapping, Optional, Protocol, Type, runtime_checkable

import httpx

from randomuser_mcp.config import get_settings
from randomuser_mcp.errors import UpstreamDataShapeError, UpstreamTransportError
from randomuser_mcp.utils.logging import get_logger

log = get_logger(__name__)

UserRecord = Dict[str, Any]


@runtime_checkable
class UserSource(Protocol):
    """Anything that can answer an upstream parameter map with user records."""

    def fetch_users(self, params: Mapping[str, Any]) -> List[UserRecord]:
        ...


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Upstream reports failures as {"error": "..."}; pull that out when present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class RandomUserClient:
    """
    Synchronous upstream client.

    Parameters
    ----------
    base_url : str | None
        API root; defaults to settings.api_url.
    timeout : float | None
        Per-request timeout in seconds; defaults to settings.timeout_seconds.
    http_client : httpx.Client | None
        Pre-built client (tests inject one backed by httpx.MockTransport). A
        client passed in is not closed by this wrapper.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.api_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.timeout_seconds,
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        )

    def fetch_users(self, params: Mapping[str, Any]) -> List[UserRecord]:
        """
        Issue one GET against the API and return its `results`.

        Parameters whose value is None are not sent.
        """
        query = {key: value for key, value in params.items() if value is not None}
        log.debug("[UPSTREAM CALL] GET", extra={"params": query})

        try:
            response = self._client.get("", params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response) or str(exc)
            raise UpstreamTransportError(detail) from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(str(exc) or type(exc).__name__) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamTransportError(f"invalid JSON in response: {exc}") from exc

        if isinstance(body, dict) and body.get("error"):
            raise UpstreamTransportError(str(body["error"]))
        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise UpstreamDataShapeError("Upstream response did not contain a 'results' list")

        log.debug("[UPSTREAM RESULT]", extra={"results": len(results)})
        return results

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RandomUserClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = ["RandomUserClient", "UserRecord", "UserSource"]
