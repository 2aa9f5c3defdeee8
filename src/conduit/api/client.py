"""Async HTTP client for the Conduit REST API."""

import logging
from typing import Any

import httpx

from conduit.constants import DEFAULT_API_URL, REQUEST_TIMEOUT
from conduit.errors import RequestError
from conduit.session import Viewer

logger = logging.getLogger(__name__)


def errors_from_response(response: httpx.Response) -> list[str]:
    """Convert an error response into display-ready messages.

    The API reports validation failures as {"errors": {"field": ["reason"]}};
    each reason becomes "field reason". Anything else falls back to the status.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    messages: list[str] = []
    if isinstance(data, dict) and isinstance(data.get("errors"), dict):
        for field, reasons in data["errors"].items():
            if isinstance(reasons, list):
                messages.extend(f"{field} {reason}" for reason in reasons)
            else:
                messages.append(f"{field} {reasons}")
    return messages or [f"Status {response.status_code}: {response.reason_phrase}"]


class ApiClient:
    """Issues JSON requests and raises RequestError on any failure."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def request(
        self,
        method: str,
        path: str,
        viewer: Viewer | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request relative to base_url.

        Args:
            method: HTTP method
            path: Path below the API root, without leading slash
            viewer: Adds the token authorization header when given
            json: Request body
            params: Query parameters

        Returns:
            Decoded JSON object ({} for empty bodies)

        Raises:
            RequestError: On transport errors, unusable URLs, error statuses
                or invalid JSON
        """
        headers = {"Accept": "application/json"}
        if viewer is not None:
            headers["Authorization"] = f"Token {viewer.auth_token}"

        logger.debug(f"{method} {path}")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url + "/",
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method, path, headers=headers, json=json, params=params
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RequestError([str(e) or type(e).__name__]) from e

        if response.is_error:
            raise RequestError(errors_from_response(response))
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise RequestError([f"Invalid JSON response: {e}"]) from e
        if not isinstance(data, dict):
            raise RequestError(["Invalid JSON response: expected an object"])
        return data
