"""HTTP client for the Fingertip REST API."""

import logging
from typing import Any, Dict, Optional

import httpx

from fingertip_mcp.config import DEFAULT_BASE_URL
from fingertip_mcp.errors import TransportError, UpstreamError
from fingertip_mcp.mapper import UpstreamRequest

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull ``message`` out of an error body, falling back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    if response.status_code == 401:
        return "Authentication failed. Check your FINGERTIP_API_KEY."
    return f"Request failed with status code {response.status_code}"


class FingertipClient:
    """Issues one authenticated request per call.

    A fresh ``httpx.AsyncClient`` is opened for every request, so instances
    hold no connection state and may be shared across concurrent tool calls.

    Args:
        api_key: Bearer token sent in the ``Authorization`` header.
        base_url: Versioned API root, e.g. ``https://api.fingertip.com/v1``.
        timeout: Request timeout in seconds; ``None`` keeps the httpx default.
        transport: Optional httpx transport, used by tests to avoid the network.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def send(self, request: UpstreamRequest) -> Any:
        """Send ``request`` and return the decoded JSON body.

        Returns:
            The parsed JSON payload, or ``None`` for an empty 2xx body.

        Raises:
            TransportError: The request never got a response.
            UpstreamError: Non-2xx status, or a 2xx body that is not JSON.
        """
        url = f"{self.base_url}{request.path}"
        logger.debug("%s %s params=%s", request.method, url, request.params)
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.request(
                    request.method,
                    url,
                    headers=self._get_headers(),
                    params=request.params,
                    json=request.body,
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {request.method} {request.path}") from e
        except httpx.RequestError as e:
            detail = str(e) or type(e).__name__
            raise TransportError(f"Could not reach the Fingertip API: {detail}") from e

        if not response.is_success:
            raise UpstreamError(_error_message(response), status_code=response.status_code)

        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON in API response (status {response.status_code})",
                status_code=response.status_code,
            ) from e
