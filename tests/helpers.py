"""Test helpers: stable IDs and a recording mock of the Fingertip API."""

import json
from typing import Any, Callable, List, Optional

import httpx

SITE_ID = "11111111-1111-1111-1111-111111111111"
PAGE_ID = "22222222-2222-2222-2222-222222222222"
BLOCK_ID = "33333333-3333-3333-3333-333333333333"
COMPONENT_ID = "44444444-4444-4444-4444-444444444444"
API_KEY = "test-key"


class RecordingApi:
    """Mock Fingertip API that records every request it receives."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ):
        self.status_code = status_code
        self.json_body = {} if json_body is None else json_body
        self.content = content
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._handler is not None:
            return self._handler(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last.content)
