"""validate → map → call → format, shared by every tool."""

import logging
from typing import Any, List, Mapping, Optional

import httpx
from mcp import types

from fingertip_mcp.client import FingertipClient
from fingertip_mcp.config import Settings
from fingertip_mcp.errors import FingertipToolError, ValidationError
from fingertip_mcp.formatting import render_error, render_payload, text_envelope
from fingertip_mcp.models import validate_arguments
from fingertip_mcp.tools import TOOLS, TOOLS_BY_NAME

logger = logging.getLogger(__name__)


class ToolPipeline:
    """Runs Fingertip tool invocations.

    The pipeline holds only immutable configuration. Every invocation is
    independent: it validates its own arguments, sends at most one request
    and always returns a text envelope, never an exception.

    Args:
        settings: Credential, base URL, output format and creation defaults.
        transport: Optional httpx transport handed to the client (tests).
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.client = FingertipClient(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    def list_tools(self) -> List[types.Tool]:
        return [spec.to_mcp_tool() for spec in TOOLS]

    async def run(self, name: str, arguments: Optional[Mapping[str, Any]]) -> str:
        """Execute one tool call and return its text output.

        Raises:
            FingertipToolError: For validation, content, transport and upstream failures.
            Exception: Anything else raised along the way propagates unchanged;
                ``invoke`` is the boundary that turns every exception into text.
        """
        spec = TOOLS_BY_NAME.get(name)
        if spec is None:
            raise ValidationError(f"Unknown tool: {name}")

        params = validate_arguments(spec.name, spec.input_model, arguments)
        request = spec.build_request(params, self.settings.defaults)
        payload = await self.client.send(request)
        return render_payload(payload, self.settings.output_format, spec.digest)

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]]) -> List[types.TextContent]:
        """Execute one tool call and wrap the result, or any error, as tool output."""
        logger.debug("tool=%s invoked", name)
        try:
            text = await self.run(name, arguments)
        except FingertipToolError as e:
            logger.warning("tool=%s kind=%s error=%s", name, e.kind, e.message)
            text = render_error(e)
        except Exception as e:
            logger.exception("tool=%s failed unexpectedly", name)
            text = render_error(e)
        return text_envelope(text)
