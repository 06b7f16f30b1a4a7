#!/usr/bin/env python3
"""
Fingertip MCP Server
Exposes Fingertip sites, pages, blocks and themes as MCP tools over stdio.

Setup:
  1. pip install -e .
  2. Get an API key from your Fingertip workspace settings
  3. Set FINGERTIP_API_KEY (see README.md for the optional settings)
  4. Add `fingertip-mcp` (or `python -m fingertip_mcp`) to your MCP client config
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from fingertip_mcp import __version__
from fingertip_mcp.config import Settings, load_settings
from fingertip_mcp.errors import ConfigurationError
from fingertip_mcp.pipeline import ToolPipeline

SERVER_NAME = "fingertip"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def build_server(pipeline: ToolPipeline) -> Server:
    """Create an MCP server whose tools are served by ``pipeline``."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return pipeline.list_tools()

    # Argument validation happens in the pipeline so failures come back as
    # ordinary "Error: ..." text rather than protocol-level errors.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await pipeline.invoke(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    server = build_server(ToolPipeline(settings))
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Fingertip MCP Server running on stdio (%s)", settings.base_url)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def configure_logging(level: str) -> None:
    # stdout carries the MCP stream; logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        sys.exit(f"Fatal: {e}")

    configure_logging(settings.log_level)
    logger.debug("Loaded %r", settings)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
