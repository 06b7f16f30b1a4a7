"""The Fingertip tool table.

Each ``ToolSpec`` ties a tool name to its input model, the function that maps
validated input to an API request and the digest used for summary output.
The pipeline and the MCP server are both driven from ``TOOLS``.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from mcp import types
from pydantic import BaseModel

from fingertip_mcp import formatting, mapper, models
from fingertip_mcp.config import MapperDefaults

RequestBuilder = Callable[[Any, MapperDefaults], mapper.UpstreamRequest]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    input_model: Type[BaseModel]
    build_request: RequestBuilder
    digest: Optional[formatting.Digest] = None
    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
            annotations=types.ToolAnnotations(
                title=self.title,
                readOnlyHint=self.read_only,
                destructiveHint=self.destructive,
                idempotentHint=self.idempotent,
                openWorldHint=True,
            ),
        )


TOOLS = (
    ToolSpec(
        name="ping",
        title="Ping Fingertip API",
        description="Simple health check to verify the API is running",
        input_model=models.PingInput,
        build_request=mapper.map_ping,
    ),
    ToolSpec(
        name="get-sites",
        title="List Sites",
        description=(
            "Get a list of sites. Supports search, workspace and status filters, "
            "sorting and cursor pagination."
        ),
        input_model=models.GetSitesInput,
        build_request=mapper.map_get_sites,
        digest=formatting.format_site_list,
    ),
    ToolSpec(
        name="get-site",
        title="Get Site Details",
        description="Get a specific site by ID",
        input_model=models.GetSiteInput,
        build_request=mapper.map_get_site,
        digest=formatting.format_site,
    ),
    ToolSpec(
        name="create-site",
        title="Create Site",
        description=(
            "Create a new site. When no pages are given, a single default page with "
            "an empty theme is created."
        ),
        input_model=models.CreateSiteInput,
        build_request=mapper.map_create_site,
        digest=formatting.format_created_site,
        read_only=False,
        idempotent=False,
    ),
    ToolSpec(
        name="get-page",
        title="Get Page Details",
        description="Get a specific page by ID",
        input_model=models.GetPageInput,
        build_request=mapper.map_get_page,
        digest=formatting.format_page,
    ),
    ToolSpec(
        name="update-page",
        title="Update Page",
        description="Update a specific page. Only the fields provided are changed.",
        input_model=models.UpdatePageInput,
        build_request=mapper.map_update_page,
        digest=formatting.format_updated_page,
        read_only=False,
    ),
    ToolSpec(
        name="get-page-blocks",
        title="List Page Blocks",
        description="Get all blocks for a specific page",
        input_model=models.GetPageInput,
        build_request=mapper.map_get_page_blocks,
        digest=formatting.format_block_list,
    ),
    ToolSpec(
        name="create-block",
        title="Create Block",
        description="Create a new block for a page",
        input_model=models.CreateBlockInput,
        build_request=mapper.map_create_block,
        digest=formatting.format_created_block,
        read_only=False,
        idempotent=False,
    ),
    ToolSpec(
        name="get-page-theme",
        title="Get Page Theme",
        description="Get the theme for a specific page",
        input_model=models.GetPageInput,
        build_request=mapper.map_get_page_theme,
        digest=formatting.format_page_theme,
    ),
    ToolSpec(
        name="update-page-theme",
        title="Update Page Theme",
        description="Update the theme for a specific page. Only the fields provided are changed.",
        input_model=models.UpdatePageThemeInput,
        build_request=mapper.map_update_page_theme,
        digest=formatting.format_updated_page_theme,
        read_only=False,
    ),
    ToolSpec(
        name="get-block",
        title="Get Block Details",
        description="Get a specific block by ID",
        input_model=models.GetBlockInput,
        build_request=mapper.map_get_block,
        digest=formatting.format_block,
    ),
    ToolSpec(
        name="update-block",
        title="Update Block",
        description="Update a specific block. Only the fields provided are changed.",
        input_model=models.UpdateBlockInput,
        build_request=mapper.map_update_block,
        digest=formatting.format_updated_block,
        read_only=False,
    ),
    ToolSpec(
        name="delete-block",
        title="Delete Block",
        description="Delete a specific block",
        input_model=models.GetBlockInput,
        build_request=mapper.map_delete_block,
        read_only=False,
        destructive=True,
    ),
)

TOOLS_BY_NAME = {spec.name: spec for spec in TOOLS}
