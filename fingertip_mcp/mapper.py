"""Translate validated tool input into Fingertip API requests.

Every ``map_*`` function takes a validated input model plus the configured
``MapperDefaults`` and returns the single ``UpstreamRequest`` the tool sends.
Update tools forward only the fields the caller sent; an explicit ``null`` is
forwarded as ``null``.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from fingertip_mcp.config import MapperDefaults
from fingertip_mcp.errors import ContentParseError
from fingertip_mcp.models import (
    CreateBlockInput,
    CreateSiteInput,
    GetBlockInput,
    GetPageInput,
    GetSiteInput,
    GetSitesInput,
    PingInput,
    SitePageInput,
    UpdateBlockInput,
    UpdatePageInput,
    UpdatePageThemeInput,
)


@dataclass(frozen=True)
class UpstreamRequest:
    """One HTTP call against the Fingertip API, relative to the base URL."""

    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    body: Optional[Dict[str, Any]] = None


# ─── Helpers ─────────────────────────────────────────────────────────────────


def parse_content(value: Any) -> Any:
    """Return ``value`` decoded from JSON if it is a string, unchanged otherwise.

    Raises:
        ContentParseError: If ``value`` is a string that is not valid JSON.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ContentParseError(f"Invalid content JSON: {e}") from e


def _provided_fields(params: BaseModel, *path_fields: str) -> Dict[str, Any]:
    """Dump only the fields the caller sent, keyed by their API names."""
    body = params.model_dump(by_alias=True, exclude_unset=True, exclude=set(path_fields))
    if "content" in body:
        body["content"] = parse_content(body["content"])
    return body


def _map_page_blocks(blocks: List[Dict[str, Any]], defaults: MapperDefaults) -> List[Dict[str, Any]]:
    mapped = []
    for block in blocks:
        block = dict(block)
        if "content" in block:
            block["content"] = parse_content(block["content"])
        if defaults.null_component_refs:
            block.setdefault("componentBlockId", None)
        mapped.append(block)
    return mapped


def _map_site_page(page: SitePageInput, defaults: MapperDefaults) -> Dict[str, Any]:
    data = page.model_dump(by_alias=True, exclude_unset=True)
    theme = data.get("pageTheme", {})
    if "content" in theme:
        theme["content"] = parse_content(theme["content"])
    if defaults.null_component_refs:
        theme.setdefault("componentPageThemeId", None)
    if "blocks" in data:
        data["blocks"] = _map_page_blocks(data["blocks"] or [], defaults)
    return data


def default_page(site_name: str, description: Optional[str], defaults: MapperDefaults) -> Dict[str, Any]:
    """The single page create-site adds when the caller supplies none."""
    return {
        "slug": defaults.page_slug,
        "name": site_name,
        "description": description or None,
        "pageTheme": {
            "content": {},
            "isComponent": False,
            "componentPageThemeId": None,
        },
        "blocks": [],
    }


# ─── Sites ───────────────────────────────────────────────────────────────────


def map_ping(params: PingInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", "/ping")


def map_get_sites(params: GetSitesInput, defaults: MapperDefaults) -> UpstreamRequest:
    query = params.model_dump(by_alias=True, exclude_none=True)
    return UpstreamRequest("GET", "/sites", params=query or None)


def map_get_site(params: GetSiteInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", f"/sites/{params.site_id}")


def map_create_site(params: CreateSiteInput, defaults: MapperDefaults) -> UpstreamRequest:
    """Build the create-site body.

    ``description`` is always sent (null when absent or blank), ``status`` falls back to
    ``defaults.site_status`` and ``pages`` to a single default page.
    """
    if params.pages:
        pages = [_map_site_page(page, defaults) for page in params.pages]
    else:
        pages = [default_page(params.name, params.description, defaults)]

    body = {
        "name": params.name,
        "slug": params.slug,
        "businessType": params.business_type,
        "description": params.description or None,
        "status": params.status or defaults.site_status,
        "pages": pages,
    }
    return UpstreamRequest("POST", "/sites", body=body)


# ─── Pages ───────────────────────────────────────────────────────────────────


def map_get_page(params: GetPageInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", f"/pages/{params.page_id}")


def map_update_page(params: UpdatePageInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest(
        "PATCH", f"/pages/{params.page_id}", body=_provided_fields(params, "page_id")
    )


def map_get_page_blocks(params: GetPageInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", f"/pages/{params.page_id}/blocks")


def map_get_page_theme(params: GetPageInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", f"/pages/{params.page_id}/theme")


def map_update_page_theme(params: UpdatePageThemeInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest(
        "PATCH", f"/pages/{params.page_id}/theme", body=_provided_fields(params, "page_id")
    )


# ─── Blocks ──────────────────────────────────────────────────────────────────


def map_create_block(params: CreateBlockInput, defaults: MapperDefaults) -> UpstreamRequest:
    """Build the create-block body.

    ``isComponent`` defaults to false. ``componentBlockId`` is sent when the
    caller passed it (null included), or as null when
    ``defaults.null_component_refs`` is set.
    """
    body: Dict[str, Any] = {
        "name": params.name,
        "kind": params.kind,
        "isComponent": bool(params.is_component),
    }
    if params.content is not None:
        body["content"] = parse_content(params.content)
    if "component_block_id" in params.model_fields_set:
        body["componentBlockId"] = params.component_block_id
    elif defaults.null_component_refs:
        body["componentBlockId"] = None
    return UpstreamRequest("POST", f"/pages/{params.page_id}/blocks", body=body)


def map_get_block(params: GetBlockInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("GET", f"/blocks/{params.block_id}")


def map_update_block(params: UpdateBlockInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest(
        "PATCH", f"/blocks/{params.block_id}", body=_provided_fields(params, "block_id")
    )


def map_delete_block(params: GetBlockInput, defaults: MapperDefaults) -> UpstreamRequest:
    return UpstreamRequest("DELETE", f"/blocks/{params.block_id}")
