"""Render API payloads and errors as tool output.

Successful payloads are rendered either verbatim as JSON or as a short
human-readable digest. Digests return ``None`` when the payload does not have
the expected shape, in which case the JSON rendering is used instead.
"""

import json
from typing import Any, Callable, Dict, List, Optional

from mcp import types

from fingertip_mcp.config import OutputFormat
from fingertip_mcp.errors import FingertipToolError

Digest = Callable[[Any], Optional[str]]

NO_CONTENT = "Request succeeded with no content."
CONTENT_PREVIEW_CHARS = 500


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _value(value: Any) -> str:
    """Render an optional scalar, using ``None`` for missing values."""
    if value is None or value == "":
        return "None"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def _unwrap(payload: Any, *keys: str) -> Optional[Dict[str, Any]]:
    """Return the entity dict, whether or not the API wrapped it under ``key``."""
    if not isinstance(payload, dict):
        return None
    for key in keys:
        inner = payload.get(key)
        if isinstance(inner, dict):
            return inner
    if "id" in payload:
        return payload
    return None


def _items(payload: Any, *keys: str) -> Optional[List[Any]]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            inner = payload.get(key)
            if isinstance(inner, list):
                return inner
    return None


def _content_preview(content: Any) -> str:
    if content is None:
        return "None"
    text = json.dumps(content)
    if len(text) > CONTENT_PREVIEW_CHARS:
        return f"{text[:CONTENT_PREVIEW_CHARS]}..."
    return text


# ─── Sites ───────────────────────────────────────────────────────────────────


def format_site_list(payload: Any) -> Optional[str]:
    items = _items(payload, "items", "sites")
    if items is None:
        return None
    if not items:
        return "No sites found"

    total = payload.get("total") if isinstance(payload, dict) else None
    count = total if total is not None else len(items)
    lines = [f"Sites ({count} total):", ""]
    for site in items:
        if not isinstance(site, dict):
            return None
        lines.extend(
            [
                f"ID: {_value(site.get('id'))}",
                f"Name: {_value(site.get('name'))}",
                f"Slug: {_value(site.get('slug'))}",
                f"Status: {_value(site.get('status'))}",
                f"Created: {_value(site.get('createdAt'))}",
                "---",
            ]
        )
    return "\n".join(lines)


def format_site(payload: Any) -> Optional[str]:
    site = _unwrap(payload, "site")
    if site is None:
        return None
    lines = [
        "Site Details:",
        f"ID: {_value(site.get('id'))}",
        f"Name: {_value(site.get('name'))}",
        f"Slug: {_value(site.get('slug'))}",
        f"Description: {_value(site.get('description'))}",
        f"Status: {_value(site.get('status'))}",
        f"Business Type: {_value(site.get('businessType'))}",
        f"Created: {_value(site.get('createdAt'))}",
        f"Updated: {_value(site.get('updatedAt'))}",
    ]
    pages = site.get("pages")
    if isinstance(pages, list):
        lines.append(f"Pages: {len(pages)}")
        for page in pages:
            if isinstance(page, dict):
                lines.append(f"  • {_value(page.get('name'))} /{page.get('slug', '')} (ID: {_value(page.get('id'))})")
    return "\n".join(lines)


def format_created_site(payload: Any) -> Optional[str]:
    site = _unwrap(payload, "site")
    if site is None:
        return None
    return "\n".join(
        [
            "Site created successfully:",
            f"ID: {_value(site.get('id'))}",
            f"Name: {_value(site.get('name'))}",
            f"Slug: {_value(site.get('slug'))}",
            f"Business Type: {_value(site.get('businessType'))}",
            f"Status: {_value(site.get('status'))}",
            f"Created: {_value(site.get('createdAt'))}",
        ]
    )


# ─── Pages ───────────────────────────────────────────────────────────────────


def _page_lines(page: Dict[str, Any]) -> List[str]:
    lines = [
        f"ID: {_value(page.get('id'))}",
        f"Site ID: {_value(page.get('siteId'))}",
        f"Name: {_value(page.get('name'))}",
        f"Slug: {_value(page.get('slug'))}",
        f"Description: {_value(page.get('description'))}",
        f"Position: {_value(page.get('position'))}",
        f"Created: {_value(page.get('createdAt'))}",
        f"Updated: {_value(page.get('updatedAt'))}",
    ]
    blocks = page.get("blocks")
    if isinstance(blocks, list):
        lines.append(f"Blocks: {len(blocks)}")
    return lines


def format_page(payload: Any) -> Optional[str]:
    page = _unwrap(payload, "page")
    if page is None:
        return None
    return "\n".join(["Page Details:", *_page_lines(page)])


def format_updated_page(payload: Any) -> Optional[str]:
    page = _unwrap(payload, "page")
    if page is None:
        return None
    return "\n".join(["Page updated:", *_page_lines(page)])


def _theme_lines(theme: Dict[str, Any]) -> List[str]:
    return [
        f"ID: {_value(theme.get('id'))}",
        f"Page ID: {_value(theme.get('pageId'))}",
        f"Is Component: {_value(theme.get('isComponent'))}",
        f"Component Page Theme ID: {_value(theme.get('componentPageThemeId'))}",
        f"Content: {_content_preview(theme.get('content'))}",
    ]


def format_page_theme(payload: Any) -> Optional[str]:
    theme = _unwrap(payload, "pageTheme", "theme")
    if theme is None:
        return None
    return "\n".join(["Page Theme:", *_theme_lines(theme)])


def format_updated_page_theme(payload: Any) -> Optional[str]:
    theme = _unwrap(payload, "pageTheme", "theme")
    if theme is None:
        return None
    return "\n".join(["Page theme updated:", *_theme_lines(theme)])


# ─── Blocks ──────────────────────────────────────────────────────────────────


def _block_lines(block: Dict[str, Any]) -> List[str]:
    return [
        f"ID: {_value(block.get('id'))}",
        f"Page ID: {_value(block.get('pageId'))}",
        f"Name: {_value(block.get('name'))}",
        f"Kind: {_value(block.get('kind'))}",
        f"Is Component: {_value(block.get('isComponent'))}",
        f"Component Block ID: {_value(block.get('componentBlockId'))}",
        f"Content: {_content_preview(block.get('content'))}",
        f"Created: {_value(block.get('createdAt'))}",
        f"Updated: {_value(block.get('updatedAt'))}",
    ]


def format_block_list(payload: Any) -> Optional[str]:
    blocks = _items(payload, "blocks", "items")
    if blocks is None:
        return None
    if not blocks:
        return "No blocks found"

    lines = [f"Blocks ({len(blocks)}):", ""]
    for block in blocks:
        if not isinstance(block, dict):
            return None
        lines.extend(
            [
                f"ID: {_value(block.get('id'))}",
                f"Name: {_value(block.get('name'))}",
                f"Kind: {_value(block.get('kind'))}",
                f"Is Component: {_value(block.get('isComponent'))}",
                f"Component Block ID: {_value(block.get('componentBlockId'))}",
                "---",
            ]
        )
    return "\n".join(lines)


def format_block(payload: Any) -> Optional[str]:
    block = _unwrap(payload, "block")
    if block is None:
        return None
    return "\n".join(["Block Details:", *_block_lines(block)])


def format_created_block(payload: Any) -> Optional[str]:
    block = _unwrap(payload, "block")
    if block is None:
        return None
    return "\n".join(["Block created:", *_block_lines(block)])


def format_updated_block(payload: Any) -> Optional[str]:
    block = _unwrap(payload, "block")
    if block is None:
        return None
    return "\n".join(["Block updated:", *_block_lines(block)])


# ─── Envelope ────────────────────────────────────────────────────────────────


def render_payload(payload: Any, output_format: OutputFormat, digest: Optional[Digest] = None) -> str:
    """Render a successful API payload according to ``output_format``."""
    if payload is None:
        return NO_CONTENT
    if output_format is OutputFormat.SUMMARY and digest is not None:
        text = digest(payload)
        if text is not None:
            return text
    return json.dumps(payload)


def render_error(error: Exception) -> str:
    if isinstance(error, FingertipToolError):
        return f"Error: {error.message}"
    return f"Error: {type(error).__name__}: {error}"


def text_envelope(text: str) -> List[types.TextContent]:
    """Wrap ``text`` as the single content block of a tool result."""
    return [types.TextContent(type="text", text=text)]
