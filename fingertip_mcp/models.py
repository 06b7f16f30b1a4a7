"""Input models for every Fingertip tool.

Each tool accepts a flat JSON object with camelCase keys. The models here
reject malformed input before anything touches the network and remember
which optional fields the caller actually sent, so update tools can tell an
omitted field apart from one explicitly set to null.
"""

import math
import re
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Type, TypeVar, Union

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    WithJsonSchema,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from fingertip_mcp.errors import ValidationError

# ─── Field Types ─────────────────────────────────────────────────────────────

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

SiteStatus = Literal["EMPTY", "UNPUBLISHED", "PREVIEW", "SOFT_CLAIM", "ENABLED", "DEMO"]
SortBy = Literal["createdAt", "updatedAt"]
SortDirection = Literal["asc", "desc"]


def _check_uuid(value: str) -> str:
    if not _UUID_RE.match(value):
        raise PydanticCustomError("uuid_format", "Invalid UUID")
    return value


def _coerce_number(value: Any) -> Any:
    """Accept numbers and numeric strings; leave everything else to the union check.

    Integral values come back as ``int`` so they are sent without a fraction.
    """
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Expected a number, got a boolean")
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise PydanticCustomError("number_parsing", "Expected a number or numeric string") from None
        if not math.isfinite(number):
            raise PydanticCustomError("number_finite", "Expected a finite number")
        return int(number) if number.is_integer() else number
    return value


# Scalar text is trimmed; JSON objects (content, media) are forwarded untouched.
Text = Annotated[str, StringConstraints(strip_whitespace=True)]

UuidStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    AfterValidator(_check_uuid),
    WithJsonSchema({"type": "string", "format": "uuid"}),
]

Number = Annotated[
    Union[int, float],
    BeforeValidator(_coerce_number),
    WithJsonSchema({"anyOf": [{"type": "number"}, {"type": "string"}]}),
]

# Block and theme content: a JSON object/array, or the same encoded as a string.
ContentValue = Union[Dict[str, Any], List[Any], str]


class _InputModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
    )


# ─── Sites ───────────────────────────────────────────────────────────────────


class PingInput(_InputModel):
    """The ping tool takes no arguments."""


class GetSitesInput(_InputModel):
    """Input for listing sites."""

    cursor: Optional[Text] = Field(default=None, description="Pagination cursor")
    search: Optional[Text] = Field(default=None, description="Search query")
    page_size: Optional[Number] = Field(default=None, description="Number of items per page")
    workspace_id: Optional[UuidStr] = Field(default=None, description="Filter sites by workspace ID")
    statuses: Optional[List[SiteStatus]] = Field(default=None, description="Filter sites by status")
    sort_by: Optional[SortBy] = Field(default=None, description="Field to sort by")
    sort_direction: Optional[SortDirection] = Field(default=None, description="Sort direction")


class GetSiteInput(_InputModel):
    site_id: UuidStr = Field(..., description="Site ID")


class PageThemeInput(_InputModel):
    """Theme attached to a page created together with its site."""

    content: Optional[ContentValue] = Field(
        default=None, description="Theme content as an object or JSON string"
    )
    is_component: Optional[bool] = Field(default=None, description="Whether this theme is a component")
    component_page_theme_id: Optional[UuidStr] = Field(
        default=None, description="ID of the parent component theme"
    )


class PageBlockInput(_InputModel):
    """Block created together with its page."""

    name: Text = Field(..., description="Block name", min_length=1)
    kind: Text = Field(..., description="Type or category of the block", min_length=1)
    content: Optional[ContentValue] = Field(
        default=None, description="Block content as an object or JSON string"
    )
    is_component: Optional[bool] = Field(default=None, description="Whether this block is a component")
    component_block_id: Optional[UuidStr] = Field(
        default=None, description="ID of the component block if this is an instance"
    )


class SitePageInput(_InputModel):
    """Page created together with its site."""

    slug: Text = Field(..., description="URL-friendly path segment for the page", min_length=1)
    name: Text = Field(..., description="Page name", min_length=1)
    description: Optional[Text] = Field(default=None, description="Page description")
    page_theme: PageThemeInput = Field(..., description="Theme for the page")
    blocks: Optional[List[PageBlockInput]] = Field(default=None, description="Blocks on the page")


class CreateSiteInput(_InputModel):
    """Input for creating a site.

    When ``pages`` is omitted a single default page is created; when
    ``status`` is omitted the server's configured default status is used.
    """

    name: Text = Field(..., description="Site name", min_length=1)
    slug: Text = Field(..., description="Site slug", min_length=1)
    business_type: Text = Field(..., description="Business type", min_length=1)
    description: Optional[Text] = Field(default=None, description="Site description")
    status: Optional[SiteStatus] = Field(default=None, description="Site status")
    pages: Optional[List[SitePageInput]] = Field(
        default=None, description="Pages to create with the site", min_length=1
    )


# ─── Pages ───────────────────────────────────────────────────────────────────


class GetPageInput(_InputModel):
    page_id: UuidStr = Field(..., description="Page ID")


class UpdatePageInput(_InputModel):
    """Input for a partial page update. Only the fields sent are changed."""

    page_id: UuidStr = Field(..., description="Page ID")
    name: Optional[Text] = Field(default=None, description="Page name")
    description: Optional[Text] = Field(default=None, description="Page description")
    position: Optional[Number] = Field(default=None, description="Display position within the site")
    slug: Optional[Text] = Field(default=None, description="URL-friendly path segment for the page")
    banner_media: Optional[Dict[str, Any]] = Field(default=None, description="Banner media for the page")
    logo_media: Optional[Dict[str, Any]] = Field(default=None, description="Logo media for the page")
    social_icons: Optional[Dict[str, Any]] = Field(
        default=None, description="Social media icons configuration"
    )


class UpdatePageThemeInput(_InputModel):
    page_id: UuidStr = Field(..., description="Page ID")
    content: Optional[ContentValue] = Field(
        default=None, description="Theme content configuration as an object or JSON string"
    )
    is_component: Optional[bool] = Field(default=None, description="Whether this theme is a component")
    component_page_theme_id: Optional[UuidStr] = Field(
        default=None, description="ID of the parent component theme"
    )


# ─── Blocks ──────────────────────────────────────────────────────────────────


class CreateBlockInput(_InputModel):
    page_id: UuidStr = Field(..., description="ID of the page to create a block in")
    name: Text = Field(..., description="Name of the block", min_length=1)
    kind: Text = Field(..., description="Type or category of the block", min_length=1)
    content: Optional[ContentValue] = Field(
        default=None, description="Block content configuration as an object or JSON string"
    )
    is_component: Optional[bool] = Field(default=None, description="Whether this block is a component")
    component_block_id: Optional[UuidStr] = Field(
        default=None, description="ID of the component block if this is an instance"
    )


class GetBlockInput(_InputModel):
    block_id: UuidStr = Field(..., description="Block ID")


class UpdateBlockInput(_InputModel):
    """Input for a partial block update. Only the fields sent are changed."""

    block_id: UuidStr = Field(..., description="Block ID")
    name: Optional[Text] = Field(default=None, description="Block name")
    content: Optional[ContentValue] = Field(
        default=None, description="Block content configuration as an object or JSON string"
    )
    kind: Optional[Text] = Field(default=None, description="Block kind/type")
    is_component: Optional[bool] = Field(default=None, description="Whether this block is a component")
    component_block_id: Optional[UuidStr] = Field(default=None, description="ID of the component block")


# ─── Validation ──────────────────────────────────────────────────────────────

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe_errors(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def validate_arguments(tool_name: str, model: Type[ModelT], arguments: Any) -> ModelT:
    """Validate raw tool arguments against ``model``.

    Raises:
        ValidationError: With one ``field: problem`` entry per failing field.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError(
            f"Invalid arguments for {tool_name}: expected an object, got {type(arguments).__name__}"
        )
    try:
        return model.model_validate(dict(arguments))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid arguments for {tool_name}: {_describe_errors(e)}") from e
