"""Process configuration, read once from the environment at startup."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from fingertip_mcp.errors import ConfigurationError

# ─── Defaults ────────────────────────────────────────────────────────────────

DEFAULT_BASE_URL = "https://api.fingertip.com/v1"
DEFAULT_SITE_STATUS = "UNPUBLISHED"
DEFAULT_PAGE_SLUG = "index"
DEFAULT_LOG_LEVEL = "INFO"

SITE_STATUSES = ("EMPTY", "UNPUBLISHED", "PREVIEW", "SOFT_CLAIM", "ENABLED", "DEMO")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class OutputFormat(str, Enum):
    """How successful payloads are rendered into tool output."""

    SUMMARY = "summary"
    JSON = "json"


@dataclass(frozen=True)
class MapperDefaults:
    """Creation defaults that differed between historical server variants.

    Attributes:
        site_status: Status sent by create-site when none is given.
        page_slug: Slug of the page create-site adds when no pages are given.
        null_component_refs: When True, create-block sends an explicit null
            ``componentBlockId`` if the caller left it out.
    """

    site_status: str = DEFAULT_SITE_STATUS
    page_slug: str = DEFAULT_PAGE_SLUG
    null_component_refs: bool = False


@dataclass(frozen=True)
class Settings:
    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    output_format: OutputFormat = OutputFormat.SUMMARY
    defaults: MapperDefaults = field(default_factory=MapperDefaults)
    timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings: Immutable settings shared by every tool invocation.

    Raises:
        ConfigurationError: If FINGERTIP_API_KEY is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("FINGERTIP_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("FINGERTIP_API_KEY environment variable is not set")

    raw_format = env.get("FINGERTIP_OUTPUT_FORMAT", OutputFormat.SUMMARY.value).strip().lower()
    try:
        output_format = OutputFormat(raw_format)
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        raise ConfigurationError(
            f"FINGERTIP_OUTPUT_FORMAT must be one of: {choices}; got {raw_format!r}"
        ) from None

    site_status = env.get("FINGERTIP_DEFAULT_SITE_STATUS", DEFAULT_SITE_STATUS).strip().upper()
    if site_status not in SITE_STATUSES:
        raise ConfigurationError(
            f"FINGERTIP_DEFAULT_SITE_STATUS must be one of: {', '.join(SITE_STATUSES)}; "
            f"got {site_status!r}"
        )

    page_slug = env.get("FINGERTIP_DEFAULT_PAGE_SLUG", DEFAULT_PAGE_SLUG).strip()
    if not page_slug:
        raise ConfigurationError("FINGERTIP_DEFAULT_PAGE_SLUG cannot be empty")

    null_refs = _parse_bool(
        "FINGERTIP_NULL_COMPONENT_REFS", env.get("FINGERTIP_NULL_COMPONENT_REFS", "false")
    )

    timeout: Optional[float] = None
    raw_timeout = env.get("FINGERTIP_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"FINGERTIP_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError("FINGERTIP_TIMEOUT must be greater than zero")

    base_url = env.get("FINGERTIP_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/")
    if not base_url:
        base_url = DEFAULT_BASE_URL

    return Settings(
        api_key=api_key,
        base_url=base_url,
        output_format=output_format,
        defaults=MapperDefaults(
            site_status=site_status,
            page_slug=page_slug,
            null_component_refs=null_refs,
        ),
        timeout=timeout,
        log_level=env.get("FINGERTIP_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
    )
