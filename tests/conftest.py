"""Shared fixtures: settings and a recording mock transport for the Fingertip API."""

from typing import Callable, Optional

import pytest

from fingertip_mcp.config import MapperDefaults, OutputFormat, Settings
from fingertip_mcp.pipeline import ToolPipeline
from tests.helpers import API_KEY, RecordingApi


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=API_KEY, base_url="https://api.fingertip.test/v1")


@pytest.fixture
def make_pipeline(settings: Settings) -> Callable[..., ToolPipeline]:
    def _make(
        api: RecordingApi,
        output_format: OutputFormat = OutputFormat.SUMMARY,
        defaults: Optional[MapperDefaults] = None,
    ) -> ToolPipeline:
        configured = Settings(
            api_key=settings.api_key,
            base_url=settings.base_url,
            output_format=output_format,
            defaults=defaults or MapperDefaults(),
        )
        return ToolPipeline(configured, transport=api.transport)

    return _make
