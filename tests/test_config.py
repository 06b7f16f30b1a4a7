import pytest

from fingertip_mcp.config import (
    DEFAULT_BASE_URL,
    MapperDefaults,
    OutputFormat,
    load_settings,
)
from fingertip_mcp.errors import ConfigurationError


def test_missing_api_key_is_fatal() -> None:
    with pytest.raises(ConfigurationError) as exc:
        load_settings({})
    assert "FINGERTIP_API_KEY" in str(exc.value)


def test_blank_api_key_is_fatal() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"FINGERTIP_API_KEY": "   "})


def test_defaults() -> None:
    settings = load_settings({"FINGERTIP_API_KEY": "secret"})
    assert settings.api_key == "secret"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.output_format is OutputFormat.SUMMARY
    assert settings.defaults == MapperDefaults(
        site_status="UNPUBLISHED", page_slug="index", null_component_refs=False
    )
    assert settings.timeout is None
    assert settings.log_level == "INFO"


def test_overrides() -> None:
    settings = load_settings(
        {
            "FINGERTIP_API_KEY": "secret",
            "FINGERTIP_BASE_URL": "https://staging.fingertip.test/v1/",
            "FINGERTIP_OUTPUT_FORMAT": "JSON",
            "FINGERTIP_DEFAULT_SITE_STATUS": "enabled",
            "FINGERTIP_DEFAULT_PAGE_SLUG": "home",
            "FINGERTIP_NULL_COMPONENT_REFS": "yes",
            "FINGERTIP_TIMEOUT": "12.5",
            "FINGERTIP_LOG_LEVEL": "debug",
        }
    )
    assert settings.base_url == "https://staging.fingertip.test/v1"
    assert settings.output_format is OutputFormat.JSON
    assert settings.defaults == MapperDefaults(
        site_status="ENABLED", page_slug="home", null_component_refs=True
    )
    assert settings.timeout == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("FINGERTIP_OUTPUT_FORMAT", "xml"),
        ("FINGERTIP_DEFAULT_SITE_STATUS", "LIVE"),
        ("FINGERTIP_DEFAULT_PAGE_SLUG", "  "),
        ("FINGERTIP_NULL_COMPONENT_REFS", "maybe"),
        ("FINGERTIP_TIMEOUT", "soon"),
        ("FINGERTIP_TIMEOUT", "0"),
    ],
)
def test_invalid_values_are_rejected(name: str, value: str) -> None:
    with pytest.raises(ConfigurationError) as exc:
        load_settings({"FINGERTIP_API_KEY": "secret", name: value})
    assert name in str(exc.value)


def test_api_key_not_in_repr() -> None:
    settings = load_settings({"FINGERTIP_API_KEY": "super-secret-token"})
    assert "super-secret-token" not in repr(settings)


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINGERTIP_API_KEY", "from-env")
    monkeypatch.delenv("FINGERTIP_OUTPUT_FORMAT", raising=False)
    assert load_settings().api_key == "from-env"
