import pytest

from fingertip_mcp import mapper
from fingertip_mcp.config import MapperDefaults
from fingertip_mcp.errors import ContentParseError
from fingertip_mcp.models import (
    CreateBlockInput,
    CreateSiteInput,
    GetBlockInput,
    GetSitesInput,
    UpdateBlockInput,
    UpdatePageInput,
    UpdatePageThemeInput,
)
from tests.helpers import BLOCK_ID, COMPONENT_ID, PAGE_ID

DEFAULTS = MapperDefaults()


def test_parse_content_decodes_strings_only() -> None:
    assert mapper.parse_content('{"a": [1, 2]}') == {"a": [1, 2]}
    assert mapper.parse_content({"a": 1}) == {"a": 1}
    assert mapper.parse_content(None) is None


def test_parse_content_raises_on_malformed_json() -> None:
    with pytest.raises(ContentParseError) as exc:
        mapper.parse_content("{not json")
    assert exc.value.message.startswith("Invalid content JSON:")


def test_get_sites_sends_only_given_query_params() -> None:
    params = GetSitesInput.model_validate(
        {"pageSize": "20", "sortBy": "createdAt", "statuses": ["ENABLED", "DEMO"]}
    )
    request = mapper.map_get_sites(params, DEFAULTS)
    assert (request.method, request.path) == ("GET", "/sites")
    assert request.params == {"pageSize": 20, "sortBy": "createdAt", "statuses": ["ENABLED", "DEMO"]}
    assert request.body is None


def test_get_sites_without_filters_has_no_query() -> None:
    request = mapper.map_get_sites(GetSitesInput(), DEFAULTS)
    assert request.params is None


def test_create_site_applies_configured_defaults() -> None:
    params = CreateSiteInput.model_validate({"name": "Acme", "slug": "acme", "businessType": "retail"})
    request = mapper.map_create_site(params, MapperDefaults(site_status="ENABLED", page_slug="home"))

    assert (request.method, request.path) == ("POST", "/sites")
    assert request.body["status"] == "ENABLED"
    assert request.body["description"] is None
    assert request.body["pages"] == [
        {
            "slug": "home",
            "name": "Acme",
            "description": None,
            "pageTheme": {"content": {}, "isComponent": False, "componentPageThemeId": None},
            "blocks": [],
        }
    ]


def test_create_site_keeps_explicit_status_and_pages() -> None:
    params = CreateSiteInput.model_validate(
        {
            "name": "Acme",
            "slug": "acme",
            "businessType": "retail",
            "status": "DEMO",
            "pages": [
                {
                    "slug": "about",
                    "name": "About",
                    "pageTheme": {"content": '{"color": "red"}'},
                    "blocks": [{"name": "Hero", "kind": "hero", "content": '{"title": "Hi"}'}],
                }
            ],
        }
    )
    body = mapper.map_create_site(params, DEFAULTS).body

    assert body["status"] == "DEMO"
    assert body["pages"] == [
        {
            "slug": "about",
            "name": "About",
            "pageTheme": {"content": {"color": "red"}},
            "blocks": [{"name": "Hero", "kind": "hero", "content": {"title": "Hi"}}],
        }
    ]


def test_create_site_nested_content_parse_error() -> None:
    params = CreateSiteInput.model_validate(
        {
            "name": "Acme",
            "slug": "acme",
            "businessType": "retail",
            "pages": [{"slug": "about", "name": "About", "pageTheme": {"content": "{oops"}}],
        }
    )
    with pytest.raises(ContentParseError):
        mapper.map_create_site(params, DEFAULTS)


def test_update_page_body_contains_only_provided_fields() -> None:
    params = UpdatePageInput.model_validate(
        {"pageId": PAGE_ID, "name": "About", "position": "3", "socialIcons": {"x": "@acme"}}
    )
    request = mapper.map_update_page(params, DEFAULTS)
    assert (request.method, request.path) == ("PATCH", f"/pages/{PAGE_ID}")
    assert request.body == {"name": "About", "position": 3, "socialIcons": {"x": "@acme"}}


def test_update_page_forwards_explicit_null() -> None:
    params = UpdatePageInput.model_validate({"pageId": PAGE_ID, "description": None})
    assert mapper.map_update_page(params, DEFAULTS).body == {"description": None}


def test_update_block_with_only_kind() -> None:
    params = UpdateBlockInput.model_validate({"blockId": BLOCK_ID, "kind": "text"})
    request = mapper.map_update_block(params, DEFAULTS)
    assert (request.method, request.path) == ("PATCH", f"/blocks/{BLOCK_ID}")
    assert request.body == {"kind": "text"}


def test_update_block_parses_string_content() -> None:
    raw = '{"items": [{"title": "One"}], "layout": null}'
    params = UpdateBlockInput.model_validate({"blockId": BLOCK_ID, "content": raw})
    assert mapper.map_update_block(params, DEFAULTS).body == {
        "content": {"items": [{"title": "One"}], "layout": None}
    }


def test_update_page_theme_partial_body() -> None:
    params = UpdatePageThemeInput.model_validate(
        {"pageId": PAGE_ID, "isComponent": True, "componentPageThemeId": None}
    )
    request = mapper.map_update_page_theme(params, DEFAULTS)
    assert request.path == f"/pages/{PAGE_ID}/theme"
    assert request.body == {"isComponent": True, "componentPageThemeId": None}


def test_create_block_omits_absent_component_reference_by_default() -> None:
    params = CreateBlockInput.model_validate({"pageId": PAGE_ID, "name": "Hero", "kind": "hero"})
    request = mapper.map_create_block(params, DEFAULTS)
    assert (request.method, request.path) == ("POST", f"/pages/{PAGE_ID}/blocks")
    assert request.body == {"name": "Hero", "kind": "hero", "isComponent": False}


def test_create_block_null_component_refs_policy() -> None:
    params = CreateBlockInput.model_validate({"pageId": PAGE_ID, "name": "Hero", "kind": "hero"})
    body = mapper.map_create_block(params, MapperDefaults(null_component_refs=True)).body
    assert body["componentBlockId"] is None


def test_create_site_null_component_refs_policy_fills_nested_pages() -> None:
    params = CreateSiteInput.model_validate(
        {
            "name": "Acme",
            "slug": "acme",
            "businessType": "retail",
            "pages": [
                {
                    "slug": "about",
                    "name": "About",
                    "pageTheme": {"content": {}},
                    "blocks": [
                        {"name": "Hero", "kind": "hero"},
                        {"name": "Footer", "kind": "footer", "componentBlockId": COMPONENT_ID},
                    ],
                }
            ],
        }
    )
    body = mapper.map_create_site(params, MapperDefaults(null_component_refs=True)).body

    page = body["pages"][0]
    assert page["pageTheme"] == {"content": {}, "componentPageThemeId": None}
    assert page["blocks"][0]["componentBlockId"] is None
    assert page["blocks"][1]["componentBlockId"] == COMPONENT_ID


def test_create_site_nested_refs_omitted_by_default() -> None:
    params = CreateSiteInput.model_validate(
        {
            "name": "Acme",
            "slug": "acme",
            "businessType": "retail",
            "pages": [
                {
                    "slug": "about",
                    "name": "About",
                    "pageTheme": {"content": {}},
                    "blocks": [{"name": "Hero", "kind": "hero"}],
                }
            ],
        }
    )
    page = mapper.map_create_site(params, DEFAULTS).body["pages"][0]
    assert "componentPageThemeId" not in page["pageTheme"]
    assert "componentBlockId" not in page["blocks"][0]


@pytest.mark.parametrize("description", ["", "   "])
def test_create_site_blank_description_is_sent_as_null(description) -> None:
    params = CreateSiteInput.model_validate(
        {"name": "Acme", "slug": "acme", "businessType": "retail", "description": description}
    )
    body = mapper.map_create_site(params, DEFAULTS).body
    assert body["description"] is None
    assert body["pages"][0]["description"] is None


def test_create_site_description_is_trimmed() -> None:
    params = CreateSiteInput.model_validate(
        {"name": " Acme ", "slug": "acme", "businessType": "retail", "description": "  Bakery  "}
    )
    body = mapper.map_create_site(params, DEFAULTS).body
    assert body["name"] == "Acme"
    assert body["description"] == "Bakery"
    assert body["pages"][0]["name"] == "Acme"


def test_create_block_forwards_given_component_reference_and_content() -> None:
    params = CreateBlockInput.model_validate(
        {
            "pageId": PAGE_ID,
            "name": "Hero",
            "kind": "hero",
            "isComponent": True,
            "componentBlockId": COMPONENT_ID,
            "content": '{"title": "Hi"}',
        }
    )
    assert mapper.map_create_block(params, DEFAULTS).body == {
        "name": "Hero",
        "kind": "hero",
        "isComponent": True,
        "componentBlockId": COMPONENT_ID,
        "content": {"title": "Hi"},
    }


def test_delete_block_request() -> None:
    request = mapper.map_delete_block(GetBlockInput.model_validate({"blockId": BLOCK_ID}), DEFAULTS)
    assert (request.method, request.path, request.body) == ("DELETE", f"/blocks/{BLOCK_ID}", None)
