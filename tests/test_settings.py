"""Tests for gaminghub_sitemaps.settings."""

import os
from unittest.mock import patch

import pytest

from gaminghub_sitemaps.settings import DEFAULT_SETTINGS, SitemapConfig, parse_publication_fallback


def _from_env(env, env_file="/nonexistent/.env"):
    with patch.dict(os.environ, env, clear=True):
        return SitemapConfig.from_env(env_file)


def test_defaults():
    config = _from_env({})
    assert config.storefront_domain == "gaming-hub.fr"
    assert config.admin_domain == "gaming-hub.myshopify.com"
    assert config.site_url == "https://gaming-hub.fr"
    assert config.image_sitemap_file == "sitemap-images.xml"
    assert config.video_sitemap_file == "sitemap-videos.xml"
    assert config.request_timeout == float(DEFAULT_SETTINGS["REQUEST_TIMEOUT"])
    assert config.publication_date_fallback is None
    assert config.debug is False
    assert config.storefront_token == ""
    assert config.admin_token == ""


def test_endpoints():
    config = _from_env({})
    assert config.storefront_endpoint == "https://gaming-hub.fr/api/2022-10/graphql.json"
    assert config.admin_endpoint == "https://gaming-hub.myshopify.com/admin/api/2024-01/graphql.json"


def test_shared_token_used_for_both_surfaces():
    config = _from_env({"SHOPIFY_TOKEN": "shared"})
    assert config.storefront_token == "shared"
    assert config.admin_token == "shared"


def test_surface_tokens_override_shared_token():
    config = _from_env({
        "SHOPIFY_TOKEN": "shared",
        "SHOPIFY_STOREFRONT_TOKEN": "sf",
        "SHOPIFY_ADMIN_TOKEN": "admin",
    })
    assert config.storefront_token == "sf"
    assert config.admin_token == "admin"


def test_environment_overrides():
    config = _from_env({
        "SITE_URL": "https://staging.gaming-hub.fr/",
        "OUTPUT_DIR": "/tmp/out",
        "REQUEST_TIMEOUT": "5",
        "DEBUG": "true",
        "PUBLICATION_DATE_FALLBACK": "2024-01-01T00:00:00+01:00",
    })
    assert config.site_url == "https://staging.gaming-hub.fr"
    assert config.output_dir == "/tmp/out"
    assert config.request_timeout == 5.0
    assert config.debug is True
    assert config.publication_date_fallback == "2024-01-01T00:00:00+01:00"


def test_env_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SHOPIFY_TOKEN=from-file\nVIDEO_BLOG_HANDLE=trailers\n")
    config = _from_env({}, env_file=str(env_file))
    assert config.admin_token == "from-file"
    assert config.video_blog_handle == "trailers"


def test_invalid_timeout_raises():
    with pytest.raises(ValueError):
        _from_env({"REQUEST_TIMEOUT": "soon"})


def test_with_overrides_ignores_none():
    config = SitemapConfig(output_dir="a")
    assert config.with_overrides(output_dir=None).output_dir == "a"
    assert config.with_overrides(output_dir="b", debug=True).output_dir == "b"


@pytest.mark.parametrize("value", ["now", "NOW", "", "  "])
def test_parse_publication_fallback_now(value):
    assert parse_publication_fallback(value) is None


def test_parse_publication_fallback_naive_timestamp_is_utc():
    assert parse_publication_fallback("2024-05-01T10:00:00") == "2024-05-01T10:00:00+00:00"


def test_parse_publication_fallback_accepts_z_suffix():
    assert parse_publication_fallback("2026-01-01T00:00:00Z") == "2026-01-01T00:00:00+00:00"


def test_parse_publication_fallback_invalid():
    with pytest.raises(ValueError):
        parse_publication_fallback("yesterday")
