"""
Settings - Default configuration values and the run configuration object.

DEFAULT_SETTINGS holds the fallback values used when environment variables are
not set. SitemapConfig.from_env() loads the .env file (if present), resolves
every value once at process start, and the resulting frozen SitemapConfig is
passed to the orchestrator, the API client and the extractors.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --output-dir)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SHOPIFY_TOKEN              Shared credential, used when the surface-specific
                             token below is not set
  SHOPIFY_STOREFRONT_TOKEN   Storefront API token (image sitemap)
  SHOPIFY_ADMIN_TOKEN        Admin API token (video sitemap)
  SHOPIFY_STOREFRONT_DOMAIN  Host serving the Storefront API
  SHOPIFY_ADMIN_DOMAIN       *.myshopify.com host serving the Admin API
  STOREFRONT_API_VERSION     Storefront API version segment
  ADMIN_API_VERSION          Admin API version segment
  SITE_URL                   Public site root used to build page URLs
  VIDEO_BLOG_HANDLE          Blog whose index page carries the video entries
  RELEASE_CALENDAR_HANDLE    Blog page carrying the game-release images
  OUTPUT_DIR                 Directory the sitemap files are written to
  IMAGE_SITEMAP_FILE         File name of the image sitemap
  VIDEO_SITEMAP_FILE         File name of the video sitemap
  REQUEST_TIMEOUT            Per-request timeout in seconds
  PUBLICATION_DATE_FALLBACK  "now" or a fixed ISO-8601 timestamp, used for
                             videos without a publication date
  DEBUG                      Whether to print verbose output
"""

import os
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_SETTINGS = {
    "SHOPIFY_STOREFRONT_DOMAIN": "gaming-hub.fr",
    "SHOPIFY_ADMIN_DOMAIN": "gaming-hub.myshopify.com",
    "STOREFRONT_API_VERSION": "2022-10",
    "ADMIN_API_VERSION": "2024-01",
    "SITE_URL": "https://gaming-hub.fr",
    "VIDEO_BLOG_HANDLE": "films-et-cinematiques-de-jeux-videos",
    "RELEASE_CALENDAR_HANDLE": "calendrier-des-sorties-de-jeux-video",
    "OUTPUT_DIR": ".",
    "IMAGE_SITEMAP_FILE": "sitemap-images.xml",
    "VIDEO_SITEMAP_FILE": "sitemap-videos.xml",
    "REQUEST_TIMEOUT": 30,
    "PUBLICATION_DATE_FALLBACK": "now",
    "DEBUG": False,
}


def _setting(name: str) -> str:
    return os.getenv(name) or str(DEFAULT_SETTINGS[name])


@dataclass(frozen=True)
class SitemapConfig:
    """Resolved configuration for one run.

    Attributes:
        storefront_token: Credential for the Storefront API.
        admin_token: Credential for the Admin API.
        storefront_domain: Host of the Storefront API.
        admin_domain: Host of the Admin API.
        storefront_api_version: Storefront API version segment.
        admin_api_version: Admin API version segment.
        site_url: Public site root (no trailing slash).
        video_blog_handle: Blog handle of the video index page.
        release_calendar_handle: Blog handle of the release calendar page.
        output_dir: Directory the sitemap files are written to.
        image_sitemap_file: Image sitemap file name.
        video_sitemap_file: Video sitemap file name.
        request_timeout: Per-request timeout in seconds.
        publication_date_fallback: Fixed fallback timestamp, or None to use
            the run start time.
        debug: Print verbose output.
    """

    storefront_token: str = ""
    admin_token: str = ""
    storefront_domain: str = DEFAULT_SETTINGS["SHOPIFY_STOREFRONT_DOMAIN"]
    admin_domain: str = DEFAULT_SETTINGS["SHOPIFY_ADMIN_DOMAIN"]
    storefront_api_version: str = DEFAULT_SETTINGS["STOREFRONT_API_VERSION"]
    admin_api_version: str = DEFAULT_SETTINGS["ADMIN_API_VERSION"]
    site_url: str = DEFAULT_SETTINGS["SITE_URL"]
    video_blog_handle: str = DEFAULT_SETTINGS["VIDEO_BLOG_HANDLE"]
    release_calendar_handle: str = DEFAULT_SETTINGS["RELEASE_CALENDAR_HANDLE"]
    output_dir: str = DEFAULT_SETTINGS["OUTPUT_DIR"]
    image_sitemap_file: str = DEFAULT_SETTINGS["IMAGE_SITEMAP_FILE"]
    video_sitemap_file: str = DEFAULT_SETTINGS["VIDEO_SITEMAP_FILE"]
    request_timeout: float = DEFAULT_SETTINGS["REQUEST_TIMEOUT"]
    publication_date_fallback: Optional[str] = None
    debug: bool = False

    @classmethod
    def from_env(cls, env_file: str = "./.env") -> "SitemapConfig":
        """Build the configuration from a .env file and the environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.

        Returns:
            A fully resolved SitemapConfig.

        Raises:
            ValueError: If REQUEST_TIMEOUT or PUBLICATION_DATE_FALLBACK cannot
                be parsed.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        shared_token = os.getenv("SHOPIFY_TOKEN", "")

        return cls(
            storefront_token=os.getenv("SHOPIFY_STOREFRONT_TOKEN") or shared_token,
            admin_token=os.getenv("SHOPIFY_ADMIN_TOKEN") or shared_token,
            storefront_domain=_setting("SHOPIFY_STOREFRONT_DOMAIN"),
            admin_domain=_setting("SHOPIFY_ADMIN_DOMAIN"),
            storefront_api_version=_setting("STOREFRONT_API_VERSION"),
            admin_api_version=_setting("ADMIN_API_VERSION"),
            site_url=_setting("SITE_URL").rstrip("/"),
            video_blog_handle=_setting("VIDEO_BLOG_HANDLE"),
            release_calendar_handle=_setting("RELEASE_CALENDAR_HANDLE"),
            output_dir=_setting("OUTPUT_DIR"),
            image_sitemap_file=_setting("IMAGE_SITEMAP_FILE"),
            video_sitemap_file=_setting("VIDEO_SITEMAP_FILE"),
            request_timeout=float(_setting("REQUEST_TIMEOUT")),
            publication_date_fallback=parse_publication_fallback(
                _setting("PUBLICATION_DATE_FALLBACK")
            ),
            debug=_setting("DEBUG").lower() == "true",
        )

    def with_overrides(self, **changes) -> "SitemapConfig":
        """Return a copy with CLI overrides applied (None values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @property
    def storefront_endpoint(self) -> str:
        return f"https://{self.storefront_domain}/api/{self.storefront_api_version}/graphql.json"

    @property
    def admin_endpoint(self) -> str:
        return f"https://{self.admin_domain}/admin/api/{self.admin_api_version}/graphql.json"


def parse_publication_fallback(value: str) -> Optional[str]:
    """Resolve the PUBLICATION_DATE_FALLBACK setting.

    "now" (case-insensitive) means the run start time is used, which is
    returned as None here. Any other value must be an ISO-8601 timestamp and
    is returned in normalized isoformat.
    """
    value = value.strip()
    if not value or value.lower() == "now":
        return None
    # fromisoformat only accepts a "Z" suffix from Python 3.11.
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(
            f"PUBLICATION_DATE_FALLBACK must be 'now' or an ISO-8601 timestamp, got {value!r}"
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat()
