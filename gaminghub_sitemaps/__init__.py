"""
gaminghub_sitemaps - Image and video sitemap generation for the Gaming Hub store.

This package contains all the modules that implement the sitemap pipelines.
Each module handles one concern:

  cli.py                Command-line entry point (gaminghub-sitemaps)
  orchestrator.py       Pipeline coordination (fetch -> save)
  shopify_client.py     HTTP communication with the Shopify GraphQL APIs
  graphql_queries.py    GraphQL query definitions
  record_normalizer.py  Flatten GraphQL responses into records
  media_extractor.py    Build image/video descriptors from records
  sitemap_renderer.py   Serialize descriptors to sitemap XML
  output_manager.py     Atomic write of the sitemap file
  settings.py           Defaults and the run configuration
  errors.py             Exception taxonomy
"""

from .errors import SitemapError, TransportError, ApiError, MalformedResponseError, OutputError
from .settings import SitemapConfig, DEFAULT_SETTINGS
from .shopify_client import ShopifyGraphQLClient
from .record_normalizer import RecordNormalizer
from .media_extractor import ImageExtractor, VideoExtractor, normalize_url, parse_duration
from .sitemap_renderer import ImageSitemapRenderer, VideoSitemapRenderer, escape_xml
from .output_manager import OutputManager
from .orchestrator import (
    ORCHESTRATORS,
    BaseSitemapOrchestrator,
    ImageSitemapOrchestrator,
    VideoSitemapOrchestrator,
)
