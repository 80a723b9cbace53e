"""
Sitemap Orchestrators - Pipeline coordination for the image and video sitemaps.

This module ties together all other modules (ShopifyGraphQLClient,
RecordNormalizer, the media extractors, the renderers and OutputManager) into
one sequential run per sitemap.

ImageSitemapOrchestrator (Storefront API):
  Step 1: FETCH BLOGS
      BLOGS_QUERY: up to 10 blogs with up to 250 articles each.
  Step 2: FETCH GAME RELEASES
      GAME_RELEASES_QUERY. Best-effort: a GraphQL error here is reported as a
      warning and the release-calendar group is left out.
  Step 3: NORMALIZE RECORDS
  Step 4: EXTRACT MEDIA
      One group per article with at least one image, then the release
      calendar group if any game release has an image.
  Step 5: RENDER XML
  Step 6: SAVE OUTPUT

VideoSitemapOrchestrator (Admin API):
  Step 1: FETCH VIDEOS
      VIDEOS_QUERY: up to 250 "video_youtube" metaobjects.
  Step 2: NORMALIZE RECORDS
  Step 3: EXTRACT MEDIA
      A single group for the video blog index page. Records without an
      id_video are skipped and counted.
  Step 4: RENDER XML
  Step 5: SAVE OUTPUT

Any other SitemapError stops the run before anything is written; run()
records it in the results and the CLI exits with status 1.

Typical usage:
    config = SitemapConfig.from_env("./.env")
    orchestrator = VideoSitemapOrchestrator(config)
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import traceback
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Tuple

from .errors import ApiError, SitemapError
from .graphql_queries import BLOGS_QUERY, GAME_RELEASES_QUERY, VIDEOS_QUERY
from .media_extractor import ImageExtractor, VideoExtractor
from .models import ArticleRecord, MediaKind, MetaobjectRecord, SitemapDocument, SitemapGroup
from .output_manager import OutputManager
from .record_normalizer import RecordNormalizer
from .settings import SitemapConfig
from .shopify_client import ShopifyGraphQLClient
from .sitemap_renderer import (
    BaseSitemapRenderer,
    ImageSitemapRenderer,
    VideoSitemapRenderer,
    check_well_formed,
)


class BaseSitemapOrchestrator:
    """Runs one sitemap pipeline: fetch, normalize, extract, render, save.

    Subclasses implement the fetch/normalize/extract steps in
    _build_document() and name their client, renderer and output file.

    Attributes:
        config: The resolved run configuration.
        debug: Whether to enable verbose output.
        output_manager: Writes the sitemap file to config.output_dir.
    """

    variant = ""

    def __init__(self, config: SitemapConfig, client: Optional[ShopifyGraphQLClient] = None):
        """Initialize the orchestrator.

        Args:
            config: The run configuration, built once by SitemapConfig.from_env().
            client: An API client to use instead of building one from config.
        """
        self.config = config
        self.debug = config.debug
        self.output_manager = OutputManager(config.output_dir)
        self._client = client
        self._step_number = 0

    @property
    def output_filename(self) -> str:
        raise NotImplementedError

    def validate_config(self) -> bool:
        """Validate that all required configuration values are present.

        Returns:
            True if all required values are present, False otherwise.
            Prints specific error messages for each missing value.
        """
        errors = self._config_errors()
        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def run(self) -> Dict[str, Any]:
        """Execute the full pipeline.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - variant: "images" or "videos"
                - success: True if the sitemap was rendered and written
                - summary: Record and media counts
                - output_path: Path of the written sitemap
                - size_kb: Size of the written sitemap in KB
                - error: Error message (if success=False)
        """
        started_at = datetime.now(timezone.utc)
        self._step_number = 0
        results = {
            "started_at": started_at.isoformat(),
            "variant": self.variant,
            "success": False,
        }

        try:
            client = self._client or self._make_client()
            document, summary = self._build_document(client, started_at)

            self._step("RENDER XML")
            xml = self._make_renderer().render(document)
            check_well_formed(xml)
            print(f"  {document.media_count} {document.kind.value} entries in "
                  f"{len(document.groups)} <url> group(s)")

            self._step("SAVE OUTPUT")
            output_path = self.output_manager.write_text(self.output_filename, xml)
            size_kb = round(len(xml.encode("utf-8")) / 1024, 2)
            print(f"  Sitemap written: {output_path} ({size_kb:.2f} KB)")

            results["success"] = True
            results["summary"] = summary
            results["output_path"] = output_path
            results["size_kb"] = size_kb

        except SitemapError as e:
            results["error"] = str(e)
            print(f"\n  ERROR: {e}")
            if self.debug:
                traceback.print_exc()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()
        return results

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        print(f"\n{'='*60}")
        print(f"{self.variant.upper()} SITEMAP COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        for key, value in (results.get("summary") or {}).items():
            print(f"{key.replace('_', ' ').capitalize()}: {value}")

        if results.get("output_path"):
            print(f"Output: {results['output_path']} ({results.get('size_kb', 0):.2f} KB)")

        if results.get("error"):
            print(f"Error: {results['error']}")

    def _step(self, title: str):
        self._step_number += 1
        print(f"\n{'='*60}")
        print(f"STEP {self._step_number}: {title}")
        print("="*60)

    def _config_errors(self) -> List[str]:
        errors = []
        if not self.config.site_url:
            errors.append("SITE_URL is required")
        if not self.output_filename:
            errors.append("An output file name is required")
        return errors

    def _make_client(self) -> ShopifyGraphQLClient:
        raise NotImplementedError

    def _make_renderer(self) -> BaseSitemapRenderer:
        raise NotImplementedError

    def _build_document(
        self, client: ShopifyGraphQLClient, started_at: datetime
    ) -> Tuple[SitemapDocument, Dict[str, Any]]:
        raise NotImplementedError


class ImageSitemapOrchestrator(BaseSitemapOrchestrator):
    """Builds sitemap-images.xml from blog articles and game releases."""

    variant = "images"

    @property
    def output_filename(self) -> str:
        return self.config.image_sitemap_file

    def article_url(self, article: ArticleRecord) -> str:
        return f"{self.config.site_url}/blogs/{article.blog_handle}/{article.handle}"

    @property
    def release_calendar_url(self) -> str:
        return f"{self.config.site_url}/blogs/{self.config.release_calendar_handle}"

    def _config_errors(self) -> List[str]:
        errors = super()._config_errors()
        if not self.config.storefront_token:
            errors.append("SHOPIFY_STOREFRONT_TOKEN (or SHOPIFY_TOKEN) is required")
        return errors

    def _make_client(self) -> ShopifyGraphQLClient:
        return ShopifyGraphQLClient.storefront(self.config)

    def _make_renderer(self) -> BaseSitemapRenderer:
        return ImageSitemapRenderer(self.debug)

    def _build_document(self, client, started_at):
        self._step("FETCH BLOGS")
        blogs_data = client.execute_graphql(BLOGS_QUERY)
        print("  Blogs query executed successfully")

        self._step("FETCH GAME RELEASES")
        releases_data = None
        try:
            releases_data = client.execute_graphql(GAME_RELEASES_QUERY)
            print("  Game release query executed successfully")
        except ApiError as e:
            print(f"  Warning: game release metaobjects unavailable (ignored): {e}")

        self._step("NORMALIZE RECORDS")
        normalizer = RecordNormalizer(self.debug)
        blogs = normalizer.normalize_blogs(blogs_data)
        for blog in blogs:
            print(f"  - {blog.title or blog.handle}: {len(blog.articles)} articles")
        article_count = sum(len(blog.articles) for blog in blogs)
        print(f"  Blogs: {len(blogs)}")
        print(f"  Articles: {article_count}")

        game_releases: List[MetaobjectRecord] = []
        if releases_data is not None:
            try:
                game_releases = normalizer.normalize_metaobjects(releases_data)
            except ApiError as e:
                print(f"  Warning: game release response unusable (ignored): {e}")
        print(f"  Game releases: {len(game_releases)}")

        self._step("EXTRACT MEDIA")
        extractor = ImageExtractor(self.debug)
        document = SitemapDocument(kind=MediaKind.IMAGE)
        for blog in blogs:
            for article in blog.articles:
                descriptors = extractor.extract_article_images(article)
                if descriptors:
                    document.groups.append(SitemapGroup(self.article_url(article), descriptors))
        article_pages = len(document.groups)
        article_images = document.media_count

        release_images = extractor.extract_game_release_images(game_releases)
        if release_images:
            document.groups.append(SitemapGroup(self.release_calendar_url, release_images))

        print(f"  Article images: {article_images} across {article_pages} articles")
        print(f"  Game release images: {len(release_images)}")
        if extractor.skipped_game_releases:
            print(f"  Game releases without image_url: {extractor.skipped_game_releases}")

        summary = {
            "blogs": len(blogs),
            "articles": article_count,
            "game_releases": len(game_releases),
            "pages": len(document.groups),
            "images": document.media_count,
        }
        return document, summary


class VideoSitemapOrchestrator(BaseSitemapOrchestrator):
    """Builds sitemap-videos.xml from the "video_youtube" metaobjects."""

    variant = "videos"

    @property
    def output_filename(self) -> str:
        return self.config.video_sitemap_file

    @property
    def blog_index_url(self) -> str:
        return f"{self.config.site_url}/blogs/{self.config.video_blog_handle}"

    def _config_errors(self) -> List[str]:
        errors = super()._config_errors()
        if not self.config.admin_token:
            errors.append("SHOPIFY_ADMIN_TOKEN (or SHOPIFY_TOKEN) is required")
        if not self.config.video_blog_handle:
            errors.append("VIDEO_BLOG_HANDLE is required")
        return errors

    def _make_client(self) -> ShopifyGraphQLClient:
        return ShopifyGraphQLClient.admin(self.config)

    def _make_renderer(self) -> BaseSitemapRenderer:
        return VideoSitemapRenderer(self.debug)

    def _build_document(self, client, started_at):
        self._step("FETCH VIDEOS")
        videos_data = client.execute_graphql(VIDEOS_QUERY)
        print("  Videos query executed successfully")

        self._step("NORMALIZE RECORDS")
        records = RecordNormalizer(self.debug).normalize_metaobjects(videos_data)
        print(f"  Metaobjects: {len(records)}")

        self._step("EXTRACT MEDIA")
        fallback = (
            self.config.publication_date_fallback
            or started_at.isoformat(timespec="seconds")
        )
        extractor = VideoExtractor(fallback, self.debug)
        videos = extractor.extract_videos(records)
        print(f"  Valid videos: {len(videos)}")
        print(f"  Skipped (no id_video): {extractor.skipped}")

        document = SitemapDocument(
            kind=MediaKind.VIDEO,
            groups=[SitemapGroup(
                self.blog_index_url, videos, changefreq="daily", priority="0.8"
            )],
        )
        summary = {
            "metaobjects": len(records),
            "videos": len(videos),
            "skipped": extractor.skipped,
        }
        return document, summary


ORCHESTRATORS = {
    ImageSitemapOrchestrator.variant: ImageSitemapOrchestrator,
    VideoSitemapOrchestrator.variant: VideoSitemapOrchestrator,
}
