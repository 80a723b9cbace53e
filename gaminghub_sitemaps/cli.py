"""
Gaming Hub Sitemap Generator - Command-line interface.

This builds the store's media sitemaps. It reads configuration from a .env
file, runs one of the two pipelines, and writes the sitemap file to the
output directory:

  images  Storefront API -> sitemap-images.xml
          Article featured and embedded images, plus the game-release
          covers attached to the release calendar page.

  videos  Admin API -> sitemap-videos.xml
          One <video:video> entry per "video_youtube" metaobject, attached
          to the video blog index page.

Usage:
    gaminghub-sitemaps images               # Build the image sitemap
    gaminghub-sitemaps videos               # Build the video sitemap
    gaminghub-sitemaps videos --debug       # Verbose output, HTTP debug logging
    gaminghub-sitemaps images --output-dir ./public
    gaminghub-sitemaps --version            # Show version
    gaminghub-sitemaps images --env /path   # Use alternate .env file

From a checkout, `python run.py ...` does the same.

Exit status is 0 on success and 1 on any failure, with a diagnostic line on
stderr.
"""

import sys
import argparse
import logging
from importlib import metadata
from pathlib import Path

from .orchestrator import ORCHESTRATORS
from .settings import SitemapConfig

DISTRIBUTION_NAME = "gaminghub-sitemaps"

# Repo-root VERSION file, used when running from a checkout without installing.
VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


def get_version() -> str:
    """Return the installed package version, else the checkout's VERSION file."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        pass
    if VERSION_FILE.exists():
        return VERSION_FILE.read_text().strip()
    return "unknown"


def main(argv=None):
    """Parse CLI arguments and run the selected sitemap pipeline."""
    parser = argparse.ArgumentParser(
        prog=DISTRIBUTION_NAME,
        description="Gaming Hub sitemap generator - Build image and video sitemaps from Shopify",
    )
    parser.add_argument("variant", nargs="?", choices=sorted(ORCHESTRATORS), help="Sitemap to build")
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--output-dir", "-o", help="Directory to write the sitemap to")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)
    version = get_version()

    if args.version:
        print(f"{DISTRIBUTION_NAME} {version}")
        return 0

    if not args.variant:
        parser.error("the sitemap variant is required (images or videos)")

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    try:
        config = SitemapConfig.from_env(args.env)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides on top of .env values
    config = config.with_overrides(
        output_dir=args.output_dir,
        debug=True if args.debug else None,
    )

    orchestrator = ORCHESTRATORS[args.variant](config)

    print(f"\n{'='*60}")
    print(f"GAMING HUB {args.variant.upper()} SITEMAP v{version}")
    print("="*60)
    print(f"Site: {config.site_url}")
    print(f"Output: {orchestrator.output_manager.get_output_path(orchestrator.output_filename)}")

    if not orchestrator.validate_config():
        print("ERROR: invalid configuration", file=sys.stderr)
        return 1

    results = orchestrator.run()
    orchestrator.print_summary(results)

    if not results.get("success"):
        print(f"ERROR: {results.get('error', 'sitemap generation failed')}", file=sys.stderr)
        return 1
    return 0
