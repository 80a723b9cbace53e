#!/usr/bin/env python3
"""
Gaming Hub Sitemap Generator - Entry Point.

Runs the sitemap CLI from a checkout without installing the package:

    python run.py images
    python run.py videos --debug

See gaminghub_sitemaps.cli for the full option list.
"""

import sys

from gaminghub_sitemaps.cli import main

if __name__ == "__main__":
    sys.exit(main())
