"""
Errors - Exception taxonomy for the sitemap pipeline.

Every failure the pipeline surfaces to the operator derives from SitemapError,
so the orchestrator can record it in the run results and the CLI can exit 1:

  TransportError          The request could not be sent, timed out, or the
                          response body was not JSON.
  ApiError                A JSON response carrying a GraphQL "errors" field.
  MalformedResponseError  A successful response missing a required field.
  OutputError             The rendered document could not be checked or written.
"""

from typing import List, Optional


class SitemapError(Exception):
    """Base class for all errors surfaced by the sitemap pipeline."""


class TransportError(SitemapError):
    """The HTTP round-trip failed or returned a non-JSON body."""


class ApiError(SitemapError):
    """The GraphQL API answered with an error list.

    Attributes:
        messages: The individual error messages returned by the API.
    """

    def __init__(self, message: str, messages: Optional[List[str]] = None):
        super().__init__(message)
        self.messages = messages or []


class MalformedResponseError(ApiError):
    """A response body did not contain a field the pipeline requires."""


class OutputError(SitemapError):
    """The sitemap file could not be validated or written."""
