"""
Shopify API Client - Handles the GraphQL calls to the Gaming Hub store.

This module is responsible for all HTTP communication with Shopify. Two API
surfaces are used, each with its own endpoint and credential header:

  1. Storefront API - Public, read-only content (blogs, articles and public
     metaobjects). Used by the image sitemap.
       POST https://<storefront_domain>/api/<version>/graphql.json
       Header: X-Shopify-Storefront-Access-Token

  2. Admin API - Private, full catalog (all metaobjects). Used by the video
     sitemap.
       POST https://<admin_domain>/admin/api/<version>/graphql.json
       Header: X-Shopify-Access-Token

Each call is a single attempt with an explicit timeout: no retry, no backoff.

Failure modes:
  TransportError  The request could not complete (connection error, timeout),
                  the body is not JSON, or a non-2xx status came back without
                  a GraphQL error list.
  ApiError        The JSON body carries a non-empty "errors" field. Shopify
                  returns either a list of {"message": ...} objects or, for
                  authentication failures, a plain string.

Pipeline context:
    Used in the fetch steps of both orchestrators. The returned "data" dict
    is passed to RecordNormalizer.
"""

from typing import Dict, Any, List

import requests

from .errors import ApiError, TransportError
from .settings import SitemapConfig

STOREFRONT_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"
ADMIN_TOKEN_HEADER = "X-Shopify-Access-Token"


class ShopifyGraphQLClient:
    """Client for one Shopify GraphQL API surface.

    Manages a requests.Session carrying the credential header. All API calls
    go through this single session.

    Attributes:
        endpoint_url: Full URL of the graphql.json endpoint.
        token_header: Name of the credential header for this surface.
        timeout: Per-request timeout in seconds.
        debug: If True, print verbose request/response details.
    """

    def __init__(
        self,
        endpoint_url: str,
        token_header: str,
        token: str,
        timeout: float = 30,
        debug: bool = False,
    ):
        self.endpoint_url = endpoint_url
        self.token_header = token_header
        self.timeout = timeout
        self.debug = debug
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            token_header: token,
        })

    @classmethod
    def storefront(cls, config: SitemapConfig) -> "ShopifyGraphQLClient":
        """Build a client for the public Storefront API."""
        return cls(
            config.storefront_endpoint,
            STOREFRONT_TOKEN_HEADER,
            config.storefront_token,
            timeout=config.request_timeout,
            debug=config.debug,
        )

    @classmethod
    def admin(cls, config: SitemapConfig) -> "ShopifyGraphQLClient":
        """Build a client for the private Admin API."""
        return cls(
            config.admin_endpoint,
            ADMIN_TOKEN_HEADER,
            config.admin_token,
            timeout=config.request_timeout,
            debug=config.debug,
        )

    def execute_graphql(self, query: str) -> Dict[str, Any]:
        """Execute a GraphQL query against the configured surface.

        Args:
            query: The GraphQL query string.

        Returns:
            The "data" portion of the GraphQL response (empty dict if absent).

        Raises:
            TransportError: If the HTTP round-trip fails or the body is not JSON.
            ApiError: If the GraphQL response contains errors.
        """
        if self.debug:
            print(f"  Executing GraphQL query ({len(query)} chars) against {self.endpoint_url}")

        try:
            response = self._session.post(
                self.endpoint_url, json={"query": query}, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Request to {self.endpoint_url} failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(
                f"Response from {self.endpoint_url} is not JSON "
                f"(HTTP {response.status_code})"
            ) from e

        if not isinstance(result, dict):
            raise TransportError(f"Unexpected response body from {self.endpoint_url}")

        errors = result.get("errors")
        if errors:
            messages = _error_messages(errors)
            raise ApiError(f"GraphQL errors: {'; '.join(messages)}", messages)

        if not response.ok:
            raise TransportError(
                f"HTTP {response.status_code} from {self.endpoint_url}"
            )

        if self.debug:
            print(f"  Response received (HTTP {response.status_code})")

        return result.get("data") or {}


def _error_messages(errors: Any) -> List[str]:
    """Flatten a GraphQL "errors" field into a list of messages."""
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, dict):
        errors = [errors]
    messages = []
    for error in errors:
        if isinstance(error, dict):
            messages.append(str(error.get("message", error)))
        else:
            messages.append(str(error))
    return messages
