"""
Record Normalizer - Flattens the raw GraphQL responses into typed records.

This module sits between the raw API response and the media extractors. It
takes the nested GraphQL JSON and produces flat records that downstream
modules can consume without knowing anything about the response shape.

The blogs response (Storefront API) has this structure:
    {
      "blogs": {
        "edges": [
          { "node": {
              "handle": "actus",
              "title": "Actus",
              "articles": {
                "edges": [
                  { "node": {
                      "handle": "...", "title": "...",
                      "image": { "url": "...", "altText": "..." } | null,
                      "content": "<p>...</p>"
                  } }
                ]
              }
          } }
        ]
      }
    }

The metaobjects response (Storefront or Admin API):
    {
      "metaobjects": {
        "nodes": [
          { "handle": "...", "fields": [ { "key": "titre", "value": "..." } ] }
        ]
      }
    }

Key behaviors:
  - Metaobject fields are folded into a key -> value mapping in one pass;
    a later duplicate key overwrites an earlier one.
  - Missing required fields (the top-level connection, blog and article
    handles) raise MalformedResponseError. Optional fields default explicitly:
    title -> "", image -> None, fields -> {}.

Pipeline context:
    Input comes from ShopifyGraphQLClient.execute_graphql(). Output feeds the
    ImageExtractor and VideoExtractor.
"""

from typing import Dict, Any, List, Optional

from .errors import MalformedResponseError
from .models import ArticleRecord, BlogRecord, MetaobjectRecord


def _require(node: Dict[str, Any], key: str, context: str) -> Any:
    value = node.get(key) if isinstance(node, dict) else None
    if not value:
        raise MalformedResponseError(f"{context} is missing required field '{key}'")
    return value


class RecordNormalizer:
    """Normalizes Storefront/Admin GraphQL payloads into records.

    Attributes:
        debug: If True, prints normalization counts.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def normalize_blogs(self, graphql_data: Dict[str, Any]) -> List[BlogRecord]:
        """Flatten a blogs query response.

        Args:
            graphql_data: The "data" portion of the response to BLOGS_QUERY.

        Returns:
            One BlogRecord per blog node, in response order.

        Raises:
            MalformedResponseError: If the blogs connection or a handle is missing.
        """
        connection = _require(graphql_data, "blogs", "Blogs response")

        blogs = []
        for edge in connection.get("edges") or []:
            node = (edge or {}).get("node") or {}
            blog_handle = _require(node, "handle", "Blog node")
            articles = [
                self._normalize_article(article_edge, blog_handle)
                for article_edge in (node.get("articles") or {}).get("edges") or []
            ]
            blogs.append(BlogRecord(
                handle=blog_handle,
                title=node.get("title") or "",
                articles=articles,
            ))

        if self.debug:
            total = sum(len(b.articles) for b in blogs)
            print(f"  Normalized: {len(blogs)} blogs, {total} articles")

        return blogs

    def normalize_metaobjects(self, graphql_data: Dict[str, Any]) -> List[MetaobjectRecord]:
        """Flatten a metaobjects query response.

        Args:
            graphql_data: The "data" portion of a metaobjects query response.

        Returns:
            One MetaobjectRecord per node, in response order.

        Raises:
            MalformedResponseError: If the metaobjects connection is missing.
        """
        connection = _require(graphql_data, "metaobjects", "Metaobjects response")

        records = [
            MetaobjectRecord(
                handle=(node or {}).get("handle"),
                fields=self._fold_fields((node or {}).get("fields")),
            )
            for node in connection.get("nodes") or []
        ]

        if self.debug:
            print(f"  Normalized: {len(records)} metaobjects")

        return records

    def _normalize_article(self, edge: Dict[str, Any], blog_handle: str) -> ArticleRecord:
        node = (edge or {}).get("node") or {}
        image = node.get("image") or {}
        return ArticleRecord(
            handle=_require(node, "handle", f"Article node in blog '{blog_handle}'"),
            title=node.get("title") or "",
            blog_handle=blog_handle,
            image_url=image.get("url"),
            image_alt_text=image.get("altText"),
            html_content=node.get("content"),
        )

    @staticmethod
    def _fold_fields(fields: Optional[List[Dict[str, Any]]]) -> Dict[str, Optional[str]]:
        folded = {}
        for entry in fields or []:
            key = (entry or {}).get("key")
            if key:
                folded[key] = entry.get("value")
        return folded
