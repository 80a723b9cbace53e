"""
GraphQL Query Definitions - The fixed queries used to build the sitemaps.

Each query is sent as-is (no variables, no pagination): the first page of each
connection is all the pipeline ever reads.

  BLOGS_QUERY           Storefront API. Up to 10 blogs with up to 250 articles
                        each: handle, title, featured image and HTML content.
                        Feeds the article groups of the image sitemap.

  GAME_RELEASES_QUERY   Storefront API. Up to 250 "nouveautes_jeux_videos"
                        metaobjects (fields image_url, titre). Feeds the
                        release-calendar group of the image sitemap.

  VIDEOS_QUERY          Admin API. Up to 250 "video_youtube" metaobjects
                        (fields id_video, titre, duration, date_publication,
                        tag). Feeds the video sitemap.

Pipeline context:
  Used in the fetch steps of the orchestrators. Responses are passed to
  RecordNormalizer for flattening.
"""

GAME_RELEASE_TYPE = "nouveautes_jeux_videos"
VIDEO_TYPE = "video_youtube"

BLOGS_QUERY = """
{
  blogs(first: 10) {
    edges {
      node {
        id
        handle
        title
        articles(first: 250) {
          edges {
            node {
              id
              handle
              title
              image {
                url
                altText
              }
              content
            }
          }
        }
      }
    }
  }
}
"""

GAME_RELEASES_QUERY = """
{
  metaobjects(type: "%s", first: 250) {
    nodes {
      handle
      fields {
        key
        value
      }
    }
  }
}
""" % GAME_RELEASE_TYPE

VIDEOS_QUERY = """
{
  metaobjects(type: "%s", first: 250) {
    nodes {
      id
      handle
      fields {
        key
        value
      }
    }
  }
}
""" % VIDEO_TYPE
