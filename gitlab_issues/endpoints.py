"""GitLab endpoint defaults and REST endpoint resolution."""

DEFAULT_GRAPHQL_ENDPOINT = "https://gitlab.com/api/graphql"
DEFAULT_REST_ENDPOINT = "https://gitlab.com/api/v4"
DEFAULT_ISSUE_PAGE_SIZE = 50

GRAPHQL_SUFFIX = "/api/graphql"
REST_SUFFIX = "/api/v4"


def resolve_graphql_endpoint(api_url: str | None = None) -> str:
    """Return the GraphQL endpoint, trimmed, or the gitlab.com default."""
    url = (api_url or "").strip()
    if not url:
        return DEFAULT_GRAPHQL_ENDPOINT
    return url.rstrip("/")


def resolve_rest_endpoint(graphql_url: str | None = None, explicit_rest_url: str | None = None) -> str:
    """Derive the REST (v4) base URL.

    An explicit REST URL wins. Otherwise a GraphQL URL ending in /api/graphql
    is mapped to /api/v4 on the same host; any other URL falls back to
    gitlab.com, not to the host of the unrecognized URL.
    """
    if explicit_rest_url:
        return explicit_rest_url.rstrip("/")
    if not graphql_url:
        return DEFAULT_REST_ENDPOINT
    if graphql_url.endswith(GRAPHQL_SUFFIX):
        return graphql_url[: -len(GRAPHQL_SUFFIX)] + REST_SUFFIX
    return DEFAULT_REST_ENDPOINT
