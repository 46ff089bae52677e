"""Tests for REST/GraphQL endpoint resolution."""

from gitlab_issues.endpoints import (
    DEFAULT_GRAPHQL_ENDPOINT,
    DEFAULT_REST_ENDPOINT,
    resolve_graphql_endpoint,
    resolve_rest_endpoint,
)


def test_no_urls_gives_gitlab_com() -> None:
    assert resolve_rest_endpoint(None, None) == "https://gitlab.com/api/v4"
    assert resolve_rest_endpoint() == DEFAULT_REST_ENDPOINT


def test_graphql_suffix_is_mapped_on_same_host() -> None:
    assert resolve_rest_endpoint("https://gitlab.example.com/api/graphql") == "https://gitlab.example.com/api/v4"


def test_explicit_rest_url_wins_and_is_stripped() -> None:
    assert resolve_rest_endpoint("https://gitlab.example.com/api/graphql", "https://custom/rest") == "https://custom/rest"
    assert resolve_rest_endpoint("https://gitlab.example.com/api/graphql", "https://custom/rest/") == "https://custom/rest"


def test_unrecognized_graphql_url_falls_back_to_gitlab_com() -> None:
    """A nonstandard GraphQL URL does not leak its host into the REST URL."""
    assert resolve_rest_endpoint("https://gitlab.example.com/graphql") == DEFAULT_REST_ENDPOINT


def test_graphql_endpoint_default_and_trim() -> None:
    assert resolve_graphql_endpoint(None) == DEFAULT_GRAPHQL_ENDPOINT
    assert resolve_graphql_endpoint("   ") == DEFAULT_GRAPHQL_ENDPOINT
    assert resolve_graphql_endpoint(" https://git.example.com/api/graphql/ ") == "https://git.example.com/api/graphql"
