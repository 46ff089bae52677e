"""GitLab Issue Manager: fetch, filter, create and update GitLab issues."""

from gitlab_issues.adapters import (
    GitLabAdapter,
    GitLabError,
    GraphQLError,
    NotFoundError,
    TransportError,
    ValidationError,
    create_issue,
    fetch_project_issues,
    fetch_project_labels,
    update_issue,
    update_issue_labels,
)
from gitlab_issues.endpoints import resolve_rest_endpoint
from gitlab_issues.filters import apply_filters

__all__ = [
    "GitLabAdapter",
    "GitLabError",
    "GraphQLError",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    "apply_filters",
    "create_issue",
    "fetch_project_issues",
    "fetch_project_labels",
    "resolve_rest_endpoint",
    "update_issue",
    "update_issue_labels",
]
