"""Issue tracker adapters (base, errors and the GitLab implementation)."""

from gitlab_issues.adapters.base import (
    GitLabError,
    GraphQLError,
    IssueTrackerAdapter,
    NotFoundError,
    TransportError,
    ValidationError,
)
from gitlab_issues.adapters.gitlab import (
    GitLabAdapter,
    create_issue,
    fetch_project_issues,
    fetch_project_labels,
    hours_to_seconds,
    update_issue,
    update_issue_labels,
)

__all__ = [
    "GitLabAdapter",
    "GitLabError",
    "GraphQLError",
    "IssueTrackerAdapter",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    "create_issue",
    "fetch_project_issues",
    "fetch_project_labels",
    "hours_to_seconds",
    "update_issue",
    "update_issue_labels",
]
