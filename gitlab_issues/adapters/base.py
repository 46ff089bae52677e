"""Abstract base and error taxonomy for issue tracker adapters."""

from abc import ABC, abstractmethod
from typing import List

from gitlab_issues.models import (
    CreateIssueInput,
    Issue,
    IssueLabel,
    ProjectIssuesResult,
    UpdateIssueInput,
    UpdateIssueLabelsInput,
)


class GitLabError(Exception):
    """Base for all errors raised by the GitLab client layer."""

    pass


class ValidationError(GitLabError):
    """Bad or missing input, detected before any request is sent."""

    pass


class TransportError(GitLabError):
    """Non-success HTTP response."""

    def __init__(self, message: str, status_code: int, reason: str = "", body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class GraphQLError(GitLabError):
    """GraphQL response carried an errors array."""

    def __init__(self, messages: List[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = messages


class NotFoundError(GitLabError):
    """Project lookup returned null (missing and forbidden look the same)."""

    pass


class IssueTrackerAdapter(ABC):
    """Abstract interface for a project issue tracker."""

    @abstractmethod
    def fetch_project_issues(self, project_path: str, page_size: int | None = None) -> ProjectIssuesResult:
        """Fetch project metadata, labels and all issues (every page)."""
        ...

    @abstractmethod
    def create_issue(self, project_path: str, data: CreateIssueInput) -> Issue:
        """Create an issue and return it normalized."""
        ...

    @abstractmethod
    def update_issue_labels(self, project_path: str, data: UpdateIssueLabelsInput) -> List[IssueLabel]:
        """Replace the label set of an issue; return the new labels."""
        ...

    @abstractmethod
    def update_issue(self, project_path: str, data: UpdateIssueInput) -> Issue:
        """Update explicitly set fields of an issue and return it normalized."""
        ...

    @abstractmethod
    def fetch_project_labels(self, project_path: str) -> List[IssueLabel]:
        """List all labels defined on the project."""
        ...
