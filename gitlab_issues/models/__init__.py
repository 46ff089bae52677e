"""Data models for GitLab issues, labels and projects (Pydantic)."""

from gitlab_issues.models.credentials import Credentials
from gitlab_issues.models.inputs import CreateIssueInput, UpdateIssueInput, UpdateIssueLabelsInput
from gitlab_issues.models.issue import HEALTH_STATUSES, HealthStatus, Issue, IssueLabel, IssueUser
from gitlab_issues.models.project import ProjectIssuesResult, ProjectRef

__all__ = [
    "Credentials",
    "CreateIssueInput",
    "HEALTH_STATUSES",
    "HealthStatus",
    "Issue",
    "IssueLabel",
    "IssueUser",
    "ProjectIssuesResult",
    "ProjectRef",
    "UpdateIssueInput",
    "UpdateIssueLabelsInput",
]
