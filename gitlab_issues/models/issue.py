"""GitLab issue model (shape shared by GraphQL and REST results)."""

from typing import List, Literal

from pydantic import Field

from gitlab_issues.models.base import CamelModel

HealthStatus = Literal["on_track", "needs_attention", "at_risk"]
HEALTH_STATUSES: tuple[str, ...] = ("on_track", "needs_attention", "at_risk")

IssueState = Literal["opened", "closed"]


class IssueUser(CamelModel):
    """Issue author or assignee."""

    id: str
    name: str = ""
    username: str = ""


class IssueLabel(CamelModel):
    """Project label, or a denormalized copy attached to an issue."""

    title: str
    color: str | None = None
    description: str | None = None


class Issue(CamelModel):
    """Normalized GitLab issue."""

    id: str
    iid: str
    title: str
    description: str | None = None
    state: str
    web_url: str = ""
    created_at: str
    updated_at: str
    author: IssueUser | None = None
    assignees: List[IssueUser] = Field(default_factory=list)
    labels: List[IssueLabel] = Field(default_factory=list)
    health_status: HealthStatus | None = None
    time_estimate: int | None = None
