"""Project reference and the fetch result container."""

from typing import List

from pydantic import Field

from gitlab_issues.models.base import CamelModel
from gitlab_issues.models.issue import Issue, IssueLabel


class ProjectRef(CamelModel):
    """GitLab project the issues were fetched from."""

    id: str
    name: str
    web_url: str = ""


class ProjectIssuesResult(CamelModel):
    """All issues of a project (every page merged) plus its label set.

    Replaced wholesale on each fetch; single issues are spliced in only
    after a label replacement or a full update.
    """

    project: ProjectRef
    issues: List[Issue] = Field(default_factory=list)
    labels: List[IssueLabel] = Field(default_factory=list)
