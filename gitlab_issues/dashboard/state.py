"""Dashboard view-state: the held fetch result, filters and last error.

The result is replaced wholesale on load/refresh; label and issue updates
splice the single affected issue back in by id.
"""

import logging
from typing import Dict, List

import requests

from gitlab_issues.adapters.base import GitLabError, IssueTrackerAdapter
from gitlab_issues.filters import apply_filters, normalize_sort, normalize_state
from gitlab_issues.models import Issue, IssueLabel, ProjectIssuesResult

LOG = logging.getLogger("gitlab_issues.dashboard.state")


class DashboardState:
    """Issues of one project as currently shown on the dashboard."""

    def __init__(self, adapter: IssueTrackerAdapter, project_path: str, page_size: int | None = None) -> None:
        self.adapter = adapter
        self.project_path = project_path
        self.page_size = page_size
        self.result: ProjectIssuesResult | None = None
        self.error: str | None = None
        self.text = ""
        self.state = "all"
        self.sort = "updated_desc"

    @property
    def loaded(self) -> bool:
        return self.result is not None

    def load(self) -> ProjectIssuesResult:
        """Fetch all issues and replace the held result.

        On failure the message is kept in `error` (the previous result stays)
        and the error is re-raised.
        """
        self.error = None
        try:
            result = self.adapter.fetch_project_issues(self.project_path, self.page_size)
        except (GitLabError, requests.RequestException) as e:
            self.error = str(e)
            LOG.warning("Dashboard fetch failed for %s: %s", self.project_path, e)
            raise
        self.result = result
        return result

    def refresh(self) -> ProjectIssuesResult:
        return self.load()

    def set_filters(self, text: str | None = None, state: str | None = None, sort: str | None = None) -> None:
        self.text = text or ""
        self.state = normalize_state(state)
        self.sort = normalize_sort(sort)

    def visible_issues(self) -> List[Issue]:
        if self.result is None:
            return []
        return apply_filters(self.result.issues, text=self.text, state=self.state, sort=self.sort)

    def apply_labels(self, issue_id: str, labels: List[IssueLabel]) -> bool:
        """Replace the labels of the held issue with this id."""
        if self.result is None:
            return False
        for i, candidate in enumerate(self.result.issues):
            if candidate.id == issue_id:
                self.result.issues[i] = candidate.model_copy(update={"labels": list(labels)})
                return True
        return False

    def apply_issue(self, issue: Issue) -> bool:
        """Replace the held issue that has the same id."""
        if self.result is None:
            return False
        for i, candidate in enumerate(self.result.issues):
            if candidate.id == issue.id:
                self.result.issues[i] = issue
                return True
        return False

    def add_issue(self, issue: Issue) -> None:
        """Put a newly created issue first (most recently updated)."""
        if self.result is None:
            return
        if not self.apply_issue(issue):
            self.result.issues.insert(0, issue)

    def find_by_iid(self, iid: str) -> Issue | None:
        if self.result is None:
            return None
        for issue in self.result.issues:
            if issue.iid == str(iid):
                return issue
        return None

    def summary(self) -> Dict[str, int]:
        """Counts shown on the dashboard cards."""
        if self.result is None:
            return {}
        issues = self.result.issues
        assignees = {a.username for issue in issues for a in issue.assignees}
        return {
            "issues": len(issues),
            "opened": sum(1 for issue in issues if issue.state == "opened"),
            "closed": sum(1 for issue in issues if issue.state == "closed"),
            "labels": len(self.result.labels),
            "assignees": len(assignees),
        }
