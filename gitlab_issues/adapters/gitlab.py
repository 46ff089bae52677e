"""GitLab API adapter: GraphQL issue listing, REST issue mutations."""

import logging
import math
from typing import Any, Dict, List
from urllib.parse import quote

import requests

from gitlab_issues.adapters.base import (
    GraphQLError,
    IssueTrackerAdapter,
    NotFoundError,
    TransportError,
    ValidationError,
)
from gitlab_issues.endpoints import DEFAULT_ISSUE_PAGE_SIZE, resolve_graphql_endpoint, resolve_rest_endpoint
from gitlab_issues.models import (
    HEALTH_STATUSES,
    CreateIssueInput,
    Credentials,
    Issue,
    IssueLabel,
    IssueUser,
    ProjectIssuesResult,
    ProjectRef,
    UpdateIssueInput,
    UpdateIssueLabelsInput,
)

LOG = logging.getLogger("gitlab_issues.adapters.gitlab")

ISSUE_LIST_QUERY = """
query ProjectIssues($fullPath: ID!, $first: Int!, $after: String) {
  project(fullPath: $fullPath) {
    id
    name
    webUrl
    labels(first: 100) {
      nodes {
        title
        color
        description
      }
    }
    issues(first: $first, after: $after, sort: UPDATED_DESC) {
      nodes {
        id
        iid
        title
        description
        state
        webUrl
        healthStatus
        timeEstimate
        createdAt
        updatedAt
        author {
          id
          name
          username
        }
        assignees(first: 10) {
          nodes {
            id
            name
            username
          }
        }
        labels(first: 20) {
          nodes {
            title
            color
            description
          }
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

STATE_EVENTS = ("close", "reopen")

# GraphQL HealthStatus enum values -> REST tokens
_GRAPHQL_HEALTH = {
    "onTrack": "on_track",
    "needsAttention": "needs_attention",
    "atRisk": "at_risk",
}


def _global_id(kind: str, value: Any) -> str:
    """REST numeric ids to the GraphQL gid form, so both paths share ids."""
    s = str(value)
    if s.startswith("gid://"):
        return s
    return f"gid://gitlab/{kind}/{s}"


def _health_from_api(value: Any) -> str | None:
    if not value:
        return None
    token = _GRAPHQL_HEALTH.get(value, str(value).lower())
    return token if token in HEALTH_STATUSES else None


def _user_from_api(data: Any) -> IssueUser | None:
    if not isinstance(data, dict) or data.get("id") is None:
        return None
    return IssueUser(
        id=_global_id("User", data["id"]),
        name=data.get("name") or "",
        username=data.get("username") or "",
    )


def _users_from_api(items: Any) -> List[IssueUser]:
    users = [_user_from_api(d) for d in (items or [])]
    return [u for u in users if u is not None]


def _label_from_graphql(data: Dict[str, Any]) -> IssueLabel:
    return IssueLabel(
        title=data.get("title") or "",
        color=data.get("color"),
        description=data.get("description"),
    )


def _labels_from_rest(items: Any) -> List[IssueLabel]:
    """REST labels are plain names, or dicts with with_labels_details=true."""
    labels = []
    for item in items or []:
        if isinstance(item, dict):
            labels.append(
                IssueLabel(
                    title=item.get("name") or item.get("title") or "",
                    color=item.get("color"),
                    description=item.get("description"),
                )
            )
        else:
            labels.append(IssueLabel(title=str(item)))
    return labels


def _issue_from_graphql(node: Dict[str, Any]) -> Issue:
    assignees = (node.get("assignees") or {}).get("nodes")
    labels = (node.get("labels") or {}).get("nodes")
    return Issue(
        id=str(node["id"]),
        iid=str(node["iid"]),
        title=node.get("title") or "",
        description=node.get("description"),
        state=node.get("state") or "opened",
        web_url=node.get("webUrl") or "",
        created_at=node.get("createdAt") or "",
        updated_at=node.get("updatedAt") or "",
        author=_user_from_api(node.get("author")),
        assignees=_users_from_api(assignees),
        labels=[_label_from_graphql(lb) for lb in (labels or []) if isinstance(lb, dict)],
        health_status=_health_from_api(node.get("healthStatus")),
        time_estimate=node.get("timeEstimate"),
    )


def _issue_from_rest(data: Dict[str, Any]) -> Issue:
    time_stats = data.get("time_stats") or {}
    return Issue(
        id=_global_id("Issue", data["id"]),
        iid=str(data["iid"]),
        title=data.get("title") or "",
        description=data.get("description"),
        state=data.get("state") or "opened",
        web_url=data.get("web_url") or "",
        created_at=data.get("created_at") or "",
        updated_at=data.get("updated_at") or "",
        author=_user_from_api(data.get("author")),
        assignees=_users_from_api(data.get("assignees")),
        labels=_labels_from_rest(data.get("labels")),
        health_status=_health_from_api(data.get("health_status")),
        time_estimate=time_stats.get("time_estimate"),
    )


def hours_to_seconds(hours: Any) -> int:
    """Convert an estimate in (possibly fractional) hours to whole seconds."""
    if isinstance(hours, bool):
        raise ValidationError("Estimate must be a non-negative number.")
    try:
        value = float(hours)
    except (TypeError, ValueError):
        raise ValidationError("Estimate must be a non-negative number.") from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError("Estimate must be a non-negative number.")
    # Round half up
    return int(math.floor(value * 3600 + 0.5))


def _validate_health(value: Any) -> str:
    if value not in HEALTH_STATUSES:
        raise ValidationError("health must be one of on_track|needs_attention|at_risk.")
    return value


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


class GitLabAdapter(IssueTrackerAdapter):
    """GitLab implementation: GraphQL for listing, REST v4 for mutations."""

    def __init__(
        self,
        token: str,
        api_url: str | None = None,
        rest_url: str | None = None,
        timeout: int = 30,
    ) -> None:
        self._token = (token or "").strip()
        self._graphql_url = resolve_graphql_endpoint(api_url)
        self._rest_url = resolve_rest_endpoint(self._graphql_url, rest_url)
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {self._token}"
        self._session.headers["Content-Type"] = "application/json"

    @classmethod
    def from_credentials(cls, credentials: Credentials, timeout: int = 30) -> "GitLabAdapter":
        return cls(
            token=credentials.token,
            api_url=credentials.api_url,
            rest_url=credentials.rest_url,
            timeout=timeout,
        )

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self._session.close()

    def __enter__(self) -> "GitLabAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def graphql_url(self) -> str:
        return self._graphql_url

    @property
    def rest_url(self) -> str:
        return self._rest_url

    def _require_access(self, project_path: str) -> None:
        if not project_path or not project_path.strip():
            raise ValidationError("Missing GitLab project full path.")
        if not self._token:
            raise ValidationError("Missing GitLab access token.")

    def _issues_url(self, project_path: str, issue_iid: str | None = None) -> str:
        url = f"{self._rest_url}/projects/{quote(project_path, safe='')}/issues"
        if issue_iid is not None:
            url = f"{url}/{quote(str(issue_iid), safe='')}"
        return url

    def _rest(self, method: str, url: str, action: str, json: Dict[str, Any] | None = None) -> Any:
        LOG.debug("%s %s", method, url)
        resp = self._session.request(method, url, json=json, timeout=self._timeout)
        if not _is_success(resp):
            body = resp.text or ""
            message = f"Failed to {action} ({resp.status_code} {resp.reason})"
            if body:
                message = f"{message}: {body}"
            raise TransportError(
                message,
                status_code=resp.status_code,
                reason=resp.reason or "",
                body=body,
            )
        return resp.json()

    def _query_page(self, project_path: str, page_size: int, cursor: str | None) -> Dict[str, Any]:
        """Run one ProjectIssues query; return the project node."""
        payload = {
            "query": ISSUE_LIST_QUERY,
            "variables": {"fullPath": project_path, "first": page_size, "after": cursor},
        }
        resp = self._session.request("POST", self._graphql_url, json=payload, timeout=self._timeout)
        if not _is_success(resp):
            raise TransportError(
                f"GitLab GraphQL responded with {resp.status_code} {resp.reason}",
                status_code=resp.status_code,
                reason=resp.reason or "",
            )
        data = resp.json() or {}
        errors = data.get("errors") or []
        if errors:
            raise GraphQLError([str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors])
        project = (data.get("data") or {}).get("project")
        if not project:
            raise NotFoundError("Project not found or access denied.")
        return project

    def fetch_project_issues(self, project_path: str, page_size: int | None = None) -> ProjectIssuesResult:
        self._require_access(project_path)
        first = DEFAULT_ISSUE_PAGE_SIZE if page_size is None else page_size
        if first < 1:
            raise ValidationError("Page size must be a positive number.")

        issues: List[Issue] = []
        seen: set[str] = set()
        labels: List[IssueLabel] = []
        project: ProjectRef | None = None
        cursor: str | None = None
        pages = 0
        while True:
            pages += 1
            LOG.debug("Fetching issues page %d of %s (after=%s)", pages, project_path, cursor)
            node = self._query_page(project_path, first, cursor)
            project = ProjectRef(
                id=str(node.get("id") or ""),
                name=node.get("name") or project_path,
                web_url=node.get("webUrl") or "",
            )
            label_nodes = (node.get("labels") or {}).get("nodes")
            if label_nodes is not None:
                labels = [_label_from_graphql(lb) for lb in label_nodes if isinstance(lb, dict)]

            connection = node.get("issues") or {}
            for issue_node in connection.get("nodes") or []:
                issue = _issue_from_graphql(issue_node)
                if issue.id in seen:
                    LOG.debug("Skipping duplicate issue %s on page %d", issue.id, pages)
                    continue
                seen.add(issue.id)
                issues.append(issue)

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            if not cursor:
                LOG.warning("hasNextPage without endCursor for %s; stopping after page %d", project_path, pages)
                break

        LOG.info("Fetched %d issues of %s in %d page(s)", len(issues), project_path, pages)
        return ProjectIssuesResult(project=project, issues=issues, labels=labels)

    def fetch_project_labels(self, project_path: str) -> List[IssueLabel]:
        self._require_access(project_path)
        url = f"{self._rest_url}/projects/{quote(project_path, safe='')}/labels?per_page=100"
        data = self._rest("GET", url, "fetch labels")
        return _labels_from_rest(data)

    def create_issue(self, project_path: str, data: CreateIssueInput) -> Issue:
        self._require_access(project_path)
        if not (data.title or "").strip():
            raise ValidationError("Missing issue title.")
        body: Dict[str, Any] = {"title": data.title}
        if data.description is not None:
            body["description"] = data.description
        if data.labels is not None:
            body["labels"] = ",".join(data.labels)
        if data.health_status is not None:
            body["health_status"] = _validate_health(data.health_status)
        if data.estimate_hours is not None:
            body["time_estimate"] = hours_to_seconds(data.estimate_hours)

        issue = _issue_from_rest(self._rest("POST", self._issues_url(project_path), "create issue", json=body))
        LOG.info("Created issue #%s in %s", issue.iid, project_path)
        return issue

    def update_issue_labels(self, project_path: str, data: UpdateIssueLabelsInput) -> List[IssueLabel]:
        self._require_access(project_path)
        if not data.issue_iid:
            raise ValidationError("Missing issueIid.")
        url = self._issues_url(project_path, data.issue_iid)
        payload = self._rest("PUT", url, "update labels", json={"labels": ",".join(data.labels)})
        return _labels_from_rest((payload or {}).get("labels"))

    def update_issue(self, project_path: str, data: UpdateIssueInput) -> Issue:
        self._require_access(project_path)
        if not data.issue_iid:
            raise ValidationError("Missing issueIid.")
        fields = data.updated_fields()
        if not fields:
            raise ValidationError("No fields provided to update.")

        body: Dict[str, Any] = {}
        if "title" in fields:
            body["title"] = data.title
        if "description" in fields:
            body["description"] = data.description
        if "labels" in fields:
            body["labels"] = ",".join(data.labels or [])
        if "state_event" in fields:
            if data.state_event not in STATE_EVENTS:
                raise ValidationError("state must be one of close|reopen.")
            body["state_event"] = data.state_event
        if "health_status" in fields:
            body["health_status"] = None if data.health_status is None else _validate_health(data.health_status)
        if "estimate_hours" in fields:
            # GitLab ignores time_estimate on update; it is sent regardless.
            body["time_estimate"] = None if data.estimate_hours is None else hours_to_seconds(data.estimate_hours)

        url = self._issues_url(project_path, data.issue_iid)
        issue = _issue_from_rest(self._rest("PUT", url, "update issue", json=body))
        LOG.info("Updated issue #%s in %s (%s)", issue.iid, project_path, ", ".join(sorted(body)))
        return issue


def fetch_project_issues(
    project_path: str,
    credentials: Credentials,
    page_size: int = DEFAULT_ISSUE_PAGE_SIZE,
) -> ProjectIssuesResult:
    """Fetch all issues of a project, every page merged."""
    with GitLabAdapter.from_credentials(credentials) as adapter:
        return adapter.fetch_project_issues(project_path, page_size)


def fetch_project_labels(project_path: str, credentials: Credentials) -> List[IssueLabel]:
    with GitLabAdapter.from_credentials(credentials) as adapter:
        return adapter.fetch_project_labels(project_path)


def create_issue(project_path: str, credentials: Credentials, data: CreateIssueInput) -> Issue:
    with GitLabAdapter.from_credentials(credentials) as adapter:
        return adapter.create_issue(project_path, data)


def update_issue_labels(
    project_path: str,
    credentials: Credentials,
    data: UpdateIssueLabelsInput,
) -> List[IssueLabel]:
    with GitLabAdapter.from_credentials(credentials) as adapter:
        return adapter.update_issue_labels(project_path, data)


def update_issue(project_path: str, credentials: Credentials, data: UpdateIssueInput) -> Issue:
    with GitLabAdapter.from_credentials(credentials) as adapter:
        return adapter.update_issue(project_path, data)
