"""Shared fixtures: GraphQL/REST payload builders and mocked responses."""

from typing import Any, Callable, Dict, List
from unittest.mock import Mock

import pytest

from gitlab_issues.models import Issue, IssueLabel


@pytest.fixture
def response() -> Callable[..., Mock]:
    """Build a mocked requests.Response."""

    def _make(status_code: int = 200, json_data: Any = None, text: str = "", reason: str = "OK") -> Mock:
        resp = Mock()
        resp.status_code = status_code
        resp.json.return_value = json_data
        resp.text = text
        resp.reason = reason
        return resp

    return _make


@pytest.fixture
def issue_node() -> Callable[..., Dict[str, Any]]:
    """GraphQL issue node as returned by the ProjectIssues query."""

    def _make(n: int, **overrides: Any) -> Dict[str, Any]:
        node = {
            "id": f"gid://gitlab/Issue/{1000 + n}",
            "iid": str(n),
            "title": f"Issue {n}",
            "description": None,
            "state": "opened",
            "webUrl": f"https://gitlab.com/group/project/-/issues/{n}",
            "healthStatus": None,
            "timeEstimate": 0,
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-02-01T00:00:00Z",
            "author": {"id": "gid://gitlab/User/1", "name": "Ada", "username": "ada"},
            "assignees": {"nodes": []},
            "labels": {"nodes": []},
        }
        node.update(overrides)
        return node

    return _make


@pytest.fixture
def graphql_page() -> Callable[..., Dict[str, Any]]:
    """GraphQL ProjectIssues response body for one page."""

    def _make(
        nodes: List[Dict[str, Any]],
        has_next: bool = False,
        cursor: str | None = None,
        labels: List[Dict[str, Any]] | None = None,
    ) -> Dict[str, Any]:
        return {
            "data": {
                "project": {
                    "id": "gid://gitlab/Project/7",
                    "name": "Project",
                    "webUrl": "https://gitlab.com/group/project",
                    "labels": {"nodes": labels if labels is not None else [{"title": "bug", "color": "#ff0000", "description": None}]},
                    "issues": {
                        "nodes": nodes,
                        "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                    },
                }
            }
        }

    return _make


@pytest.fixture
def rest_issue() -> Callable[..., Dict[str, Any]]:
    """REST v4 issue object."""

    def _make(**overrides: Any) -> Dict[str, Any]:
        data = {
            "id": 1042,
            "iid": 42,
            "title": "Login fails",
            "description": "Steps to reproduce",
            "state": "opened",
            "web_url": "https://gitlab.com/group/project/-/issues/42",
            "created_at": "2024-03-01T10:00:00Z",
            "updated_at": "2024-03-02T10:00:00Z",
            "author": {"id": 5, "name": "Grace", "username": "grace"},
            "assignees": [{"id": 6, "name": "Linus", "username": "linus"}],
            "labels": ["bug", "frontend"],
            "health_status": "on_track",
            "time_stats": {"time_estimate": 5400},
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Normalized Issue with sensible defaults."""

    def _make(iid: int, **overrides: Any) -> Issue:
        fields: Dict[str, Any] = {
            "id": f"gid://gitlab/Issue/{1000 + iid}",
            "iid": str(iid),
            "title": f"Issue {iid}",
            "state": "opened",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
        labels = overrides.pop("labels", [])
        fields.update(overrides)
        fields["labels"] = [IssueLabel(title=t) if isinstance(t, str) else t for t in labels]
        return Issue(**fields)

    return _make
