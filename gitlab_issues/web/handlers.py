"""Dispatch JSON actions posted to /api/gitlab.

Body: {action, projectPath, token, apiUrl?, restUrl?, data?}. Returns a
(status, body) pair; errors come back as {"error": message}.
"""

import logging
from typing import Any, Dict, Tuple

import requests
from pydantic import ValidationError as SchemaError

from gitlab_issues.adapters import GitLabAdapter, GitLabError, ValidationError
from gitlab_issues.dashboard import DashboardState
from gitlab_issues.models import CreateIssueInput, Credentials, UpdateIssueInput, UpdateIssueLabelsInput

LOG = logging.getLogger("gitlab_issues.web.handlers")

ACTIONS = ("listIssues", "fetchLabels", "createIssue", "updateLabels", "updateIssue")


def _error(status: int, message: str) -> Tuple[int, Dict[str, Any]]:
    return status, {"error": message}


def _run_action(
    adapter: GitLabAdapter,
    action: str,
    project_path: str,
    data: Dict[str, Any],
    dashboard: DashboardState | None,
) -> Tuple[int, Dict[str, Any]]:
    if action == "listIssues":
        result = adapter.fetch_project_issues(project_path)
        if dashboard is not None:
            dashboard.result = result
        return 200, result.to_json_dict()

    if action == "fetchLabels":
        labels = adapter.fetch_project_labels(project_path)
        return 200, {"labels": [label.to_json_dict() for label in labels]}

    if action == "createIssue":
        if not data.get("title"):
            return _error(400, "Field 'data.title' is required for createIssue.")
        issue = adapter.create_issue(project_path, CreateIssueInput.model_validate(data))
        if dashboard is not None:
            dashboard.add_issue(issue)
        return 200, issue.to_json_dict()

    if action == "updateLabels":
        if not data.get("issueIid"):
            return _error(400, "Field 'data.issueIid' is required for updateLabels.")
        label_input = UpdateIssueLabelsInput.model_validate(data)
        labels = adapter.update_issue_labels(project_path, label_input)
        if dashboard is not None:
            held = dashboard.find_by_iid(label_input.issue_iid)
            if held is not None:
                dashboard.apply_labels(held.id, labels)
        return 200, {"labels": [label.to_json_dict() for label in labels]}

    if action == "updateIssue":
        if not data.get("issueIid"):
            return _error(400, "Field 'data.issueIid' is required for updateIssue.")
        issue = adapter.update_issue(project_path, UpdateIssueInput.model_validate(data))
        if dashboard is not None:
            dashboard.apply_issue(issue)
        return 200, issue.to_json_dict()

    return _error(400, "Unsupported action.")


def handle_api_request(
    payload: Any,
    dashboard: DashboardState | None = None,
    timeout: int = 30,
) -> Tuple[int, Dict[str, Any]]:
    """Validate the envelope, run the action, map errors to status codes.

    Results for the dashboard's own project are also applied to its state.
    """
    if not isinstance(payload, dict):
        return _error(400, "Invalid JSON payload.")
    project_path = payload.get("projectPath")
    if not project_path:
        return _error(400, "Field 'projectPath' is required.")
    token = payload.get("token")
    if not token:
        return _error(400, "Field 'token' is required.")

    credentials = Credentials(
        token=token,
        api_url=payload.get("apiUrl") or None,
        rest_url=payload.get("restUrl") or None,
    )
    action = payload.get("action")
    data = payload.get("data") or {}
    if not isinstance(data, dict):
        return _error(400, "Field 'data' must be an object.")
    target = dashboard if dashboard is not None and dashboard.project_path == project_path else None

    try:
        with GitLabAdapter.from_credentials(credentials, timeout=timeout) as adapter:
            return _run_action(adapter, str(action), project_path, data, target)
    except (ValidationError, SchemaError) as e:
        return _error(400, str(e))
    except (GitLabError, requests.RequestException) as e:
        LOG.error("[gitlab-issue-manager] %s", e)
        return _error(502, str(e))
