"""Flags and helpers shared by the terminal commands."""

import argparse
import json
from pathlib import Path
from typing import Any, List, Tuple

from gitlab_issues.adapters import GitLabAdapter, ValidationError
from gitlab_issues.config import AppConfig
from gitlab_issues.endpoints import DEFAULT_GRAPHQL_ENDPOINT, DEFAULT_REST_ENDPOINT


def add_shared_arguments(parser: argparse.ArgumentParser) -> None:
    """GitLab access flags; unset flags fall back to config/env."""
    parser.add_argument("--project", help="GitLab project path (group/sub/project)")
    parser.add_argument("--token", help="Personal access token (api scope)")
    parser.add_argument("--api-url", dest="api_url", help=f"GraphQL endpoint (default {DEFAULT_GRAPHQL_ENDPOINT})")
    parser.add_argument("--rest-url", dest="rest_url", help=f"REST endpoint (default {DEFAULT_REST_ENDPOINT})")
    parser.add_argument("--page-size", dest="page_size", help="GraphQL page size")


def parse_positive_int(value: Any, label: str) -> int | None:
    if value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a positive number.") from None
    if not parsed > 0 or parsed == float("inf"):
        raise ValidationError(f"{label} must be a positive number.")
    return int(parsed)


def parse_labels(value: Any) -> List[str] | None:
    """"a, b,,c" -> ["a", "b", "c"]; lists are trimmed the same way."""
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(v) for v in value]
    else:
        raise ValidationError("labels must be a comma-separated string or array.")
    return [item.strip() for item in items if item.strip()]


def normalize_state_event(value: Any) -> str | None:
    """Accept close/closed and open/opened/reopen/reopened."""
    if not value:
        return None
    token = str(value).strip().lower()
    if token in ("close", "closed"):
        return "close"
    if token in ("open", "opened", "reopen", "reopened"):
        return "reopen"
    raise ValidationError("state must be one of close|reopen.")


def read_json_file(path: Path) -> dict:
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must contain a JSON object.")
    return data


def build_adapter(args: argparse.Namespace, config: AppConfig) -> Tuple[GitLabAdapter, str]:
    """Adapter and project path from flags, then config/env."""
    credentials = config.credentials(token=args.token, api_url=args.api_url, rest_url=args.rest_url)
    if not credentials.token:
        raise ValidationError("Missing token. Set GITLAB_TOKEN or pass --token.")
    project_path = args.project or config.gitlab.project_path
    if not project_path:
        raise ValidationError("Missing project path. Set GITLAB_PROJECT_PATH or pass --project.")
    adapter = GitLabAdapter.from_credentials(credentials, timeout=config.gitlab.timeout)
    return adapter, project_path


def page_size_from(args: argparse.Namespace, config: AppConfig) -> int:
    return parse_positive_int(args.page_size, "--page-size") or config.gitlab.page_size
