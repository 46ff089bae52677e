"""`gitlab-issues update`: update one issue with the same fields as the dashboard."""

import argparse
import json
from pathlib import Path
from typing import Any, Dict

from pydantic.alias_generators import to_snake

from gitlab_issues.adapters import ValidationError
from gitlab_issues.cli.common import (
    add_shared_arguments,
    build_adapter,
    normalize_state_event,
    parse_labels,
    read_json_file,
)
from gitlab_issues.config import AppConfig
from gitlab_issues.models import UpdateIssueInput


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gitlab-issues update",
        description="Update a specific issue",
    )
    add_shared_arguments(parser)
    parser.add_argument("--iid", "--issue", dest="iid", help="Issue IID to update (required)")
    parser.add_argument("--title")
    parser.add_argument("--description")
    parser.add_argument("--labels", help='Comma-separated labels, e.g. "foo,bar"')
    parser.add_argument("--health", "--health-status", dest="health", help="on_track | needs_attention | at_risk")
    parser.add_argument("--estimate", help="Time estimate in hours")
    parser.add_argument("--state", help="close | reopen")
    parser.add_argument(
        "--data-file",
        dest="data_file",
        type=Path,
        help="JSON payload (title, description, labels, healthStatus, estimateHours or timeEstimateSeconds)",
    )
    parser.add_argument("--json", action="store_true", help="Output JSON response")
    return parser.parse_args(argv)


def build_update_fields(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge --data-file with flags (flags win); only given fields are kept."""
    fields: Dict[str, Any] = {}
    if args.data_file is not None:
        for key, value in read_json_file(args.data_file).items():
            name = to_snake(key)
            fields[name] = parse_labels(value) if name == "labels" else value

    if args.title is not None:
        fields["title"] = args.title
    if args.description is not None:
        fields["description"] = args.description
    if args.labels is not None:
        fields["labels"] = parse_labels(args.labels)
    if args.health is not None:
        fields["health_status"] = args.health
    if args.estimate is not None:
        fields["estimate_hours"] = args.estimate
    if args.state is not None:
        fields["state_event"] = normalize_state_event(args.state)
    return fields


def run_update(args: argparse.Namespace, config: AppConfig) -> int:
    if not args.iid:
        raise ValidationError("--iid (issue internal ID) is required for update.")
    adapter, project_path = build_adapter(args, config)
    fields = build_update_fields(args)
    fields.pop("issue_iid", None)
    data = UpdateIssueInput.model_validate({"issue_iid": args.iid, **fields})
    with adapter:
        issue = adapter.update_issue(project_path, data)

    if args.json:
        print(json.dumps(issue.to_json_dict(), indent=2))
    else:
        print(f"Issue #{issue.iid or args.iid} updated successfully (state: {issue.state}).")
    return 0
