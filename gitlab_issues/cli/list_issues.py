"""`gitlab-issues list`: fetch issues, apply local filters, print table/JSON."""

import argparse
import json
from datetime import datetime
from typing import Any, Dict, List

from gitlab_issues.cli.common import add_shared_arguments, build_adapter, page_size_from, parse_positive_int
from gitlab_issues.config import AppConfig
from gitlab_issues.filters import SORTS, apply_filters
from gitlab_issues.models import Issue, ProjectIssuesResult

HEADER = "IID     State      Updated      Health          Title"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gitlab-issues list",
        description="Fetch issues and apply local filters",
    )
    add_shared_arguments(parser)
    parser.add_argument("--filter", "--search", dest="filter", help="Text filter (title/description/labels)")
    parser.add_argument("--state", help="all | opened | closed")
    parser.add_argument("--sort", help=" | ".join(SORTS))
    parser.add_argument("--limit", help="Limit printed rows")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of table")
    return parser.parse_args(argv)


def build_issues_payload(result: ProjectIssuesResult, filtered: List[Issue]) -> Dict[str, Any]:
    """JSON document for matching issues (same shape for every output)."""
    return {
        "project": result.project.to_json_dict(),
        "labels": [label.to_json_dict() for label in result.labels],
        "totalIssues": len(result.issues),
        "matchingIssues": len(filtered),
        "issues": [issue.to_json_dict() for issue in filtered],
    }


def _updated_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value[:10]


def format_issue_line(issue: Issue) -> str:
    columns = [
        f"#{issue.iid}".ljust(6),
        f"[{issue.state}]".ljust(10),
        _updated_date(issue.updated_at).ljust(12),
        (issue.health_status or "-").ljust(15),
        issue.title,
    ]
    line = "  ".join(columns)
    if issue.labels:
        line += "\n      labels: " + ", ".join(label.title for label in issue.labels)
    if issue.time_estimate:
        line += f"\n      estimate: {issue.time_estimate / 3600:.1f}h"
    return line


def format_list(result: ProjectIssuesResult, filtered: List[Issue], limit: int | None = None) -> str:
    """Summary, table rows (up to limit) and a hint about hidden rows."""
    project = result.project
    lines = [
        f"Project: {project.name} ({project.web_url or 'no URL'})",
        f"Issues fetched: {len(result.issues)}",
        f"Matching filters: {len(filtered)}",
    ]
    if not filtered:
        lines.append("No issues matched the provided filters.")
        return "\n".join(lines)

    rows = filtered[:limit] if limit else filtered
    lines.append("")
    lines.append(HEADER)
    lines.append("-" * 60)
    lines.extend(format_issue_line(issue) for issue in rows)
    if limit and len(filtered) > limit:
        lines.append("")
        lines.append(f"... {len(filtered) - limit} more issue(s) hidden. Increase --limit to see all.")
    return "\n".join(lines)


def run_list(args: argparse.Namespace, config: AppConfig) -> int:
    adapter, project_path = build_adapter(args, config)
    limit = parse_positive_int(args.limit, "--limit")
    with adapter:
        result = adapter.fetch_project_issues(project_path, page_size_from(args, config))
    filtered = apply_filters(result.issues, text=args.filter, state=args.state, sort=args.sort)
    payload = build_issues_payload(result, filtered)

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print(format_list(result, filtered, limit))
    print("\nJSON payload for matching issues:\n" + json.dumps(payload, indent=2))
    return 0
