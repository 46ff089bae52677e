"""`gitlab-create-issue`: create a GitLab issue without running the dashboard.

Usage:
    gitlab-create-issue --title "My bug" --description "Details" --labels "bug,ui" --health on_track --estimate 2

Environment (preferred) or flags:
    GITLAB_PROJECT_PATH / --project   (group/subgroup/project)
    GITLAB_TOKEN        / --token     (PAT with api scope)
    GITLAB_API_URL      / --api-url   (GraphQL endpoint; REST is derived from it)
"""

import argparse
import sys
from pathlib import Path

from gitlab_issues.adapters import ValidationError
from gitlab_issues.cli.common import add_shared_arguments, build_adapter, parse_labels
from gitlab_issues.config import AppConfig
from gitlab_issues.models import CreateIssueInput


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gitlab-create-issue",
        description="Create a GitLab issue",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    add_shared_arguments(parser)
    parser.add_argument("--title", help="Issue title (required)")
    parser.add_argument("--description", help="Issue description")
    parser.add_argument("--labels", help='Comma-separated labels, e.g. "bug,ui"')
    parser.add_argument("--health", help="on_track | needs_attention | at_risk")
    parser.add_argument("--estimate", help="Time estimate in hours")
    return parser.parse_args(argv)


def run_create(args: argparse.Namespace, config: AppConfig) -> int:
    if not args.title:
        raise ValidationError("Missing required --title.")
    adapter, project_path = build_adapter(args, config)
    data = CreateIssueInput(
        title=args.title,
        description=args.description,
        labels=parse_labels(args.labels),
        health_status=args.health,
        estimate_hours=args.estimate,
    )
    with adapter:
        issue = adapter.create_issue(project_path, data)
    print(f"Created issue #{issue.iid}: {issue.title}\nURL: {issue.web_url}\nState: {issue.state}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for gitlab-create-issue."""
    from gitlab_issues.main import load_app_config, run_command

    args = parse_args(argv)
    config = load_app_config(args.config)
    return run_command(run_create, args, config)


if __name__ == "__main__":
    sys.exit(main())
