"""GitLab Issue Manager entry point.

Three modes: list (fetch + local filters, default), update (one issue) and
serve (dashboard web server). Usage: gitlab-issues [list|update|serve] [flags].
"""

import argparse
import locale
import logging
import sys
from pathlib import Path
from typing import Callable

import requests

from gitlab_issues.adapters import GitLabError
from gitlab_issues.config import AppConfig, load_config
from gitlab_issues.logging import IssueManagerLogging

SUBCOMMANDS = ("list", "update", "serve")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI with optional subcommand (list | update | serve)."""
    argv = argv if argv is not None else sys.argv[1:]
    sub = "list"
    rest = list(argv)
    if argv and not argv[0].startswith("-"):
        if argv[0] in SUBCOMMANDS:
            sub = argv[0]
            rest = argv[1:]

    parser = argparse.ArgumentParser(
        prog="gitlab-issues",
        description="GitLab Issue Manager - list, update, or serve the dashboard",
        add_help=False,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parsed, remaining = parser.parse_known_args(rest)
    parsed.subcommand = sub
    parsed.rest = remaining
    return parsed


def load_app_config(config_path: Path) -> AppConfig:
    """Load config (config.example.yaml if config.yaml is missing) and set up logging."""
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("gitlab_issues").warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)
    IssueManagerLogging(config.logging).setup()
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logging.getLogger("gitlab_issues").debug("System locale unavailable; title sort uses code points")
    return config


def run_command(
    command: Callable[[argparse.Namespace, AppConfig], int],
    args: argparse.Namespace,
    config: AppConfig,
) -> int:
    """Run a command; GitLab, transport and input file errors print the
    message and exit 1."""
    try:
        return command(args, config)
    except (GitLabError, requests.RequestException, OSError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Entry point: dispatch to list, update or serve."""
    args = parse_args(argv)
    config = load_app_config(args.config)

    if args.check:
        print("Config OK:", config.gitlab.project_path or "(no project)", config.gitlab.api_url)
        return 0

    if args.subcommand == "update":
        from gitlab_issues.cli.update_issue import parse_args as update_parse
        from gitlab_issues.cli.update_issue import run_update

        return run_command(run_update, update_parse(args.rest), config)

    if args.subcommand == "serve":
        from gitlab_issues.web.server import run_server

        try:
            run_server(config)
        except KeyboardInterrupt:
            return 0
        except Exception as e:
            logging.getLogger("gitlab_issues.web").exception("Fatal error: %s", e)
            return 1
        return 0

    # list (default)
    from gitlab_issues.cli.list_issues import parse_args as list_parse
    from gitlab_issues.cli.list_issues import run_list

    return run_command(run_list, list_parse(args.rest), config)


if __name__ == "__main__":
    sys.exit(main())
