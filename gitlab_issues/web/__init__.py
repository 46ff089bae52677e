"""Dashboard web server and JSON action handlers."""

from gitlab_issues.web.handlers import handle_api_request
from gitlab_issues.web.server import build_dashboard, run_server

__all__ = ["build_dashboard", "handle_api_request", "run_server"]
