"""HTTP server for the dashboard page and the /api/gitlab JSON endpoint."""

import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any
from urllib.parse import parse_qs, urlparse

import requests

from gitlab_issues.adapters import GitLabAdapter, GitLabError
from gitlab_issues.config import AppConfig
from gitlab_issues.dashboard import DashboardState
from gitlab_issues.web.handlers import handle_api_request
from gitlab_issues.web.page import render_dashboard

LOG = logging.getLogger("gitlab_issues.web")

API_PATH = "/api/gitlab"


def build_dashboard(config: AppConfig) -> DashboardState | None:
    """Dashboard for the configured project, or None if no project is set."""
    project_path = config.gitlab.project_path
    if not project_path:
        return None
    adapter = GitLabAdapter.from_credentials(config.credentials(), timeout=config.gitlab.timeout)
    return DashboardState(adapter, project_path, page_size=config.gitlab.page_size)


class DashboardHandler(BaseHTTPRequestHandler):
    """Handle GET /health, GET / (dashboard) and POST /api/gitlab."""

    config: AppConfig
    dashboard: DashboardState | None = None

    def _send(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_json(self, status: int, payload: Any) -> None:
        self._send(status, json.dumps(payload).encode(), "application/json")

    def do_GET(self) -> None:
        url = urlparse(self.path)
        if url.path == "/health":
            self._send_json(200, {"status": "ok", "service": "gitlab-issue-manager"})
            return
        if url.path == "/":
            self._handle_dashboard(parse_qs(url.query))
            return
        self.send_response(404)
        self.end_headers()

    def do_POST(self) -> None:
        if urlparse(self.path).path == API_PATH:
            self._handle_api()
            return
        self.send_response(404)
        self.end_headers()

    def _handle_dashboard(self, query: dict) -> None:
        dashboard = self.dashboard
        if dashboard is None:
            html = render_dashboard(None, notice="No project configured. Set GITLAB_PROJECT_PATH or gitlab.project_path.")
            self._send(200, html.encode(), "text/html; charset=utf-8")
            return

        def first(key: str) -> str | None:
            return (query.get(key) or [None])[0]

        dashboard.set_filters(text=first("q"), state=first("state"), sort=first("sort"))
        if first("refresh") or not dashboard.loaded:
            try:
                dashboard.load()
            except (GitLabError, requests.RequestException):
                pass  # message kept in dashboard.error and rendered
        self._send(200, render_dashboard(dashboard).encode(), "text/html; charset=utf-8")

    def _handle_api(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length) if length else b""
        try:
            payload = json.loads(body.decode()) if body else None
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._send_json(400, {"error": "Invalid JSON payload."})
            return
        LOG.info("API action: %s", payload.get("action") if isinstance(payload, dict) else None)
        status, result = handle_api_request(payload, dashboard=self.dashboard, timeout=self.config.gitlab.timeout)
        self._send_json(status, result)

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def run_server(config: AppConfig, dashboard: DashboardState | None = None) -> None:
    """Run the dashboard HTTP server until interrupted."""
    host = config.web.host
    port = config.web.port
    DashboardHandler.config = config
    DashboardHandler.dashboard = dashboard if dashboard is not None else build_dashboard(config)
    server = HTTPServer((host, port), DashboardHandler)
    LOG.info("Dashboard listening on http://%s:%s", host, port)
    server.serve_forever()
