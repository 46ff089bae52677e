"""Dashboard view-state."""

from gitlab_issues.dashboard.state import DashboardState

__all__ = ["DashboardState"]
