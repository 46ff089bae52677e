"""Server-rendered dashboard page."""

from html import escape

from gitlab_issues.dashboard import DashboardState
from gitlab_issues.filters import SORTS, STATES
from gitlab_issues.models import Issue

STYLE = """
body { font-family: system-ui, sans-serif; margin: 2rem; background: #0f172a; color: #e2e8f0; }
a { color: #38bdf8; }
.cards { display: flex; gap: 1rem; margin: 1rem 0; }
.card { background: #1e293b; padding: .75rem 1rem; border-radius: 8px; }
.error { background: #7f1d1d; padding: .75rem; border-radius: 8px; }
table { border-collapse: collapse; width: 100%; }
th, td { text-align: left; padding: .4rem .6rem; border-bottom: 1px solid #334155; }
.label { display: inline-block; padding: 0 .4rem; margin-right: .25rem; border-radius: 4px; font-size: .8rem; }
"""


def _options(values: tuple[str, ...], selected: str) -> str:
    return "".join(
        f'<option value="{v}"{" selected" if v == selected else ""}>{v}</option>' for v in values
    )


def _issue_row(issue: Issue) -> str:
    labels = "".join(
        f'<span class="label" style="background:{escape(label.color or "#475569")}">{escape(label.title)}</span>'
        for label in issue.labels
    )
    assignees = ", ".join(escape(a.username) for a in issue.assignees) or "-"
    estimate = f"{issue.time_estimate / 3600:.1f}h" if issue.time_estimate else "-"
    return (
        "<tr>"
        f'<td><a href="{escape(issue.web_url)}">#{escape(issue.iid)}</a></td>'
        f"<td>{escape(issue.title)}</td>"
        f"<td>{escape(issue.state)}</td>"
        f"<td>{labels}</td>"
        f"<td>{assignees}</td>"
        f"<td>{escape(issue.health_status or '-')}</td>"
        f"<td>{estimate}</td>"
        f"<td>{escape(issue.updated_at[:10])}</td>"
        "</tr>"
    )


def render_dashboard(dashboard: DashboardState | None, notice: str | None = None) -> str:
    """Render the issues page for the current dashboard state."""
    parts = ["<!doctype html><html><head><meta charset='utf-8'>", "<title>GitLab Issue Manager</title>"]
    parts.append(f"<style>{STYLE}</style></head><body><h1>GitLab Issue Manager</h1>")

    if notice:
        parts.append(f'<p class="error">{escape(notice)}</p>')
    if dashboard is None:
        parts.append("</body></html>")
        return "".join(parts)
    if dashboard.error:
        parts.append(f'<p class="error">{escape(dashboard.error)}</p>')

    if dashboard.result is not None:
        project = dashboard.result.project
        parts.append(f'<p>Project: <a href="{escape(project.web_url)}">{escape(project.name)}</a></p>')
        cards = "".join(
            f'<div class="card"><strong>{value}</strong> {escape(name)}</div>'
            for name, value in dashboard.summary().items()
        )
        parts.append(f'<div class="cards">{cards}</div>')

    parts.append(
        '<form method="get" action="/">'
        f'<input name="q" placeholder="Filter" value="{escape(dashboard.text)}"> '
        f'<select name="state">{_options(STATES, dashboard.state)}</select> '
        f'<select name="sort">{_options(SORTS, dashboard.sort)}</select> '
        '<button type="submit">Apply</button> '
        '<button type="submit" name="refresh" value="1">Refresh</button>'
        "</form>"
    )

    issues = dashboard.visible_issues()
    if dashboard.result is not None and not issues:
        parts.append("<p>No issues matched the provided filters.</p>")
    elif issues:
        parts.append(
            "<table><thead><tr><th>IID</th><th>Title</th><th>State</th><th>Labels</th>"
            "<th>Assignees</th><th>Health</th><th>Estimate</th><th>Updated</th></tr></thead><tbody>"
        )
        parts.extend(_issue_row(issue) for issue in issues)
        parts.append("</tbody></table>")
    parts.append("</body></html>")
    return "".join(parts)
