"""Local text/state filter and sort over fetched issues.

Shared by the dashboard, the list command and its JSON output so that all
three show the same issues in the same order.
"""

import locale
from datetime import datetime
from typing import Iterable, List

from gitlab_issues.models import Issue

STATES = ("all", "opened", "closed")
SORTS = ("updated_desc", "updated_asc", "created_desc", "created_asc", "title_asc")
DEFAULT_STATE = "all"
DEFAULT_SORT = "updated_desc"


def normalize_state(state: str | None) -> str:
    """Map a state token to all|opened|closed; unknown tokens mean all."""
    if not state:
        return DEFAULT_STATE
    token = str(state).strip().lower()
    if token == "open":
        return "opened"
    return token if token in STATES else DEFAULT_STATE


def normalize_sort(sort: str | None) -> str:
    """Return sort if known, else updated_desc."""
    if not sort or str(sort) not in SORTS:
        return DEFAULT_SORT
    return str(sort)


def _timestamp(value: str) -> float:
    """ISO 8601 string to epoch seconds; unparseable values sort as 0."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except (AttributeError, ValueError):
        return 0.0


def _title_key(issue: Issue) -> tuple[str, str]:
    """Case-insensitive collation first; case only breaks ties."""
    return locale.strxfrm(issue.title.casefold()), locale.strxfrm(issue.title)


def _haystack(issue: Issue) -> str:
    parts = [issue.title, issue.description or "", issue.state]
    parts.extend(label.title or "" for label in issue.labels)
    return " ".join(parts).lower()


def apply_filters(
    issues: Iterable[Issue],
    text: str | None = None,
    state: str | None = None,
    sort: str | None = None,
) -> List[Issue]:
    """Filter by text and state, then sort. Returns a new list."""
    needle = (text or "").strip().lower()
    state_filter = normalize_state(state)
    sort_mode = normalize_sort(sort)

    filtered = [
        issue
        for issue in issues
        if (state_filter == "all" or issue.state == state_filter) and (not needle or needle in _haystack(issue))
    ]

    if sort_mode == "title_asc":
        filtered.sort(key=_title_key)
    elif sort_mode == "updated_asc":
        filtered.sort(key=lambda issue: _timestamp(issue.updated_at))
    elif sort_mode == "created_desc":
        filtered.sort(key=lambda issue: _timestamp(issue.created_at), reverse=True)
    elif sort_mode == "created_asc":
        filtered.sort(key=lambda issue: _timestamp(issue.created_at))
    else:
        filtered.sort(key=lambda issue: _timestamp(issue.updated_at), reverse=True)
    return filtered
