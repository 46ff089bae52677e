"""Inputs for issue creation and updates.

Values are validated by the adapter (not by pydantic) so that bad values
surface as gitlab_issues ValidationError before any request is sent.
"""

from typing import Any, List

from pydantic import model_validator

from gitlab_issues.models.base import CamelModel

SECONDS_KEYS = ("timeEstimateSeconds", "time_estimate_seconds")
HOURS_KEYS = ("estimateHours", "estimate_hours")


def _estimate_from_seconds(data: Any) -> Any:
    """Map timeEstimateSeconds to estimate_hours; an explicit hours value wins."""
    if not isinstance(data, dict) or not any(key in data for key in SECONDS_KEYS):
        return data
    data = dict(data)
    seconds = None
    for key in SECONDS_KEYS:
        if key in data:
            seconds = data.pop(key)
    if any(key in data for key in HOURS_KEYS):
        return data
    if seconds is None or isinstance(seconds, bool):
        data["estimate_hours"] = seconds
        return data
    try:
        data["estimate_hours"] = float(seconds) / 3600
    except (TypeError, ValueError):
        # Left for the adapter to reject
        data["estimate_hours"] = seconds
    return data


class CreateIssueInput(CamelModel):
    """New issue. estimate_hours is converted to whole seconds on the wire."""

    title: str = ""
    description: str | None = None
    labels: List[str] | None = None
    health_status: str | None = None
    estimate_hours: Any = None

    @model_validator(mode="before")
    @classmethod
    def estimate_from_seconds(cls, data: Any) -> Any:
        return _estimate_from_seconds(data)


class UpdateIssueLabelsInput(CamelModel):
    """Replace the full label set of one issue."""

    issue_iid: str
    labels: List[str]


class UpdateIssueInput(CamelModel):
    """Partial issue update.

    Only fields explicitly set (model_fields_set) are sent; leaving a field
    out keeps its value, passing None or an empty value clears it.
    """

    issue_iid: str
    title: str | None = None
    description: str | None = None
    labels: List[str] | None = None
    state_event: str | None = None
    health_status: str | None = None
    estimate_hours: Any = None

    @model_validator(mode="before")
    @classmethod
    def estimate_from_seconds(cls, data: Any) -> Any:
        return _estimate_from_seconds(data)

    def updated_fields(self) -> set[str]:
        """Names of explicitly set fields other than issue_iid."""
        return set(self.model_fields_set) - {"issue_iid"}
