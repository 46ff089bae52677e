"""Tests for the local filter/sort engine."""

import pytest

from gitlab_issues.filters import apply_filters, normalize_sort, normalize_state


@pytest.fixture
def issues(make_issue):
    return [
        make_issue(1, title="Fix login", state="opened", updated_at="2024-01-03T00:00:00Z", created_at="2023-12-01T00:00:00Z"),
        make_issue(
            2,
            title="Add dark mode",
            state="closed",
            description="Theme toggle",
            updated_at="2024-01-05T00:00:00Z",
            created_at="2023-11-01T00:00:00Z",
        ),
        make_issue(3, title="Crash on save", state="opened", labels=["Frontend"], updated_at="2024-01-01T00:00:00Z", created_at="2024-01-01T00:00:00Z"),
    ]


class TestNormalize:
    def test_state_tokens(self) -> None:
        assert normalize_state("opened") == "opened"
        assert normalize_state("CLOSED") == "closed"
        assert normalize_state("open") == "opened"
        assert normalize_state(None) == "all"
        assert normalize_state("clsoed") == "all"

    def test_sort_tokens(self) -> None:
        assert normalize_sort("title_asc") == "title_asc"
        assert normalize_sort(None) == "updated_desc"
        assert normalize_sort("newest") == "updated_desc"


class TestApplyFilters:
    def test_all_and_empty_text_keeps_every_issue(self, issues) -> None:
        result = apply_filters(issues, text="", state="all")
        assert sorted(i.iid for i in result) == ["1", "2", "3"]
        assert all(any(r is i for i in issues) for r in result)

    def test_default_sort_is_updated_desc(self, issues) -> None:
        assert [i.iid for i in apply_filters(issues)] == ["2", "1", "3"]

    def test_text_matches_label_case_insensitively(self, issues) -> None:
        assert [i.iid for i in apply_filters(issues, text="frontend")] == ["3"]

    def test_text_matches_description_and_state(self, issues) -> None:
        assert [i.iid for i in apply_filters(issues, text="THEME")] == ["2"]
        assert [i.iid for i in apply_filters(issues, text="closed")] == ["2"]

    def test_whitespace_text_matches_everything(self, issues) -> None:
        assert len(apply_filters(issues, text="   ")) == 3

    def test_state_filter(self, issues) -> None:
        assert sorted(i.iid for i in apply_filters(issues, state="opened")) == ["1", "3"]
        assert [i.iid for i in apply_filters(issues, state="closed")] == ["2"]

    def test_unknown_state_is_lenient(self, issues) -> None:
        assert len(apply_filters(issues, state="bogus")) == 3

    @pytest.mark.parametrize(
        "sort,expected",
        [
            ("updated_asc", ["3", "1", "2"]),
            ("created_desc", ["3", "1", "2"]),
            ("created_asc", ["2", "1", "3"]),
            ("unknown", ["2", "1", "3"]),
        ],
    )
    def test_timestamp_sorts(self, issues, sort: str, expected: list[str]) -> None:
        assert [i.iid for i in apply_filters(issues, sort=sort)] == expected

    def test_title_sort_is_idempotent(self, issues) -> None:
        once = apply_filters(issues, sort="title_asc")
        twice = apply_filters(once, sort="title_asc")
        assert [i.iid for i in once] == ["2", "3", "1"]
        assert [i.iid for i in twice] == [i.iid for i in once]

    def test_filter_then_sort(self, issues) -> None:
        assert [i.iid for i in apply_filters(issues, state="opened", sort="updated_asc")] == ["3", "1"]

    def test_input_list_is_not_modified(self, issues) -> None:
        before = [i.iid for i in issues]
        apply_filters(issues, sort="title_asc")
        assert [i.iid for i in issues] == before

    def test_timestamps_compare_as_instants(self, make_issue) -> None:
        """Offsets are honored: 10:00+02:00 is earlier than 09:00Z."""
        a = make_issue(1, updated_at="2024-01-01T10:00:00+02:00")
        b = make_issue(2, updated_at="2024-01-01T09:00:00Z")
        assert [i.iid for i in apply_filters([a, b])] == ["2", "1"]

    def test_title_sort_ignores_case(self, make_issue) -> None:
        issues = [make_issue(1, title="beta"), make_issue(2, title="Zeta"), make_issue(3, title="alpha")]
        assert [i.title for i in apply_filters(issues, sort="title_asc")] == ["alpha", "beta", "Zeta"]
