"""Tests for YAML + env configuration and token resolution."""

from pathlib import Path

import pydantic
import pytest

from gitlab_issues.config import load_config
from gitlab_issues.endpoints import DEFAULT_GRAPHQL_ENDPOINT


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "GITLAB_TOKEN",
        "GITLAB_PRIVATE_TOKEN",
        "GITLAB_TOKEN_FILE",
        "GITLAB_PROJECT_PATH",
        "GITLAB_API_URL",
        "GITLAB_PAGE_SIZE",
        "WEB_PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_missing_file_uses_defaults_and_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_PROJECT_PATH", "group/from-env")
    monkeypatch.setenv("WEB_PORT", "8080")
    config = load_config(tmp_path / "absent.yaml")
    assert config.gitlab.project_path == "group/from-env"
    assert config.gitlab.api_url == DEFAULT_GRAPHQL_ENDPOINT
    assert config.gitlab.page_size == 50
    assert config.web.port == 8080
    assert config.gitlab_token_resolved is None


def test_yaml_sections_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MY_GITLAB_TOKEN", "glpat-abc")
    path = _write(
        tmp_path,
        """
gitlab:
  api_url: https://git.example.com/api/graphql
  project_path: group/sub/project
  page_size: 20
  token: ${MY_GITLAB_TOKEN}
web:
  port: 3100
logging:
  level: DEBUG
""",
    )
    config = load_config(path)
    assert config.gitlab.api_url == "https://git.example.com/api/graphql"
    assert config.gitlab.project_path == "group/sub/project"
    assert config.gitlab.page_size == 20
    assert config.web.port == 3100
    assert config.logging.level == "DEBUG"
    assert config.gitlab_token_resolved == "glpat-abc"


def test_unresolved_placeholder_falls_back_to_env_token(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path, "gitlab:\n  token: ${NOT_SET_ANYWHERE}\n")
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
    monkeypatch.setenv("GITLAB_PRIVATE_TOKEN", " private ")
    assert load_config(path).gitlab_token_resolved == "private"


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token.txt"
    secret.write_text("from-file\n")
    monkeypatch.setenv("GITLAB_TOKEN_FILE", str(secret))
    assert load_config(tmp_path / "absent.yaml").gitlab_token_resolved == "from-file"


def test_page_size_out_of_range_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "gitlab:\n  page_size: 500\n")
    with pytest.raises(pydantic.ValidationError):
        load_config(path)


def test_credentials_prefer_explicit_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_TOKEN", "env-token")
    path = _write(tmp_path, "gitlab:\n  api_url: https://git.example.com/api/graphql\n")
    config = load_config(path)

    from_config = config.credentials()
    assert from_config.token == "env-token"
    assert from_config.api_url == "https://git.example.com/api/graphql"
    assert from_config.rest_url is None

    explicit = config.credentials(token="flag-token", rest_url="https://rest.example.com/api/v4")
    assert explicit.token == "flag-token"
    assert explicit.rest_url == "https://rest.example.com/api/v4"


def test_env_wins_over_yaml_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_API_URL", "https://gitlab.example.com/api/graphql")
    monkeypatch.setenv("GITLAB_PROJECT_PATH", "mine/proj")
    monkeypatch.setenv("WEB_PORT", "8088")
    path = _write(
        tmp_path,
        """
gitlab:
  api_url: https://gitlab.com/api/graphql
  project_path: your-group/your-project
  page_size: 25
web:
  port: 3000
""",
    )
    config = load_config(path)
    assert config.credentials().api_url == "https://gitlab.example.com/api/graphql"
    assert config.gitlab.project_path == "mine/proj"
    assert config.gitlab.page_size == 25
    assert config.web.port == 8088
