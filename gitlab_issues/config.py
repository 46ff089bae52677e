"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitlab_issues.endpoints import DEFAULT_GRAPHQL_ENDPOINT, DEFAULT_ISSUE_PAGE_SIZE
from gitlab_issues.models import Credentials


def _read_secret(env_keys: tuple[str, ...], file_env_key: str) -> str | None:
    """Read secret from the first set env var or from file path in env (e.g.
    Docker secrets)."""
    for env_key in env_keys:
        value = _current_env.get(env_key)
        if value and value.strip():
            return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


class GitLabConfig(BaseSettings):
    """GitLab API access and default project."""

    model_config = SettingsConfigDict(env_prefix="GITLAB_", env_file=".env", extra="ignore")

    token: str | None = Field(default=None, description="Personal access token (api scope); use env or secret file")
    api_url: str = Field(default=DEFAULT_GRAPHQL_ENDPOINT, description="GraphQL endpoint")
    rest_url: str | None = Field(default=None, description="REST endpoint; derived from api_url when unset")
    project_path: str | None = Field(default=None, description="Project full path e.g. group/subgroup/project")
    page_size: int = Field(default=DEFAULT_ISSUE_PAGE_SIZE, ge=1, le=100, description="GraphQL issues page size")
    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")


class WebConfig(BaseSettings):
    """Dashboard server settings."""

    model_config = SettingsConfigDict(env_prefix="WEB_", extra="ignore")

    host: str = Field(default="127.0.0.1", description="Bind host")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    gitlab: GitLabConfig = Field(default_factory=GitLabConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def gitlab_token_resolved(self) -> str | None:
        """Resolve GitLab token from config, env or Docker secret file."""
        t = self.gitlab.token
        if t and not t.startswith("${"):
            return t.strip()
        return _read_secret(("GITLAB_TOKEN", "GITLAB_PRIVATE_TOKEN"), "GITLAB_TOKEN_FILE")

    def credentials(
        self,
        token: str | None = None,
        api_url: str | None = None,
        rest_url: str | None = None,
    ) -> Credentials:
        """Build Credentials, explicit arguments overriding config values."""
        return Credentials(
            token=token or self.gitlab_token_resolved or "",
            api_url=api_url or self.gitlab.api_url,
            rest_url=rest_url or self.gitlab.rest_url,
        )


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _env_overrides(section: Any, settings_cls: type[BaseSettings]) -> dict[str, Any]:
    """Drop YAML keys whose prefixed env var is set, so the environment wins."""
    prefix = settings_cls.model_config.get("env_prefix", "")
    return {
        key: value
        for key, value in (section or {}).items()
        if not _current_env.get(f"{prefix}{key}".upper())
    }


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITLAB_TOKEN, GITLAB_PRIVATE_TOKEN or GITLAB_TOKEN_FILE.
    A missing file yields a config built from the environment only.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    # Env overrides for nested values (e.g. GITLAB_API_URL over gitlab.api_url)
    gitlab = GitLabConfig(**_env_overrides(raw.get("gitlab"), GitLabConfig))
    web = WebConfig(**_env_overrides(raw.get("web"), WebConfig))
    logging = LoggingConfig(**_env_overrides(raw.get("logging"), LoggingConfig))

    return AppConfig(gitlab=gitlab, web=web, logging=logging)
