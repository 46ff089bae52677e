"""Credentials passed explicitly into every GitLab operation."""

from pydantic import BaseModel


class Credentials(BaseModel):
    """GraphQL endpoint, optional REST override and bearer token."""

    token: str = ""
    api_url: str | None = None
    rest_url: str | None = None
