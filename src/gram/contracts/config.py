"""Configuration contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

AUTH_MODES = frozenset({"env", "token", "gh-cli"})

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class GramConfig(BaseModel):
    provider: str = "github"
    auth: str = "env"
    token: str | None = None
    api_url: str = DEFAULT_GITHUB_API_URL
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=2, ge=0, le=10)
    ignore_extras: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_token(self) -> GramConfig:
        if self.auth not in AUTH_MODES:
            raise ValueError("auth must be one of: env, token, gh-cli")
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        return self
