"""Environment token resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass

from gram.auth.base import TokenResolver
from gram.contracts.exceptions import AuthenticationError

TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass(frozen=True)
class EnvTokenResolver(TokenResolver):
    variable: str = TOKEN_ENV_VAR

    async def resolve(self) -> str:
        token = (os.getenv(self.variable) or "").strip()
        if not token:
            raise AuthenticationError(f"{self.variable} is not set or empty")
        return token
