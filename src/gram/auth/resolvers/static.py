"""Token supplied directly through config or ``--token``."""

from __future__ import annotations

from dataclasses import dataclass, field

from gram.auth.base import TokenResolver
from gram.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticTokenResolver(TokenResolver):
    token: str = field(repr=False)

    async def resolve(self) -> str:
        if not self.token.strip():
            raise AuthenticationError("token auth selected but the supplied token is blank")
        return self.token.strip()
