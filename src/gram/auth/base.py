"""Token resolution for hosting-provider credentials."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TokenResolver(ABC):
    """Produces the bearer token a settings provider authenticates with.

    Implementations raise :class:`~gram.contracts.exceptions.AuthenticationError`
    when no usable token is available.
    """

    @abstractmethod
    async def resolve(self) -> str: ...
