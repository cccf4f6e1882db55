"""Resolve a token from the GitHub CLI's stored login."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from gram.auth.base import TokenResolver
from gram.contracts.exceptions import AuthenticationError

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class GhCliTokenResolver(TokenResolver):
    """Runs ``gh auth token`` for *hostname* and returns its output."""

    hostname: str = "github.com"
    executable: str = "gh"
    timeout: float = 10.0

    async def resolve(self) -> str:
        argv = (self.executable, "auth", "token", "--hostname", self.hostname)
        _LOG.debug("Resolving token via %s", " ".join(argv))
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise AuthenticationError(
                f"'{self.executable}' was not found on PATH; install the GitHub CLI or use another auth mode"
            ) from exc
        except OSError as exc:
            raise AuthenticationError(f"could not run '{self.executable}': {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            process.kill()
            await process.wait()
            raise AuthenticationError(f"'{self.executable} auth token' timed out after {self.timeout:g}s") from exc

        if process.returncode != 0:
            details = stderr.decode(errors="replace").strip()
            suffix = f": {details}" if details else ""
            raise AuthenticationError(f"no GitHub CLI login for {self.hostname}{suffix}")

        token = stdout.decode(errors="replace").strip()
        if not token:
            raise AuthenticationError(f"GitHub CLI returned an empty token for {self.hostname}")
        return token
