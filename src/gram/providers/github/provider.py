"""GitHub REST settings provider."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from gram.contracts.config import DEFAULT_GITHUB_API_URL
from gram.contracts.exceptions import (
    AuthenticationError,
    NotFoundError,
    ProviderError,
    RateLimitError,
    TransientError,
)
from gram.contracts.provider import SettingsProvider
from gram.contracts.settings import SettingsRecord
from gram.providers.github._retrying_transport import RetryingTransport, is_rate_limited, parse_retry_after
from gram.providers.github.mapping import map_repository

_LOG = logging.getLogger(__name__)

_BRANCHES_PAGE_SIZE = 100


def _user_agent() -> str:
    try:
        return f"gram/{version('gram')}"
    except PackageNotFoundError:
        return "gram"


class GitHubProvider(SettingsProvider):
    """Fetch repository settings from the GitHub REST API.

    Use as an async context manager so the HTTP client is closed::

        async with GitHubProvider(token=token) as provider:
            actual = await provider.fetch_settings("octocat", "hello-world")
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 30.0,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubProvider:
        transport = self._transport
        if self._max_retries > 0:
            transport = RetryingTransport(transport=transport, max_retries=self._max_retries)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": _user_agent(),
            },
            timeout=httpx.Timeout(self._timeout),
            transport=transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_settings(self, owner: str, repo: str) -> SettingsRecord:
        repository = await self._get_json(f"/repos/{owner}/{repo}")
        if not isinstance(repository, dict):
            raise ProviderError(f"unexpected repository payload for {owner}/{repo}")
        protected_branches = await self._protected_branches(owner, repo)

        try:
            record = map_repository(repository, protected_branches)
        except ValidationError as exc:
            raise ProviderError(f"repository settings for {owner}/{repo} could not be normalized: {exc}") from exc
        _LOG.debug("Fetched %d actual setting(s) for %s/%s", len(record.settings), owner, repo)
        return record

    async def _protected_branches(self, owner: str, repo: str) -> list[dict[str, Any]]:
        branches: list[dict[str, Any]] = []
        url: str | None = f"/repos/{owner}/{repo}/branches"
        params: dict[str, Any] | None = {"protected": "true", "per_page": _BRANCHES_PAGE_SIZE}
        while url is not None:
            response = await self._request(url, params=params)
            page = self._decode(response)
            if not isinstance(page, list):
                raise ProviderError(f"unexpected branches payload for {owner}/{repo}")
            for entry in page:
                if not isinstance(entry, dict):
                    raise ProviderError(f"unexpected branch entry for {owner}/{repo}")
                branches.append(entry)
            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            if url is not None and not self._is_same_origin(url):
                raise ProviderError(f"refusing to follow pagination link to another host: {url}")
            params = None
        return branches

    def _is_same_origin(self, url: str) -> bool:
        target = httpx.URL(url)
        if target.is_relative_url:
            return True
        base = httpx.URL(self._base_url)
        return (target.scheme, target.host, target.port) == (base.scheme, base.host, base.port)

    async def _get_json(self, url: str) -> Any:
        return self._decode(await self._request(url))

    async def _request(self, url: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        if self._client is None:
            raise ProviderError("Provider is not initialized. Use 'async with'.")
        _LOG.debug("GET %s", url)
        try:
            response = await self._client.get(url, params=params)
        except httpx.TransportError as exc:
            raise TransientError(f"request to {url} failed: {exc}") from exc
        self._raise_for_status(response)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"invalid JSON in response from {response.request.url}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        path = response.request.url.path
        if is_rate_limited(response):
            retry_after = parse_retry_after(response)
            raise RateLimitError(f"GitHub rate limit exceeded calling GET {path}", retry_after=retry_after)
        if status == 401:
            raise AuthenticationError(
                f"Encountered a http status of 401 when calling GET on url {path}. Is your token correct?"
            )
        if status == 403:
            raise AuthenticationError(f"Access denied when calling GET on url {path}. Check the token's scopes.")
        if status == 404:
            raise NotFoundError(f"Repository not found when calling GET on url {path}")
        if status >= 500:
            raise TransientError(f"GitHub returned {status} for GET {path}", status_code=status)
        raise ProviderError(f"GitHub returned {status} for GET {path}")
