"""Anti-forgery request digests for the object-path service."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from tenantcli.adapters.http_resilience import ResilientClient
from tenantcli.domain.errors import DigestUnavailableError
from tenantcli.domain.ports import RequestDigest

from .schema import ContextInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenantcli.config.http_resilience import ResilienceConfig
    from tenantcli.domain.ports import DigestProvider

log = getLogger(__name__)

CONTEXT_INFO_PATH = "/_api/contextinfo"
DEFAULT_EXPIRY_MARGIN = timedelta(seconds=60)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ContextInfoDigestProvider:
    """Obtain a fresh digest from ``<endpoint>/_api/contextinfo`` on every call."""

    def __init__(
        self,
        resilience: ResilienceConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        now_provider: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._resilience = resilience
        self._client_factory = client_factory or ResilientClient
        self._now = now_provider

    async def get_digest(self, endpoint: str) -> RequestDigest:
        url = f"{endpoint.rstrip('/')}{CONTEXT_INFO_PATH}"
        log.debug("POST %s", url)
        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.post(
                    url,
                    headers={"accept": "application/json;odata=nometadata"},
                )
        except httpx.HTTPError as exc:
            raise DigestUnavailableError(f"Could not retrieve request digest: {exc}") from exc

        if not response.is_success:
            raise DigestUnavailableError(
                f"Could not retrieve request digest from {url}: status {response.status_code}"
            )

        try:
            info = ContextInfo.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise DigestUnavailableError(f"Unexpected context info payload from {url}") from exc

        expires_at = self._now() + timedelta(seconds=info.form_digest_timeout_seconds)
        return RequestDigest(value=info.form_digest_value, expires_at=expires_at)


class CachedDigestProvider:
    """Reuse digests per endpoint until they are about to expire.

    Refreshes are single-flight: concurrent callers for the same endpoint wait on one
    lock and read the digest stored by whichever caller refreshed it.
    """

    def __init__(
        self,
        provider: DigestProvider,
        *,
        expiry_margin: timedelta = DEFAULT_EXPIRY_MARGIN,
        now_provider: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._provider = provider
        self._margin = expiry_margin
        self._now = now_provider
        self._digests: dict[str, RequestDigest] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _is_fresh(self, digest: RequestDigest) -> bool:
        return digest.expires_at - self._margin > self._now()

    async def get_digest(self, endpoint: str) -> RequestDigest:
        key = endpoint.rstrip("/")
        cached = self._digests.get(key)
        if cached is not None and self._is_fresh(cached):
            return cached

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            cached = self._digests.get(key)
            if cached is not None and self._is_fresh(cached):
                return cached
            log.debug("Refreshing request digest for %s", key)
            digest = await self._provider.get_digest(key)
            self._digests[key] = digest
            return digest

