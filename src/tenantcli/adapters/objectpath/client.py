"""Object-path batch client for the client.svc ``ProcessQuery`` endpoint."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from tenantcli.adapters.http_resilience import ResilientClient
from tenantcli.domain.errors import MalformedResponseError, ProtocolError

from .correlation import correlate
from .digest import ContextInfoDigestProvider
from .schema import ODataErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenantcli.config.http_resilience import ResilienceConfig
    from tenantcli.config.objectpath import ObjectPathConfig
    from tenantcli.domain.ports import DigestProvider

    from .actions import BatchPayload

log = getLogger(__name__)

PROCESS_QUERY_PATH = "/_vti_bin/client.svc/ProcessQuery"


def _error_message(response: httpx.Response) -> str:
    try:
        message = ODataErrorResponse.model_validate(response.json()).message
    except (ValueError, ValidationError):
        message = None
    if message:
        return message
    request = response.request
    return f"{request.method} {request.url} failed with status {response.status_code}"


class ObjectPathClient:
    """Post batch payloads to the tenant admin endpoint and decode the reply array.

    The batch is atomic from the caller's point of view: the whole array is returned,
    or the call fails. Nothing is re-sent.
    """

    def __init__(
        self,
        *,
        config: ObjectPathConfig,
        digest_provider: DigestProvider | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._digests = digest_provider or ContextInfoDigestProvider(
            config.resilience,
            client_factory=self._client_factory,
        )

    @property
    def endpoint(self) -> str:
        return self._config.admin_url

    async def execute(self, payload: BatchPayload) -> list[object]:
        digest = await self._digests.get_digest(self.endpoint)
        url = f"{self.endpoint}{PROCESS_QUERY_PATH}"
        body = payload.serialize()
        log.debug("POST %s (%d action(s))", url, len(payload.actions))

        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.post(
                    url,
                    content=body.encode("utf-8"),
                    headers={
                        "X-RequestDigest": digest.value,
                        "Content-Type": "text/xml",
                        "accept": "application/json",
                    },
                )
        except httpx.HTTPError as exc:
            raise ProtocolError(f"POST {url} failed: {exc}") from exc

        if not response.is_success:
            raise ProtocolError(_error_message(response), status_code=response.status_code)

        try:
            decoded = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"Batch response from {url} is not valid JSON") from exc

        if not isinstance(decoded, list):
            raise MalformedResponseError(
                f"Batch response from {url} is a {type(decoded).__name__}, expected an array"
            )
        return decoded

    async def run(self, payload: BatchPayload) -> object:
        """Execute ``payload`` and return the element at its result slot."""

        response = await self.execute(payload)
        return correlate(response, payload.slots)
