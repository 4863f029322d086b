"""Directory service (Microsoft Graph) API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from tenantcli.adapters.http_resilience import ResilientClient
from tenantcli.domain.errors import MalformedResponseError, NotFoundError, ProtocolError

from .odata import eq_filter
from .schema import CollectionPage, DirectoryObject, GraphErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenantcli.config.directory import DirectoryConfig
    from tenantcli.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

ODATA_JSON_ACCEPT = "application/json;odata.metadata=none"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = GraphErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        payload = None
    if payload is not None and payload.error.message:
        return payload.error.message
    request = response.request
    return f"{request.method} {request.url} failed with status {response.status_code}"


class DirectoryClient:
    """Low-level HTTP client for directory collections."""

    def __init__(
        self,
        *,
        config: DirectoryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def collection_url(self, collection: str) -> str:
        return f"{self._config.api_root}/{collection.strip('/')}"

    async def get_entity[M: DirectoryObject](
        self,
        collection: str,
        entity_id: str,
        *,
        model: type[M],
    ) -> M:
        url = f"{self.collection_url(collection)}/{entity_id}"
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client=client, url=url)

        if httpx.codes.is_client_error(response.status_code):
            raise NotFoundError(_error_message(response), key=entity_id)
        _raise_for_status(response)
        return _validate(model, _json(response))

    async def get_all_items[M: DirectoryObject](
        self,
        collection: str,
        *,
        model: type[M],
        filter: str | None = None,  # noqa: A002
    ) -> list[M]:
        """Fetch every page of ``collection``, following ``@odata.nextLink``."""

        url: str | None = self.collection_url(collection)
        params = {"$filter": filter} if filter is not None else None
        items: list[M] = []
        pages = 0

        async with self._client_factory(self._resilience) as client:
            while url is not None:
                response = await self._perform_request(client=client, url=url, params=params)
                _raise_for_status(response)
                page = _validate(CollectionPage, _json(response))
                items.extend(_validate(model, item) for item in page.value)
                pages += 1
                url = page.next_link
                params = None

        log.debug("Fetched %d item(s) from %s in %d page(s)", len(items), collection, pages)
        return items

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        log.debug("GET %s", url)
        try:
            return await client.get(url, params=params, headers={"accept": ODATA_JSON_ACCEPT})
        except httpx.HTTPError as exc:
            raise ProtocolError(f"GET {url} failed: {exc}") from exc


class DirectoryCollection[M: DirectoryObject]:
    """``EntityLookup`` over one directory collection."""

    def __init__(self, client: DirectoryClient, collection: str, model: type[M]) -> None:
        self._client = client
        self._collection = collection
        self._model = model

    async def fetch_by_id(self, entity_id: str) -> M:
        return await self._client.get_entity(self._collection, entity_id, model=self._model)

    async def find_by_display_name(self, display_name: str) -> list[M]:
        return await self._client.get_all_items(
            self._collection,
            model=self._model,
            filter=eq_filter("displayName", display_name),
        )


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise ProtocolError(_error_message(response), status_code=response.status_code)


def _json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Unexpected non-JSON response from {response.url}") from exc


def _validate[M: BaseModel](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected {model.__name__} payload: {exc}") from exc
