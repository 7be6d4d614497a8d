# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from .core.antiforgery import TokenSource
from .core.config import WebApiConfig
from .core.http import Transport
from .data._odata import _ODataClient
from .models.query import QueryOptions

if TYPE_CHECKING:
    import pandas as pd


class WebApiClient:
    """
    Asynchronous client for the Dataverse / Power Pages Web API.

    Exposes the five record operations (create, retrieve, retrieve multiple, update,
    delete) and delegates URL shaping, header building and response interpretation to an
    internal :class:`~dataverse_pages.data._odata._ODataClient`. Each call performs one
    request/response round trip through the configured transport.

    :param config: Web API configuration; a string is treated as the API base URL.
    :type config: ~dataverse_pages.core.config.WebApiConfig or str
    :param transport: Transport strategy. Defaults to
        :class:`~dataverse_pages.core.http.RequestsTransport`; pass a
        :class:`~dataverse_pages.core.host.HostTransport` to route calls through the
        host's secure request facility.
    :type transport: ~dataverse_pages.core.http.Transport or None
    :param token_source: Anti-forgery token lookup used for POST, PATCH and DELETE.
        When ``None`` no token is sent.
    :type token_source: ~dataverse_pages.core.antiforgery.TokenSource or None

    Example:
        Basic record lifecycle::

            from dataverse_pages import WebApiClient, WebApiConfig

            config = WebApiConfig.for_portal("https://contoso.powerappsportals.com")
            async with WebApiClient(config) as client:
                contact_id = await client.create("contact", {"firstname": "Jane"})
                await client.update("contact", contact_id, {"lastname": "Doe"})
                record = await client.retrieve("contact", contact_id, {"select": ["fullname"]})
                await client.delete("contact", contact_id)
    """

    def __init__(
        self,
        config: Union[WebApiConfig, str],
        transport: Optional[Transport] = None,
        token_source: Optional[TokenSource] = None,
    ) -> None:
        if isinstance(config, str):
            config = WebApiConfig(api_url=config)
        self._config = config
        self._odata = _ODataClient(config, transport=transport, token_source=token_source)

    @property
    def config(self) -> WebApiConfig:
        return self._config

    async def __aenter__(self) -> "WebApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release transport resources. Safe to call multiple times."""
        await self._odata.close()

    async def create(
        self,
        entity_name: str,
        data: Mapping[str, Any],
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Create a record.

        :param entity_name: Logical (singular) name, e.g. ``"contact"``.
        :type entity_name: str
        :param data: Column values for the new record.
        :type data: dict
        :return: Id of the created record.
        :rtype: str

        :raises ~dataverse_pages.core.errors.ApiError: If the service rejects the request.
        :raises ~dataverse_pages.core.errors.MalformedResponseError: If the response does not
            identify the new record.
        """
        return await self._odata._create(entity_name, data, headers=headers)

    async def retrieve(
        self,
        entity_name: str,
        record_id: str,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Retrieve a single record by id.

        Only ``select`` and ``expand`` are applied from ``options``.

        :return: The record as returned by the service.
        :rtype: dict
        """
        return await self._odata._get(entity_name, record_id, options, headers=headers)

    async def retrieve_multiple(
        self,
        entity_name: str,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve records from a table.

        Applies ``select``, ``filter``, ``orderby``, ``top`` and ``expand``. Only the first page
        returned by the service is read.

        :return: The ``value`` array of the collection response.
        :rtype: list[dict]
        """
        return await self._odata._get_multiple(entity_name, options, headers=headers)

    async def retrieve_multiple_dataframe(
        self,
        entity_name: str,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "pd.DataFrame":
        """Like :meth:`retrieve_multiple`, returning a DataFrame without OData annotation columns."""
        from .utils._pandas import records_to_dataframe

        rows = await self.retrieve_multiple(entity_name, options, headers=headers)
        return records_to_dataframe(rows)

    async def update(
        self,
        entity_name: str,
        record_id: str,
        data: Mapping[str, Any],
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """Update columns of an existing record. Returns ``True`` when the service answers 204."""
        return await self._odata._update(entity_name, record_id, data, headers=headers)

    async def delete(
        self,
        entity_name: str,
        record_id: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """Delete a record. Returns ``True`` when the service answers 204."""
        return await self._odata._delete(entity_name, record_id, headers=headers)
