# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Request pipeline for the Web API: paths, headers, transport call and result shaping."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from ..core._error_codes import MALFORMED_MISSING_ENTITY_ID, MALFORMED_MISSING_VALUE
from ..core.antiforgery import TokenSource
from ..core.config import WebApiConfig
from ..core.errors import MalformedResponseError
from ..core.http import RequestsTransport, Transport
from ..core.responses import interpret
from ..models.query import RETRIEVE_MULTIPLE_OPTIONS, RETRIEVE_OPTIONS, QueryOptions, build_query_string

_logger = logging.getLogger(__name__)

# First parenthesized group of an entity URL, e.g. .../contacts(<id>)
_ENTITY_ID_RE = re.compile(r"\(([^)]+)\)")

_WRITE_METHODS = frozenset({"POST", "PATCH", "DELETE"})

DEFAULT_HEADERS = {
    "Content-Type": "application/json; charset=utf-8",
    "Accept": "application/json",
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}


class _ODataClient:
    """Low-level Web API client: URL shaping, header building and response interpretation."""

    def __init__(
        self,
        config: WebApiConfig,
        transport: Optional[Transport] = None,
        token_source: Optional[TokenSource] = None,
    ) -> None:
        self.config = config
        self.api = config.api_url
        self._transport = transport or RequestsTransport(timeout=config.http_timeout)
        self._token_source = token_source

    # ------------------------------ paths -------------------------------
    def _collection_url(self, entity_name: str) -> str:
        return f"{self.api}{entity_name}s"

    def _record_url(self, entity_name: str, record_id: str) -> str:
        return f"{self._collection_url(entity_name)}({record_id})"

    # ----------------------------- headers ------------------------------
    def _headers(self, method: str, extra: Optional[Mapping[str, str]] = None) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict(DEFAULT_HEADERS)
        headers.update(self.config.headers)
        if extra:
            headers.update(extra)
        if self._token_source is not None and method.upper() in _WRITE_METHODS:
            token = self._token_source.lookup()
            if token is None:
                _logger.warning(
                    "Anti-forgery token not found; sending %s request without it.", method.upper()
                )
            else:
                headers.update(token.as_header())
        return headers

    # ----------------------------- request ------------------------------
    async def _request(
        self,
        method: str,
        url: str,
        *,
        data: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        body = json.dumps(dict(data)) if data is not None else None
        _logger.debug("%s %s", method, url)
        response = await self._transport.send(url, method, self._headers(method, headers), body)
        _logger.debug("%s %s -> %s", method, url, response.status_code)
        return interpret(response)

    # ------------------------------ CRUD --------------------------------
    async def _create(
        self,
        entity_name: str,
        data: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """POST a record and return the id parsed from its entity URL."""
        location = await self._request("POST", self._collection_url(entity_name), data=data, headers=headers)
        m = _ENTITY_ID_RE.search(location) if isinstance(location, str) else None
        if not m:
            raise MalformedResponseError(
                f"Create response for '{entity_name}' did not include a record id in OData-EntityId.",
                subcode=MALFORMED_MISSING_ENTITY_ID,
                details={"location": location if isinstance(location, str) else None},
            )
        return m.group(1)

    async def _get(
        self,
        entity_name: str,
        record_id: str,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        url = self._record_url(entity_name, record_id) + build_query_string(options, RETRIEVE_OPTIONS)
        return await self._request("GET", url, headers=headers)

    async def _get_multiple(
        self,
        entity_name: str,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """GET a collection and unwrap the ``value`` array of the OData envelope."""
        url = self._collection_url(entity_name) + build_query_string(options, RETRIEVE_MULTIPLE_OPTIONS)
        body = await self._request("GET", url, headers=headers)
        items = body.get("value") if isinstance(body, dict) else None
        if not isinstance(items, list):
            raise MalformedResponseError(
                f"Collection response for '{entity_name}' is missing its 'value' array.",
                subcode=MALFORMED_MISSING_VALUE,
            )
        return items

    async def _update(
        self,
        entity_name: str,
        record_id: str,
        data: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return await self._request("PATCH", self._record_url(entity_name, record_id), data=data, headers=headers)

    async def _delete(
        self,
        entity_name: str,
        record_id: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return await self._request("DELETE", self._record_url(entity_name, record_id), headers=headers)

    async def close(self) -> None:
        await self._transport.aclose()
