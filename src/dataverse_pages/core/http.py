# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Transport abstraction and the direct HTTP transport.

This module provides the :class:`Transport` protocol every request goes through,
the :class:`RawResponse` value transports hand back, and :class:`RequestsTransport`,
a wrapper around the requests library that runs each call in a worker thread so
callers suspend cooperatively while the round trip is in flight.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

import requests
from requests.structures import CaseInsensitiveDict

from ._error_codes import TRANSPORT_NETWORK
from .errors import TransportError

_logger = logging.getLogger(__name__)

_NO_PAYLOAD = object()


def _no_headers(name: str) -> Optional[str]:
    return None


@dataclass
class RawResponse:
    """
    A completed HTTP exchange, independent of the transport that produced it.

    :param status_code: HTTP status code.
    :type status_code: int
    :param text: Raw response body. Empty when the transport only has a decoded payload.
    :type text: str
    :param payload: Body already decoded by the transport (host-mediated calls decode JSON
        themselves). When set, :meth:`json` returns it without parsing ``text``.
    :param header_getter: Case-insensitive header lookup.
    """

    status_code: int
    text: str = ""
    payload: Any = _NO_PAYLOAD
    header_getter: Callable[[str], Optional[str]] = field(default=_no_headers, repr=False)

    @classmethod
    def from_headers(cls, status_code: int, headers: Mapping[str, str], text: str = "") -> "RawResponse":
        lookup = CaseInsensitiveDict(headers or {})
        return cls(status_code=status_code, text=text, header_getter=lookup.get)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> Optional[str]:
        return self.header_getter(name)

    def json(self) -> Any:
        """Return the decoded body. Raises :class:`ValueError` when the body is not JSON."""
        if self.payload is not _NO_PAYLOAD:
            return self.payload
        return json.loads(self.text)


@runtime_checkable
class Transport(Protocol):
    """Asynchronous request/response capability shared by every transport strategy."""

    async def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> RawResponse:
        ...

    async def aclose(self) -> None:
        ...


class RequestsTransport:
    """
    Direct transport issuing the HTTP request with requests.

    The blocking call runs through :func:`asyncio.to_thread`. No retries are attempted:
    network failures surface as :class:`~dataverse_pages.core.errors.TransportError`
    chained to the original ``requests`` exception.

    :param timeout: Request timeout in seconds. ``None`` waits indefinitely.
    :type timeout: :class:`float` | None
    :param session: Optional caller-owned requests.Session. The transport never closes it.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        if self._session is not None:
            return self._session.request(method, url, **kwargs)
        return requests.request(method, url, **kwargs)

    async def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> RawResponse:
        data = body.encode("utf-8") if body is not None else None
        try:
            r = await asyncio.to_thread(self._request, method, url, headers=dict(headers), data=data)
        except requests.exceptions.RequestException as exc:
            _logger.debug("%s %s failed before a response was received: %s", method, url, exc)
            raise TransportError(
                f"{method} {url} failed: {exc}",
                subcode=TRANSPORT_NETWORK,
                details={"url": url, "method": method},
            ) from exc
        return RawResponse(status_code=r.status_code, text=r.text, header_getter=r.headers.get)

    async def aclose(self) -> None:
        # Sessions belong to the caller
        return None
