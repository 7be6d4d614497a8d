# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Host-mediated transport.

Power Pages exposes a secure request facility (``webapi.safeAjax``) that wraps the HTTP
call with the portal's own security checks and reports completion through callbacks.
:class:`HostTransport` adapts such a facility to the same awaitable
:class:`~dataverse_pages.core.http.Transport` contract the direct transport implements.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from requests.structures import CaseInsensitiveDict

from ._error_codes import TRANSPORT_HOST
from .errors import TransportError
from .http import RawResponse

_logger = logging.getLogger(__name__)


class HostResponse(Protocol):
    """Response-like object the host passes to its callbacks (an XHR in the browser)."""

    status: int

    def get_response_header(self, name: str) -> Optional[str]:
        ...


@dataclass
class HostRequest:
    """Settings handed to the host facility for one call."""

    method: str
    url: str
    content_type: str
    body: Optional[str]
    on_success: Callable[[Any, str, HostResponse], None]
    on_error: Callable[[HostResponse, str, Any], None]
    headers: Dict[str, str] = field(default_factory=dict)


SafeAjax = Callable[[HostRequest], None]


def _response_text(response: Any) -> str:
    text = getattr(response, "response_text", None)
    if isinstance(text, str):
        return text
    decoded = getattr(response, "response_json", None)
    if decoded is not None:
        return json.dumps(decoded)
    return ""


class HostTransport:
    """
    Transport delegating every request to a host-provided ``safe_ajax`` callable.

    The facility must invoke exactly one of ``on_success``/``on_error``. Callbacks may fire
    from any thread; completion is marshalled back onto the event loop that issued the call
    and the pending future is settled once. Extra invocations are ignored.

    :param safe_ajax: Callable accepting a :class:`HostRequest`.
    """

    def __init__(self, safe_ajax: SafeAjax) -> None:
        if not callable(safe_ajax):
            raise TypeError("safe_ajax must be callable")
        self._safe_ajax = safe_ajax

    async def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> RawResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def settle(result: Any = None, error: Optional[BaseException] = None) -> None:
            if future.done():
                _logger.debug("Ignoring repeated completion for %s %s", method, url)
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def on_success(res: Any, status_text: str, response: HostResponse) -> None:
            if isinstance(res, str):
                raw = RawResponse(status_code=response.status, text=res, header_getter=response.get_response_header)
            elif res is None:
                raw = RawResponse(status_code=response.status, header_getter=response.get_response_header)
            else:
                raw = RawResponse(status_code=response.status, payload=res, header_getter=response.get_response_header)
            loop.call_soon_threadsafe(settle, raw)

        def on_error(response: HostResponse, status_text: str, error: Any) -> None:
            status = getattr(response, "status", 0) or 0
            if not status:
                # No HTTP exchange took place
                exc = TransportError(
                    f"{method} {url} failed: {error or status_text}",
                    subcode=TRANSPORT_HOST,
                    details={"url": url, "method": method, "status_text": status_text},
                )
                loop.call_soon_threadsafe(settle, None, exc)
                return
            raw = RawResponse(
                status_code=status,
                text=_response_text(response),
                header_getter=response.get_response_header,
            )
            loop.call_soon_threadsafe(settle, raw)

        headers = CaseInsensitiveDict(headers)
        settings = HostRequest(
            method=method,
            url=url,
            content_type=headers.get("Content-Type", "application/json; charset=utf-8"),
            body=body,
            on_success=on_success,
            on_error=on_error,
            headers={k: v for k, v in headers.items() if k.lower() != "content-type"},
        )
        try:
            self._safe_ajax(settings)
        except Exception as exc:
            # Completions already scheduled find the future cancelled and are dropped
            future.cancel()
            raise TransportError(
                f"Host request facility failed for {method} {url}: {exc}",
                subcode=TRANSPORT_HOST,
                details={"url": url, "method": method},
            ) from exc
        return await future

    async def aclose(self) -> None:
        return None
