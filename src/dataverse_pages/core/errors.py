# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the Web API client.

Every failure derives from :class:`DataverseError`, which carries a stable ``code``,
an optional ``subcode`` and a ``details`` dictionary for diagnostics.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class DataverseError(Exception):
    """Base structured error for the Web API client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ConfigurationError(DataverseError):
    def __init__(self, message: str, *, subcode: Optional[str] = None):
        super().__init__(message, code="configuration_error", subcode=subcode, source="client")


class TransportError(DataverseError):
    """The request never produced an HTTP response (connectivity, DNS, host facility failure)."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="transport_error", subcode=subcode, details=details, source="client")


class MalformedResponseError(DataverseError):
    """A successful response did not have the shape the operation expects."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="malformed_response",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class ApiError(DataverseError):
    """Non-success HTTP response returned by the Web API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        service_error_code: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


__all__ = [
    "DataverseError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
    "ApiError",
]
