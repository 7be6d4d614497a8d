# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Web API client.

This module contains configuration, transports, anti-forgery token lookup,
response interpretation and error handling.
"""

from .antiforgery import PageTokenSource, StaticTokenSource, TokenSource, VerificationToken
from .config import WebApiConfig, resolve_api_url
from .errors import (
    ApiError,
    ConfigurationError,
    DataverseError,
    MalformedResponseError,
    TransportError,
)
from .host import HostRequest, HostTransport
from .http import RawResponse, RequestsTransport, Transport

__all__ = [
    "PageTokenSource",
    "StaticTokenSource",
    "TokenSource",
    "VerificationToken",
    "WebApiConfig",
    "resolve_api_url",
    "ApiError",
    "ConfigurationError",
    "DataverseError",
    "MalformedResponseError",
    "TransportError",
    "HostRequest",
    "HostTransport",
    "RawResponse",
    "RequestsTransport",
    "Transport",
]
