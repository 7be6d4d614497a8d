# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Asynchronous client for the Dataverse and Power Pages Web API."""

from .client import WebApiClient
from .core import (
    ApiError,
    ConfigurationError,
    DataverseError,
    HostTransport,
    MalformedResponseError,
    PageTokenSource,
    RequestsTransport,
    StaticTokenSource,
    TransportError,
    WebApiConfig,
)
from .models.query import QueryOptions
from .registry import configure, get_client, install

__version__ = "0.1.0"

__all__ = [
    "WebApiClient",
    "WebApiConfig",
    "QueryOptions",
    "RequestsTransport",
    "HostTransport",
    "PageTokenSource",
    "StaticTokenSource",
    "DataverseError",
    "ApiError",
    "TransportError",
    "MalformedResponseError",
    "ConfigurationError",
    "configure",
    "get_client",
    "install",
]
