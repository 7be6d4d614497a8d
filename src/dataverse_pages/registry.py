# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Process-wide default client.

Applications that share one client across modules configure it once with
:func:`configure` and fetch it with :func:`get_client`. Configuring again returns the
existing client unchanged. :func:`install` publishes a client under a well-known name in
a shared namespace (for example a plugin registry or ``builtins.__dict__``) without ever
replacing what is already there.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, MutableMapping, Optional

from .client import WebApiClient
from .core._error_codes import CONFIGURATION_NOT_CONFIGURED
from .core.errors import ConfigurationError

_logger = logging.getLogger(__name__)

DEFAULT_NAME = "dataverse"

_lock = threading.Lock()
_default: Optional[WebApiClient] = None


def configure(*args: Any, **kwargs: Any) -> WebApiClient:
    """
    Create the process-wide client, or return it if it already exists.

    Arguments are forwarded to :class:`~dataverse_pages.client.WebApiClient` on first call
    and ignored afterwards.
    """
    global _default
    with _lock:
        if _default is not None:
            _logger.debug("Default Web API client already configured; returning existing instance.")
            return _default
        _default = WebApiClient(*args, **kwargs)
        return _default


def get_client() -> WebApiClient:
    if _default is None:
        raise ConfigurationError(
            "No default Web API client; call dataverse_pages.configure() first.",
            subcode=CONFIGURATION_NOT_CONFIGURED,
        )
    return _default


def install(namespace: MutableMapping[str, Any], client: WebApiClient, name: str = DEFAULT_NAME) -> Any:
    """
    Register ``client`` as ``namespace[name]`` unless the name is already taken.

    :return: The object registered under ``name`` after the call.
    """
    with _lock:
        if name in namespace:
            _logger.debug("'%s' already installed; leaving it in place.", name)
            return namespace[name]
        namespace[name] = client
        return client


def reset() -> None:
    """Forget the default client (does not close it)."""
    global _default
    with _lock:
        _default = None
