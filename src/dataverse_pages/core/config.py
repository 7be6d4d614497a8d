# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlsplit

from ._error_codes import CONFIGURATION_API_URL_MISSING
from .errors import ConfigurationError

PORTAL_API_PATH = "/_api/"
WEB_API_PATH = "/api/data/v9.2/"

# Power Pages serves its own endpoints under this path segment
_PORTAL_MARKER = "/_services/"


def _origin(url: str) -> str:
    parts = urlsplit((url or "").strip())
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(
            f"Cannot determine origin from URL {url!r}.",
            subcode=CONFIGURATION_API_URL_MISSING,
        )
    return f"{parts.scheme}://{parts.netloc}"


def resolve_api_url(page_url: str) -> str:
    """
    Derive the Web API base URL from the URL of the page the client runs on.

    Pages served from a Power Pages site (path containing ``/_services/``) talk to the
    portal Web API at ``/_api/``; anything else falls back to the Dataverse Web API.

    :param page_url: Absolute URL of the hosting page.
    :type page_url: :class:`str`
    :return: Base URL ending with ``/``.
    :rtype: :class:`str`
    :raises ~dataverse_pages.core.errors.ConfigurationError: If the URL has no scheme or host.
    """
    origin = _origin(page_url)
    if _PORTAL_MARKER in urlsplit(page_url).path:
        return origin + PORTAL_API_PATH
    return origin + WEB_API_PATH


@dataclass(frozen=True)
class WebApiConfig:
    """
    Configuration settings for :class:`~dataverse_pages.client.WebApiClient`.

    :param api_url: Web API base URL, e.g. ``"https://site.powerappsportals.com/_api/"``.
        A trailing slash is added when missing.
    :type api_url: str
    :param headers: Extra headers sent with every request. They override the OData defaults
        and are themselves overridden by per-call headers.
    :type headers: dict[str, str]
    :param http_timeout: Request timeout in seconds for the direct transport. ``None`` (default)
        waits indefinitely.
    :type http_timeout: float or None
    """

    api_url: str
    headers: Dict[str, str] = field(default_factory=dict)
    http_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        url = (self.api_url or "").strip()
        if not url:
            raise ConfigurationError("api_url is required.", subcode=CONFIGURATION_API_URL_MISSING)
        if not url.endswith("/"):
            url += "/"
        # frozen dataclass; normalize in place
        object.__setattr__(self, "api_url", url)

    @classmethod
    def from_page_url(cls, page_url: str, **kwargs) -> "WebApiConfig":
        """Build a configuration whose base URL is detected from the hosting page URL."""
        return cls(api_url=resolve_api_url(page_url), **kwargs)

    @classmethod
    def for_portal(cls, origin: str, **kwargs) -> "WebApiConfig":
        """Build a configuration for a Power Pages site (``/_api/``)."""
        return cls(api_url=_origin(origin) + PORTAL_API_PATH, **kwargs)

    @classmethod
    def for_environment(cls, origin: str, **kwargs) -> "WebApiConfig":
        """Build a configuration for a Dataverse environment (``/api/data/v9.2/``)."""
        return cls(api_url=_origin(origin) + WEB_API_PATH, **kwargs)
