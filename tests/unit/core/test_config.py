# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from dataverse_pages.core.config import WebApiConfig, resolve_api_url
from dataverse_pages.core.errors import ConfigurationError


def test_portal_page_uses_portal_api():
    assert resolve_api_url("https://contoso.powerappsportals.com/_services/x?y=1") == (
        "https://contoso.powerappsportals.com/_api/"
    )


def test_other_page_uses_dataverse_api():
    assert resolve_api_url("https://org.crm.dynamics.com/main.aspx") == "https://org.crm.dynamics.com/api/data/v9.2/"


def test_resolve_requires_absolute_url():
    with pytest.raises(ConfigurationError):
        resolve_api_url("/relative/path")


def test_api_url_gets_trailing_slash():
    assert WebApiConfig(api_url="https://site.example/_api").api_url == "https://site.example/_api/"


def test_empty_api_url_rejected():
    with pytest.raises(ConfigurationError):
        WebApiConfig(api_url="  ")


def test_constructors():
    assert WebApiConfig.for_portal("https://site.example/some/page").api_url == "https://site.example/_api/"
    assert WebApiConfig.for_environment("https://org.example").api_url == "https://org.example/api/data/v9.2/"
    cfg = WebApiConfig.from_page_url("https://site.example/_services/about", http_timeout=5)
    assert cfg.api_url == "https://site.example/_api/"
    assert cfg.http_timeout == 5
    assert cfg.headers == {}
