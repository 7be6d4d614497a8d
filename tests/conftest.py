# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Web API client tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest

from dataverse_pages import registry
from dataverse_pages.core.config import WebApiConfig


@pytest.fixture
def test_config():
    """Portal configuration pointing at a fake site."""
    return WebApiConfig(api_url="https://site.example/_api/")


@pytest.fixture
def sample_guid():
    """Sample GUID for testing."""
    return "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def sample_entity_data():
    """Sample record payload for testing."""
    return {"firstname": "Jane", "lastname": "Doe", "emailaddress1": "jane@example.com"}


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test starts without a process-wide default client."""
    registry.reset()
    yield
    registry.reset()
