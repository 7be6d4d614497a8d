# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Status codes the service uses for throttling and temporary outages
TRANSIENT_STATUS_CODES = {429, 502, 503, 504}

# Malformed response subcodes
MALFORMED_MISSING_ENTITY_ID = "malformed_missing_entity_id"
MALFORMED_MISSING_VALUE = "malformed_missing_value"
MALFORMED_INVALID_JSON = "malformed_invalid_json"

# Transport subcodes
TRANSPORT_NETWORK = "transport_network"
TRANSPORT_HOST = "transport_host"

# Configuration subcodes
CONFIGURATION_API_URL_MISSING = "configuration_api_url_missing"
CONFIGURATION_NOT_CONFIGURED = "configuration_not_configured"


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"
