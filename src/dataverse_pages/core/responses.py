# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classification of completed Web API responses."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ._error_codes import MALFORMED_INVALID_JSON, TRANSIENT_STATUS_CODES, http_subcode
from .errors import ApiError, MalformedResponseError
from .http import RawResponse

_logger = logging.getLogger(__name__)

ENTITY_ID_HEADER = "OData-EntityId"

_BODY_EXCERPT_LIMIT = 500


def _error_envelope(text: str) -> tuple[Optional[str], Optional[str]]:
    """Return ``(message, code)`` from an OData error body, or ``(None, None)``."""
    try:
        body = json.loads(text) if text else None
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    err = body.get("error")
    if not isinstance(err, dict):
        return None, None
    message = err.get("message")
    code = err.get("code")
    return (
        message if isinstance(message, str) and message else None,
        code if isinstance(code, str) else None,
    )


def raise_for_response(response: RawResponse) -> None:
    """
    Raise :class:`~dataverse_pages.core.errors.ApiError` for a non-success response.

    The service's ``error.message`` becomes the exception message when the body carries one;
    otherwise a generic message embedding the status code is used. The raw body is logged
    before raising.
    """
    if response.ok:
        return
    status = response.status_code
    text = response.text or ""
    message, service_code = _error_envelope(text)
    if message is None:
        message = f"API request failed with status {status}."
    _logger.error("Web API error (status=%s): %s", status, text)
    raise ApiError(
        message,
        status_code=status,
        is_transient=status in TRANSIENT_STATUS_CODES,
        subcode=http_subcode(status),
        service_error_code=service_code,
        body_excerpt=text[:_BODY_EXCERPT_LIMIT] or None,
    )


def interpret(response: RawResponse) -> Any:
    """
    Normalize a response into the operation result.

    - 204: ``True`` (body is not read)
    - 201: the ``OData-EntityId`` header (``Location`` when the former is absent)
    - other 2xx: the decoded JSON body
    - anything else: :class:`~dataverse_pages.core.errors.ApiError`
    """
    raise_for_response(response)
    status = response.status_code
    if status == 204:
        return True
    if status == 201:
        return response.header(ENTITY_ID_HEADER) or response.header("Location")
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(
            f"Response body for status {status} is not valid JSON.",
            subcode=MALFORMED_INVALID_JSON,
            status_code=status,
            details={"body_excerpt": (response.text or "")[:_BODY_EXCERPT_LIMIT]},
        ) from exc
