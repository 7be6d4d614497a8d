# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import logging

import pytest

from dataverse_pages.core._error_codes import http_subcode
from dataverse_pages.core.errors import ApiError, MalformedResponseError
from dataverse_pages.core.http import RawResponse
from dataverse_pages.core.responses import interpret, raise_for_response
from tests.unit.test_helpers import UnreadableResponse, make_response


def test_204_is_true_without_body():
    assert interpret(UnreadableResponse(status_code=204)) is True


def test_201_returns_raw_entity_id_header():
    loc = "https://site.example/_api/contacts(11111111-1111-1111-1111-111111111111)"
    assert interpret(make_response(201, {"odata-entityid": loc})) == loc


def test_200_decodes_json():
    assert interpret(make_response(200, {}, {"a": 1})) == {"a": 1}


def test_other_2xx_decodes_json():
    assert interpret(make_response(206, {}, {"value": []})) == {"value": []}


def test_prefers_predecoded_payload():
    r = RawResponse(status_code=200, text="not json", payload={"ok": True})
    assert interpret(r) == {"ok": True}


def test_success_with_invalid_json_is_malformed():
    with pytest.raises(MalformedResponseError):
        interpret(make_response(200, {}, "<html/>"))


def test_http_404_subcode_and_service_code():
    r = make_response(404, {}, {"error": {"code": "0x80040217", "message": "Not found"}})
    with pytest.raises(ApiError) as ei:
        raise_for_response(r)
    err = ei.value.to_dict()
    assert err["message"] == "Not found"
    assert err["subcode"] == http_subcode(404) == "http_404"
    assert err["details"]["service_error_code"] == "0x80040217"
    assert err["is_transient"] is False


def test_http_429_transient():
    with pytest.raises(ApiError) as ei:
        raise_for_response(make_response(429, {}, {"error": {"message": "Throttle"}}))
    assert ei.value.is_transient is True
    assert ei.value.subcode == http_subcode(429) == "http_429"


def test_http_500_generic_message_and_body_excerpt():
    with pytest.raises(ApiError) as ei:
        raise_for_response(make_response(500, {}, "Internal"))
    assert ei.value.message == "API request failed with status 500."
    assert ei.value.subcode == http_subcode(500) == "http_500"
    assert ei.value.details["body_excerpt"] == "Internal"


def test_error_envelope_without_message_uses_generic():
    with pytest.raises(ApiError) as ei:
        raise_for_response(make_response(403, {}, {"error": {"code": "x"}}))
    assert "403" in ei.value.message


def test_raw_body_logged_before_raising(caplog):
    with caplog.at_level(logging.ERROR, logger="dataverse_pages.core.responses"):
        with pytest.raises(ApiError):
            raise_for_response(make_response(400, {}, {"error": {"message": "Invalid filter"}}))
    assert "Invalid filter" in caplog.text
