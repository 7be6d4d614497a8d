# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import asyncio
import logging
import unittest
from unittest.mock import MagicMock

from dataverse_pages.core.antiforgery import StaticTokenSource, TokenSource
from dataverse_pages.core.config import WebApiConfig
from dataverse_pages.data._odata import DEFAULT_HEADERS, _ODataClient
from tests.unit.test_helpers import API_URL, DummyTransport


def _client(token_source=None, config=None, responses=()):
    transport = DummyTransport(responses)
    od = _ODataClient(config or WebApiConfig(api_url=API_URL), transport=transport, token_source=token_source)
    return od, transport


class TestPaths(unittest.TestCase):
    """Collection and single-record URL shaping."""

    def test_collection_url_appends_s(self):
        od, _ = _client()
        self.assertEqual(od._collection_url("contact"), API_URL + "contacts")

    def test_record_url_interpolates_id(self):
        od, _ = _client()
        self.assertEqual(od._record_url("account", "abc-1"), API_URL + "accounts(abc-1)")

    def test_dataverse_base_path(self):
        od, _ = _client(config=WebApiConfig.for_environment("https://org.example"))
        self.assertEqual(od._collection_url("contact"), "https://org.example/api/data/v9.2/contacts")


class TestHeaders(unittest.TestCase):
    """Default OData headers, overrides and anti-forgery injection."""

    def test_defaults(self):
        od, _ = _client()
        self.assertEqual(dict(od._headers("GET")), DEFAULT_HEADERS)

    def test_override_order(self):
        cfg = WebApiConfig(api_url=API_URL, headers={"Accept": "text/plain", "X-App": "a"})
        od, _ = _client(config=cfg)
        headers = od._headers("GET", {"x-app": "b", "Prefer": "odata.include-annotations=*"})
        self.assertEqual(headers["Accept"], "text/plain")
        self.assertEqual(headers["X-App"], "b")
        self.assertEqual(headers["Prefer"], "odata.include-annotations=*")
        self.assertEqual(headers["OData-Version"], "4.0")

    def test_token_added_on_writes(self):
        od, _ = _client(token_source=StaticTokenSource("tok"))
        for method in ("POST", "PATCH", "DELETE", "post"):
            self.assertEqual(od._headers(method)["__RequestVerificationToken"], "tok")

    def test_reads_never_look_up_token(self):
        source = MagicMock(spec=TokenSource)
        od, _ = _client(token_source=source)
        headers = od._headers("GET")
        source.lookup.assert_not_called()
        self.assertNotIn("__RequestVerificationToken", headers)

    def test_missing_token_warns_and_continues(self):
        od, transport = _client(token_source=StaticTokenSource(None), responses=[(204, {}, None)])
        with self.assertLogs("dataverse_pages.data._odata", level=logging.WARNING) as logs:
            result = asyncio.run(od._delete("contact", "abc"))
        self.assertTrue(result)
        self.assertEqual(len(transport.calls), 1)
        self.assertNotIn("__RequestVerificationToken", transport.calls[0][2])
        self.assertIn("Anti-forgery token not found", logs.output[0])

    def test_no_token_source_means_no_lookup(self):
        od, _ = _client()
        self.assertNotIn("__RequestVerificationToken", od._headers("POST"))


class TestClose(unittest.TestCase):
    def test_close_closes_transport(self):
        od, transport = _client()
        asyncio.run(od.close())
        self.assertTrue(transport.closed)


if __name__ == "__main__":
    unittest.main()
