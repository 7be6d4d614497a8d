# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import asyncio

import pandas as pd

from dataverse_pages.utils._pandas import records_to_dataframe, strip_odata_keys
from tests.unit.test_helpers import API_URL, make_client


def test_strip_odata_keys():
    rec = {"@odata.etag": 'W/"1"', "name": "A", "statecode@OData.Community.Display.V1.FormattedValue": "Active"}
    assert strip_odata_keys(rec) == {"name": "A"}


def test_records_to_dataframe_union_of_columns():
    df = records_to_dataframe([{"a": 1}, {"b": 2}])
    assert sorted(df.columns) == ["a", "b"]
    assert pd.isna(df.loc[0, "b"])


def test_retrieve_multiple_dataframe():
    body = {"value": [{"@odata.etag": "e1", "contactid": "1", "fullname": "A"}, {"contactid": "2", "fullname": "B"}]}
    client, transport = make_client([(200, {}, body)])
    df = asyncio.run(client.retrieve_multiple_dataframe("contact", {"select": ["contactid", "fullname"]}))
    assert list(df.columns) == ["contactid", "fullname"]
    assert df["fullname"].tolist() == ["A", "B"]
    assert transport.calls[0][1] == API_URL + "contacts?$select=contactid,fullname"


def test_empty_result_gives_empty_frame():
    client, _ = make_client([(200, {}, {"value": []})])
    df = asyncio.run(client.retrieve_multiple_dataframe("contact"))
    assert df.empty
