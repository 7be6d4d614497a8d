# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable

import pandas as pd


def strip_odata_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    """Remove OData annotation keys (keys containing '@') from a record dict."""
    return {k: v for k, v in record.items() if "@" not in k}


def records_to_dataframe(records: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Build a DataFrame from Web API rows. Columns are the union of keys; missing values are NaN."""
    return pd.DataFrame([strip_odata_keys(r) for r in records])
