# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Data models used by the Web API client."""

from .query import QueryOptions, build_query_string

__all__ = ["QueryOptions", "build_query_string"]
