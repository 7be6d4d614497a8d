# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Web API client.

This module contains OData path shaping, request headers and CRUD helpers.
"""
