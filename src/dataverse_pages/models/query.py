# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""OData system query options."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Union

__all__ = ["QueryOptions", "build_query_string", "RETRIEVE_OPTIONS", "RETRIEVE_MULTIPLE_OPTIONS"]

# Emission order is fixed regardless of how the options were supplied
RETRIEVE_MULTIPLE_OPTIONS = ("select", "filter", "orderby", "top", "expand")
RETRIEVE_OPTIONS = ("select", "expand")


@dataclass(frozen=True)
class QueryOptions:
    """
    OData query options for retrieve and retrieve-multiple requests.

    Every field defaults to ``None``, meaning "not sent". Values are passed to the service
    verbatim; the client does not validate or escape OData expressions.

    :param select: Column names for ``$select``, joined with commas. A string is sent as-is.
    :type select: list[str] or str or None
    :param filter: Raw ``$filter`` expression.
    :type filter: str or None
    :param orderby: Raw ``$orderby`` expression.
    :type orderby: str or None
    :param top: Row cap for ``$top``. ``0`` is a value, not an absence.
    :type top: int or None
    :param expand: Raw ``$expand`` expression.
    :type expand: str or None

    Example::

        options = QueryOptions(select=["fullname", "emailaddress1"], filter="statecode eq 0", top=10)
        rows = await client.retrieve_multiple("contact", options)
    """

    select: Optional[Union[Sequence[str], str]] = None
    filter: Optional[str] = None
    orderby: Optional[str] = None
    top: Optional[int] = None
    expand: Optional[str] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "QueryOptions":
        """Build options from a plain mapping; unrecognized keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in options.items() if k in known})

    @classmethod
    def coerce(cls, options: Union["QueryOptions", Mapping[str, Any], None]) -> "QueryOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_mapping(options)
        raise TypeError("options must be QueryOptions, a mapping, or None")

    def fragments(self, names: Sequence[str] = RETRIEVE_MULTIPLE_OPTIONS) -> List[str]:
        out: List[str] = []
        for name in RETRIEVE_MULTIPLE_OPTIONS:
            if name not in names:
                continue
            value = getattr(self, name)
            if value is None:
                continue
            if name == "select" and not isinstance(value, str):
                value = ",".join(value)
            out.append(f"${name}={value}")
        return out


def build_query_string(
    options: Union[QueryOptions, Mapping[str, Any], None],
    names: Sequence[str] = RETRIEVE_MULTIPLE_OPTIONS,
) -> str:
    """
    Render query options as ``?$select=...&$filter=...``.

    Only options listed in ``names`` and present on ``options`` are emitted, always in the
    order select, filter, orderby, top, expand. Returns an empty string when nothing is
    emitted.
    """
    parts = QueryOptions.coerce(options).fragments(names)
    if not parts:
        return ""
    return "?" + "&".join(parts)
