# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Anti-forgery (request verification) token lookup for write requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from bs4 import BeautifulSoup

TOKEN_FIELD_NAME = "__RequestVerificationToken"


@dataclass(frozen=True)
class VerificationToken:
    field_name: str
    value: str

    def as_header(self) -> dict:
        return {self.field_name: self.value}


@runtime_checkable
class TokenSource(Protocol):
    def lookup(self) -> Optional[VerificationToken]:
        ...


class PageTokenSource:
    """
    Reads the verification token from the hosting page's hidden input field.

    ``page`` is either the page HTML or a callable returning it; a callable is evaluated on
    every lookup so a refreshed page (or the portal's ``/_layout/tokenhtml`` fragment) is
    picked up.
    """

    def __init__(
        self,
        page: Union[str, Callable[[], Optional[str]]],
        field_name: str = TOKEN_FIELD_NAME,
    ) -> None:
        self._page = page
        self.field_name = field_name

    def lookup(self) -> Optional[VerificationToken]:
        html = self._page() if callable(self._page) else self._page
        if not html:
            return None
        element = BeautifulSoup(html, "html.parser").find("input", attrs={"name": self.field_name})
        value = element.get("value") if element is not None else None
        if not value:
            return None
        return VerificationToken(self.field_name, value)


class StaticTokenSource:
    """Token source for a value the caller already holds."""

    def __init__(self, value: Optional[str], field_name: str = TOKEN_FIELD_NAME) -> None:
        self.value = value
        self.field_name = field_name

    def lookup(self) -> Optional[VerificationToken]:
        if not self.value:
            return None
        return VerificationToken(self.field_name, self.value)
