"""
Errors that abort a fetch.

    FetchError
    ├── SendError       (the request never got a response)
    └── BodyCopyError   (the body could not be written to stdout)
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    import httpx


class FetchError(Exception):
    def __init__(self, message: str, *, request: httpx.Request | None = None) -> None:
        super().__init__(message)
        self._request = request

    @property
    def request(self) -> httpx.Request:
        if self._request is None:
            raise RuntimeError("The .request property has not been set.")
        return self._request


class SendError(FetchError):
    pass


class BodyCopyError(FetchError):
    pass
