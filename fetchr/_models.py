from __future__ import annotations

import dataclasses
import enum
import typing

DEFAULT_URL = "https://hyper.rs"
PRINT_BODY_FLAG = "--print-body"


class RequestMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"

    @classmethod
    def from_token(cls, token: str | None) -> RequestMethod:
        """
        Map a command-line method token to a method.

        Matching is case-insensitive. Only ``post`` selects POST, every other
        token (or no token at all) falls back to GET.
        """
        if token is not None and token.lower() == "post":
            return cls.POST
        return cls.GET


@dataclasses.dataclass(frozen=True)
class RequestSpec:
    """A single request, as described on the command line."""

    method: RequestMethod = RequestMethod.GET
    url: str = DEFAULT_URL
    print_body: bool = False
    url_defaulted: bool = dataclasses.field(default=False, compare=False)

    @classmethod
    def from_args(cls, args: typing.Sequence[str]) -> RequestSpec:
        """
        Build a spec from positional arguments, program path excluded.

        ``[method] [url] [--print-body]``. The URL is not validated here;
        a malformed URL only fails once the request is sent.
        """
        method = RequestMethod.from_token(args[0] if len(args) > 0 else None)

        if len(args) > 1:
            url, url_defaulted = args[1], False
        else:
            url, url_defaulted = DEFAULT_URL, True

        print_body = len(args) > 2 and args[2] == PRINT_BODY_FLAG

        return cls(
            method=method,
            url=url,
            print_body=print_body,
            url_defaulted=url_defaulted,
        )
