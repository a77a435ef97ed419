from __future__ import annotations

import logging
import typing

import httpx

from ._exceptions import BodyCopyError, SendError
from ._models import RequestSpec

logger = logging.getLogger("fetchr.dispatch")


def build_client(**kwargs: typing.Any) -> httpx.Client:
    """Return the blocking client used for a fetch. Redirects are followed."""
    kwargs.setdefault("follow_redirects", True)
    return httpx.Client(**kwargs)


def copy_body(response: httpx.Response, out: typing.BinaryIO) -> int:
    """Copy the raw response body into ``out``, returning the byte count."""
    written = 0
    try:
        for chunk in response.iter_bytes():
            out.write(chunk)
            written += len(chunk)
        out.flush()
    except (OSError, httpx.HTTPError) as exc:
        raise BodyCopyError(
            f"Failed to print response body: {exc}", request=response.request
        ) from exc
    return written


def dispatch(
    spec: RequestSpec,
    *,
    show_head: typing.Callable[[httpx.Response], None],
    body_out: typing.BinaryIO,
    client: httpx.Client | None = None,
) -> httpx.Response:
    """
    Send the single request described by ``spec``.

    ``show_head`` receives the response once the status line and headers
    are in. The body is copied to ``body_out`` only when ``spec.print_body``
    is set. A client built here is closed before returning; a client passed
    in by the caller is left open.
    """
    if client is None:
        with build_client() as owned:
            return dispatch(
                spec, show_head=show_head, body_out=body_out, client=owned
            )

    request: httpx.Request | None = None
    try:
        request = client.build_request(spec.method.value, spec.url)
        logger.debug("Sending %s %s", request.method, request.url)
        response = client.send(request, stream=True)
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
        raise SendError(str(exc), request=request) from exc

    try:
        logger.debug(
            "Response: %s %s %s",
            response.http_version,
            response.status_code,
            response.reason_phrase,
        )
        show_head(response)
        if spec.print_body:
            written = copy_body(response, body_out)
            logger.debug("Copied %d body bytes", written)
    finally:
        response.close()

    return response
