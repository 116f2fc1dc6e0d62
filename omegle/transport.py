from typing import Any
from urllib.parse import parse_qsl

import httpx
from httpx import AsyncClient, Request, Response
from loguru import logger

from omegle import __version__
from omegle.errors import RequestFailed, ResponseError, ServerUnavailable

DEFAULT_TIMEOUT = 60
REDACTED_FIELDS = frozenset({"msg"})


def make_http_client(timeout: float = DEFAULT_TIMEOUT) -> AsyncClient:
    """
    Build the HTTP client shared by the status resolver, the chat factory
    and every chat session. The timeout has to be longer than the time the
    service holds a long-poll request.
    """
    return AsyncClient(
        timeout=timeout,
        headers={"User-Agent": f"omegle-client/{__version__}"},
        event_hooks={"request": [log_request]},
    )


async def request(http: AsyncClient, method: str, url: str, **kwargs: Any) -> Response:
    try:
        response = await http.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.RequestError as exc:
        logger.warning("HTTP request error occured: {exc}", exc=repr(exc))
        raise RequestFailed(f"Request to {url} failed: {exc!r}.") from exc
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code

        match status_code:
            case 502 | 503:
                raise ServerUnavailable(
                    "Server is unavailable at the moment.", status_code
                ) from exc
            case _:
                raise ResponseError(f"API error: {exc}.", status_code) from exc
    else:
        return response


async def log_request(request: Request) -> None:
    content = None

    if request.headers.get("Content-Type") == "application/x-www-form-urlencoded":
        content = {
            key: "[REDACTED]" if key in REDACTED_FIELDS else value
            for key, value in parse_qsl(request.content.decode())
        }

    logger.debug(
        "Make {method} request to {url} with content {content}.",
        method=request.method,
        url=request.url,
        content=content,
    )
