import logging
from typing import Any

import httpx

from functions.core.errors import TransportError
from functions.core.models import ActionRequest, Empty

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def dispatch(request: ActionRequest | str) -> Any:
    if isinstance(request, str):
        request = ActionRequest(url=request)

    kwargs: dict[str, Any] = {
        "params": request.params,
        "timeout": request.timeout if request.timeout is not None else DEFAULT_TIMEOUT,
    }
    if request.method == "POST" and not isinstance(request.body, Empty):
        kwargs["json"] = request.body.payload()

    logger.debug("%s %s", request.method, request.url)
    try:
        response = httpx.request(request.method, request.url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        code = e.response.status_code
        detail = e.response.text.strip()
        raise TransportError(
            f"{request.method} {request.url} failed: {code} {detail}".rstrip(), code
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(f"{request.method} {request.url} failed: {e}") from e

    return response if request.raw else _decode(response)
