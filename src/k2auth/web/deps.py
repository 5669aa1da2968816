from collections.abc import Mapping
from typing import Annotated, NamedTuple, cast

from fastapi import Depends, Request

from k2auth.app import App


class RequestSource(NamedTuple):
    """What the server can observe about the caller."""

    headers: Mapping[str, str]
    peer_host: str | None


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_request_source(request: Request) -> RequestSource:
    return RequestSource(headers=request.headers, peer_host=request.client.host if request.client else None)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
RequestSourceDep = Annotated[RequestSource, Depends(get_request_source)]
