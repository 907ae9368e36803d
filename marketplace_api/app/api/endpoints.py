"""
HTTP surface of the service.

A single catch-all route accepts every method on every path and hands
the call to :class:`HttpGateway` as an ``HttpRequest`` record.  The read
entry point is always tried first; if it answers with the ``upgrade``
flag, the same record is passed to the mutating entry point.  Routing
decisions and status codes are left entirely to the gateway.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response

from marketplace_api.app.api.gateway import HttpGateway
from marketplace_api.app.schemas.http import HttpRequest, HttpResponse

router = APIRouter()

FORWARDED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


def get_gateway(request: Request) -> HttpGateway:
    """Return the gateway created by ``create_app``."""
    return request.app.state.gateway


async def to_http_request(request: Request) -> HttpRequest:
    # Records carry the path as sent on the wire; the router decodes the
    # id segment itself.  ``request.url.path`` is already percent-decoded.
    raw_path = request.scope.get("raw_path")
    url = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else quote(request.url.path)
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return HttpRequest(
        method=request.method,
        url=url,
        headers=list(request.headers.items()),
        body=await request.body(),
    )


def to_response(result: HttpResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=dict(result.headers),
    )


@router.api_route("/{full_path:path}", methods=FORWARDED_METHODS, include_in_schema=False)
async def forward(
    full_path: str,
    request: Request,
    gateway: HttpGateway = Depends(get_gateway),
) -> Response:
    """Dispatch any request through the read and, if needed, update entry points."""
    record = await to_http_request(request)
    result = gateway.http_request(record)
    if result.upgrade:
        result = gateway.http_request_update(record)
    return to_response(result)
