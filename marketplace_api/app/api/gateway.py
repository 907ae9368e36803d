"""
Entry points working on HTTP-shaped records.

The service distinguishes read-only calls from calls that persist
changes.  ``HttpGateway.http_request`` serves reads.  When it receives
a PUT, POST or DELETE it runs no business logic and answers with an
empty 200 response whose ``upgrade`` flag is set; the caller then
re-issues the same request to ``HttpGateway.http_request_update``.

Handled requests always get status 200, including "not found" and
"already exists" outcomes.  Unsupported methods, unroutable paths and
invalid bodies get status 400 with a ``{"msg": ...}`` body.
"""

import json
import logging
from typing import Any

from marketplace_api.app.api.dispatch import (
    MUTATING_METHODS,
    InvalidPayloadError,
    match_get_request,
    match_update_request,
)
from marketplace_api.app.schemas.http import HttpRequest, HttpResponse
from marketplace_api.app.services.product_service import ProductService

JSON_HEADERS = [("Content-type", "application/json")]


def build_http_response(code: int, body: Any) -> HttpResponse:
    """Encode ``body`` as compact UTF‑8 JSON and wrap it in a response."""
    encoded = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return HttpResponse(status_code=code, headers=list(JSON_HEADERS), body=encoded)


class HttpGateway:
    """Read-only and mutating entry points bound to one product service."""

    def __init__(self, service: ProductService) -> None:
        self.service = service

    def http_request(self, req: HttpRequest) -> HttpResponse:
        if req.method in MUTATING_METHODS:
            return HttpResponse(
                status_code=200,
                headers=list(JSON_HEADERS),
                body=b"",
                upgrade=True,
            )
        if req.method != "GET":
            logging.getLogger(__name__).warning("Rejected read call with method %s", req.method)
            return build_http_response(400, {"msg": "invalid get method"})

        handler = match_get_request(self.service, req.method, req.url)
        if handler is None:
            return build_http_response(400, {"msg": "get handler not found"})
        return build_http_response(200, handler().model_dump())

    def http_request_update(self, req: HttpRequest) -> HttpResponse:
        if req.method not in MUTATING_METHODS:
            logging.getLogger(__name__).warning("Rejected update call with method %s", req.method)
            return build_http_response(400, {"msg": "invalid update method"})

        try:
            handler = match_update_request(self.service, req.method, req.url, req.body)
        except InvalidPayloadError as exc:
            logging.getLogger(__name__).warning("Invalid payload for %s %s: %s", req.method, req.url, exc)
            return build_http_response(400, {"msg": str(exc)})
        if handler is None:
            return build_http_response(400, {"msg": "update handler not found"})
        return build_http_response(200, handler().model_dump())
