"""
Request routing for the product resource.

Two path patterns are recognised:

- the collection ``/marketplace/products``
- an item ``/marketplace/products/:id``; the id is one path segment and
  becomes the request's path variable.

Patterns are compiled to regular expressions with a named group for the
id.  The collection pattern is tried first and the method is switched
on inside the matched branch only, so ``PUT /marketplace/products`` or
``POST /marketplace/products/1`` resolve to no handler at all.

There is one dispatch table per entry point:

    read (``match_get_request``)       mutating (``match_update_request``)
    GET    collection -> list_products  POST   collection -> add_product
    GET    item       -> get_product    PUT    item       -> update_product
                                        DELETE item       -> delete_product

Request bodies are only decoded for the routes that take a payload.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from marketplace_api.app.core.config import settings
from marketplace_api.app.schemas.product import (
    Product,
    ProductId,
    ProductRequest,
    ProductResponse,
)
from marketplace_api.app.services.product_service import ProductService

MUTATING_METHODS = ("PUT", "POST", "DELETE")

_ID_SEGMENT = r"[A-Za-z0-9\-_~ %]+"
COLLECTION_PATTERN = re.compile(r"^/marketplace/products$")
ITEM_PATTERN = re.compile(rf"^/marketplace/products(?:/(?P<id>{_ID_SEGMENT}))?$")

Handler = Callable[[ProductRequest], ProductResponse]


class InvalidPayloadError(ValueError):
    """Raised when a request body cannot be turned into a product."""


@dataclass
class BoundHandler:
    """A handler together with the request it should be called with."""

    handle: Handler
    request: ProductRequest

    def __call__(self) -> ProductResponse:
        return self.handle(self.request)


def request_path(url: str) -> str:
    """Return the path component of ``url``, without query or fragment."""
    return urlsplit(url).path


def parse_product(body: bytes, stored_id: Optional[str] = None) -> Product:
    """Decode a UTF‑8 JSON body into a :class:`Product`.

    Raises :class:`InvalidPayloadError` if the body is not UTF‑8, not
    JSON, does not describe a product, holds text that cannot be
    stored as UTF‑8 (lone surrogate escapes such as ``"\\ud800"``), or
    is larger than ``settings.max_value_size`` once encoded.  When
    ``stored_id`` is given the size is measured with that id in place of
    the body's id, since that is the record that will be written.
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidPayloadError("request body is not valid utf-8") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidPayloadError(f"invalid json body: {exc.msg}") from exc
    try:
        product = Product.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) or "body" for err in exc.errors()})
        raise InvalidPayloadError(f"invalid product: {', '.join(fields)}") from exc

    record = product.model_dump()
    if stored_id is not None:
        record["id"] = stored_id
    try:
        size = len(json.dumps(record, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    except UnicodeEncodeError as exc:
        raise InvalidPayloadError("product is not valid utf-8") from exc
    if size > settings.max_value_size:
        raise InvalidPayloadError(
            f"product is {size} bytes, the limit is {settings.max_value_size}"
        )
    return product


def _check_key_size(product_id: str) -> None:
    if len(product_id.encode("utf-8")) > settings.max_key_size:
        raise InvalidPayloadError(
            f"product id is longer than {settings.max_key_size} bytes"
        )


def _path_variable(match: re.Match) -> ProductId:
    return ProductId(id=unquote(match.group("id")))


def match_get_request(service: ProductService, method: str, url: str) -> Optional[BoundHandler]:
    """Resolve a read-only call, or return ``None`` if nothing matches."""
    path = request_path(url)
    if COLLECTION_PATTERN.match(path):
        if method == "GET":
            return BoundHandler(handle=service.list_products, request=ProductRequest())
    else:
        match = ITEM_PATTERN.match(path)
        if match:
            if method == "GET":
                return BoundHandler(
                    handle=service.get_product,
                    request=ProductRequest(path_variable=_path_variable(match)),
                )
    logging.getLogger(__name__).debug("No read handler for %s %s", method, path)
    return None


def match_update_request(
    service: ProductService, method: str, url: str, body: bytes
) -> Optional[BoundHandler]:
    """Resolve a state-changing call, or return ``None`` if nothing matches.

    Raises :class:`InvalidPayloadError` when the matched route needs a
    payload and ``body`` is not a valid product.
    """
    path = request_path(url)
    if COLLECTION_PATTERN.match(path):
        if method == "POST":
            payload = parse_product(body)
            _check_key_size(payload.id)
            return BoundHandler(
                handle=service.add_product,
                request=ProductRequest(payload=payload),
            )
    else:
        match = ITEM_PATTERN.match(path)
        if match:
            if method == "DELETE":
                return BoundHandler(
                    handle=service.delete_product,
                    request=ProductRequest(path_variable=_path_variable(match)),
                )
            if method == "PUT":
                path_variable = _path_variable(match)
                return BoundHandler(
                    handle=service.update_product,
                    request=ProductRequest(
                        path_variable=path_variable,
                        payload=parse_product(body, stored_id=path_variable.id),
                    ),
                )
    logging.getLogger(__name__).debug("No update handler for %s %s", method, path)
    return None
