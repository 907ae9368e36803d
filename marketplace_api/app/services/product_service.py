"""
Handlers for the product resource.

Each handler takes a :class:`ProductRequest` and returns a
:class:`ProductResponse`.  A missing product or a duplicate id is not
an error: the handler answers with a ``{"msg": ...}`` object in
``data`` and the gateway still replies with HTTP 200.  The only side
effects are the store mutations of ``add_product``, ``update_product``
and ``delete_product``.
"""

import logging

from marketplace_api.app.schemas.product import ProductRequest, ProductResponse
from marketplace_api.app.services.product_store import ProductStore


class ProductService:
    """List, get, create, update and delete products in a store."""

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    def list_products(self, req: ProductRequest) -> ProductResponse:
        """Return every stored product.  The request is ignored."""
        return ProductResponse(data=[product.model_dump() for product in self.store.values()])

    def get_product(self, req: ProductRequest) -> ProductResponse:
        product_id = req.path_variable.id
        product = self.store.get(product_id)
        if product is None:
            return ProductResponse(data={"msg": f"a product with id={product_id} not found"})
        return ProductResponse(data=product.model_dump())

    def delete_product(self, req: ProductRequest) -> ProductResponse:
        product_id = req.path_variable.id
        removed = self.store.remove(product_id)
        if removed is None:
            return ProductResponse(
                data={"msg": f"couldn't delete a product with id={product_id}. there is no such product."}
            )
        logging.getLogger(__name__).info("Deleted product %s", removed.id)
        return ProductResponse(data={"id": removed.id, "deleted": True})

    def add_product(self, req: ProductRequest) -> ProductResponse:
        """Insert the payload unless its id is already taken."""
        payload = req.payload
        if self.store.contains_key(payload.id):
            return ProductResponse(data={"msg": f"a product id={payload.id} already exists"})
        self.store.insert(payload.id, payload)
        logging.getLogger(__name__).info("Created product %s", payload.id)
        return ProductResponse(data={"product": payload.model_dump()})

    def update_product(self, req: ProductRequest) -> ProductResponse:
        """Replace an existing product with the payload.

        The id always comes from the path; an id in the body is
        overwritten so a record can never be moved to another key.
        """
        payload = req.payload.model_copy(update={"id": req.path_variable.id})
        if not self.store.contains_key(payload.id):
            return ProductResponse(
                data={"msg": f"couldn't update a product with id={payload.id}. product not found"}
            )
        self.store.insert(payload.id, payload)
        logging.getLogger(__name__).info("Updated product %s", payload.id)
        return ProductResponse(data={"product": payload.model_dump()})
