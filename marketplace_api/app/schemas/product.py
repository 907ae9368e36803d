"""
Pydantic schemas for marketplace products.

A product is listed by its owner and identified by a caller-assigned
string ``id``.  All other fields are opaque strings; they must be
present but their content is not validated.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A product that can be listed on the marketplace."""

    id: str = Field(..., examples=["1"])
    name: str = Field(..., examples=["Chair"])
    price: str = Field(..., examples=["25"])
    location: str = Field(..., examples=["Berlin"])
    description: str = Field(..., examples=["Wooden chair, barely used"])
    image: str = Field(..., examples=["https://example.com/chair.png"])
    owner: str = Field(..., examples=["alice"])

    model_config = {"strict": True}


class ProductId(BaseModel):
    """Path variable captured from ``/marketplace/products/{id}``."""

    id: str


class ProductRequest(BaseModel):
    """Input of a product handler.

    ``path_variable`` is set for item routes and ``payload`` for routes
    that carry a body.  Each handler reads only the part it needs.
    """

    path_variable: Optional[ProductId] = None
    payload: Optional[Product] = None


class ProductResponse(BaseModel):
    """Output of a product handler; ``data`` is serialized as JSON."""

    data: Any
