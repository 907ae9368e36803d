"""
API package.

``dispatch`` matches a method and path to a product handler,
``gateway`` exposes the read-only and mutating entry points over
HTTP-shaped records, and ``endpoints`` mounts them on FastAPI.
"""
