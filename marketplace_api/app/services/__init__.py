"""
Service layer abstraction.

``product_store`` is the durable key-value store for products and
``product_service`` holds the handlers that run business logic against
it.  The store is passed to the service explicitly, so tests can swap
in a store on a temporary database.
"""
