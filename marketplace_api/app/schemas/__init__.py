"""
Pydantic schema definitions.

``product`` holds the persisted record and the typed request/response
objects passed to the handlers; ``http`` holds the HTTP-shaped records
exchanged with the entry points.
"""
