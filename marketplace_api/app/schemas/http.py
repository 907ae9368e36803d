"""
HTTP-shaped records exchanged with the gateway entry points.

Headers are kept as an ordered list of ``(name, value)`` pairs and
bodies as raw bytes.  ``upgrade`` is only set on a response returned by
the read-only entry point for a state-changing method; it tells the
caller to re-issue the request to the mutating entry point.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    method: str
    url: str
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""
    upgrade: Optional[bool] = None


class HttpResponse(BaseModel):
    status_code: int
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""
    upgrade: Optional[bool] = None
