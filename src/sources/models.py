"""Source entity and the normalized request/response models."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Source:
    id: str = ""
    name: str = ""
    url: str = ""  # free text, no format check


@dataclass
class SourceRequest:
    """Gateway event reduced to what the router needs.

    Both API Gateway payload shapes (v1 REST, v2 HTTP API) map onto this.
    """

    method: str
    source_id: str | None = None
    body: str | bytes | None = None
    caller_scope: str | None = None  # None when no authorizer claims are present


@dataclass
class SourceResponse:
    status_code: int
    body: Any  # JSON-serialisable
