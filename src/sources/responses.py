"""Status code and body shaping for source operations."""

from typing import Any

from src.sources.models import SourceResponse


def ok(body: Any) -> SourceResponse:
    return SourceResponse(status_code=200, body=body)


def created(source_id: str) -> SourceResponse:
    return SourceResponse(status_code=201, body=source_id)


def error(status_code: int, message: str) -> SourceResponse:
    return SourceResponse(status_code=status_code, body={"error": message})


def bad_request(message: str) -> SourceResponse:
    return error(400, message)


def unauthorized() -> SourceResponse:
    return error(401, "Unauthorised")


def not_found() -> SourceResponse:
    return error(404, "Source not found")


def method_not_allowed() -> SourceResponse:
    return error(405, "Unsupported HTTP method")


def server_error(message: str) -> SourceResponse:
    """Generic failure; the underlying cause is logged, never returned."""
    return error(500, message)
