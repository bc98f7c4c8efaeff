"""Values read from the raw API Gateway event."""

from typing import Any


def source_id_from_event(event: dict[str, Any] | None) -> str | None:
    """The `{id}` path parameter, identical in payload v1 and v2.

    Read from the event rather than the URL so the stage prefix and the
    resource path configured in the gateway do not matter.
    """
    if not isinstance(event, dict):
        return None
    params = event.get("pathParameters") or {}
    if not isinstance(params, dict):
        return None
    source_id = params.get("id")
    return source_id if isinstance(source_id, str) and source_id else None
