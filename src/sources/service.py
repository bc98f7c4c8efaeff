"""Request routing and the source CRUD operations.

dispatch() is the single entry point: it takes a normalized SourceRequest
and an explicit store, and always returns a SourceResponse. Domain errors
are turned into responses here and never propagate to the web layer.
"""

import uuid

from src.config.settings import Settings
from src.logging.audit import get_audit_logger
from src.security.auth import has_write_scope, requires_write_scope
from src.sources import responses
from src.sources.codec import (
    CorruptRecordError,
    SourceDecodeError,
    decode_source,
    encode_source,
    encode_sources,
)
from src.sources.models import Source, SourceRequest, SourceResponse
from src.sources.store import SourceStore, SourceStoreError

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

# Operation name -> message returned on a 500
FAILURE_MESSAGES = {
    "list": "Failed to retrieve sources",
    "get": "Failed to retrieve source",
    "create": "Failed to store source",
    "update": "Failed to store source",
    "delete": "Failed to delete source",
}


async def dispatch(request: SourceRequest, store: SourceStore, settings: Settings) -> SourceResponse:
    """Route a request to exactly one operation.

    Pipeline: Method check -> Write scope (non-GET) -> Operation
    """
    logger = get_audit_logger()
    method = request.method.upper()
    source_id = request.source_id or None

    if method not in SUPPORTED_METHODS:
        return responses.method_not_allowed()

    if requires_write_scope(method) and not has_write_scope(request.caller_scope, settings.write_scope):
        logger.warning(
            "Write rejected: missing or invalid scope",
            extra={"audit_data": {
                "method": method,
                "source_id": source_id,
                "scope_present": request.caller_scope is not None,
            }},
        )
        return responses.unauthorized()

    if method == "GET":
        if source_id is None:
            return await _run("list", list_sources, store)
        return await _run("get", get_source, store, source_id)

    if method == "POST":
        return await _run("create", create_source, store, request.body)

    if method == "PUT":
        return await _run("update", update_source, store, request.body, source_id)

    # DELETE
    if source_id is None:
        return responses.bad_request("id required for delete")
    return await _run("delete", delete_source, store, source_id)


async def _run(operation: str, fn, *args) -> SourceResponse:
    """Invoke an operation, mapping domain errors to responses."""
    logger = get_audit_logger()
    try:
        return await fn(*args)
    except SourceDecodeError as exc:
        logger.info(
            "Invalid request body",
            extra={"audit_data": {"operation": operation, "reason": str(exc)}},
        )
        return responses.bad_request("Invalid request body")
    except CorruptRecordError as exc:
        logger.error(
            "Corrupt source record",
            extra={"audit_data": {
                "operation": operation,
                "field": exc.field,
                "stored_id": exc.item_id,
            }},
        )
        return responses.server_error(FAILURE_MESSAGES[operation])
    except SourceStoreError as exc:
        logger.error(
            "Source store failure",
            extra={"audit_data": {
                "operation": operation,
                "store_operation": exc.operation,
                "error": str(exc.cause),
            }},
        )
        return responses.server_error(FAILURE_MESSAGES[operation])


async def list_sources(store: SourceStore) -> SourceResponse:
    sources = await store.scan()
    return responses.ok(encode_sources(sources))


async def get_source(store: SourceStore, source_id: str) -> SourceResponse:
    source = await store.get(source_id)
    if source is None:
        return responses.not_found()
    return responses.ok(encode_source(source))


async def create_source(store: SourceStore, body: str | bytes | None) -> SourceResponse:
    """Store a new source under a freshly generated id.

    Any id in the body is ignored.
    """
    decoded = decode_source(body)
    source = Source(id=str(uuid.uuid4()), name=decoded.name, url=decoded.url)
    await store.put(source)
    return responses.created(source.id)


async def update_source(
    store: SourceStore, body: str | bytes | None, path_id: str | None = None
) -> SourceResponse:
    """Full replace of the source named by the body id (or the path id).

    No existence check: updating an unknown id creates it. When both ids
    are given they must agree.
    """
    source = decode_source(body)
    if source.id and path_id and source.id != path_id:
        return responses.bad_request("id in path and body do not match")
    if not source.id:
        source.id = path_id or ""
    if not source.id:
        return responses.bad_request("id required for update")
    await store.put(source)
    return responses.ok(source.id)


async def delete_source(store: SourceStore, source_id: str) -> SourceResponse:
    await store.delete(source_id)
    return responses.ok(source_id)
