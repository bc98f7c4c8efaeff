"""Wordlist Sources API — FastAPI application entry point.

CRUD over wordlist sources stored in DynamoDB. Reads are public; writes
require the write scope forwarded by the API Gateway JWT authorizer.
"""

import re
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config.settings import Settings, get_settings
from src.logging.audit import (
    RequestTimer,
    generate_request_id,
    get_audit_logger,
    request_id_var,
    setup_logging,
)
from src.security.auth import caller_scope_from_event
from src.sources import responses
from src.sources.events import source_id_from_event
from src.sources.factory import get_source_store
from src.sources.models import SourceRequest
from src.sources.service import dispatch
from src.sources.store import SourceStore

VERSION = "1.0.0"

# Every standard method reaches dispatch(), which owns the 405 decision
ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE", "CONNECT"]

# Direct ASGI callers (no Lambda event) address sources by URL
LOCAL_SOURCES_PATH = re.compile(r"^/sources(?:/(?P<source_id>[^/]+))?/?$")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging()
    get_audit_logger().info("Sources API started")
    yield
    get_audit_logger().info("Sources API stopped")


app = FastAPI(
    title="Wordlist Sources API",
    description="CRUD API for wordlist sources",
    version=VERSION,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework errors (unknown path etc.) in the {"error": ...} shape."""
    if exc.status_code == 405:
        resp = responses.method_not_allowed()
        return JSONResponse(status_code=resp.status_code, content=resp.body)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.api_route("/{path:path}", methods=ROUTED_METHODS)
async def sources(
    request: Request,
    store: SourceStore = Depends(get_source_store),
    settings: Settings = Depends(get_settings),
):
    """Normalize the gateway request and hand it to the source router.

    Mangum exposes the raw Lambda event as scope["aws.event"]; the gateway
    has already matched the route, so the id and authorizer claims come
    from the event whatever the stage or resource path.
    """
    logger = get_audit_logger()
    rid = _request_id(request)
    request_id_var.set(rid)

    event = request.scope.get("aws.event")
    if event is not None:
        source_id = source_id_from_event(event)
    else:
        match = LOCAL_SOURCES_PATH.match(request.url.path)
        if match is None:
            return JSONResponse(status_code=404, content={"error": "Not Found"})
        source_id = match.group("source_id")

    source_request = SourceRequest(
        method=request.method,
        source_id=source_id or None,
        body=await request.body(),
        caller_scope=caller_scope_from_event(event),
    )

    with RequestTimer() as timer:
        try:
            result = await dispatch(source_request, store, settings)
            status_code, content = result.status_code, result.body
        except Exception:
            logger.exception(
                "Unhandled error",
                extra={"audit_data": {"method": source_request.method}},
            )
            status_code, content = 500, {"error": "Internal server error"}

    logger.info(
        "Request handled",
        extra={"audit_data": {
            "method": source_request.method,
            "source_id": source_request.source_id,
            "status": status_code,
            "latency_ms": timer.elapsed_ms,
        }},
    )

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={"X-Request-Id": rid},
    )


def _request_id(request: Request) -> str:
    """Prefer the Lambda request id so logs line up with CloudWatch."""
    context = request.scope.get("aws.context")
    aws_request_id = getattr(context, "aws_request_id", None)
    if isinstance(aws_request_id, str) and aws_request_id:
        return aws_request_id
    return generate_request_id()
