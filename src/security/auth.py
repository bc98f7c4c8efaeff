"""Write-scope authorization for source mutations.

API Gateway verifies the JWT before the request reaches us; this module
only reads the `scope` claim the authorizer forwarded and compares it
against the single configured write scope.
"""

import hmac
from typing import Any

READ_METHODS = frozenset({"GET"})


def caller_scope_from_event(event: dict[str, Any] | None) -> str | None:
    """Extract the scope claim from either API Gateway payload shape.

    v2 (HTTP API, JWT authorizer): requestContext.authorizer.jwt.claims.scope
    v1 (REST API, Cognito authorizer): requestContext.authorizer.claims.scope
    v1 (REST API, Lambda authorizer context): requestContext.authorizer.scope
    """
    if not isinstance(event, dict):
        return None

    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    if not isinstance(authorizer, dict):
        return None

    jwt = authorizer.get("jwt")
    if isinstance(jwt, dict):
        scope = (jwt.get("claims") or {}).get("scope")
    elif isinstance(authorizer.get("claims"), dict):
        scope = authorizer["claims"].get("scope")
    else:
        scope = authorizer.get("scope")

    return scope if isinstance(scope, str) else None


def requires_write_scope(method: str) -> bool:
    """Reads are public; everything else needs the write scope."""
    return method.upper() not in READ_METHODS


def has_write_scope(caller_scope: str | None, write_scope: str) -> bool:
    """Exact match against the one recognised write scope."""
    if not caller_scope or not write_scope:
        return False
    return hmac.compare_digest(caller_scope.encode(), write_scope.encode())
