"""Shared fixtures for the Wordlist Sources API test suite."""

import json

import pytest

from src.config.settings import get_settings
from src.sources.codec import source_to_item
from src.sources.models import Source
from src.sources.store import InMemorySourceStore

WRITE_SCOPE = "https://wordlist.gaul.tech/write"


@pytest.fixture
def sample_source() -> Source:
    """A typical stored source."""
    return Source(
        id="6f1c2a8e-3b7d-4e59-9a0c-1d2e3f4a5b6c",
        name="rockyou",
        url="https://example.com/rockyou.txt",
    )


@pytest.fixture
def memory_store(sample_source) -> InMemorySourceStore:
    """In-memory store pre-seeded with sample_source."""
    return InMemorySourceStore({sample_source.id: source_to_item(sample_source)})


@pytest.fixture
def empty_store() -> InMemorySourceStore:
    return InMemorySourceStore()


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(SOURCES_TABLE_NAME="t", WRITE_SCOPE="scope")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    # Always clear cache on teardown so other tests get fresh settings
    get_settings.cache_clear()


def make_v2_event(method: str, path: str = "/sources", body: dict | str | None = None,
                  scope: str | None = None, source_id: str | None = None,
                  stage: str = "$default") -> dict:
    """API Gateway HTTP API (payload v2) event with an optional JWT scope claim."""
    request_context = {
        "accountId": "123456789012",
        "apiId": "api-id",
        "domainName": "api.example.com",
        "http": {
            "method": method,
            "path": path,
            "protocol": "HTTP/1.1",
            "sourceIp": "203.0.113.10",
            "userAgent": "pytest",
        },
        "requestId": "req-v2",
        "routeKey": f"{method} {path}",
        "stage": stage,
    }
    if scope is not None:
        request_context["authorizer"] = {"jwt": {"claims": {"scope": scope}, "scopes": None}}

    return {
        "version": "2.0",
        "routeKey": f"{method} {path}",
        "rawPath": path,
        "rawQueryString": "",
        "headers": {"content-type": "application/json", "host": "api.example.com"},
        "requestContext": request_context,
        "pathParameters": {"id": source_id} if source_id else None,
        "body": _encode_body(body),
        "isBase64Encoded": False,
    }


def make_v1_event(method: str, path: str = "/sources", body: dict | str | None = None,
                  scope: str | None = None, source_id: str | None = None) -> dict:
    """API Gateway REST API (payload v1) event with an optional Cognito scope claim."""
    request_context = {
        "accountId": "123456789012",
        "apiId": "api-id",
        "httpMethod": method,
        "identity": {"sourceIp": "203.0.113.10"},
        "path": f"/prod{path}",
        "requestId": "req-v1",
        "resourcePath": "/sources/{id}" if source_id else "/sources",
        "stage": "prod",
    }
    if scope is not None:
        request_context["authorizer"] = {"claims": {"scope": scope}}

    return {
        "resource": "/sources/{id}" if source_id else "/sources",
        "path": path,
        "httpMethod": method,
        "headers": {"Content-Type": "application/json", "Host": "api.example.com"},
        "multiValueHeaders": {
            "Content-Type": ["application/json"],
            "Host": ["api.example.com"],
        },
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": {"id": source_id} if source_id else None,
        "stageVariables": None,
        "requestContext": request_context,
        "body": _encode_body(body),
        "isBase64Encoded": False,
    }


def _encode_body(body: dict | str | None) -> str | None:
    if body is None or isinstance(body, str):
        return body
    return json.dumps(body)
