"""Factory for source store backends."""

from src.config.settings import get_settings
from src.sources.store import InMemorySourceStore, SourceStore

_store: SourceStore | None = None


def get_source_store() -> SourceStore:
    """Get the source store singleton for this process.

    Used as a FastAPI dependency, so tests swap it via dependency_overrides.
    """
    global _store
    if _store is not None:
        return _store

    settings = get_settings()
    backend = settings.source_store_backend

    if backend == "dynamodb":
        # Lazy import keeps boto3 off the import path for memory-only runs
        from src.sources.dynamodb_store import DynamoDBSourceStore
        _store = DynamoDBSourceStore(
            table_name=settings.sources_table_name,
            region=settings.aws_region,
        )
        return _store

    if backend == "memory":
        _store = InMemorySourceStore()
        return _store

    raise ValueError(f"Unknown source store backend: {backend}")
