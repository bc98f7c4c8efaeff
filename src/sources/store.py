"""Source store abstraction + in-memory implementation."""

from abc import ABC, abstractmethod

from src.sources.codec import source_from_item, source_to_item
from src.sources.models import Source


class SourceStoreError(Exception):
    """The backing store failed to complete an operation."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Source store {operation} failed: {cause}")


class SourceStore(ABC):
    """Get/scan/put/delete against a single table keyed by id."""

    @abstractmethod
    async def get(self, source_id: str) -> Source | None:
        """Look up one source. Returns None if not found."""
        ...

    @abstractmethod
    async def scan(self) -> list[Source]:
        """Every stored source, in whatever order the backend yields."""
        ...

    @abstractmethod
    async def put(self, source: Source) -> None:
        """Unconditional upsert (full replace)."""
        ...

    @abstractmethod
    async def delete(self, source_id: str) -> None:
        """Unconditional delete. Unknown ids are not an error."""
        ...


class InMemorySourceStore(SourceStore):
    """Dict-backed store for local runs and tests.

    Items are held in DynamoDB typed form so reads go through the same
    integrity checks as the real table.
    """

    def __init__(self, items: dict[str, dict] | None = None):
        self._items: dict[str, dict] = dict(items or {})

    async def get(self, source_id: str) -> Source | None:
        item = self._items.get(source_id)
        if item is None:
            return None
        return source_from_item(item)

    async def scan(self) -> list[Source]:
        return [source_from_item(item) for item in self._items.values()]

    async def put(self, source: Source) -> None:
        self._items[source.id] = source_to_item(source)

    async def delete(self, source_id: str) -> None:
        self._items.pop(source_id, None)
