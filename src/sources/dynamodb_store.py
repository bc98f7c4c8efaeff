"""DynamoDB-backed source store."""

import asyncio

from botocore.exceptions import BotoCoreError, ClientError

from src.sources.codec import source_from_item, source_to_item
from src.sources.models import Source
from src.sources.store import SourceStore, SourceStoreError


class DynamoDBSourceStore(SourceStore):
    """One table, primary key `id` (S), attributes `name` and `url` (S).

    Uses the low-level client so items keep their attribute type tags and
    the codec can reject records stored with the wrong types.
    """

    def __init__(self, table_name: str, region: str = "eu-west-2"):
        self._table_name = table_name
        self._region = region
        self._client = None

    def _get_client(self):
        """Lazy-init boto3 DynamoDB client, reused across invocations."""
        if self._client is None:
            import boto3

            self._client = boto3.client("dynamodb", region_name=self._region)
        return self._client

    def _key(self, source_id: str) -> dict:
        return {"id": {"S": source_id}}

    async def get(self, source_id: str) -> Source | None:
        item = await self._call("get", self._get_item, source_id)
        if item is None:
            return None
        return source_from_item(item)

    async def scan(self) -> list[Source]:
        items = await self._call("scan", self._scan_items)
        return [source_from_item(item) for item in items]

    async def put(self, source: Source) -> None:
        await self._call("put", self._put_item, source_to_item(source))

    async def delete(self, source_id: str) -> None:
        await self._call("delete", self._delete_item, source_id)

    async def _call(self, operation: str, fn, *args):
        """Run a blocking boto3 call off the event loop, wrapping AWS errors."""
        try:
            return await asyncio.to_thread(fn, *args)
        except (BotoCoreError, ClientError) as exc:
            raise SourceStoreError(operation, exc) from exc

    def _get_item(self, source_id: str) -> dict | None:
        resp = self._get_client().get_item(
            TableName=self._table_name,
            Key=self._key(source_id),
        )
        return resp.get("Item")

    def _scan_items(self) -> list[dict]:
        # Single page only: scans are not paginated
        resp = self._get_client().scan(TableName=self._table_name)
        return resp.get("Items", [])

    def _put_item(self, item: dict) -> None:
        self._get_client().put_item(TableName=self._table_name, Item=item)

    def _delete_item(self, source_id: str) -> None:
        self._get_client().delete_item(
            TableName=self._table_name,
            Key=self._key(source_id),
        )
