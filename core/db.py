"""
Document store access (MongoDB via pymongo's asyncio client).

Purpose:
- Define the small async contract the record service needs from a document
  store: connect, ping, sorted find, find-one, insert, delete-by-id, close
- MongoStore: one long-lived AsyncMongoClient per process, opened at startup
  and closed on shutdown
- MemoryStore: in-process store with the same contract, used by tests and
  selectable with MONGO_URI=memory for local dev without MongoDB
- parse_identifier: the single place where a client-supplied id string is
  turned into an ObjectId

Production notes:
- No indexes are created; email uniqueness is checked by the service
- Driver errors are wrapped as StoreError so routes map them to 500
"""
import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from config.settings import Settings
from core.exceptions import NotFoundError, StoreError

logger = logging.getLogger(__name__)


def parse_identifier(raw: str, not_found_message: str = "Record not found") -> ObjectId:
    """
    Convert an identifier string into an ObjectId.

    A malformed id is reported exactly like a missing record (NotFoundError),
    so callers cannot tell the two apart.
    """
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        logger.debug("Rejected malformed identifier %r", raw)
        raise NotFoundError(not_found_message)


def store_timestamp() -> datetime:
    """
    Current UTC time at the precision BSON dates keep (milliseconds), so the
    value handed to the store is the value read back.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _truncate_dates(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v.replace(microsecond=v.microsecond // 1000 * 1000) if isinstance(v, datetime) else v
        for k, v in document.items()
    }


class DocumentStore(ABC):
    """Async CRUD contract over named collections."""

    @abstractmethod
    async def connect(self) -> bool:
        """Open the connection; return False (never raise) if unreachable."""

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Raise StoreError when the store is not reachable."""

    @abstractmethod
    async def find_sorted(self, collection: str, field: str, descending: bool = True) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def insert_one(self, collection: str, document: Dict[str, Any]) -> ObjectId:
        ...

    @abstractmethod
    async def delete_one(self, collection: str, object_id: ObjectId) -> int:
        """Delete by _id; return the number of removed documents (0 or 1)."""


class MongoStore(DocumentStore):
    def __init__(self, uri: str, db_name: str, timeout_ms: int = 5000):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self.client: Optional[AsyncMongoClient] = None

    def _db(self):
        if self.client is None:
            # Client construction does no I/O; the driver connects lazily.
            self.client = AsyncMongoClient(
                self.uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self.timeout_ms,
            )
        return self.client[self.db_name]

    async def connect(self) -> bool:
        try:
            await self.ping()
        except StoreError as e:
            logger.error("MongoDB connection error: %s", e)
            return False
        logger.info("Connected to MongoDB at %s (db=%s)", self.uri, self.db_name)
        return True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("MongoDB client closed")

    async def ping(self) -> None:
        try:
            await self._db().command("ping")
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def find_sorted(self, collection: str, field: str, descending: bool = True) -> List[Dict[str, Any]]:
        try:
            direction = -1 if descending else 1
            cursor = self._db()[collection].find({}).sort([(field, direction), ("_id", direction)])
            return await cursor.to_list(None)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self._db()[collection].find_one(query)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> ObjectId:
        try:
            result = await self._db()[collection].insert_one(document)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.inserted_id

    async def delete_one(self, collection: str, object_id: ObjectId) -> int:
        try:
            result = await self._db()[collection].delete_one({"_id": object_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.deleted_count


class MemoryStore(DocumentStore):
    """
    Dict-backed store. Set `available = False` to simulate an outage: every
    operation then raises StoreError, just like an unreachable MongoDB.
    """

    def __init__(self):
        self.collections: Dict[str, List[Dict[str, Any]]] = {}
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreError("In-memory store is unavailable")

    async def connect(self) -> bool:
        if not self.available:
            logger.error("In-memory store marked unavailable")
            return False
        logger.info("Using in-memory document store")
        return True

    async def close(self) -> None:
        logger.info("In-memory store closed")

    async def ping(self) -> None:
        self._check()

    async def find_sorted(self, collection: str, field: str, descending: bool = True) -> List[Dict[str, Any]]:
        self._check()
        docs = self.collections.get(collection, [])
        ordered = sorted(
            docs,
            key=lambda d: (d.get(field), d["_id"]),
            reverse=descending,
        )
        return [copy.deepcopy(d) for d in ordered]

    async def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check()
        for doc in self.collections.get(collection, []):
            if all(doc.get(k) == v for k, v in query.items()):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> ObjectId:
        self._check()
        # datetimes keep millisecond precision, as in BSON
        stored = _truncate_dates(copy.deepcopy(document))
        stored.setdefault("_id", ObjectId())
        self.collections.setdefault(collection, []).append(stored)
        return stored["_id"]

    async def delete_one(self, collection: str, object_id: ObjectId) -> int:
        self._check()
        docs = self.collections.get(collection, [])
        for i, doc in enumerate(docs):
            if doc["_id"] == object_id:
                del docs[i]
                return 1
        return 0

    def count(self, collection: str) -> int:
        return len(self.collections.get(collection, []))


def build_store(settings: Settings) -> DocumentStore:
    """Pick the store implementation from configuration."""
    if settings.use_memory_store:
        logger.warning("MONGO_URI is 'memory' - records will not survive a restart")
        return MemoryStore()
    return MongoStore(settings.MONGO_URI, settings.MONGO_DB_NAME, timeout_ms=settings.MONGO_TIMEOUT_MS)
