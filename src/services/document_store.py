"""
Document store adapter - thin pass-through to MongoDB via the pymongo async driver

Collections are schema-less: no uniqueness or range rules are enforced here,
and timestamps are stamped by the adapter rather than the database.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from database.mongo_connection import get_mongo_database
from utils.exceptions import DocumentQueryError, IdentityFormatError, InsertError

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with milliseconds and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Render ObjectId values as strings"""
    if document is None:
        return None
    return {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in document.items()
    }


class DocumentStore:
    """findAll / insertOne / deleteOne / updateOne over a named collection"""

    def __init__(self, database_getter: Callable[[], Awaitable[Any]] = get_mongo_database):
        self._database_getter = database_getter

    async def get_collection(self, collection_name: str):
        """Get a collection (the document equivalent of a table)"""
        db = await self._database_getter()
        return db[collection_name]

    async def find_all(self, collection_name: str) -> List[Dict[str, Any]]:
        """Return every document, newest first; a missing collection yields []"""
        try:
            collection = await self.get_collection(collection_name)
            cursor = collection.find({}).sort([("createdAt", -1), ("_id", -1)])
            documents = await cursor.to_list()
        except PyMongoError as e:
            logger.error(f"MongoDB find failed on {collection_name}: {e}")
            raise DocumentQueryError(f"Failed to read {collection_name}: {e}") from e

        return [_serialize_document(document) for document in documents]

    async def insert_one(self, collection_name: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """Stamp timestamps, insert, and return the stored document"""
        timestamp = utc_timestamp()
        document_with_timestamp = {
            **document,
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }

        try:
            collection = await self.get_collection(collection_name)
            result = await collection.insert_one(document_with_timestamp)
            stored = await collection.find_one({"_id": result.inserted_id})
        except PyMongoError as e:
            logger.error(f"MongoDB insert failed on {collection_name}: {e}")
            raise InsertError(f"Failed to insert into {collection_name}: {e}") from e

        if stored is None:
            raise InsertError(f"Inserted document {result.inserted_id} could not be read back")

        return _serialize_document(stored)

    async def delete_one(self, collection_name: str, identity: str) -> int:
        """Delete by identity and return the deleted count (0 or 1)"""
        object_id = self.to_native_id(identity)

        try:
            collection = await self.get_collection(collection_name)
            result = await collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"MongoDB delete failed on {collection_name}: {e}")
            raise DocumentQueryError(f"Failed to delete from {collection_name}: {e}") from e

        return result.deleted_count

    async def update_one(self, collection_name: str, identity: str, patch: Dict[str, Any]) -> int:
        """Merge the given fields into a document and return the matched count"""
        object_id = self.to_native_id(identity)

        update_with_timestamp = {
            **patch,
            "updatedAt": utc_timestamp(),
        }
        # Identity is immutable
        update_with_timestamp.pop("_id", None)

        try:
            collection = await self.get_collection(collection_name)
            result = await collection.update_one({"_id": object_id}, {"$set": update_with_timestamp})
        except PyMongoError as e:
            logger.error(f"MongoDB update failed on {collection_name}: {e}")
            raise DocumentQueryError(f"Failed to update {collection_name}: {e}") from e

        return result.matched_count

    @staticmethod
    def to_native_id(identity: Optional[str]) -> ObjectId:
        """Convert an external identity string to an ObjectId"""
        # ObjectId(None) would mint a fresh id
        if not isinstance(identity, str):
            raise IdentityFormatError(f"Invalid document identity: {identity!r}")
        try:
            return ObjectId(identity.strip())
        except InvalidId:
            raise IdentityFormatError(f"Invalid document identity: {identity!r}")
