"""
Document database connection management

The MongoDB client is created lazily on first use and cached for the rest of
the process. Concurrent first use is serialized by an asyncio lock so that all
waiting requests share a single connection attempt.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from config import settings

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"


class MongoConnection:
    """Process-scoped MongoDB client holder"""

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None):
        self._uri = uri
        self._db_name = db_name
        self._lock = asyncio.Lock()
        self._client: Optional[AsyncMongoClient] = None
        self._db: Optional[AsyncDatabase] = None
        self.state = ConnectionState.UNINITIALIZED

    async def get_database(self) -> AsyncDatabase:
        """Return the cached database handle, connecting on first use"""
        if self.state == ConnectionState.READY:
            return self._db

        async with self._lock:
            # Another request may have finished connecting while we waited
            if self.state == ConnectionState.READY:
                return self._db

            self.state = ConnectionState.CONNECTING
            try:
                await self._connect()
            except Exception:
                self.state = ConnectionState.UNINITIALIZED
                raise

            self.state = ConnectionState.READY
            return self._db

    async def _connect(self):
        uri = self._uri or settings.MONGODB_URI
        db_name = self._db_name or settings.MONGODB_DB

        if not uri:
            raise ValueError(
                "MongoDB connection URI required. "
                "Set MONGODB_URI in .env or the process environment"
            )

        client = AsyncMongoClient(
            uri,
            maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            socketTimeoutMS=settings.MONGODB_SOCKET_TIMEOUT_MS,
        )

        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            await client.close()
            raise

        self._client = client
        self._db = client[db_name]
        logger.info(f"Connected to MongoDB database '{db_name}' successfully")

    async def close(self):
        """Close the cached client (application shutdown only)"""
        async with self._lock:
            if self._client is not None:
                await self._client.close()
                logger.info("MongoDB connection closed")
            self._client = None
            self._db = None
            self.state = ConnectionState.UNINITIALIZED


# Global connection holder
mongo_connection = MongoConnection()

async def get_mongo_database() -> AsyncDatabase:
    """Get the shared MongoDB database handle"""
    return await mongo_connection.get_database()

async def close_mongo():
    """Close the shared MongoDB connection"""
    await mongo_connection.close()
