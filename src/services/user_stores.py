"""
Concrete user stores binding each adapter to a store name
"""

from typing import Any, Dict, List, Optional

from services.base_store import UserStore
from services.document_store import DocumentStore
from services.relational_store import RelationalStore


class SqlUserStore(UserStore):
    """Users table in the relational store"""

    def __init__(self, table: str, adapter: Optional[RelationalStore] = None):
        super().__init__(table)
        self.adapter = adapter or RelationalStore()

    async def fetch_all(self) -> List[Dict[str, Any]]:
        return await self.adapter.get_all(self.store_name)

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self.adapter.insert(self.store_name, record)

    async def delete(self, identity: str) -> Optional[int]:
        # The relational adapter does not report whether a row matched
        await self.adapter.delete(self.store_name, identity)
        return None


class MongoUserStore(UserStore):
    """Users collection in the document store"""

    def __init__(self, collection: str, adapter: Optional[DocumentStore] = None):
        super().__init__(collection)
        self.adapter = adapter or DocumentStore()

    async def fetch_all(self) -> List[Dict[str, Any]]:
        return await self.adapter.find_all(self.store_name)

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self.adapter.insert_one(self.store_name, record)

    async def delete(self, identity: str) -> Optional[int]:
        return await self.adapter.delete_one(self.store_name, identity)
