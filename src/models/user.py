"""
User-related Pydantic models
"""

from typing import Any
from pydantic import BaseModel, ConfigDict
from models.enums import BackendKey, DatabaseType

class Backend(BaseModel):
    """Descriptor echoed in every envelope"""
    model_config = ConfigDict(frozen=True)

    key: BackendKey
    type: DatabaseType
    label: str

    @property
    def database(self) -> str:
        return self.key.value

SUPABASE_BACKEND = Backend(key=BackendKey.SUPABASE, type=DatabaseType.SQL, label="Supabase")
MONGODB_BACKEND = Backend(key=BackendKey.MONGODB, type=DatabaseType.NOSQL, label="MongoDB")

# Presence is checked by the service, not the model, so that a missing field
# is reported with the same envelope on both backends
class UserCreateRequest(BaseModel):
    name: Any = None
    email: Any = None
    age: Any = None
