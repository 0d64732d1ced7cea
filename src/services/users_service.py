"""
Users service - business logic shared by both backends
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.settings import USERS_COLLECTION, USERS_TABLE
from models.enums import ServiceErrorType
from models.user import MONGODB_BACKEND, SUPABASE_BACKEND, Backend
from services.base_store import UserStore
from services.user_stores import MongoUserStore, SqlUserStore
from utils.exceptions import (
    ConstraintError,
    IdentityFormatError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_FAILURE_MESSAGES = {
    "fetch": "Failed to fetch users from {label}",
    "create": "Failed to create user in {label}",
    "delete": "Failed to delete user from {label}",
}

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: Optional[str] = None


def is_present(value: Any) -> bool:
    """A field is present unless it is missing, null or blank text"""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def coerce_age(value: Any) -> int:
    """Coerce age to an integer the way parseInt reads a leading integer"""
    if isinstance(value, bool):
        raise ValidationError("Age must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Age must be an integer")
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    raise ValidationError("Age must be an integer")


class UsersService:
    """Service for user operations against one backend"""

    def __init__(self, backend: Backend, store: UserStore):
        self.backend = backend
        self.store = store
        logger.info(f"UsersService initialized for {backend.label} ({backend.type.value}) store: {store.store_name}")

    async def list_users(self) -> ServiceResult:
        """Fetch all users from the backend, newest first"""
        logger.info(f"Fetching users from {self.backend.label} ({self.backend.type.value})...")
        try:
            users = await self.store.fetch_all()
        except Exception as e:
            return self._failure("fetch", e)

        users = users or []
        logger.info(f"Found {len(users)} users in {self.backend.label}")
        return ServiceResult(success=True, data=users, count=len(users))

    async def create_user(self, name: Any, email: Any, age: Any) -> ServiceResult:
        """
        Create a new user

        Args:
            name: User name (required)
            email: Email address (required; uniqueness depends on the backend)
            age: Age as integer or text (required; range checks depend on the backend)

        Returns:
            ServiceResult with the stored user as its only data item
        """
        try:
            if not (is_present(name) and is_present(email) and is_present(age)):
                raise ValidationError("Name, email, and age are required")
            record = {"name": name, "email": email, "age": coerce_age(age)}
        except ValidationError as e:
            logger.info(f"Rejected user for {self.backend.label}: {e}")
            return ServiceResult(
                success=False,
                error=str(e),
                error_type=ServiceErrorType.VALIDATION_ERROR.value
            )

        logger.info(f"Creating user in {self.backend.label}: {record}")
        try:
            user = await self.store.insert(record)
        except Exception as e:
            return self._failure("create", e)

        logger.info(f"User created in {self.backend.label}: {user}")
        return ServiceResult(success=True, data=[user], count=1)

    async def delete_user(self, identity: Optional[str]) -> ServiceResult:
        """
        Delete a user by identity

        A zero deleted-count is reported as not found. Backends that cannot
        observe the count report success.
        """
        if not is_present(identity):
            return ServiceResult(
                success=False,
                error="User ID is required",
                error_type=ServiceErrorType.VALIDATION_ERROR.value
            )

        logger.info(f"Deleting user from {self.backend.label}: {identity}")
        try:
            deleted = await self.store.delete(identity)
            if deleted == 0:
                raise NotFoundError(f"No user with id {identity}")
        except Exception as e:
            return self._failure("delete", e)

        logger.info(f"User deleted from {self.backend.label} successfully")
        return ServiceResult(success=True, count=deleted if deleted is not None else 0)

    def _failure(self, operation: str, exc: Exception) -> ServiceResult:
        """Log an adapter failure and convert it to a ServiceResult"""
        if isinstance(exc, NotFoundError):
            logger.info(f"{self.backend.label} {operation}: {exc}")
            return ServiceResult(
                success=False,
                error="User not found",
                error_type=ServiceErrorType.RESOURCE_NOT_FOUND.value,
                details=str(exc)
            )

        if isinstance(exc, IdentityFormatError):
            logger.warning(f"{self.backend.label} {operation} rejected identity: {exc}")
            return ServiceResult(
                success=False,
                error="Invalid user ID",
                error_type=ServiceErrorType.INVALID_IDENTITY.value,
                details=str(exc)
            )

        logger.error(f"{self.backend.label} {operation} error: {exc}", exc_info=True)
        error_type = (
            ServiceErrorType.CONSTRAINT_ERROR if isinstance(exc, ConstraintError)
            else ServiceErrorType.DATABASE_ERROR
        )
        return ServiceResult(
            success=False,
            error=_FAILURE_MESSAGES[operation].format(label=self.backend.label),
            error_type=error_type.value,
            details=str(exc) or type(exc).__name__
        )


# Global service instances
_supabase_users_service: Optional[UsersService] = None
_mongodb_users_service: Optional[UsersService] = None

def get_supabase_users_service() -> UsersService:
    """Get the global relational users service instance"""
    global _supabase_users_service
    if _supabase_users_service is None:
        _supabase_users_service = UsersService(SUPABASE_BACKEND, SqlUserStore(USERS_TABLE))
    return _supabase_users_service

def get_mongodb_users_service() -> UsersService:
    """Get the global document users service instance"""
    global _mongodb_users_service
    if _mongodb_users_service is None:
        _mongodb_users_service = UsersService(MONGODB_BACKEND, MongoUserStore(USERS_COLLECTION))
    return _mongodb_users_service
