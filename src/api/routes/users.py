"""
Users API routes - one router per backend, identical contract
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from models.enums import ServiceErrorType
from models.user import UserCreateRequest
from services.users_service import ServiceResult, UsersService

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    ServiceErrorType.VALIDATION_ERROR.value: 400,
    ServiceErrorType.INVALID_IDENTITY.value: 400,
    ServiceErrorType.RESOURCE_NOT_FOUND.value: 404,
}


def failure_response(result: ServiceResult) -> JSONResponse:
    """Convert a failed ServiceResult into the failure envelope"""
    status_code = _ERROR_STATUS.get(result.error_type, 500)
    content = {"success": False, "error": result.error}
    if result.details:
        content["details"] = result.details
    return JSONResponse(status_code=status_code, content=content)


def build_users_router(service_getter: Callable[[], UsersService]) -> APIRouter:
    """Build list/create/delete endpoints bound to one backend's service"""
    router = APIRouter()

    @router.get("")
    async def list_users(service: UsersService = Depends(service_getter)):
        """Fetch all users from this backend"""
        result = await service.list_users()
        if not result.success:
            return failure_response(result)

        return {
            "success": True,
            "users": result.data or [],
            "database": service.backend.database,
            "type": service.backend.type.value,
        }

    @router.post("")
    async def create_user(
        request: UserCreateRequest,
        service: UsersService = Depends(service_getter)
    ):
        """Create a new user in this backend"""
        result = await service.create_user(
            name=request.name,
            email=request.email,
            age=request.age
        )
        if not result.success:
            return failure_response(result)

        return {
            "success": True,
            "user": result.data[0],
            "database": service.backend.database,
            "type": service.backend.type.value,
        }

    @router.delete("")
    async def delete_user_without_id(service: UsersService = Depends(service_getter)):
        """Reject deletes that carry no identity"""
        return failure_response(await service.delete_user(None))

    @router.delete("/{user_id}")
    async def delete_user(user_id: str, service: UsersService = Depends(service_getter)):
        """Delete a user from this backend"""
        result = await service.delete_user(user_id)
        if not result.success:
            return failure_response(result)

        return {
            "success": True,
            "message": "User deleted successfully",
            "database": service.backend.database,
            "type": service.backend.type.value,
        }

    return router
