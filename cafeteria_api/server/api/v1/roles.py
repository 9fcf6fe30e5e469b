"""
Role administration endpoints (admin only).
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.core.models.io.roles import RoleCreate, RoleRead, RoleUpdate, UserRoleRead
from cafeteria_api.server.services.deps import AdminDep, RoleServiceDep

router = APIRouter(tags=["roles"])


@router.get("", response_model=List[RoleRead], summary="List Roles")
async def list_roles(admin: AdminDep, roles: RoleServiceDep) -> List[RoleRead]:
    return [RoleRead.model_validate(role) for role in await roles.list_roles()]


@router.get(
    "/{role_id}",
    response_model=RoleRead,
    summary="Get Role",
    responses={404: {"model": ErrorResponse, "description": "Role not found"}},
)
async def get_role(role_id: int, admin: AdminDep, roles: RoleServiceDep) -> RoleRead:
    role = await roles.get_role(role_id)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Role {role_id} not found")
    return RoleRead.model_validate(role)


@router.post(
    "",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Role",
    responses={409: {"model": ErrorResponse, "description": "Role name already exists"}},
)
async def create_role(data: RoleCreate, admin: AdminDep, roles: RoleServiceDep) -> RoleRead:
    return RoleRead.model_validate(await roles.create_role(data))


@router.put(
    "/{role_id}",
    response_model=RoleRead,
    summary="Update Role",
    responses={
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def update_role(role_id: int, data: RoleUpdate, admin: AdminDep, roles: RoleServiceDep) -> RoleRead:
    return RoleRead.model_validate(await roles.update_role(role_id, data))


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Role",
    description="Delete a role and every assignment of it.",
)
async def delete_role(role_id: int, admin: AdminDep, roles: RoleServiceDep) -> None:
    await roles.delete_role(role_id)


@router.post(
    "/{role_id}/users/{user_id}",
    response_model=UserRoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Role",
    description="Grant a role to a user. Granting a role the user already holds is a no-op.",
    responses={404: {"model": ErrorResponse, "description": "Role or user not found"}},
)
async def assign_role(role_id: int, user_id: int, admin: AdminDep, roles: RoleServiceDep) -> UserRoleRead:
    return UserRoleRead.model_validate(await roles.assign(role_id, user_id))


@router.delete(
    "/{role_id}/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unassign Role",
    responses={404: {"model": ErrorResponse, "description": "Role, user or assignment not found"}},
)
async def unassign_role(role_id: int, user_id: int, admin: AdminDep, roles: RoleServiceDep) -> None:
    await roles.unassign(role_id, user_id)
