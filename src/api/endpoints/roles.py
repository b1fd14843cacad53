from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import get_db
from src.schemas.role import (
    RoleCreate,
    RoleUpdate,
    RoleResponse,
    RoleListResponse,
    RoleMessageResponse,
)
from src.services import role as role_service
from src.validator.input import parse_positive_int

router = APIRouter()

INVALID_ROLE_ID = "Invalid role ID. Must be a positive integer."

ERROR_RESPONSES = {
    400: {"description": "Invalid input data or role ID"},
    404: {"description": "Role not found"},
    409: {"description": "Role name already exists"},
}


@router.get("", response_model=RoleListResponse)
async def read_roles(
    db: AsyncSession = Depends(get_db),
    show_all: Optional[str] = Query(None, alias="all", description="Pass 'true' to include deactivated roles"),
) -> Any:
    """
    Список ролей, отсортированный по имени.
    По умолчанию возвращаются только активные роли.
    """
    roles = await role_service.get_multi(db=db, include_inactive=show_all == "true")
    return {"data": roles}


@router.get("/{role_id}", response_model=RoleResponse, responses=ERROR_RESPONSES)
async def read_role(*, db: AsyncSession = Depends(get_db), role_id: str) -> Any:
    """
    Получить роль по ID (в том числе деактивированную).
    """
    role = await role_service.get(db=db, id=parse_positive_int(role_id, INVALID_ROLE_ID))
    return {"data": role}


@router.post(
    "",
    response_model=RoleMessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_role(*, db: AsyncSession = Depends(get_db), role_in: RoleCreate) -> Any:
    """
    Создать новую роль. Имя уникально без учета регистра.
    """
    role = await role_service.create(db=db, obj_in=role_in)
    return {"message": "Role created successfully", "data": role}


@router.put("/{role_id}", response_model=RoleMessageResponse, responses=ERROR_RESPONSES)
async def update_role(*, db: AsyncSession = Depends(get_db), role_id: str, role_in: RoleUpdate) -> Any:
    """
    Обновить имя и/или описание роли.
    """
    id = parse_positive_int(role_id, INVALID_ROLE_ID)
    role = await role_service.update(db=db, id=id, obj_in=role_in)
    return {"message": "Role updated successfully", "data": role}


@router.delete("/{role_id}", response_model=RoleMessageResponse, responses=ERROR_RESPONSES)
async def deactivate_role(*, db: AsyncSession = Depends(get_db), role_id: str) -> Any:
    """
    Деактивировать роль (мягкое удаление). Пользователи сохраняют role_id.
    """
    id = parse_positive_int(role_id, INVALID_ROLE_ID)
    role = await role_service.deactivate(db=db, id=id)
    return {"message": "Role deactivated successfully", "data": role}
