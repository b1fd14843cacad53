from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import get_db
from src.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserPage,
    UserCreated,
    UserUpdated,
)
from src.services import user as user_service
from src.validator.input import parse_int_or_default

router = APIRouter()


@router.get("", response_model=UserPage, responses={400: {"description": "Invalid role parameter"}})
async def read_users(
    db: AsyncSession = Depends(get_db),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    per_page: Optional[str] = Query(None, description="Items per page (default 6)"),
    role: Optional[str] = Query(None, description="Filter users by role ID"),
) -> Any:
    """
    Список пользователей с пагинацией и фильтром по роли.
    """
    return await user_service.get_page(
        db=db,
        page=parse_int_or_default(page, 1),
        per_page=parse_int_or_default(per_page, user_service.DEFAULT_PER_PAGE),
        role_filter=role,
    )


@router.get("/{user_id}", response_model=UserResponse, responses={404: {"description": "User not found"}})
async def read_user(*, db: AsyncSession = Depends(get_db), user_id: str) -> Any:
    """
    Получить пользователя по ID вместе с ролью.
    """
    user = await user_service.get(db=db, id=user_id)
    return {"data": user}


@router.post(
    "",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or role does not exist"}},
)
async def create_user(*, db: AsyncSession = Depends(get_db), user_in: UserCreate) -> Any:
    """
    Создать пользователя. Без role_id назначается роль по умолчанию (1).
    """
    return await user_service.create(db=db, obj_in=user_in)


@router.put(
    "/{user_id}",
    response_model=UserUpdated,
    responses={400: {"description": "Invalid input or role does not exist"}, 404: {"description": "User not found"}},
)
async def update_user(*, db: AsyncSession = Depends(get_db), user_id: str, user_in: UserUpdate) -> Any:
    """
    Обновить имя, должность и/или роль пользователя.
    """
    return await user_service.update(db=db, id=user_id, obj_in=user_in)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(*, db: AsyncSession = Depends(get_db), user_id: str) -> Response:
    """
    Удалить пользователя. Отсутствующий ID не считается ошибкой.
    """
    await user_service.delete(db=db, id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
