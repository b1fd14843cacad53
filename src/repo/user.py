from typing import Optional, List

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from src.core.errors import storage_errors
from src.models.user import User


@storage_errors
async def get_user_by_id(db: AsyncSession, id: int) -> Optional[User]:
    """Получает пользователя по идентификатору вместе с ролью (LEFT JOIN)"""
    result = await db.execute(select(User).options(joinedload(User.role)).where(User.id == id))
    return result.scalars().first()


@storage_errors
async def count_users(db: AsyncSession, role_id: Optional[int] = None) -> int:
    """Считает пользователей с необязательным фильтром по роли"""
    query = select(func.count()).select_from(User)
    if role_id is not None:
        query = query.where(User.role_id == role_id)
    result = await db.execute(query)
    return result.scalar_one()


@storage_errors
async def get_users(
    db: AsyncSession, skip: int = 0, limit: int = 6, role_id: Optional[int] = None
) -> List[User]:
    """Получает страницу пользователей с ролями"""
    query = select(User).options(joinedload(User.role))
    if role_id is not None:
        query = query.where(User.role_id == role_id)
    query = query.order_by(User.id).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


@storage_errors
async def create_user_in_db(db: AsyncSession, user: User) -> None:
    """Создает пользователя в базе данных"""
    db.add(user)
    await db.commit()
    await db.refresh(user)


@storage_errors
async def update_user_in_db(db: AsyncSession, user: User) -> None:
    """Обновляет пользователя в базе данных"""
    db.add(user)
    await db.commit()


@storage_errors
async def delete_user_from_db(db: AsyncSession, id: int) -> bool:
    """Удаляет пользователя из базы данных"""
    result = await db.execute(delete(User).where(User.id == id))
    await db.commit()
    return result.rowcount > 0
