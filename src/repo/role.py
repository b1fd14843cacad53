from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.core.errors import storage_errors
from src.models.role import Role


@storage_errors
async def get_role_by_id(db: AsyncSession, id: int) -> Optional[Role]:
    """Получает роль по идентификатору"""
    result = await db.execute(select(Role).where(Role.id == id))
    return result.scalars().first()


@storage_errors
async def get_active_role_by_id(db: AsyncSession, id: int) -> Optional[Role]:
    """Получает роль по идентификатору, только если она активна"""
    result = await db.execute(select(Role).where((Role.id == id) & (Role.is_active.is_(True))))
    return result.scalars().first()


@storage_errors
async def get_role_by_name(db: AsyncSession, name: str, exclude_id: Optional[int] = None) -> Optional[Role]:
    """
    Ищет роль по имени без учета регистра среди всех ролей.
    Регистр приводится в SQL, так же как в уникальном индексе по lower(name).
    """
    query = select(Role).where(func.lower(Role.name) == func.lower(name))
    if exclude_id is not None:
        query = query.where(Role.id != exclude_id)
    result = await db.execute(query)
    return result.scalars().first()


@storage_errors
async def get_all_roles(db: AsyncSession, include_inactive: bool = False) -> List[Role]:
    """Получает список ролей, отсортированный по имени"""
    query = select(Role)
    if not include_inactive:
        query = query.where(Role.is_active.is_(True))
    result = await db.execute(query.order_by(Role.name, Role.id))
    return result.scalars().all()


@storage_errors
async def create_role_in_db(db: AsyncSession, role: Role) -> None:
    """Создает роль в базе данных"""
    db.add(role)
    await db.commit()
    await db.refresh(role)


@storage_errors
async def update_role_in_db(db: AsyncSession, role: Role) -> None:
    """Обновляет роль в базе данных"""
    db.add(role)
    await db.commit()
    await db.refresh(role)
