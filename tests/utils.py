import random
import string
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.models.role import Role
from src.models.user import User


def random_string(length: int = 10) -> str:
    """Генерирует случайную строку заданной длины."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


async def create_test_role(
    db: AsyncSession,
    name: Optional[str] = None,
    description: Optional[str] = "Test role",
    is_active: bool = True,
) -> Role:
    """Создает тестовую роль в БД."""
    role = Role(name=name or f"Role {random_string(6)}", description=description, is_active=is_active)
    db.add(role)
    await db.commit()
    await db.refresh(role)
    return role


async def create_test_user(db: AsyncSession, role_id: int = 1, job: str = "Tester") -> User:
    """Создает тестового пользователя в БД."""
    first_name = random_string(6).capitalize()
    user = User(
        first_name=first_name,
        last_name="Test",
        email=f"{first_name.lower()}.test@reqres.in",
        avatar="https://reqres.in/img/faces/3-image.jpg",
        job=job,
        role_id=role_id,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
