import logging
import math
import random
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

import src.repo.role as role_repo
import src.repo.user as user_repo
from src.core.errors import NotFoundError, ValidationError
from src.models.role import DEFAULT_ROLE_ID
from src.models.user import User
from src.schemas.user import UserCreate, UserUpdate
from src.services import audit
from src.utils.dates import get_utc_now, utc_iso
from src.validator.input import coerce_id, is_non_empty_string, is_optional_string, is_storable_id, parse_positive_int

log = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 6
AVATAR_POOL_SIZE = 10
EMAIL_DOMAIN = "reqres.in"

INVALID_ROLE = "Invalid role_id provided"
INVALID_ROLE_FILTER = "Invalid role parameter. Must be a positive integer."


def split_name(name: str) -> Tuple[str, str]:
    """Splits on the first space; the last name is empty when there is none."""
    first_name, _, last_name = name.partition(" ")
    return first_name, last_name


def make_email(first_name: str, last_name: str) -> str:
    """Only the first word of the last name goes into the address."""
    surname = last_name.split()[0] if last_name.split() else "doe"
    return f"{first_name}.{surname}@{EMAIL_DOMAIN}".lower()


def random_avatar() -> str:
    return f"https://reqres.in/img/faces/{random.randint(1, AVATAR_POOL_SIZE)}-image.jpg"


async def ensure_active_role(db: AsyncSession, raw_role_id: Any) -> int:
    """Resolves a requested role id, which must point at an active role."""
    role_id = coerce_id(raw_role_id)
    if role_id is None or not await role_repo.get_active_role_by_id(db, role_id):
        raise ValidationError(INVALID_ROLE)
    return role_id


async def get(db: AsyncSession, id: Any) -> User:
    user_id = coerce_id(id)
    user = await user_repo.get_user_by_id(db, user_id) if user_id is not None else None
    if not user:
        raise NotFoundError("User not found")
    return user


async def get_page(
    db: AsyncSession,
    *,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
    role_filter: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Returns one page of users with their roles.

    The role filter is validated before any query runs.
    """
    role_id = None
    if role_filter is not None:
        role_id = parse_positive_int(role_filter, INVALID_ROLE_FILTER)

    offset = (page - 1) * per_page
    total, users = 0, []
    # Role ids and offsets past the INTEGER range cannot match stored rows
    if role_id is None or is_storable_id(role_id):
        total = await user_repo.count_users(db, role_id)
        if is_storable_id(offset):
            users = await user_repo.get_users(db, skip=offset, limit=per_page, role_id=role_id)

    return {
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": math.ceil(total / per_page),
        "data": users,
    }


async def create(db: AsyncSession, *, obj_in: UserCreate) -> Dict[str, Any]:
    if not is_non_empty_string(obj_in.name) or not is_non_empty_string(obj_in.job):
        raise ValidationError("Name and job are required")

    # Falsy role ids (absent, null, 0) fall back to the default role
    role_id = await ensure_active_role(db, obj_in.role_id or DEFAULT_ROLE_ID)

    first_name, last_name = split_name(obj_in.name)
    db_obj = User(
        first_name=first_name,
        last_name=last_name,
        email=make_email(first_name, last_name),
        avatar=random_avatar(),
        job=obj_in.job,
        role_id=role_id,
    )
    await user_repo.create_user_in_db(db, db_obj)

    # The response echoes the request, not the derived columns
    return {
        "name": obj_in.name,
        "job": obj_in.job,
        "id": db_obj.id,
        "createdAt": utc_iso(get_utc_now()),
    }


async def update(db: AsyncSession, *, id: Any, obj_in: UserUpdate) -> Dict[str, Any]:
    if not obj_in.name and not obj_in.job and not obj_in.role_id:
        raise ValidationError("Name, job, or role_id is required")
    if not is_optional_string(obj_in.name, bool(obj_in.name)):
        raise ValidationError("Name must be a string")
    if not is_optional_string(obj_in.job, bool(obj_in.job)):
        raise ValidationError("Job must be a string")

    db_obj = await get(db, id)
    previous_role_id = db_obj.role_id

    role_id = None
    if obj_in.role_id:
        role_id = await ensure_active_role(db, obj_in.role_id)

    if obj_in.name:
        db_obj.first_name, db_obj.last_name = split_name(obj_in.name)
    if obj_in.job:
        db_obj.job = obj_in.job
    if role_id is not None:
        db_obj.role_id = role_id

    await user_repo.update_user_in_db(db, db_obj)

    if role_id is not None and role_id != previous_role_id:
        await audit.record_role_change(db_obj.id, previous_role_id, role_id)

    return {
        "name": obj_in.name or "",
        "job": obj_in.job or "",
        "updatedAt": utc_iso(get_utc_now()),
    }


async def delete(db: AsyncSession, *, id: Any) -> None:
    """Hard delete; a missing user is not an error."""
    user_id = coerce_id(id)
    if user_id is None:
        return
    if not await user_repo.delete_user_from_db(db, user_id):
        log.debug(f"Delete of missing user {id} ignored")
