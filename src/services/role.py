from typing import List
import logging

from sqlalchemy.ext.asyncio import AsyncSession

import src.repo.role as role_repo
from src.core.errors import ConflictError, NotFoundError, ValidationError
from src.models.role import Role, DEFAULT_ROLE_ID
from src.schemas.role import RoleCreate, RoleUpdate
from src.validator.input import is_non_empty_string, is_optional_string, is_storable_id, normalize_description

log = logging.getLogger(__name__)

NAME_TAKEN = "A role with this name already exists"


async def get_multi(db: AsyncSession, include_inactive: bool = False) -> List[Role]:
    return await role_repo.get_all_roles(db, include_inactive)


async def get(db: AsyncSession, id: int) -> Role:
    role = await role_repo.get_role_by_id(db, id) if is_storable_id(id) else None
    if not role:
        raise NotFoundError("Role not found")
    return role


async def create(db: AsyncSession, *, obj_in: RoleCreate) -> Role:
    supplied = obj_in.model_fields_set

    if not is_non_empty_string(obj_in.name):
        raise ValidationError("Role name is required and must be a non-empty string")
    if not is_optional_string(obj_in.description, "description" in supplied):
        raise ValidationError("Role description must be a string")

    name = obj_in.name.strip()
    if await role_repo.get_role_by_name(db, name):
        raise ConflictError(NAME_TAKEN)

    db_obj = Role(name=name, description=normalize_description(obj_in.description), is_active=True)
    await role_repo.create_role_in_db(db, db_obj)

    log.info(f"Created role {db_obj.id} ({db_obj.name})")
    return db_obj


async def update(db: AsyncSession, *, id: int, obj_in: RoleUpdate) -> Role:
    supplied = obj_in.model_fields_set
    name_supplied = "name" in supplied
    description_supplied = "description" in supplied

    # null, "" and 0/false names do not count as an update on their own
    name_given = obj_in.name not in (None, "", 0)

    if not name_given and not description_supplied:
        raise ValidationError("At least one field (name or description) must be provided")
    if name_supplied and not is_non_empty_string(obj_in.name):
        raise ValidationError("Role name must be a non-empty string")
    if not is_optional_string(obj_in.description, description_supplied):
        raise ValidationError("Role description must be a string")

    db_obj = await get(db, id)

    if name_supplied:
        name = obj_in.name.strip()
        # Same name in another case is a rename of this role, not a conflict
        if name != db_obj.name and await role_repo.get_role_by_name(db, name, exclude_id=db_obj.id):
            raise ConflictError(NAME_TAKEN)
        db_obj.name = name

    if description_supplied:
        db_obj.description = normalize_description(obj_in.description)

    await role_repo.update_role_in_db(db, db_obj)
    return db_obj


async def deactivate(db: AsyncSession, *, id: int) -> Role:
    """Soft delete: the row and every user reference to it are kept."""
    if id == DEFAULT_ROLE_ID:
        raise ValidationError("Cannot deactivate the default User role")

    db_obj = await get(db, id)
    if not db_obj.is_active:
        raise ValidationError("Role is already deactivated")

    db_obj.is_active = False
    await role_repo.update_role_in_db(db, db_obj)

    log.info(f"Deactivated role {db_obj.id} ({db_obj.name})")
    return db_obj
