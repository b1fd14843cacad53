"""
Schema bootstrap for the roles/users datastore.

``initialize`` is idempotent: it is run on every application start and from
test setup. Once the schema is established it only performs existence and
emptiness checks.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import func, insert, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from src.core.errors import StorageError
from src.models.role import Role, DEFAULT_ROLE_ID
from src.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_ROLES: List[Dict[str, Any]] = [
    {"id": DEFAULT_ROLE_ID, "name": "User", "description": "Default user role with basic access"},
    {"id": 2, "name": "Admin", "description": "Administrator with full system access"},
    {"id": 3, "name": "Moderator", "description": "Moderator with content management access"},
]

SAMPLE_USERS: List[Dict[str, Any]] = [
    {
        "email": "george.bluth@reqres.in",
        "first_name": "George",
        "last_name": "Bluth",
        "avatar": "https://reqres.in/img/faces/1-image.jpg",
        "role_id": 2,
    },
    {
        "email": "janet.weaver@reqres.in",
        "first_name": "Janet",
        "last_name": "Weaver",
        "avatar": "https://reqres.in/img/faces/2-image.jpg",
        "role_id": DEFAULT_ROLE_ID,
    },
]

ADD_ROLE_ID_COLUMN = f"ALTER TABLE users ADD COLUMN role_id INTEGER DEFAULT {DEFAULT_ROLE_ID} REFERENCES roles(id)"


async def _has_table(conn: AsyncConnection, name: str) -> bool:
    return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(name))


async def _column_names(conn: AsyncConnection, table: str) -> List[str]:
    columns = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_columns(table))
    return [column["name"] for column in columns]


async def _count(conn: AsyncConnection, table) -> int:
    result = await conn.execute(select(func.count()).select_from(table))
    return result.scalar_one()


async def _seed_rows(engine: AsyncEngine, table, rows: List[Dict[str, Any]], label: str) -> int:
    """Inserts rows one transaction at a time; a failed row is logged and skipped."""
    inserted = 0
    for row in rows:
        try:
            async with engine.begin() as conn:
                await conn.execute(insert(table).values(**row))
            inserted += 1
            logger.info(f"Inserted sample {label}: {row}")
        except SQLAlchemyError as e:
            logger.error(f"Error inserting sample {label} {row}: {e}")
    return inserted


async def _ensure_roles(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: Role.__table__.create(sync_conn, checkfirst=True))
        roles_count = await _count(conn, Role.__table__)

    if roles_count == 0:
        logger.info("Empty roles table detected, inserting default roles...")
        await _seed_rows(engine, Role.__table__, DEFAULT_ROLES, "role")


async def _ensure_users(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        table_existed = await _has_table(conn, "users")
        await conn.run_sync(lambda sync_conn: User.__table__.create(sync_conn, checkfirst=True))

        if table_existed and "role_id" not in await _column_names(conn, "users"):
            logger.info("Adding role_id column to existing users table")
            await conn.execute(text(ADD_ROLE_ID_COLUMN))

        users_count = await _count(conn, User.__table__)

    if not table_existed:
        logger.info("New database detected, inserting sample users...")
    elif users_count == 0:
        logger.info("Empty users table detected, inserting sample users...")
    else:
        logger.info("Existing users table with data found, skipping sample data insertion")
        return

    await _seed_rows(engine, User.__table__, SAMPLE_USERS, "user")


async def initialize(engine: AsyncEngine) -> None:
    """Creates and seeds the schema; table or column check failures raise StorageError."""
    try:
        await _ensure_roles(engine)
        await _ensure_users(engine)
    except SQLAlchemyError as e:
        logger.exception(f"Database initialization failed: {e}")
        raise StorageError("Database initialization failed") from e
