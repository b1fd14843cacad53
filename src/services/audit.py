import logging
from typing import Optional

from src.messaging.producers import publish_audit_event
from src.utils.dates import get_utc_now, utc_iso

logger = logging.getLogger(__name__)

ROLE_CHANGED = "user_role_changed"


async def record_role_change(user_id: int, old_role_id: Optional[int], new_role_id: int) -> None:
    changed_at = utc_iso(get_utc_now())
    logger.info(f"AUDIT: User {user_id} role changed from {old_role_id} to {new_role_id} at {changed_at}")

    await publish_audit_event(
        ROLE_CHANGED,
        user_id,
        {
            "user_id": user_id,
            "old_role_id": old_role_id,
            "new_role_id": new_role_id,
            "changed_at": changed_at,
        },
    )
