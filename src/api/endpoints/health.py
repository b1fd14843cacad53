from typing import Any

from fastapi import APIRouter

from src.utils.dates import get_utc_now, utc_iso

router = APIRouter()


@router.get("")
async def health_check() -> Any:
    """Returns the health status of the API"""
    return {"status": "healthy", "timestamp": utc_iso(get_utc_now())}
