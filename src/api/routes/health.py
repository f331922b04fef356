"""
Health check API route
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from utils.error_handling import envelope

router = APIRouter()

@router.get("/test")
async def health_check():
    """Connectivity probe used by the client on load; it does not touch the database"""
    return envelope(
        True,
        "API funcionando perfeitamente!",
        timestamp=datetime.now(timezone.utc).isoformat()
    )
