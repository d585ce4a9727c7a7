"""
Usage statistics endpoints (for admin / monitoring).
"""

from fastapi import APIRouter, Depends

from companion.dependencies import get_usage_tracker
from companion.models.schemas import UsageSummary
from companion.services.usage import UsageTracker

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=UsageSummary)
async def all_usage(usage: UsageTracker = Depends(get_usage_tracker)):
    return usage.summary()


@router.get("/{user_id}")
async def user_usage(user_id: str, usage: UsageTracker = Depends(get_usage_tracker)):
    stats = usage.user_stats(user_id)
    if stats is None:
        return {"message": "No data for this user"}
    return stats
