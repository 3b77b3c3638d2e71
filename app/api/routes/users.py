"""
Recently seen users
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_location_resolver
from app.schemas import UserListResponse
from app.services import LocationResolver

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
async def list_recent_users(
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    List phone/email pairs seen in the most recent reports.
    """
    users = await resolver.recent_users()
    return UserListResponse(users=users)
