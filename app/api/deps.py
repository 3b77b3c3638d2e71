"""
Shared route dependencies
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import get_db
from app.services import LocationResolver, LocationStore


async def get_location_resolver(db: AsyncSession = Depends(get_db)) -> LocationResolver:
    return LocationResolver(LocationStore(db))
