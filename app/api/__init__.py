"""
API routes package
"""
from fastapi import APIRouter
from app.api.routes import locations, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(locations.router)
api_router.include_router(users.router)
