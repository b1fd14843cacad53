from fastapi import APIRouter
from src.api.endpoints import users, roles, health

api_router = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(roles.router, prefix="/roles", tags=["Roles"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
