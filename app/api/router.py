from fastapi import APIRouter

from app.api.routers import newsletters, subscriptions

api_router = APIRouter()

api_router.include_router(subscriptions.router)
api_router.include_router(newsletters.router)
