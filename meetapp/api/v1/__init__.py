"""API v1 router initialization."""

from fastapi import APIRouter

from meetapp.api.v1.meetups import router as meetups_router
from meetapp.api.v1.sessions import router as sessions_router
from meetapp.api.v1.subscriptions import router as subscriptions_router

router = APIRouter()

router.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])
router.include_router(meetups_router, prefix="/meetups", tags=["Meetups"])
router.include_router(subscriptions_router, prefix="/subscriptions", tags=["Subscriptions"])
