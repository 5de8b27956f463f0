"""API router configuration."""

from fastapi import APIRouter

from api.routes.auth import router as auth_router
from api.routes.onboarding import router as onboarding_router
from api.routes.teacher_invites import router as teacher_invites_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(teacher_invites_router)
router.include_router(onboarding_router)
