"""
API router — aggregates all sub-routers under ``/api``.
"""

from fastapi import APIRouter

from japama.api.routes.auth import router as auth_router
from japama.api.routes.users import router as users_router
from japama.api.routes.subdivisions import router as subdivisions_router
from japama.api.routes.streets import router as streets_router
from japama.api.routes.houses import router as houses_router
from japama.api.routes.reports import router as reports_router
from japama.api.routes.payments import router as payments_router

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["auth"])
router.include_router(users_router, prefix="/users", tags=["users"])
router.include_router(subdivisions_router, prefix="/subdivisions", tags=["subdivisions"])
router.include_router(streets_router, prefix="/streets", tags=["streets"])
router.include_router(houses_router, prefix="/houses", tags=["houses"])
router.include_router(reports_router, prefix="/reports", tags=["reports"])
router.include_router(payments_router, tags=["payments"])
