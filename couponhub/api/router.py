from fastapi import APIRouter

from couponhub.api.v1 import admin, coupons, redemptions, uploads, users

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(coupons.router)
api_router.include_router(redemptions.router)
api_router.include_router(users.router)
api_router.include_router(uploads.router)
api_router.include_router(admin.router)
