# backend/app/api/v1/routes/__init__.py
from fastapi import APIRouter
from .csv_io import router as csv_router

# Create a main router that includes all sub-routers
router = APIRouter()

router.include_router(csv_router, prefix="/csv", tags=["CSV Import/Export"])

__all__ = ["router"]
