"""API v1 routes."""

from fastapi import APIRouter

from branchreport.api.v1 import formulas, health, templates

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(formulas.router, prefix="/formulas", tags=["formulas"])
router.include_router(templates.router, prefix="/templates", tags=["templates"])

__all__ = ["router"]
