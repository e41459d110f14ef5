"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_portal.api.routes.auth_routes import router as auth_router
from placement_portal.api.routes.student_routes import router as student_router
from placement_portal.api.routes.teacher_routes import router as teacher_router
from placement_portal.api.routes.placement_routes import router as placement_router
from placement_portal.api.routes.export_routes import router as export_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(teacher_router)
api_router.include_router(placement_router)
api_router.include_router(export_router)
