from __future__ import annotations

from fastapi import APIRouter

from api.routes import admin, class_schedules, grade_sections, schedule_slots, teachers


api_router = APIRouter()
api_router.include_router(teachers.router, prefix="/teachers", tags=["teachers"])
api_router.include_router(schedule_slots.router, prefix="/schedule-slots", tags=["schedule-slots"])
api_router.include_router(class_schedules.router, prefix="/class-schedules", tags=["class-schedules"])
api_router.include_router(grade_sections.router, prefix="/grade-sections", tags=["grade-sections"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
