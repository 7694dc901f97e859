"""Version 1 of the HTTP API"""
from fastapi import APIRouter

from kanban.api.v1 import analytics, auth, boards, calendar, columns, tasks, timer

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(boards.router, prefix="/boards", tags=["boards"])
api_router.include_router(columns.router, tags=["columns"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(timer.router, prefix="/timer", tags=["timer"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
