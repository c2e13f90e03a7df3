"""
Routers - aggregates endpoint modules.
/auth/* carries login flows; /api/* carries the todo resource and health checks.
"""

from fastapi import APIRouter

from todo_app.api.endpoints import auth, health, todos

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(todos.router, prefix="/todos", tags=["todos"])

auth_router = APIRouter()

auth_router.include_router(auth.router, tags=["auth"])
