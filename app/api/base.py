from fastapi import APIRouter
from app.api import account, auth, calendar, events, health, tasks, timer, todos

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth.router)
api_router.include_router(account.router)
api_router.include_router(tasks.router)
api_router.include_router(todos.router)
api_router.include_router(events.router)
api_router.include_router(calendar.router)
api_router.include_router(timer.router)
api_router.include_router(health.router)
