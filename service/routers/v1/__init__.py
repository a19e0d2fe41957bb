"""
Rotation Planner API v1 Router.

Endpoints:
- POST /schedule - Generate a schedule over a fixed horizon
- POST /schedule/required-duty-days - Generate by covered duty-day target
- POST /validate - Validate any schedule
- GET /coverage-start-day - Coverage-start day for an induction length
"""

from fastapi import APIRouter

router = APIRouter(tags=["v1"])

# Import and include schedule endpoints
from .schedule import router as schedule_router
router.include_router(schedule_router)
