"""
API Router Aggregator.

Combines all endpoint routers into a single router for the main app.
"""

from fastapi import APIRouter

from talentflow.api.endpoints import auth, jobs, candidates, assessments

api_router = APIRouter()

# Include all routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)

api_router.include_router(
    assessments.router,
    prefix="/assessments",
    tags=["Assessments"],
)
