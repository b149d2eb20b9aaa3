from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talentflow.core.config import settings
from talentflow.db.init_db import initialize_database

# Import API router
from talentflow.api.api import api_router

logger = logging.getLogger("talentflow")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed demo data once on startup."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.SEED_ON_STARTUP:
        initialize_database()
    else:
        logger.info("SEED_ON_STARTUP disabled - skipping database initialization")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Applicant tracking data layer with a simulated REST API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api prefix
app.include_router(api_router, prefix="/api")
