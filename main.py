"""
Wedding Planner - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from wedding_planner.core.config import settings
from wedding_planner.core.db import engine, Base, SessionLocal
from wedding_planner.core.exceptions import WeddingPlannerError
from wedding_planner.api import routes_admin, routes_public, routes_rsvp, ws
from wedding_planner.services.repositories import TableRepo
from wedding_planner.utils.responses import domain_error_response

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    Base.metadata.create_all(bind=engine)
    # One row per table so seating changes always have a row to lock
    db = SessionLocal()
    try:
        TableRepo.ensure_rows(db, settings.TABLE_COUNT)
    finally:
        db.close()
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Wedding Planner",
    description="RSVP collection, guest management, seating and catering reports",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(WeddingPlannerError)
async def wedding_planner_error_handler(request: Request, exc: WeddingPlannerError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc.error_code}")
    return domain_error_response(exc)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_rsvp.router, prefix="/rsvp", tags=["rsvp"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
