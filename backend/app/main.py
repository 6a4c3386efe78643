"""Main FastAPI application."""

import logging
import os
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path to import hoopcast
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from app.api import matchup
from app.config import settings

# Configure logging - can be controlled via LOG_LEVEL environment variable
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title=settings.app_name, debug=settings.debug, version="1.0.0")

# In development (DEBUG=True), also allow localhost URLs for local testing
allowed_origins = [settings.frontend_url]
if settings.debug:
    allowed_origins.extend(
        [
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )

allowed_origins = [origin for origin in allowed_origins if origin]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(matchup.router, prefix="/api/matchup", tags=["matchup"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"name": settings.app_name, "version": "1.0.0", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
