"""
FastAPI application entry point for BrandHub.

Companies publish a brand profile and asset library; other companies
see the full library only after their access request is approved.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brandhub import __version__
from brandhub.api.errors import register_exception_handlers
from brandhub.api.routes import health
from brandhub.api.routes import auth
from brandhub.api.routes import brands
from brandhub.api.routes import access_requests
from brandhub.api.routes import assets
from brandhub.api.routes import notes
from brandhub.api.routes import notifications
from brandhub.api.routes import team
from brandhub.api.routes import billing
from brandhub.api.routes import webhooks_stripe

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    missing = [name for name in ("DATABASE_URL", "JWT_SECRET") if not os.getenv(name)]
    if missing:
        logger.warning(
            "Required environment variables are not set",
            extra={"missing": missing},
        )
    logger.info("Starting BrandHub API", extra={"version": __version__})

    yield

    # Shutdown
    logger.info("Shutting down BrandHub API")


# Create FastAPI app
app = FastAPI(
    title="BrandHub API",
    description="Multi-tenant brand directory with subscription-gated writes and peer access requests",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware (configure for your frontend domain)
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Health check (no auth)
app.include_router(health.router)

# Signup / login / logout / me
app.include_router(auth.router)

# Brand profile, detail, search and public browse
app.include_router(brands.router)

# Cross-tenant access workflow
app.include_router(access_requests.router)

# Asset library (upload gated by subscription)
app.include_router(assets.router)

app.include_router(notes.router)
app.include_router(notifications.router)
app.include_router(team.router)

# Stripe billing and webhooks
app.include_router(billing.router)
app.include_router(webhooks_stripe.router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV") == "development"
    )
