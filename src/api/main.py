"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from importlib import metadata
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars (like api.security)
load_dotenv()

from api.errors import register_exception_handlers
from api.routes import admin, auth, games, health
from utils.logging import setup_structured_logging
from adapter.mongodb.account_repository import MongoAccountRepository
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from services.bootstrap import ensure_default_admin_exists

setup_structured_logging()

logger = logging.getLogger(__name__)

SERVICE_NAME = "Betatips API"
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _read_version() -> str:
    """pyproject.toml is the single source of truth; fall back to installed metadata."""
    if _PYPROJECT.exists():
        with open(_PYPROJECT, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    return metadata.version("betatips-api")


VERSION = _read_version()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: indexes and default admin on startup."""
    client = get_mongodb_client()
    if client:
        db = client[DATABASE_NAME]
        if ensure_all_indexes(db):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")

        ensure_default_admin_exists(MongoAccountRepository(db))
    else:
        logger.warning("MongoDB unavailable, skipping index creation and admin bootstrap")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Sports tips API - accounts, VIP access and admin-curated predictions",
    version=VERSION,
    lifespan=lifespan,
)

# Credentials cannot be combined with a wildcard origin, so they are only
# enabled when CORS_ORIGINS lists explicit origins.
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(games.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Uvicorn's access log duplicates the structured request logs
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
