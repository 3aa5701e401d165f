"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars (security, connection)
load_dotenv()

# main.py is at <root>/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import auth, health, providers
from api.responses import request_validation_errors, validation_problem
from utils.logging import setup_structured_logging
from adapter.sql import connection
from adapter.sql.tables import create_all_tables

# Set up structured JSON logging
setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Provider Registry API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: refuse to start without a database, then ensure tables."""
    if not connection.DATABASE_URL:
        raise RuntimeError("DATABASE_URL environment variable is required")

    engine = connection.get_engine()
    if engine is None:
        raise RuntimeError("Database is not reachable, check DATABASE_URL")

    create_all_tables(engine)
    logger.info("Database tables verified/created successfully")

    yield  # App runs here

    connection.reset_engine()


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="User registration/login with bearer tokens and CRUD over providers",
    version=VERSION,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies/params as 400 with a field -> messages map."""
    errors = request_validation_errors(exc)
    logger.info("Request validation failed", extra={"path": request.url.path, "fields": sorted(errors)})
    return validation_problem(errors)


# CORS configuration
# - If CORS_ORIGINS="*": allow_credentials must be False (browsers don't support credentials with wildcard)
# - If CORS_ORIGINS is a specific list: allow_credentials can be True
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    # Strip whitespace from each origin to handle "origin1, origin2" format
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

# Register routes
app.include_router(auth.router)
app.include_router(providers.router)
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
    # Application logs (via our structured logging) already cover requests
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
