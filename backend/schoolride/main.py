"""FastAPI application entry point.

This module wires together the API routers, configures middleware,
logging and error handlers, and exposes the ASGI application object used
by the server.
"""

import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from schoolride.routes import (
    auth,
    users,
    children,
    assignments,
    rides,
    dashboard,
    admin,
    settings,
)
from schoolride.database import create_db_and_tables, async_session
from schoolride.crud import get_settings
from schoolride.errors import SchoolRideError, schoolride_error_handler

# Basic logging configuration.  The log level can be controlled with an
# environment variable so deployments can adjust verbosity without code
# changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(title="SchoolRide", docs_url=None)


def custom_openapi():
    """Generate an OpenAPI schema that is aware of our `/api` proxy prefix."""

    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    # The reverse proxy serves the API under `/api`; tell Swagger about it.
    openapi_schema["servers"] = [{"url": "/api"}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Create tables and make sure the settings row exists."""

    await create_db_and_tables()
    async with async_session() as session:
        s = await get_settings(session)
    logger.info("%s API started", s.site_name)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(children.router)
app.include_router(assignments.router)
app.include_router(rides.router)
app.include_router(dashboard.router)
app.include_router(admin.router)
app.include_router(settings.router)

app.add_exception_handler(SchoolRideError, schoolride_error_handler)


@app.get("/docs", include_in_schema=False)
async def custom_swagger_ui_html():
    """Serve the interactive docs with the correct API prefix."""

    # The API is served behind a `/api` prefix by the reverse proxy, so the
    # schema lives at `/api/openapi.json` rather than `/openapi.json`.
    return get_swagger_ui_html(openapi_url="/api/openapi.json", title="API Docs")


@app.get("/")
async def read_root():
    async with async_session() as session:
        s = await get_settings(session)
        name = s.site_name
    return {"message": f"Welcome to {name} API"}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
