"""PixelVerse Ops API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PvsError → {"error": ...} JSON responses
    - CORS configured from settings (not hardcoded)
    - Both datastores initialized on startup, disposed on shutdown (lifespan)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Legacy GraphQL mounted at /graphql beside the REST routers, same primary datastore
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pvs_api.api.error_handlers import register_error_handlers
from pvs_api.api.routes import (
    agenda, app_deployments, apps, audit, clients, cms, contact_forms,
    deployments, domani, health, internal_clients, leads, newsletter,
    projects, recaptcha, websites,
)
from pvs_api.config import get_settings
from pvs_api.infrastructure.database import (
    close_databases, init_db, init_domani_db,
)
from pvs_api.infrastructure.observability import setup_logging
from pvs_api.legacy_graphql.schema import router as graphql_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_domani_db(
        settings.domani_database_url,
        pool_size=settings.domani_pool_size,
        max_overflow=settings.domani_max_overflow,
    )
    logger.info("PixelVerse API started")
    yield
    await close_databases()
    logger.info("PixelVerse API shutting down")


app = FastAPI(title="PixelVerse Ops API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(clients.router)
app.include_router(internal_clients.router)
app.include_router(websites.router)
app.include_router(websites.client_router)
app.include_router(apps.router)
app.include_router(apps.client_router)
app.include_router(app_deployments.router)
app.include_router(app_deployments.app_router)
app.include_router(deployments.router)
app.include_router(deployments.website_router)
app.include_router(agenda.router)
app.include_router(domani.router)
app.include_router(leads.router)
app.include_router(audit.router)
app.include_router(cms.router)
app.include_router(contact_forms.router)
app.include_router(newsletter.router)
app.include_router(projects.router)
app.include_router(recaptcha.router)
app.include_router(graphql_router, prefix="/graphql")

register_error_handlers(app)
