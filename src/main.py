"""
FastAPI Application

Entry point for the Order Analytics API. The lifespan owns the document
store: opened at startup, stored on `app.state`, closed at shutdown.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from src.config import get_settings
from src.config.logging import configure_logging
from src.database.connection import DocumentStore
from src.serving.api.graphql import graphql_app
from src.serving.api.middleware import RequestLoggingMiddleware
from src.serving.api.routes import health_router

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()

    logger.info("Starting Order Analytics API", environment=settings.app_env)

    store = DocumentStore(settings.database)
    await store.connect()
    app.state.store = store

    yield

    logger.info("Shutting down...")
    await store.close()


app = FastAPI(
    title="Order Analytics API",
    description="Customer spending, top sellers, sales analytics and order history",
    version=settings.version,
    docs_url="/docs" if settings.is_development else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(health_router, prefix="/api/v1", tags=["Health"])
app.include_router(graphql_app, prefix="/graphql", tags=["GraphQL"])


@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Order Analytics API",
        "version": settings.version,
        "environment": settings.app_env,
        "graphql": "/graphql",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
