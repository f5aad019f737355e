import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from tokengraph.adapters.dataset_memory import InMemoryDatasetSource
from tokengraph.api.deps import create_catalog, get_settings
from tokengraph.components.catalog import TokenCatalog
from tokengraph.components.tokens import DataFormatError, DatasetFetchError
from tokengraph.rules.loader import load_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Invalid rules are fatal (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    try:
        catalog = create_catalog(rules, settings)
    except ValueError as e:
        logger.error("%s; serving an empty registry", e)
        catalog = TokenCatalog(InMemoryDatasetSource())
        catalog.last_error = str(e)

    # A bad dataset is not fatal: serve an empty registry and report it
    try:
        catalog.load()
    except (DataFormatError, DatasetFetchError, FileNotFoundError) as e:
        logger.error("Serving an empty registry: %s", e)

    app.state.catalog = catalog
    yield


app = FastAPI(
    title="Token Graph API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from tokengraph.api.routes import tokens  # noqa: E402

app.include_router(tokens.router, prefix="/api/tokens", tags=["Tokens"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    catalog: TokenCatalog | None = getattr(request.app.state, "catalog", None)
    if catalog is None:
        return {"status": "starting", "service": "api"}

    snapshot = catalog.snapshot
    return {
        "status": "degraded" if catalog.last_error else "ok",
        "service": "api",
        "tokens": len(snapshot.registry),
        "source": snapshot.source,
        "loaded_at": snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
        "error": catalog.last_error,
    }
