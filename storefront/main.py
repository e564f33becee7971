# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Dict

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .catalog import catalog
from .logging_config import setup_logging
from .routes import (
    admin_backup_router,
    admin_config_router,
    admin_menu_router,
    admin_option_groups_router,
    cart_router,
    flow_router,
    public_config_router,
    public_menu_router,
    public_outlets_router,
    sessions_router,
)
from .seed_menu import build_demo_backup

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

ROUTERS = [
    sessions_router,
    public_menu_router,
    public_outlets_router,
    public_config_router,
    flow_router,
    cart_router,
    admin_menu_router,
    admin_option_groups_router,
    admin_config_router,
    admin_backup_router,
]


def load_catalog() -> None:
    """Load the catalog from CATALOG_PATH, or the demo menu when unset."""
    if config.CATALOG_PATH:
        logger.info("Loading catalog from %s", config.CATALOG_PATH)
        catalog.load_from_file(config.CATALOG_PATH)
    else:
        logger.info("CATALOG_PATH not set, loading demo catalog")
        catalog.load(build_demo_backup())


def create_app() -> FastAPI:
    """Create the storefront FastAPI application."""
    app = FastAPI(
        title="Storefront Ordering API",
        description="Storefront ordering with a guided item customization flow",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Versioned API plus root paths
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", tags=["Health"])
    def health() -> Dict[str, str]:
        """Health check endpoint. Returns ok if the service is running."""
        return {"status": "ok"}

    return app


load_catalog()
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import os

    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "").lower() in ("1", "true", "yes"),
    )
