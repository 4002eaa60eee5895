from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from core.config import settings
from core.logging_config import setup_logging

# Feature routes
from features.locations.routes.location_routes import router as location_router
from features.tides.routes.tide_routes import router as tide_router

# Services
from features.common.services.debouncer import Debouncer
from features.locations.services.geocoder import Geocoder, NominatimGeocoder
from features.locations.services.location_store import LocationStore
from features.locations.services.preference_storage import PreferenceStorage
from features.locations.services.search_controller import SearchController
from features.tides.services.tide_service import TideService
from features.tides.services.tide_session import TideSession

setup_logging()
logger = logging.getLogger(__name__)

def create_app(
    geocoder: Optional[Geocoder] = None,
    preferences: Optional[PreferenceStorage] = None,
    tide_service: Optional[TideService] = None
) -> FastAPI:
    """Build the API, optionally with replacement collaborators."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        active_geocoder = geocoder or NominatimGeocoder()
        try:
            logger.info("🚀 Starting Tide Times API...")

            store = LocationStore(geocoder=active_geocoder)
            search_controller = SearchController(
                store,
                Debouncer(settings.search_debounce_seconds)
            )
            service = tide_service or TideService()
            session = TideSession(
                store=store,
                tide_service=service,
                preferences=preferences or PreferenceStorage()
            )

            # Store services in app state
            app.state.geocoder = active_geocoder
            app.state.location_store = store
            app.state.search_controller = search_controller
            app.state.tide_service = service
            app.state.tide_session = session

            logger.info("\n📅 Restoring saved location...")
            restored = await session.restore_saved()
            if restored:
                logger.info(f"✅ Restored {restored.name}")

            logger.info("\n✨ API startup complete - ready to serve requests")
            yield

        except Exception as e:
            logger.error(f"❌ Startup error: {str(e)}")
            raise
        finally:
            logger.info("\n🔄 Shutting down API...")
            if hasattr(app.state, "search_controller"):
                await app.state.search_controller.shutdown()

            if hasattr(app.state, "tide_session"):
                app.state.tide_session.close()

            close = getattr(active_geocoder, "close", None)
            if close is not None:
                await close()

            logger.info("👋 API shutdown complete")

    app = FastAPI(
        title="Tide Times API",
        description="API for synthetic tide charts of coastal locations",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include feature routers
    app.include_router(location_router)
    app.include_router(tide_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "time": datetime.now().isoformat()
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
