import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.database import Database
from app.errors import register_error_handlers
from app.routers.compare import router as compare_router
from app.routers.prices import router as prices_router
from app.routers.products import router as products_router
from app.routers.stores import router as stores_router
from app.services.image_upload import ImageUploadService

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. The database and image uploader live for the app's lifespan."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database and configure image uploads on startup, dispose the engine on shutdown."""
        logger.info(f"Starting up ({settings.environment})... Initializing database")
        app.state.database = Database(settings.database_url)
        app.state.database.create_tables()
        app.state.image_uploader = ImageUploadService.from_settings(settings)
        if not app.state.image_uploader.configured:
            logger.warning("Cloudinary is not configured; image uploads will fail")
        yield
        logger.info("Shutting down...")
        app.state.database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Compare product prices across stores",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(products_router, prefix=settings.api_prefix)
    app.include_router(stores_router, prefix=settings.api_prefix)
    app.include_router(prices_router, prefix=settings.api_prefix)
    app.include_router(compare_router, prefix=settings.api_prefix)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": "1.0.0"
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
