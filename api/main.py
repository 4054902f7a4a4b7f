import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin import router as admin_router
from auth import router as auth_router
from cars import router as cars_router
from core.config import Settings
from core.db import Database
from core.errors import install_handlers
from core.schema import SCHEMA
from lapbook import router as lapbook_router
from media import router as media_router
from profiles import router as profiles_router
from reviews import router as reviews_router
from tracks import router as tracks_router
from zones import router as zones_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One SQLite handle per process, shared through app.state.
        database = Database(settings.database_url)
        await database.connect()
        await database.apply_schema(SCHEMA)
        app.state.db = database
        logger.info("Database ready at %s", settings.database_url)
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(title="Trackside API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_handlers(app)

    app.include_router(auth_router.router, prefix=API_PREFIX, tags=["auth"])
    app.include_router(cars_router.router, prefix=API_PREFIX, tags=["cars"])
    app.include_router(tracks_router.router, prefix=API_PREFIX, tags=["tracks"])
    app.include_router(zones_router.router, prefix=API_PREFIX, tags=["zones"])
    app.include_router(reviews_router.router, prefix=API_PREFIX, tags=["reviews"])
    app.include_router(lapbook_router.router, prefix=API_PREFIX, tags=["lapbook"])
    app.include_router(profiles_router.router, prefix=API_PREFIX, tags=["profile"])
    app.include_router(media_router.router, prefix=API_PREFIX, tags=["upload"])
    app.include_router(admin_router.router, prefix=API_PREFIX, tags=["admin"])
    app.include_router(media_router.static_router, tags=["upload"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Trackside API listening on :%d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
