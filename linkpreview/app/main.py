from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from loguru import logger

from linkpreview.app.composition import create_app_dependencies
from linkpreview.app.config.settings import Settings
from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.routers.health import health_router
from linkpreview.app.routers.metadata import metadata_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.bind(service_name=SERVICE_NAME, event="api_starting").info("")
    dependencies = create_app_dependencies(getattr(app.state, "settings", None))
    await dependencies.connect()

    app.state.settings = dependencies.settings
    app.state.metadata_extractor = dependencies.metadata_extractor
    app.state.database = dependencies.database
    app.state.metadata_cache = dependencies.metadata_cache
    try:
        yield
    finally:
        logger.bind(service_name=SERVICE_NAME, event="api_stopping").info("")
        await dependencies.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="Link Preview API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.include_router(health_router)
    app.include_router(metadata_router)

    # mounted last so routes take precedence
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")
    else:
        logger.bind(service_name=SERVICE_NAME, event="static_dir_missing", path=str(static_dir)).warning("")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings: Settings = app.state.settings
    logger.bind(service_name=SERVICE_NAME, event="server_starting", port=settings.port).info("")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
