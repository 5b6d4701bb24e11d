import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from controllers.spouse_controller import SpouseController
from dal.spouse_dal import SpouseDAL, SpouseStore
from routes.spouse_route import router as spouse_router
from utils.database_init import AsyncDatabaseInitializer
from utils.settings import AppSettings

LOGGER = logging.getLogger(__name__)

MAX_LOG_LINE = 80


def create_app(settings: Optional[AppSettings] = None, store: Optional[SpouseStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Server settings; read from the environment when omitted.
        store: Spouse store to use instead of the SQLite-backed SpouseDAL.
    """
    settings = settings or AppSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize the spouse store (SQLite unless one was
        injected) and attach its controller to `app.state`.
        """
        spouse_store = store
        if spouse_store is None:
            db_initializer = AsyncDatabaseInitializer(settings.database_url)
            await db_initializer.ensure_database()
            app.state.db_initializer = db_initializer
            spouse_store = SpouseDAL(db_initializer)

        app.state.spouse_controller = SpouseController(
            spouse_store, expose_details=settings.is_development
        )
        LOGGER.info("Server running in %s mode on port %d", settings.mode, settings.port)
        yield

    app = FastAPI(title="Spouse Showcase", lifespan=lifespan)
    app.state.settings = settings

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        """Log one line per /api request, with its JSON body, once the response is ready."""
        start = time.perf_counter()
        response = await call_next(request)
        if not request.url.path.startswith("/api"):
            return response

        duration_ms = int((time.perf_counter() - start) * 1000)
        line = f"{request.method} {request.url.path} {response.status_code} in {duration_ms}ms"
        if response.headers.get("content-type", "").startswith("application/json"):
            body = b"".join([chunk async for chunk in response.body_iterator])
            line += f" :: {body.decode('utf-8', 'replace')}"
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
        if len(line) > MAX_LOG_LINE:
            line = line[: MAX_LOG_LINE - 1] + "…"
        LOGGER.info(line)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        LOGGER.error("Server error: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})

    app.include_router(spouse_router)

    if settings.is_production:
        _register_frontend(app, settings)

    return app


def _register_frontend(app: FastAPI, settings: AppSettings) -> None:
    """Serve the built frontend from `settings.public_dir`, if it exists."""
    public_dir = settings.public_dir
    if not public_dir.exists():
        LOGGER.warning("Production mode: frontend directory %s not found", public_dir)
        return

    assets_dir = public_dir / "assets"
    if assets_dir.exists():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")
    LOGGER.info("Production mode: serving static files from %s", public_dir)
    public_root = public_dir.resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_index(full_path: str):
        """
        Serve a file from the public directory, or the index page for any
        other non-API path.
        """
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        if full_path:
            candidate = (public_dir / full_path).resolve()
            if candidate.is_relative_to(public_root) and candidate.is_file():
                return FileResponse(candidate)
        index_path = public_dir / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)


def main() -> None:
    """Run the server with settings taken from the environment."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )
    settings = AppSettings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
