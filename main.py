from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.exceptions import InternalError, MethodNotSupportedError, ValidationError
from app.routers import dashboard
from app.routers.api import build_api_router
from app.routers.campaigns import ALLOWED_METHODS

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize database
    await app.state.db.create_all()
    logger.info(f"Connected to {app.state.db.engine.url.render_as_string(hide_password=True)}")

    yield

    # Cleanup
    await app.state.db.dispose()

def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(
        title=settings.APP_NAME,
        description="Backend API and dashboard for tracking marketing campaigns",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(InternalError)
    async def internal_exception_handler(request: Request, exc: InternalError):
        return JSONResponse(status_code=exc.status_code, content={"message": "Internal server error"})

    @app.exception_handler(MethodNotSupportedError)
    async def method_exception_handler(request: Request, exc: MethodNotSupportedError):
        return PlainTextResponse(
            exc.message,
            status_code=exc.status_code,
            headers={"Allow": exc.allow_header},
        )

    campaigns_path = f"{settings.API_PREFIX}/campaigns"

    @app.exception_handler(StarletteHTTPException)
    async def router_exception_handler(request: Request, exc: StarletteHTTPException):
        # Verbs no route declares still get the resource's own 405
        if exc.status_code == 405 and request.url.path.rstrip("/") == campaigns_path:
            return await method_exception_handler(request, MethodNotSupportedError(request.method, ALLOWED_METHODS))
        return await http_exception_handler(request, exc)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_api_router(settings.API_PREFIX))
    app.include_router(dashboard.router, tags=["dashboard"])
    return app

logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

import uvicorn

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
