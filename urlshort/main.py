"""Main FastAPI application for the urlshort redirect service."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from urlshort.config.logging import configure_logging
from urlshort.config.settings import Settings, get_settings, SERVICE_NAME, SERVICE_VERSION
from urlshort.exceptions import DecodeError, RedirectConfigNotFound
from urlshort.middleware.logging import LoggingMiddleware
from urlshort.middleware.redirect import RedirectMiddleware
from urlshort.redirects import build_map, load_path_rules
from urlshort.routers import health

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting urlshort",
                redirects=len(app.state.redirects),
                source=app.state.redirects_source)
    yield
    logger.info("Shutting down urlshort")


def load_redirects(source: Optional[Path], strict: bool = True) -> Dict[str, str]:
    """Build the redirect map for startup.
    
    With ``strict`` set, unreadable rules abort startup by propagating the
    error. Otherwise the error is logged and the service runs with no
    redirects.
    """
    if source is None:
        logger.info("No redirect rules file configured")
        return {}
    
    try:
        rules = load_path_rules(source)
    except (DecodeError, RedirectConfigNotFound) as exc:
        if strict:
            logger.error("Redirect rules unusable, aborting startup", **exc.to_dict())
            raise
        logger.warning("Redirect rules unusable, starting without redirects", **exc.to_dict())
        return {}
    
    return build_map(rules)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    
    source = settings.resolve_redirects_file()
    path_map = load_redirects(source, strict=settings.redirects_strict)
    
    app = FastAPI(
        title="urlshort",
        description="Path to URL redirect service",
        version=SERVICE_VERSION,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan
    )
    
    app.state.redirects = path_map
    app.state.redirects_source = str(source) if source else None
    
    # Last added is outermost: request logging must also see redirects
    app.add_middleware(RedirectMiddleware, path_map=path_map)
    app.add_middleware(LoggingMiddleware)
    
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error("Unhandled exception",
                     exc_info=exc,
                     path=request.url.path,
                     method=request.method)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )
    
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint."""
        return {
            "message": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running"
        }
    
    app.include_router(health.router, prefix="/health", tags=["health"])
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    
    settings = get_settings()
    uvicorn.run(
        "urlshort.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
