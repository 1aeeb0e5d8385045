import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from quickpost.routers import images, posts, preview
from quickpost.settings import Settings, settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

FALLBACK_PAGE = "<html><body>QuickPost</body></html>"


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the editor app bound to one posts directory."""
    app_settings = app_settings or settings

    app = FastAPI(title="QuickPost", description="Local markdown blog post editor")
    app.state.settings = app_settings

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        if request.url.path.startswith("/api/"):
            logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": _describe_errors(exc)})

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return "OK"

    app.include_router(posts.router, prefix="/api")
    app.include_router(preview.router, prefix="/api")
    app.include_router(images.router)

    static_dir = app_settings.static_path
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning(f"Static directory {static_dir} not found, serving stub page")

        @app.get("/", response_class=HTMLResponse)
        def index():
            return FALLBACK_PAGE

    return app


def _describe_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    return "; ".join(messages) or "Invalid request"


app = create_app()
