"""
Campus Placement Portal - Main Application

FastAPI backend with:
- MongoDB for students, teachers, placement drives and sessions
- Server-side sessions behind an HTTP-only cookie
- bcrypt password hashing for students
- Excel export of the student roster

Run: uvicorn placement_portal.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from placement_portal import __version__
from placement_portal.api.routes import api_router
from placement_portal.core.auth import LoginRequired
from placement_portal.core.config import Settings, get_settings
from placement_portal.core.sessions import ServerSessionMiddleware
from placement_portal.db.mongodb import get_mongo_db, init_mongo_indexes, test_mongo_connection
from placement_portal.services.mongo_service import PortalStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def create_app(settings: Settings = None, db: Database = None) -> FastAPI:
    """
    Build the application.

    Both arguments default to the environment's settings and database;
    tests pass their own.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    if db is None:
        db = get_mongo_db(settings)
    store = PortalStore(db, settings)

    app = FastAPI(
        title="Campus Placement Portal",
        description="""
        Placement management for a campus.

        ## Features
        - **Students**: Register, log in, view their dashboard and placement drives
        - **Teachers**: Register, log in, post placement drives, view students
        - **Export**: Download the student roster as an Excel sheet
        """,
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        ServerSessionMiddleware,
        store=store.sessions,
        cookie_name=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        https_only=settings.session_https_only,
    )

    app.include_router(api_router)

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse(exc.location, status_code=302)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # pages show the detail as-is
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(
            "Database error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    # Startup event
    @app.on_event("startup")
    async def startup_event():
        """Initialize MongoDB indexes on startup."""
        try:
            init_mongo_indexes(db)
        except PyMongoError as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.get("/", tags=["Frontend"])
    async def home():
        return {"status": "healthy", "app": "Campus Placement Portal", "view": "home"}

    @app.get("/health", tags=["Health"])
    def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "mongodb": "connected" if test_mongo_connection(db) else "disconnected"
        }

    return app


app = create_app()
