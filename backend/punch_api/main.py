import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from punch_api.core.config import settings
from punch_api.core.exceptions import AttendanceError
from punch_api.api import attendance as attendance_api

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def init_database(engine):
    """Create tables that do not exist yet."""
    from punch_api.core.database import Base
    from punch_api.models import Employee, AttendanceRecord  # noqa: F401  register tables

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool on startup and drain it on shutdown."""
    from punch_api.core.database import create_db_engine, create_session_factory

    engine = create_db_engine(settings.DATABASE_URL)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    init_database(engine)
    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")

    yield

    engine.dispose()
    logger.info("Database connections closed")


# Disable API docs in production
docs_url = "/docs" if settings.ENVIRONMENT != "production" else None
redoc_url = "/redoc" if settings.ENVIRONMENT != "production" else None

app = FastAPI(
    title=settings.APP_NAME,
    description="Face recognition punch clock - attendance API",
    version=VERSION,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url,
)


# Every error leaves as {"error": "..."}

@app.exception_handler(AttendanceError)
async def attendance_error_handler(request: Request, exc: AttendanceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


class RequestSizeLimitMiddleware:
    """
    Reject bodies above MAX_REQUEST_SIZE.

    A declared Content-Length is checked up front; chunked bodies are counted
    as they are read and fail with 413 once the ceiling is crossed.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.MAX_REQUEST_SIZE
        path = scope.get("path")
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            logger.warning(f"Rejected {content_length} byte request to {path}")
            response = JSONResponse(status_code=413, content={"error": "Request body too large"})
            await response(scope, receive, send)
            return

        received = 0

        async def receive_limited():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    logger.warning(f"Rejected streamed request to {path} after {received} bytes")
                    raise HTTPException(status_code=413, detail="Request body too large")
            return message

        await self.app(scope, receive_limited, send)


app.add_middleware(RequestSizeLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(attendance_api.router)


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "punch-clock-api", "version": VERSION}
