"""
FastAPI app assembly: logging, middleware, error rendering and router wiring.
"""
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

load_dotenv()

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)


from quickdesk.db.database import init_sqlite_schema
from quickdesk.api.admin import router as admin_router
from quickdesk.api.categories import router as categories_router
from quickdesk.api.notifications import router as notifications_router
from quickdesk.api.role_requests import router as role_requests_router
from quickdesk.api.support import router as support_router
from quickdesk.api.tickets import router as tickets_router
from quickdesk.api.users import router as users_router
from quickdesk.services.errors import ServiceError
from quickdesk.utils.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Postgres schema is managed by Alembic migrations; SQLite is created in place.
    init_sqlite_schema()
    yield


app = FastAPI(
    title="QuickDesk Help Desk Service",
    description="API for help-desk tickets, comments, votes, categories and role administration.",
    version="1.0.0",
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error: %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Something went wrong!"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(users_router, prefix="/api")
app.include_router(categories_router, prefix="/api")
app.include_router(tickets_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(role_requests_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(support_router, prefix="/api")
