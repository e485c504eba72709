import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from lostfound import errors
from lostfound.config import CORS_ORIGINS, LOG_LEVEL
from lostfound.db.db import create_db_and_tables
from lostfound.routers import admin, items

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Lost & Found API", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(items.router, prefix="/api/items", tags=["Items"])


@app.exception_handler(errors.LostFoundError)
async def lost_found_error_handler(request: Request, exc: errors.LostFoundError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, errors.AuthError) else None

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "Malformed request"})


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.get("/")
def root():
    return {"status": "ok"}
