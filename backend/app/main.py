from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api import auth, identify, plants, reminders
from app.core.config import settings
from app.core.database import check_database_health, init_db
from app.core.exceptions import GreenThumbError
from app.core.rate_limit import RateLimitMiddleware
from app.core.redis_client import check_redis_health

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="GreenThumb Journal API",
    description="Plant-care journal: plant records, identification, growth photos and recurring care reminders",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting middleware
app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GreenThumbError)
async def greenthumb_error_handler(request: Request, exc: GreenThumbError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Missing or invalid fields.", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} store failure: {exc}")
    return JSONResponse(status_code=500, content={"detail": "An internal server error occurred."})


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(plants.router, prefix="/api/plants", tags=["Plants"])
app.include_router(reminders.router, prefix="/api/reminders", tags=["Reminders"])
app.include_router(identify.router, prefix="/api", tags=["Identification"])


@app.get("/")
async def root():
    return {"message": "GreenThumb Journal API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    database = check_database_health()
    cache = check_redis_health()
    # The cache is optional; only the database decides overall health
    return {
        "status": "healthy" if database["connected"] else "unhealthy",
        "database": database,
        "cache": cache,
    }
