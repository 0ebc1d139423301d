"""
RideZone API - FastAPI Application

Modular monolith architecture with:
- MongoDB connection pool (shared/persistance)
- Accounts module (modules/accounts)
  - services/: Identity reconciliation (credentials + Google)
  - http_handlers/: /register, /login, /auth/google-signin
- Catalog module (modules/catalog)
  - services/: Product CRUD, startup data fixes
  - http_handlers/: /products
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from pymongo.errors import PyMongoError

# Load environment variables first
load_dotenv()

from config.settings import settings
from shared.exceptions import RideZoneError, translate_store_error
from shared.persistance.mongo_db import mongo_pool, ensure_indexes
from shared.services.logger import get_logger, setup_logging
from modules.accounts import auth_router, IdentityService
from modules.catalog import products_router, StartupNormalizer


setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Connects to MongoDB, prepares indexes and runs the startup data
    fixes before traffic is served.
    """
    # Startup
    logger.info("Starting RideZone API...")

    try:
        mongo_pool.connect(settings.MONGO_URI)
        logger.info(f"MongoDB connected to {settings.MONGO_DB}")
    except Exception:
        logger.exception("MongoDB connection failed")
        raise

    users = mongo_pool.get_collection(settings.USERS_COLLECTION, settings.MONGO_DB)
    # Legacy mixed-case emails must be lowercased before the unique index applies
    IdentityService(collection=users).normalize_stored_emails()
    ensure_indexes(users)

    if settings.RUN_STARTUP_MIGRATIONS:
        summary = StartupNormalizer().run(backfill=settings.BACKFILL_CATEGORIES)
        logger.info(f"Startup data fixes done: {summary}")

    yield

    # Shutdown
    logger.info("Shutting down RideZone API...")
    mongo_pool.close()
    logger.info("MongoDB connection closed")


# Create FastAPI app
app = FastAPI(
    title="RideZone API",
    description="Back-end service for the RideZone vehicle marketplace",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handlers ---

@app.exception_handler(RideZoneError)
async def ridezone_error_handler(request: Request, exc: RideZoneError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.exception(f"Store error on {request.method} {request.url.path}", exc_info=exc)
    error = translate_store_error(exc)
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


# Include routers from modules
app.include_router(auth_router)
app.include_router(products_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "service": "RideZone API",
        "version": "0.1.0",
        "status": "healthy",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        # Test MongoDB connection
        mongo_pool.client.admin.command("ping")
        mongo_status = "connected"
    except (RideZoneError, PyMongoError) as e:
        mongo_status = f"error: {e}"

    return {
        "status": "healthy" if mongo_status == "connected" else "degraded",
        "mongodb": mongo_status,
        "database": settings.MONGO_DB,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
    )
