import logging
import os
from contextlib import asynccontextmanager
from azure.core.exceptions import AzureError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from wordwise.db import get_settings, ensure_containers, verify_connection, close_client
from wordwise.routers import vocabulary_router, seed_router, learn_router
from wordwise.auth import get_auth_settings

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    auth_settings = get_auth_settings()

    if auth_settings.enabled:
        if auth_settings.is_configured():
            logger.info("Token authentication enabled (issuer: %s)", auth_settings.issuer)
        else:
            logger.warning("Authentication enabled but not configured (missing AUTH_ISSUER or AUTH_AUDIENCE)")
    else:
        logger.warning("Authentication DISABLED - trusting X-User-Id header (dev mode)")

    if settings.is_configured():
        if settings.use_emulator:
            try:
                ensure_containers()
            except AzureError as e:
                logger.error("Could not create Cosmos DB containers on the emulator: %s", e)
        if verify_connection():
            logger.info("Connected to Cosmos DB database %s", settings.database_name)
        else:
            logger.error("Failed to connect to Cosmos DB - check configuration")
    else:
        logger.warning("Cosmos DB not configured (COSMOS_ENDPOINT not set)")

    yield

    # Shutdown
    close_client()
    logger.info("Cosmos DB connection closed")


app = FastAPI(
    title="Wordwise API",
    description="Vocabulary learning backend with spaced-repetition review scheduling",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(vocabulary_router)
app.include_router(learn_router)
app.include_router(seed_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Wordwise API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "vocabulary": "/vocabulary",
            "learn": "/learn/next",
            "review": "/learn/review",
            "stats": "/learn/stats",
            "seed": "/seed",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}
