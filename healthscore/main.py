import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# IMPORT ROUTERS
from healthscore.routers.health import router as health_router
from healthscore.routers.evidence import router as evidence_router
from healthscore.routers.stocks import router as stocks_router
from healthscore.config import settings
from healthscore.logging_config import configure_logging

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)


# SWAGGER UI tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Evidence"},
    {"name": "Stocks"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)           # Health
app.include_router(evidence_router)         # Evidence
app.include_router(stocks_router)           # Stocks


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.APP_NAME} API ({settings.APP_ENV})")
    if settings.ALPHA_VANTAGE_KEY is None:
        logger.warning("ALPHA_VANTAGE_KEY not set; /api/v1/stocks will return 503")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME} API")
