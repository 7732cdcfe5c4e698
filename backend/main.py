import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.core.clients import HTTPResources
from backend.app.core.config import settings
from backend.app.core.errors import register_exception_handlers
from backend.app.routers import equipment, predict

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("predictive_maintenance")


# --- FastAPI lifespan: one shared HTTP client ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Predictive maintenance API: starting (model %s)", settings.MODEL_VERSION)
    HTTPResources.client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    yield
    logger.info("Predictive maintenance API: shutting down, closing HTTP client")
    await HTTPResources.client.aclose()
    HTTPResources.client = None


app = FastAPI(
    title="Predictive Maintenance Analytics API",
    description="Equipment health scoring, maintenance recommendations and fleet insights.",
    version="3.2.1",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/redoc",
)

# --- MIDDLEWARE: CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(predict.router)
app.include_router(equipment.router)


@app.get("/api/health", tags=["Utilities"])
async def health_check():
    return {
        "status": "ok",
        "message": "Predictive maintenance API is ready.",
        "model_version": settings.MODEL_VERSION,
        "http_client": "ready" if HTTPResources.client is not None else "uninitialized",
    }
