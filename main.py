# main.py - FastAPI application entry point
from contextlib import asynccontextmanager
import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import config
from routes import auth_routes
from routes import report_routes
from routes import notification_routes
from routes import geocode_routes
from routes import upload_routes
from services.dependencies import report_store
from services.seed import seed_store

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Seeds demo data once per process
@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.SEED_SAMPLE_COUNT > 0:
        seed_store(report_store, config.SEED_SAMPLE_COUNT, config.SEED_RANDOM_SEED)
    logger.info("CivicPulse backend ready with %d reports", report_store.count())
    yield


app = FastAPI(
    title="CivicPulse API",
    description="Civic issue reporting backend: citizens report and upvote issues, admins triage and resolve them.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS for the citizen and admin web apps
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded attachments are served straight from disk
os.makedirs(config.UPLOAD_DIR, exist_ok=True)
app.mount(upload_routes.STATIC_PREFIX, StaticFiles(directory=config.UPLOAD_DIR), name="uploads")

# Register every router under its prefix
app.include_router(auth_routes.router, prefix="/auth", tags=["auth"])
app.include_router(report_routes.router, prefix="/reports", tags=["reports"])
app.include_router(
    notification_routes.router, prefix="/notifications", tags=["notifications"]
)
app.include_router(geocode_routes.router, prefix="/geocode", tags=["geocode"])
app.include_router(upload_routes.router, prefix="/uploads", tags=["uploads"])


# Health check
@app.get("/")
async def root():
    return {"message": "CivicPulse backend running"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
