# ecotrack/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ecotrack.api.v1.endpoints import footprints
from ecotrack.core.config import settings
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="EcoTrack Footprint API",
    description="API to estimate a yearly carbon footprint, classify it and suggest personalized reductions.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    footprints.router,
    prefix="/api/v1/footprints",
    tags=["Footprints"]
)

@app.get("/", tags=["Health Check"])
async def read_root():
    logger.info("Health check endpoint '/' accessed.")
    return {"message": "Welcome to the EcoTrack Footprint API!"}
