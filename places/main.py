"""FastAPI application"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .routes.places import router as places_router
from .routes.hours import router as hours_router
from .config import PLACES_TZ
from .database import Base, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Database ready (hours evaluated in {PLACES_TZ})")
    except SQLAlchemyError as e:
        logger.warning(f"Table creation failed (non-fatal): {e}")
    yield


app = FastAPI(
    title="Places API",
    description="Map places with weekly hours and open-now status",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS (open for the map front end)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(places_router)
app.include_router(hours_router)
