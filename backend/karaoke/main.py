"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from karaoke.config import settings
from karaoke.database import Base, engine

# Import routers
from karaoke.routers import events, song_requests, public

# Import all models so Base.metadata knows about them
from karaoke.models.event import Event               # noqa: F401
from karaoke.models.song_request import SongRequest  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Karaoke Queue",
    description="Karaoke night queue — operator booth, attendee bookings and a live public queue with wait estimates",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(song_requests.router, prefix="/api/events/{event_id}/requests", tags=["Requests"])
app.include_router(public.router, prefix="/api/public", tags=["Public"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
