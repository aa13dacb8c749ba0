"""QR site tracker: FastAPI backend for QR-coded work sites and before/after photos."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

# Show request-level warnings and write operations (INFO level)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("site_core").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.auth import router as auth_router
from api.errors import register_exception_handlers
from api.import_api import router as import_router
from api.locations import router as locations_router
from api.photos import router as photos_router
from api.routes import router
from utils.config import CORS_ORIGINS, UPLOAD_DIR

app = FastAPI(
    title="QR Site Tracker",
    description="Location registry, photo documentation and completion status for QR-coded work sites",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# API routes under /api; uploaded photos under /media
app.include_router(router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(locations_router, prefix="/api")
app.include_router(photos_router, prefix="/api")
app.include_router(import_router, prefix="/api")
app.mount("/media", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="media")


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and make sure the photo directory exists."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    os.makedirs(UPLOAD_DIR, exist_ok=True)


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "qr-site-tracker", "docs": "/docs", "health": "/api/health"}
