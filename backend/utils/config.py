"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./sites.db",
    )

# Blob storage for before/after photos (local filesystem, served under /media).
UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "./uploads")
MEDIA_BASE_URL = os.environ.get("MEDIA_BASE_URL", f"http://localhost:{PORT}/media")

# Frontend origin: QR codes encode {PUBLIC_APP_URL}/upload/{qrCodeId}.
PUBLIC_APP_URL = os.environ.get("PUBLIC_APP_URL", "http://localhost:8080")
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8080").split(",")
    if o.strip()
]

ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "password")
SESSION_TTL_MINUTES = int(os.environ.get("SESSION_TTL_MINUTES", "480"))
