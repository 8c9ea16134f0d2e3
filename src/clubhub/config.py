"""Configuration module for ClubHub.

This module provides centralized configuration management, including directory
paths, database location, API server settings, authentication and application
defaults. All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project (the checkout containing src/)
ROOT_DIR = Path(__file__).resolve().parent.parent.parent

# Data directory (holds the SQLite database by default)
DATA_DIR_NAME = "data"
DATA_DIR = Path(os.getenv("DATA_DIR", str(ROOT_DIR / DATA_DIR_NAME)))

# --- Database Configuration ---

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/clubhub.db")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080,"
    "http://127.0.0.1:8080,http://localhost:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7))  # 7 days
)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Admin registration token. When unset, admin registration is open.
ADMIN_TOKEN: Optional[str] = os.getenv("ADMIN_TOKEN")

# --- Application Defaults ---

# Timezone used to decide what "today" is when filtering upcoming events
APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

# Number of notifications returned by the feed
NOTIFICATION_FEED_LIMIT: int = int(os.getenv("NOTIFICATION_FEED_LIMIT", "20"))

DEFAULT_CLUB_CATEGORY: str = "General"

# Display name for an accepted member without a role
DEFAULT_MEMBER_ROLE_NAME: str = "Member"
PRESIDENT_ROLE_NAME: str = "President"

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
