"""Application-wide configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# Redis (backing store for profiles, keyword profiles, journals, ...)
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

# ── Analytics Configuration ─────────────────────────────────────────────

# Other users sampled for similarity matching and complementary mining
CANDIDATE_SAMPLE_SIZE: int = int(os.getenv("CANDIDATE_SAMPLE_SIZE", "100"))

# Minimum overlap percentage for a similar professional
SIMILARITY_THRESHOLD: float = float(os.getenv("SIMILARITY_THRESHOLD", "30"))

# Journals newer than this count as recent activity
RECENT_WINDOW_DAYS: int = int(os.getenv("RECENT_WINDOW_DAYS", "30"))

# Upper bound on a single report computation at the HTTP boundary
REPORT_TIMEOUT_SECONDS: float = float(os.getenv("REPORT_TIMEOUT_SECONDS", "30"))

# ── Server Configuration ─────────────────────────────────────────────────

SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
