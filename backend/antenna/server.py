"""FastAPI server exposing the DNA metrics report.

GET /api/dna-metrics?user_id=...  → full analytics report for one user
GET /api/health                   → liveness + Redis reachability
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import redis
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from antenna.config.settings import REDIS_URL, REPORT_TIMEOUT_SECONDS
from antenna.engine.aggregator import compute_report
from antenna.errors import ComputationError, InputError, NotFoundError
from antenna.models.report import ErrorResponse

logger = logging.getLogger(__name__)

app = FastAPI(title="Antenna", description="Signal analytics for professional profiles")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.get("/api/health")
async def health():
    r = _get_redis()
    try:
        r.ping()
        redis_ok = True
    except redis.RedisError:
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}


@app.get("/api/dna-metrics")
async def dna_metrics(user_id: Optional[str] = Query(default=None)):
    """Compute the DNA metrics report for a user.

    The computation is a synchronous full-population scan, so it runs in a
    worker thread bounded by REPORT_TIMEOUT_SECONDS.
    """
    if not user_id or not user_id.strip():
        return _error(400, "user_id required")

    r = _get_redis()
    try:
        report = await asyncio.wait_for(
            asyncio.to_thread(compute_report, user_id, r),
            timeout=REPORT_TIMEOUT_SECONDS,
        )
    except InputError as exc:
        return _error(exc.status_code, str(exc))
    except NotFoundError as exc:
        logger.info("DNA metrics: %s", exc)
        return _error(exc.status_code, "Profile not found")
    except asyncio.TimeoutError:
        logger.error("DNA metrics for %s exceeded %.0fs", user_id, REPORT_TIMEOUT_SECONDS)
        return _error(504, "Metrics computation timed out")
    except ComputationError as exc:
        return _error(exc.status_code, "Failed to fetch metrics", str(exc.cause))
    except Exception as exc:
        logger.exception("Error fetching DNA metrics for %s", user_id)
        return _error(500, "Failed to fetch metrics", str(exc))

    return report.model_dump(by_alias=True)
