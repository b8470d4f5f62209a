"""
Health check endpoint.

Reports that the process is serving requests, the current time and
the seconds elapsed since the application started.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health(request: Request) -> Dict[str, Any]:
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.monotonic() - started_at,
    }
