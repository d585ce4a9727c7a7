"""
Request / response logging middleware.

Health probes are logged at debug so they do not drown out chat traffic.
"""

import time

from fastapi import Request
from loguru import logger

QUIET_PATHS = {"/health", "/api/health"}


async def logging_middleware(request: Request, call_next):
    path = request.url.path
    log = logger.debug if path in QUIET_PATHS else logger.info
    start = time.perf_counter()
    log(f"→ {request.method} {path}")

    response = await call_next(request)

    elapsed = round((time.perf_counter() - start) * 1000, 2)
    response.headers["X-Process-Time-Ms"] = str(elapsed)
    log(f"← {request.method} {path} [{response.status_code}] {elapsed}ms")
    return response
