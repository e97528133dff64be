"""Wall-clock timing middleware."""

import time
from typing import Any

import structlog

from onionchain.middleware.base import Middleware, Next

logger = structlog.get_logger()


class TimingMiddleware(Middleware):
    def __init__(self, name: str = "pipeline") -> None:
        self._name = name

    async def __call__(self, ctx: Any, call_next: Next) -> Any:
        started = time.monotonic()
        failed = False
        try:
            return await call_next()
        except Exception:
            failed = True
            raise
        finally:
            duration_ms = (time.monotonic() - started) * 1000
            logger.info(
                "middleware_timing",
                name=self._name,
                duration_ms=round(duration_ms, 3),
                failed=failed,
            )
