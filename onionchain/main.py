"""CLI entry point: runs a two-middleware demo pipeline."""

import asyncio
import sys

import structlog
from pydantic import BaseModel

from onionchain.app import configure_logging
from onionchain.core.compose import compose
from onionchain.core.config import OnionchainConfig
from onionchain.middleware.base import Next
from onionchain.middleware.timing import TimingMiddleware

logger = structlog.get_logger()


class DemoContext(BaseModel):
    name: str


async def middleware1(ctx: DemoContext, call_next: Next) -> None:
    print("Middleware 1-start:", ctx.name)
    await call_next()
    print("Middleware1-end")


async def middleware2(ctx: DemoContext, call_next: Next) -> None:
    print("Middleware 2-start:", ctx.name)
    await call_next()
    print("middleware2-end")


async def main() -> None:
    try:
        config = OnionchainConfig()
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config)

    composed = compose([TimingMiddleware("demo"), middleware1, middleware2])
    logger.info("demo_starting", name=config.demo_name)
    await composed(DemoContext(name=config.demo_name))
    print("All middlewares executed.")


def run() -> None:
    asyncio.run(main())
