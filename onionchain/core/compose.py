"""Compose async middleware into a single onion-style dispatcher.

Entry code runs forward through the chain and exit code unwinds in reverse:

    ctx → mw[0] → mw[1] → ... → mw[n-1] → terminal
    ctx ← mw[0] ← mw[1] ← ... ← mw[n-1] ←─────┘

Each middleware receives ``(ctx, call_next)``. Calling ``call_next()`` schedules
everything downstream and returns a future for its result; returning without
calling it short-circuits.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from onionchain.exceptions import InvalidArgumentError, ReentrantNextError
from onionchain.middleware.base import MiddlewareFn, Next

logger = structlog.get_logger()

Dispatcher = Callable[..., Awaitable[Any]]


async def _noop(ctx: Any, call_next: Next) -> None:
    return None


def _accepts_two_args(fn: Callable[..., Any]) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins and some C callables expose no signature.
        return True
    try:
        sig.bind(None, None)
    except TypeError:
        return False
    return True


def _validate(chain: Any) -> tuple[MiddlewareFn, ...]:
    if not isinstance(chain, Sequence) or isinstance(chain, (str, bytes, bytearray)):
        raise InvalidArgumentError(
            "Middleware stack must be a sequence!", kind="not a sequence"
        )
    for position, fn in enumerate(chain):
        if not callable(fn) or not _accepts_two_args(fn):
            raise InvalidArgumentError(
                "Middleware must be composed of functions!",
                kind="not callable",
                position=position,
            )
    return tuple(chain)


class DispatchCursor:
    """Highest chain index started by one dispatcher invocation."""

    __slots__ = ("index",)

    def __init__(self) -> None:
        self.index = -1


class _Dispatch:
    """State for a single run of a composed pipeline."""

    def __init__(
        self,
        chain: tuple[MiddlewareFn, ...],
        ctx: Any,
        terminal: MiddlewareFn | None,
    ) -> None:
        self._chain = chain
        self._ctx = ctx
        self._terminal = terminal
        self.cursor = DispatchCursor()

    def step(self, i: int) -> Awaitable[Any]:
        if i <= self.cursor.index:
            raise ReentrantNextError(i)
        self.cursor.index = i

        fn: MiddlewareFn | None
        if i < len(self._chain):
            fn = self._chain[i]
        elif i == len(self._chain):
            fn = self._terminal if self._terminal is not None else _noop
        else:
            # Only reachable when the terminal calls its own continuation.
            fn = None
        # Downstream starts on the call, not on the await.
        return asyncio.ensure_future(self._invoke(fn, i))

    async def _invoke(self, fn: MiddlewareFn | None, i: int) -> Any:
        if fn is None:
            return None
        result = fn(self._ctx, self._continuation(i + 1))
        if inspect.isawaitable(result):
            return await result
        return result

    def _continuation(self, i: int) -> Next:
        def call_next() -> Awaitable[Any]:
            return self.step(i)

        return call_next


def compose(chain: Sequence[MiddlewareFn]) -> Dispatcher:
    """Build a dispatcher that runs *chain* in onion order.

    Raises InvalidArgumentError if *chain* is not a sequence or holds an
    element that cannot be called as ``fn(ctx, call_next)``. The chain is
    copied, so later changes to the caller's list have no effect.

    The returned coroutine function ``dispatcher(ctx, terminal=None)``
    resolves with whatever the first middleware returns. Any exception raised
    inside the chain, including ReentrantNextError, propagates unchanged.
    """
    middleware = _validate(chain)
    logger.debug("pipeline_composed", chain_length=len(middleware))

    async def dispatcher(ctx: Any, terminal: MiddlewareFn | None = None) -> Any:
        run = _Dispatch(middleware, ctx, terminal)
        try:
            return await run.step(0)
        except Exception as e:
            logger.debug(
                "pipeline_failed",
                error_type=type(e).__name__,
                error=str(e),
                cursor=run.cursor.index,
                chain_length=len(middleware),
            )
            raise

    return dispatcher
