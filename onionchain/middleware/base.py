"""Middleware contract — each middleware can pass through or short-circuit."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

Next = Callable[[], Awaitable[Any]]
MiddlewareFn = Callable[[Any, Next], Any]


class Middleware(ABC):
    """Class-based middleware; instances compose like plain functions.

    Code before ``await call_next()`` runs on the way in, code after it runs
    on the way out. Returning without calling ``call_next`` skips the rest
    of the chain.
    """

    @abstractmethod
    async def __call__(self, ctx: Any, call_next: Next) -> Any: ...
