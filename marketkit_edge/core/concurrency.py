"""
Tolerant fan-out for independent upstream calls.

``settle_all`` waits for every awaitable to finish and reports each outcome
separately, so a failing call never cancels or fails its siblings.
"""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one awaited call: a value on success, an error otherwise."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        """Return the value on success, otherwise ``default``."""
        return self.value if self.ok else default


async def settle_all(*awaitables: Awaitable[Any]) -> list[Settled[Any]]:
    """
    Run awaitables concurrently and collect per-call results in order.

    Only ``Exception`` subclasses are captured; cancellation and other
    ``BaseException`` types propagate.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)

    settled: list[Settled[Any]] = []
    for result in results:
        if isinstance(result, Exception):
            settled.append(Settled(error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(Settled(value=result))
    return settled
