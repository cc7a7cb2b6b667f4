from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class _Runner(Generic[T]):  # noqa: UP046
    def __init__(self, coro: Coroutine[Any, Any, T]):
        self.coro = coro
        self.out: T | None = None
        self.err: BaseException | None = None

    def run(self) -> None:
        try:
            self.out = asyncio.run(self.coro)
        except BaseException as e:  # noqa: BLE001
            self.err = e


def run_async(coro: Coroutine[Any, Any, T]) -> T:  # noqa: UP047
    """Run a coroutine from sync Flask code, even if a loop is already running."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    r: _Runner[T] = _Runner(coro)
    t = threading.Thread(target=r.run, daemon=True)
    t.start()
    t.join()
    if r.err:
        raise r.err
    return r.out  # type: ignore[return-value]
