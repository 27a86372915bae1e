"""
Trailing-edge debouncer.

Delays propagation of rapidly changing editor text until the input has been
quiet for a fixed interval. Only the final value of a burst is emitted.

Dependencies: asyncio
System role: Input throttling in front of the validation pipeline
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Emit the last observed value once no new value arrived for `delay_ms`.

    Timers run on the current asyncio event loop. Observing a new value
    cancels the pending emission, so a cancelled value never reaches
    `on_emit`. There is no leading emission.
    """

    def __init__(
        self,
        delay_ms: int,
        on_emit: Callable[[T], None],
        initial: T | None = None,
    ) -> None:
        """
        Initialize debouncer.

        Args:
            delay_ms: Quiet period in milliseconds
            on_emit: Called with the debounced value on the event loop
            initial: Value reported by `value` before the first emission
        """
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._delay = delay_ms / 1000
        self._on_emit = on_emit
        self._value = initial
        self._timer: asyncio.TimerHandle | None = None
        self._closed = False

    @property
    def value(self) -> T | None:
        """Latest emitted value."""
        return self._value

    @property
    def pending(self) -> bool:
        """Whether an emission is scheduled."""
        return self._timer is not None

    def observe(self, value: T) -> None:
        """
        Schedule emission of `value` after the quiet period.

        Any previously scheduled emission is cancelled.

        Args:
            value: Newly observed value
        """
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire, value)

    def cancel(self) -> None:
        """Drop the pending emission, if any. The debouncer stays usable."""
        self._cancel_timer()

    def close(self) -> None:
        """Release the pending timer and stop accepting values."""
        self._cancel_timer()
        self._closed = True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, value: T) -> None:
        self._timer = None
        self._value = value
        logger.debug(f"{__name__}:_fire - emitting debounced value")
        self._on_emit(value)
