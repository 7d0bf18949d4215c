from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Event, Timer
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]


@dataclass(eq=False)
class ThinkingToken:
    """Handle for one pending opponent move; ``generation`` ties it to a game state."""

    generation: int
    payload: Any = None
    timer: Optional[Any] = None
    _cancel_event: Event = field(default_factory=Event, init=False, repr=False)
    _fired: Event = field(default_factory=Event, init=False, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def fired(self) -> bool:
        return self._fired.is_set()

    def cancel(self) -> None:
        self._cancel_event.set()
        if self.timer is not None:
            self.timer.cancel()


def _thread_timer(delay: float, callback: Callable[[], None]) -> Timer:
    timer = Timer(delay, callback)
    timer.daemon = True
    return timer


class ThinkingScheduler:
    """Runs a callback after a fixed "thinking" delay unless cancelled first."""

    def __init__(self, delay: float = 0.45, *, timer_factory: TimerFactory = _thread_timer) -> None:
        if delay < 0:
            raise ValueError("Thinking delay must not be negative.")
        self.delay = delay
        self._timer_factory = timer_factory

    def schedule(
        self,
        generation: int,
        callback: Callable[[ThinkingToken], None],
        payload: Any = None,
    ) -> ThinkingToken:
        token = ThinkingToken(generation=generation, payload=payload)

        def _fire() -> None:
            if token.cancelled:
                logger.debug("Thinking token %d cancelled before firing.", generation)
                return
            token._fired.set()
            callback(token)

        if self.delay == 0:
            _fire()
            return token

        token.timer = self._timer_factory(self.delay, _fire)
        token.timer.start()
        return token
