"""Periodic one-second tick driving a single focus session"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Union

from app.services.errors import StateError
from .break_scheduler import advance
from .models.timer_state import TimerSignal, TimerState, TimerStatus

logger = logging.getLogger(__name__)

SignalHandler = Callable[[TimerSignal, TimerState], Union[None, Awaitable[None]]]


class TimerTicker:
    """
    Runs advance() on one TimerState at a fixed interval.

    The ticker owns its state exclusively; readers get snapshots through
    `state`. Once stop() has been called no further tick is applied, even if
    the sleeping task wakes up before the cancellation lands.
    """

    def __init__(
        self,
        state: TimerState,
        on_signal: Optional[SignalHandler] = None,
        interval: float = 1.0,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._state = state
        self._on_signal = on_signal
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._stopped = False
        self.fired: List[TimerSignal] = []

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the tick loop on the running event loop"""
        if self.running:
            raise RuntimeError("Ticker already running")
        if self._state.status == TimerStatus.NOT_STARTED:
            raise StateError("Timer has not been started")
        self._stopped = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it to finish"""
        self._stopped = True
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def wait(self) -> TimerState:
        """Wait until the session completes or the ticker is stopped"""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self._state

    async def tick(self, delta_seconds: Optional[float] = None) -> List[TimerSignal]:
        """Apply one tick immediately; returns the signals it fired"""
        if self._stopped:
            return []
        result = advance(self._state, self._interval if delta_seconds is None else delta_seconds)
        self._state = result.state
        for signal in result.signals:
            self.fired.append(signal)
            await self._notify(signal)
        return result.signals

    async def _notify(self, signal: TimerSignal) -> None:
        if self._on_signal is None:
            return
        try:
            outcome = self._on_signal(signal, self._state)
            if asyncio.iscoroutine(outcome):
                await outcome
        except Exception as e:
            # Notifications are fire-and-forget
            logger.error(f"Timer notification failed for {signal.value}: {e}")

    async def _run(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self._interval)
            if self._stopped:
                break
            await self.tick()
            if self._state.status == TimerStatus.COMPLETED:
                logger.info("Timer ticker finished: session completed")
                break
