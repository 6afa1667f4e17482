from __future__ import annotations
import asyncio
from typing import List, Optional

from flightpath.core.config import FRAME_RATE_HZ
from flightpath.core.logger import get_logger
from flightpath.schemas.flight import LogEntry, SimState
from flightpath.services.simulation import SimulationEngine

log = get_logger(__name__)


class FlightPlayer:
    """Cooperative frame loop: one ``engine.tick`` per frame on the running event loop.

    Only one run is driven at a time. ``start`` cancels the previous task
    before scheduling a new one; the engine's run id check covers a callback
    that was already past its await when the cancel landed.
    """

    def __init__(self, engine: SimulationEngine, frame_rate_hz: float = FRAME_RATE_HZ):
        self.engine = engine
        self.frame_interval = 1.0 / frame_rate_hz
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, run_id: int) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(run_id))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, run_id: int) -> None:
        loop = asyncio.get_running_loop()
        while True:
            await asyncio.sleep(self.frame_interval)
            if not self.engine.is_current(run_id):
                return
            entry = self.engine.tick(loop.time(), run_id=run_id)
            if entry is None or self.engine.state is SimState.COMPLETED:
                return

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.shield(self._task)


def run_offline(engine: SimulationEngine, dt: float) -> List[LogEntry]:
    """Drive a launched engine to completion with fixed ``dt`` ticks (no wall clock)."""
    if dt <= 0:
        raise ValueError("dt must be positive")
    run_id = engine.run_id
    ticks = 0
    while engine.is_current(run_id):
        engine.tick(ticks * dt, run_id=run_id)
        ticks += 1
    log.info("offline run=%d finished: %d ticks at dt=%.4f s", run_id, ticks, dt)
    return engine.log.entries
