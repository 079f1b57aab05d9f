"""Background worker that runs ingestion cycles on a timer."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from loguru import logger

from newsfeed.models.results import CycleResult
from newsfeed.utils.timing import wait_or_stop

CycleRunner = Callable[[asyncio.Event], Awaitable[CycleResult]]


class IngestionWorker:
    """Runs ``run_cycle`` after a startup delay, then once per interval.

    Cycles never overlap. Failures are logged and the next cycle is still
    scheduled. ``stop()`` ends the loop before the next cycle starts; a cycle in
    flight sees the same event and stops between items.
    """

    def __init__(
        self,
        run_cycle: CycleRunner,
        startup_delay_seconds: float,
        interval_seconds: float,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        self._run_cycle = run_cycle
        self.startup_delay_seconds = startup_delay_seconds
        self.interval_seconds = interval_seconds
        self.stop_event = stop_event or asyncio.Event()
        self.cycles_completed = 0
        self.cycles_failed = 0
        self.last_result: CycleResult | None = None

    def stop(self) -> None:
        """Request a graceful stop."""
        if not self.stop_event.is_set():
            logger.info("Ingestion worker is stopping gracefully")
        self.stop_event.set()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    async def run_once(self) -> CycleResult | None:
        """Run one cycle, converting any failure into a log entry."""
        logger.info(f"Ingestion worker is running at: {datetime.now(UTC).isoformat()}")
        try:
            result = await self._run_cycle(self.stop_event)
        except Exception:
            self.cycles_failed += 1
            logger.exception("Error occurred while running ingestion cycle")
            return None

        self.cycles_completed += 1
        self.last_result = result
        logger.info(
            f"Ingestion cycle completed: {result.imported} imported, {result.skipped} skipped, "
            f"{result.filtered} filtered, {result.failed} failed"
        )
        return result

    async def run(self) -> None:
        """Loop until stopped."""
        logger.info("Ingestion worker is starting")

        if await wait_or_stop(self.stop_event, self.startup_delay_seconds):
            logger.info("Ingestion worker stopped before the first cycle")
            return

        while not self.stopped:
            await self.run_once()

            logger.info(f"Next run scheduled in {self.interval_seconds / 3600:g} hours")
            if await wait_or_stop(self.stop_event, self.interval_seconds):
                break

        logger.info("Ingestion worker is stopping")
