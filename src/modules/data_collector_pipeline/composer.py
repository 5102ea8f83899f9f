import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

PipelineStep = Callable[[], Awaitable[None]]


class PipelineComposer:
    """Runs named async steps in order; a failing step stops the run."""

    def __init__(self) -> None:
        self._steps: list[tuple[str, PipelineStep]] = []

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self._steps]

    def add_step(self, name: str, step: PipelineStep) -> None:
        self._steps.append((name, step))

    async def run(self) -> None:
        logger.info("Pipeline started (%d steps)", len(self._steps))
        for name, step in self._steps:
            started = time.perf_counter()
            try:
                await step()
            except Exception:
                logger.error("Step '%s' failed, aborting pipeline", name)
                raise
            logger.info("Completed step '%s' in %.2fs", name, time.perf_counter() - started)
        logger.info("Pipeline finished")
