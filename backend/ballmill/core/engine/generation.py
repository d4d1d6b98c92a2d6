"""
Design generation workflow.

collecting-requirements -> generating -> options-ready, and back to
collecting-requirements when the inputs are edited.

Generation itself is one batch computation; the eight named phases only pace
the progress reported to the client. A run is an asyncio task, so a newer
request can cancel (supersede) an older one instead of interleaving results.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, List, Optional

from ballmill.core.logging import get_logger
from ballmill.core.settings import settings
from ballmill.schemas.catalog import Material
from ballmill.schemas.design import DesignRequirements, GenerationEvent, RankedDesignOption
from ballmill.schemas.enums import GenerationState

from .design import generate_options, rank_options

logger = get_logger(__name__)

GENERATION_PHASES = (
    "Analysing requirements",
    "Reviewing material database",
    "Computing engineering parameters",
    "Generating design options",
    "Optimising performance",
    "Economic evaluation",
    "Risk and reliability analysis",
    "Preparing recommendations",
)


class GenerationRun:
    """
    One generation request.

    Events are buffered in a queue so the consumer can attach after the task
    has started. The stream always ends: with the options, with a
    ``superseded`` event when the run is cancelled, or with an ``error`` event
    when the computation raised.
    """

    def __init__(
        self,
        requirements: DesignRequirements,
        material: Optional[Material] = None,
        step_delay: Optional[float] = None,
        on_complete: Optional[Callable[["GenerationRun"], None]] = None,
        on_failed: Optional[Callable[["GenerationRun"], None]] = None,
    ):
        self.requirements = requirements
        self.material = material
        self.step_delay = settings.generation_step_delay_s if step_delay is None else step_delay
        self.options: Optional[List[RankedDesignOption]] = None
        self.progress = 0.0
        self._on_complete = on_complete
        self._on_failed = on_failed
        self._queue: asyncio.Queue[Optional[GenerationEvent]] = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None

    def start(self) -> "GenerationRun":
        if self._task is not None:
            raise RuntimeError("generation run already started")
        self._task = asyncio.create_task(self._run())
        self._task.add_done_callback(self._finish)
        return self

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self) -> None:
        total = len(GENERATION_PHASES)
        for index, phase in enumerate(GENERATION_PHASES):
            self.progress = (index + 1) / total * 100
            await self._queue.put(
                GenerationEvent(
                    state=GenerationState.GENERATING,
                    phase=phase,
                    step=index + 1,
                    total_steps=total,
                    progress=self.progress,
                )
            )
            await asyncio.sleep(self.step_delay)

        self.options = rank_options(generate_options(self.requirements, self.material), self.requirements)
        if self._on_complete is not None:
            self._on_complete(self)
        await self._queue.put(
            GenerationEvent(
                state=GenerationState.OPTIONS_READY,
                step=total,
                total_steps=total,
                progress=100.0,
                options=self.options,
            )
        )

    def _finish(self, task: asyncio.Task) -> None:
        # Runs for every outcome, including a cancel before the first step
        total = len(GENERATION_PHASES)
        if task.cancelled():
            logger.info("design_generation_superseded", progress=round(self.progress, 1))
            self._queue.put_nowait(
                GenerationEvent(
                    state=GenerationState.GENERATING,
                    total_steps=total,
                    progress=self.progress,
                    superseded=True,
                )
            )
        elif task.exception() is not None:
            exc = task.exception()
            logger.error(
                "design_generation_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                progress=round(self.progress, 1),
                exc_info=exc,
            )
            if self._on_failed is not None:
                self._on_failed(self)
            self._queue.put_nowait(
                GenerationEvent(
                    state=GenerationState.COLLECTING_REQUIREMENTS,
                    total_steps=total,
                    progress=self.progress,
                    error=f"{type(exc).__name__}: {exc}",
                )
            )
        self._queue.put_nowait(None)

    async def events(self) -> AsyncIterator[GenerationEvent]:
        """Progress events in order, ending with the terminal event (options, superseded or error)."""
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event

    async def result(self) -> List[RankedDesignOption]:
        """Wait for the ranked options; raises CancelledError if superseded."""
        if self._task is None:
            raise RuntimeError("generation run not started")
        await self._task
        if self.options is None:
            raise RuntimeError("generation run finished without options")
        return self.options


class DesignAssistantSession:
    """Workflow state of one design assistant user; at most one run in flight."""

    def __init__(self, step_delay: Optional[float] = None):
        self.step_delay = step_delay
        self.state = GenerationState.COLLECTING_REQUIREMENTS
        self.options: Optional[List[RankedDesignOption]] = None
        self._run: Optional[GenerationRun] = None

    @property
    def current_run(self) -> Optional[GenerationRun]:
        return self._run

    def generate(self, requirements: DesignRequirements, material: Optional[Material] = None) -> GenerationRun:
        """Start a run, cancelling the one in flight. Must be called from a running event loop."""
        if self._run is not None and not self._run.done:
            self._run.cancel()
        self.options = None
        self.state = GenerationState.GENERATING
        self._run = GenerationRun(
            requirements,
            material,
            self.step_delay,
            on_complete=self._complete,
            on_failed=self._failed,
        )
        logger.info(
            "design_generation_started",
            capacity_tph=requirements.capacity,
            priority=requirements.priority.value,
            material=material.key if material else None,
        )
        return self._run.start()

    def edit_requirements(self) -> None:
        """Back to collecting requirements; drops options and any run in flight."""
        if self._run is not None:
            self._run.cancel()
        self._run = None
        self.options = None
        self.state = GenerationState.COLLECTING_REQUIREMENTS

    def _complete(self, run: GenerationRun) -> None:
        # A superseded run must not overwrite the newer one's state
        if run is not self._run:
            return
        self.options = run.options
        self.state = GenerationState.OPTIONS_READY
        logger.info("design_generation_completed", options=len(run.options or []))

    def _failed(self, run: GenerationRun) -> None:
        if run is not self._run:
            return
        self.options = None
        self.state = GenerationState.COLLECTING_REQUIREMENTS
