"""
Generation progress tracking and streaming.

The tracker turns phase changes into ``GenerationProgress`` events with an
overall percentage derived from the fixed phase weight table. The stream
helper wraps a generation run into newline-delimited JSON events that end
in exactly one ``result`` or ``error`` event.
"""

import asyncio
import json
import time
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Mapping, Optional

from ..models import GenerationPhase, GenerationProgress, GenerationResult
from ..profiles import PHASE_WEIGHTS

ProgressCallback = Callable[[GenerationProgress], None]


@dataclass(frozen=True)
class PhaseInfo:
    label: str
    description: str


PHASE_INFO: Mapping[GenerationPhase, PhaseInfo] = {
    GenerationPhase.ANALYZING_INTENT: PhaseInfo("Analyzing Intent", "Understanding your request and goals"),
    GenerationPhase.DETECTING_STYLE: PhaseInfo("Detecting Style", "Choosing optimal video style"),
    GenerationPhase.PLANNING_NARRATIVE: PhaseInfo("Planning Narrative", "Building story structure and emotional arc"),
    GenerationPhase.STRUCTURING_SCENES: PhaseInfo("Structuring Scenes", "Creating scene layouts and compositions"),
    GenerationPhase.CREATING_BEATS: PhaseInfo("Creating Beats", "Adding visual rhythm and timing"),
    GenerationPhase.VALIDATING_QUALITY: PhaseInfo("Validating Quality", "Ensuring premium standards"),
    GenerationPhase.FINALIZING: PhaseInfo("Finalizing", "Completing video specification"),
    GenerationPhase.COMPLETE: PhaseInfo("Complete", "Video ready!"),
}


class ProgressTracker:
    """Emit progress events for the generation state machine.

    Args:
        callback: Called synchronously with every event, in emission order.
        weights: (start, end) overall percentage per phase.
    """

    def __init__(
        self,
        callback: Optional[ProgressCallback] = None,
        weights: Mapping[GenerationPhase, tuple[int, int]] = PHASE_WEIGHTS,
    ):
        self.callback = callback
        self.weights = weights
        self.phase = GenerationPhase.ANALYZING_INTENT
        self.phase_progress = 0
        self.events: list[GenerationProgress] = []
        self._started = time.monotonic()

    def _overall(self) -> int:
        start, end = self.weights[self.phase]
        return round(start + (end - start) * self.phase_progress / 100)

    def snapshot(self, message: Optional[str] = None, **extra) -> GenerationProgress:
        return GenerationProgress(
            phase=self.phase,
            phase_progress=self.phase_progress,
            overall_progress=self._overall(),
            message=message or PHASE_INFO[self.phase].description,
            **extra,
        )

    def _emit(self, message: Optional[str] = None, **extra) -> GenerationProgress:
        event = self.snapshot(message, **extra)
        self.events.append(event)
        if self.callback is not None:
            self.callback(event)
        return event

    def start_phase(self, phase: GenerationPhase, message: Optional[str] = None) -> GenerationProgress:
        self.phase = phase
        self.phase_progress = 0
        return self._emit(message)

    def update_progress(self, phase_progress: int, message: Optional[str] = None, **extra) -> GenerationProgress:
        """Report progress inside the current phase, clamped to 0-100."""
        self.phase_progress = min(100, max(0, phase_progress))
        return self._emit(message, **extra)

    def complete_phase(self) -> GenerationProgress:
        self.phase_progress = 100
        return self._emit()

    def complete(self) -> GenerationProgress:
        self.phase = GenerationPhase.COMPLETE
        self.phase_progress = 100
        return self._emit()

    @property
    def elapsed(self) -> float:
        """Seconds since the tracker was created."""
        return time.monotonic() - self._started


# ============================================================================
# DISPLAY HELPERS
# ============================================================================


def create_progress_bar(percent: float, width: int = 20) -> str:
    filled = round(percent / 100 * width)
    return f"[{'█' * filled}{'░' * (width - filled)}]"


def format_progress(progress: GenerationProgress) -> str:
    bar = create_progress_bar(progress.overall_progress)
    return f"{bar} {progress.overall_progress}% - {PHASE_INFO[progress.phase].label}"


def estimate_remaining_time(elapsed_seconds: float, progress_percent: float) -> Optional[int]:
    """Seconds left at the current rate, None before any progress."""
    if progress_percent <= 0 or elapsed_seconds <= 0:
        return None
    if progress_percent >= 100:
        return 0
    rate = progress_percent / elapsed_seconds
    return round((100 - progress_percent) / rate)


# ============================================================================
# STREAMING
# ============================================================================


def _event_line(event: dict) -> str:
    return json.dumps(event, ensure_ascii=False) + "\n"


async def stream_generation(
    generate: Callable[[ProgressCallback], Awaitable[GenerationResult]],
) -> AsyncIterator[str]:
    """Run a generation and yield its events as NDJSON lines.

    Args:
        generate: Coroutine function that runs the generation, reporting
            progress through the callback it receives.

    Yields:
        One ``progress`` line per event, then a single ``result`` or
        ``error`` line.
    """
    queue: asyncio.Queue = asyncio.Queue()

    async def run() -> None:
        try:
            result = await generate(lambda event: queue.put_nowait(("progress", event)))
        except Exception as e:  # surfaced to the consumer as the terminal error event
            queue.put_nowait(("error", e))
        else:
            queue.put_nowait(("result", result))

    task = asyncio.create_task(run())
    try:
        while True:
            kind, payload = await queue.get()
            if kind == "progress":
                yield _event_line(
                    {"type": "progress", "data": payload.model_dump(mode="json", by_alias=True, exclude_none=True)}
                )
            elif kind == "result":
                yield _event_line({"type": "result", "data": payload.to_render_payload()})
                break
            else:
                yield _event_line({"type": "error", "error": str(payload) or type(payload).__name__})
                break
    finally:
        if not task.done():
            task.cancel()
