"""
Validation coordinator.

Runs the renderer check and the AI check for each debounced generation of
editor text, merges their outcomes by priority and publishes the resulting
DisplayState. Completions that belong to a superseded generation are dropped.

Dependencies: asyncio, visualizer.boundary.renderer, visualizer.core.agentic_system
System role: Dual-validation orchestration
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from visualizer.models.diagram import AiVerdict, DisplayState, RenderResult

logger = logging.getLogger(__name__)


class RenderChecker(Protocol):
    async def check(self, text: str) -> RenderResult: ...


class AiChecker(Protocol):
    async def check(self, text: str) -> AiVerdict: ...


class GenerationPhase(str, Enum):
    """Progress of one generation's two checks."""

    BOTH_PENDING = "both_pending"
    RENDER_DONE = "render_done"
    AI_DONE = "ai_done"
    BOTH_DONE = "both_done"


@dataclass(frozen=True)
class GenerationState:
    """Results collected so far for one generation."""

    token: int
    text: str
    render: RenderResult | None = None
    verdict: AiVerdict | None = None

    @property
    def phase(self) -> GenerationPhase:
        if self.render is None and self.verdict is None:
            return GenerationPhase.BOTH_PENDING
        if self.verdict is None:
            return GenerationPhase.RENDER_DONE
        if self.render is None:
            return GenerationPhase.AI_DONE
        return GenerationPhase.BOTH_DONE


def merge_error(render: RenderResult | None, verdict: AiVerdict | None) -> str | None:
    """
    Pick the single error message to show.

    The AI message wins when the model flags the text, then the renderer's
    error, otherwise no error. Missing results count as "no opinion yet".
    """
    if verdict is not None and verdict.flagged:
        return verdict.message
    if render is not None and render.failed:
        return render.error_message
    return None


def to_display_state(generation: GenerationState, previous_markup: str = "") -> DisplayState:
    """
    Derive the published state from a generation's collected results.

    Until the render completes, the previous diagram stays on screen.
    """
    render = generation.render
    markup = previous_markup if render is None else render.markup
    return DisplayState(
        generation=generation.token,
        markup=markup,
        error_message=merge_error(render, generation.verdict),
        rendering=render is None,
        checking=generation.verdict is None,
    )


class ValidationCoordinator:
    """
    Coordinate renderer and AI checks per generation.

    All state changes happen on the event loop between awaits, and every
    completion compares its captured token with the current one before it
    is applied.
    """

    def __init__(
        self,
        renderer: RenderChecker,
        ai_checker: AiChecker,
        publish: Callable[[DisplayState], None] | None = None,
    ) -> None:
        """
        Initialize validation coordinator.

        Args:
            renderer: Renderer adapter
            ai_checker: AI checker adapter
            publish: Receives every new DisplayState
        """
        self._renderer = renderer
        self._ai_checker = ai_checker
        self._publish = publish
        self._token = 0
        self._generation: GenerationState | None = None
        self._state = DisplayState.empty()
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> DisplayState:
        """Latest published display state."""
        return self._state

    @property
    def generation(self) -> GenerationState | None:
        """Active generation, or None for the empty generation."""
        return self._generation

    @property
    def token(self) -> int:
        return self._token

    def submit(self, text: str) -> int:
        """
        Start a new generation for `text`.

        Results of all earlier generations are discarded from now on, even
        if their checks are still in flight.

        Args:
            text: Debounced diagram text

        Returns:
            int: Token of the new generation
        """
        self._token += 1
        token = self._token

        if not text.strip():
            self._generation = None
            self._set_state(DisplayState.empty(token))
            return token

        self._generation = GenerationState(token=token, text=text)
        self._set_state(to_display_state(self._generation, self._state.markup))
        logger.debug(f"{__name__}:submit - generation={token}, text_len={len(text)}")

        self._spawn(self._run_render(token, text))
        self._spawn(self._run_ai_check(token, text))
        return token

    async def validate(self, text: str) -> DisplayState:
        """
        Run both checks once and return the merged state.

        Stateless: does not touch the published state or generation token.

        Args:
            text: Diagram text

        Returns:
            DisplayState: Final state with both checks done
        """
        if not text.strip():
            return DisplayState.empty()
        render, verdict = await asyncio.gather(
            self._renderer.check(text),
            self._ai_checker.check(text),
        )
        return to_display_state(GenerationState(token=0, text=text, render=render, verdict=verdict))

    async def wait_idle(self) -> None:
        """Wait until all in-flight checks have finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel in-flight checks; their results will never be applied."""
        self._token += 1
        self._generation = None
        for task in list(self._tasks):
            task.cancel()

    async def _run_render(self, token: int, text: str) -> None:
        result = await self._renderer.check(text)
        if not self._is_current(token, "render"):
            return
        self._generation = replace(self._generation, render=result)
        self._apply()

    async def _run_ai_check(self, token: int, text: str) -> None:
        verdict = await self._ai_checker.check(text)
        if not self._is_current(token, "ai_check"):
            return
        self._generation = replace(self._generation, verdict=verdict)
        self._apply()

    def _is_current(self, token: int, source: str) -> bool:
        if self._generation is None or self._generation.token != token:
            logger.debug(
                f"{__name__}:_is_current - dropping stale {source} result "
                f"generation={token}, current={self._token}"
            )
            return False
        return True

    def _apply(self) -> None:
        generation = self._generation
        self._set_state(to_display_state(generation, self._state.markup))
        if generation.phase is GenerationPhase.BOTH_DONE:
            logger.info(
                f"{__name__}:_apply - generation={generation.token} done, "
                f"render={generation.render.status.value}, "
                f"ai={generation.verdict.status.value}, "
                f"has_error={self._state.error_message is not None}"
            )

    def _set_state(self, state: DisplayState) -> None:
        self._state = state
        if self._publish is not None:
            self._publish(state)

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
