"""
Shared test fixtures and configuration for entire test suite.

Provides: stub and controllable checkers, sample SVG markup, temp dirs
Dependencies: pytest, asyncio
System role: Test infrastructure and fixture management
"""

import asyncio
import uuid

import pytest

from visualizer.models.diagram import AiVerdict, RenderResult

SIMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="50" viewBox="0 0 100 50">'
    '<rect x="0" y="0" width="100" height="50" fill="#336699"/>'
    "</svg>"
)


class StubRenderer:
    """Renderer adapter returning a fixed result immediately."""

    def __init__(self, result: RenderResult | None = None) -> None:
        self.result = result or RenderResult.ok(SIMPLE_SVG)
        self.calls: list[str] = []

    async def check(self, text: str) -> RenderResult:
        self.calls.append(text)
        return self.result


class StubAiChecker:
    """AI checker returning a fixed verdict immediately."""

    def __init__(self, verdict: AiVerdict | None = None) -> None:
        self.verdict = verdict or AiVerdict.valid()
        self.calls: list[str] = []

    async def check(self, text: str) -> AiVerdict:
        self.calls.append(text)
        return self.verdict


class ControlledChecker:
    """Checker whose calls block until the test resolves them, in any order."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._futures: list[asyncio.Future] = []

    async def check(self, text: str):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(text)
        self._futures.append(future)
        return await future

    def resolve(self, index: int, value) -> None:
        self._futures[index].set_result(value)


async def settle(rounds: int = 10) -> None:
    """Let pending tasks on the event loop run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def simple_svg() -> str:
    """SVG markup of a 100x50 diagram."""
    return SIMPLE_SVG


@pytest.fixture
def stub_renderer() -> StubRenderer:
    return StubRenderer()


@pytest.fixture
def stub_ai_checker() -> StubAiChecker:
    return StubAiChecker()


@pytest.fixture
def controlled_renderer() -> ControlledChecker:
    return ControlledChecker()


@pytest.fixture
def controlled_ai_checker() -> ControlledChecker:
    return ControlledChecker()


@pytest.fixture
def settle_loop():
    """Coroutine function that lets pending tasks run."""
    return settle


@pytest.fixture
def session_id():
    """Generate a test session ID."""
    return uuid.uuid4()
