"""
Test suite for Debouncer.

Tests trailing-edge emission, burst collapsing, cancellation and the
initial value. Uses a short real delay on the running event loop.

System role: Verification of input throttling
"""

import asyncio

import pytest

from visualizer.core.debouncer import Debouncer

DELAY_MS = 20


async def wait_past_delay(factor: float = 3) -> None:
    await asyncio.sleep(DELAY_MS / 1000 * factor)


class TestDebouncerInit:
    """Test suite for Debouncer construction."""

    def test_initial_value_is_reported_before_first_emission(self) -> None:
        debouncer = Debouncer(DELAY_MS, lambda value: None, initial="graph TD")

        assert debouncer.value == "graph TD"
        assert debouncer.pending is False

    def test_negative_delay_should_raise(self) -> None:
        with pytest.raises(ValueError):
            Debouncer(-1, lambda value: None)


class TestDebouncerObserve:
    """Test suite for Debouncer.observe."""

    @pytest.mark.asyncio
    async def test_single_value_emitted_after_quiet_period(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        debouncer.observe("a")
        assert emitted == []
        assert debouncer.pending is True

        await wait_past_delay()

        assert emitted == ["a"]
        assert debouncer.value == "a"
        assert debouncer.pending is False

    @pytest.mark.asyncio
    async def test_burst_emits_only_final_value(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        for value in ["g", "gr", "gra", "grap", "graph"]:
            debouncer.observe(value)

        await wait_past_delay()

        assert emitted == ["graph"]

    @pytest.mark.asyncio
    async def test_values_separated_by_quiet_periods_are_all_emitted(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        debouncer.observe("first")
        await wait_past_delay()
        debouncer.observe("second")
        await wait_past_delay()

        assert emitted == ["first", "second"]

    @pytest.mark.asyncio
    async def test_no_leading_emission(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append, initial="init")

        debouncer.observe("typed")
        await asyncio.sleep(0)

        assert emitted == []
        assert debouncer.value == "init"
        debouncer.close()

    @pytest.mark.asyncio
    async def test_zero_delay_emits_on_next_loop_iteration(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(0, emitted.append)

        debouncer.observe("x")
        await asyncio.sleep(0.01)

        assert emitted == ["x"]


class TestDebouncerCancel:
    """Test suite for Debouncer.cancel and close."""

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_value(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        debouncer.observe("dropped")
        debouncer.cancel()
        await wait_past_delay()

        assert emitted == []
        assert debouncer.pending is False

    @pytest.mark.asyncio
    async def test_cancel_keeps_debouncer_usable(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        debouncer.observe("dropped")
        debouncer.cancel()
        debouncer.observe("kept")
        await wait_past_delay()

        assert emitted == ["kept"]

    @pytest.mark.asyncio
    async def test_close_releases_timer_and_rejects_values(self) -> None:
        emitted: list[str] = []
        debouncer = Debouncer(DELAY_MS, emitted.append)

        debouncer.observe("pending")
        debouncer.close()
        await wait_past_delay()

        assert emitted == []
        with pytest.raises(RuntimeError):
            debouncer.observe("late")
