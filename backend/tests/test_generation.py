"""
Tests for the design generation workflow.

Async code is driven with asyncio.run so no pytest plugin is needed.
"""

import asyncio

import pytest
from ballmill.core.engine import GENERATION_PHASES, DesignAssistantSession, GenerationRun, generation
from ballmill.schemas import DesignRequirements, GenerationState


async def _collect(run):
    return [event async for event in run.events()]


class TestGenerationRun:
    def test_progress_events_then_options(self):
        async def scenario():
            run = GenerationRun(DesignRequirements(), step_delay=0).start()
            return await _collect(run)

        events = asyncio.run(scenario())
        assert len(events) == len(GENERATION_PHASES) + 1

        progress_events = events[:-1]
        assert [e.phase for e in progress_events] == list(GENERATION_PHASES)
        assert [e.progress for e in progress_events] == [12.5, 25, 37.5, 50, 62.5, 75, 87.5, 100]
        assert all(e.state == GenerationState.GENERATING for e in progress_events)

        final = events[-1]
        assert final.state == GenerationState.OPTIONS_READY
        assert len(final.options) == 4
        assert sum(o.recommended for o in final.options) == 1
        assert not final.superseded

    def test_result(self):
        async def scenario():
            run = GenerationRun(DesignRequirements(priority="cost"), step_delay=0).start()
            return await run.result()

        options = asyncio.run(scenario())
        assert [o.id for o in options] == ["conservative", "balanced", "aggressive", "modular"]

    def test_cancelled_run_ends_with_superseded_event(self):
        async def scenario():
            run = GenerationRun(DesignRequirements(), step_delay=10).start()
            await asyncio.sleep(0)
            run.cancel()
            events = await _collect(run)
            with pytest.raises(asyncio.CancelledError):
                await run.result()
            return run, events

        run, events = asyncio.run(scenario())
        assert run.cancelled
        assert events[-1].superseded
        assert events[-1].options is None
        assert run.options is None

    def test_failed_run_ends_with_error_event(self, monkeypatch):
        def broken_ranking(options, requirements):
            raise ValueError("no feasible design")

        monkeypatch.setattr(generation, "rank_options", broken_ranking)

        async def scenario():
            session = DesignAssistantSession(step_delay=0)
            run = session.generate(DesignRequirements())
            events = await _collect(run)
            with pytest.raises(ValueError, match="no feasible design"):
                await run.result()
            return session, events

        session, events = asyncio.run(scenario())
        assert len(events) == len(GENERATION_PHASES) + 1
        final = events[-1]
        assert final.error == "ValueError: no feasible design"
        assert final.state == GenerationState.COLLECTING_REQUIREMENTS
        assert final.options is None
        assert not final.superseded
        assert session.state == GenerationState.COLLECTING_REQUIREMENTS
        assert session.options is None

    def test_result_without_options(self, monkeypatch):
        monkeypatch.setattr(generation, "rank_options", lambda options, requirements: None)

        async def scenario():
            run = GenerationRun(DesignRequirements(), step_delay=0).start()
            with pytest.raises(RuntimeError, match="without options"):
                await run.result()

        asyncio.run(scenario())

    def test_start_twice(self):
        async def scenario():
            run = GenerationRun(DesignRequirements(), step_delay=0).start()
            with pytest.raises(RuntimeError):
                run.start()
            await run.result()

        asyncio.run(scenario())


class TestDesignAssistantSession:
    def test_state_transitions(self):
        async def scenario():
            session = DesignAssistantSession(step_delay=0)
            states = [session.state]
            run = session.generate(DesignRequirements())
            states.append(session.state)
            await run.result()
            states.append(session.state)
            options = session.options
            session.edit_requirements()
            states.append(session.state)
            return states, options, session

        states, options, session = asyncio.run(scenario())
        assert states == [
            GenerationState.COLLECTING_REQUIREMENTS,
            GenerationState.GENERATING,
            GenerationState.OPTIONS_READY,
            GenerationState.COLLECTING_REQUIREMENTS,
        ]
        assert len(options) == 4
        assert session.options is None
        assert session.current_run is None

    def test_new_request_supersedes_running_one(self):
        async def scenario():
            session = DesignAssistantSession(step_delay=0.01)
            first = session.generate(DesignRequirements(capacity=50))
            await asyncio.sleep(0)
            second = session.generate(DesignRequirements(capacity=200))
            first_events = await _collect(first)
            second_events = await _collect(second)
            return session, first, second, first_events, second_events

        session, first, second, first_events, second_events = asyncio.run(scenario())
        assert first.cancelled
        assert first_events[-1].superseded
        assert all(e.options is None for e in first_events)

        assert second_events[-1].state == GenerationState.OPTIONS_READY
        assert session.state == GenerationState.OPTIONS_READY
        assert session.options == second.options
        # Throughput scales with the newer capacity
        assert session.options[1].throughput == pytest.approx(204)

    def test_progress_is_monotonic_across_supersede(self):
        async def scenario():
            session = DesignAssistantSession(step_delay=0.01)
            first = session.generate(DesignRequirements())
            await asyncio.sleep(0.015)
            second = session.generate(DesignRequirements())
            return await _collect(first), await _collect(second)

        first_events, second_events = asyncio.run(scenario())
        for events in (first_events, second_events):
            progress = [e.progress for e in events]
            assert progress == sorted(progress)

    def test_edit_cancels_run_in_flight(self):
        async def scenario():
            session = DesignAssistantSession(step_delay=10)
            run = session.generate(DesignRequirements())
            session.edit_requirements()
            events = await _collect(run)
            return session, run, events

        session, run, events = asyncio.run(scenario())
        assert run.cancelled
        # Cancelled before the first phase ran
        assert len(events) == 1
        assert events[0].superseded
        assert events[0].progress == 0
        assert session.state == GenerationState.COLLECTING_REQUIREMENTS
