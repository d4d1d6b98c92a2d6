"""
Tests for the in-memory design session registry.
"""

import asyncio

from ballmill.core.settings import settings
from ballmill.schemas import DesignRequirements
from ballmill.services.design_sessions import get_session, prune_sessions, reset_sessions, session_count
from fastapi.testclient import TestClient


class TestSessionRegistry:
    def test_same_id_same_session(self):
        assert get_session("a", step_delay=0) is get_session("a")
        assert session_count() == 1

    def test_idle_sessions_pruned(self):
        async def scenario():
            for i in range(5):
                await get_session(f"user-{i}", step_delay=0).generate(DesignRequirements()).result()
            return session_count()

        # Each new id drops the finished ones before it
        assert asyncio.run(scenario()) == 1
        assert prune_sessions() == 1
        assert session_count() == 0

    def test_busy_sessions_capped(self, monkeypatch):
        monkeypatch.setattr(settings, "design_max_sessions", 3)

        async def scenario():
            runs = [
                get_session(f"user-{i}", step_delay=10).generate(DesignRequirements()) for i in range(5)
            ]
            count = session_count()
            await asyncio.sleep(0)
            cancelled = [run.cancelled for run in runs]
            reset_sessions()
            await asyncio.sleep(0)
            return count, cancelled

        count, cancelled = asyncio.run(scenario())
        assert count == 3
        # The two oldest were evicted with their runs
        assert cancelled == [True, True, False, False, False]

    def test_streams_with_distinct_ids_stay_bounded(self, client: TestClient):
        for i in range(50):
            resp = client.post(
                "/api/design/options/stream",
                json={"session_id": f"client-{i}", "requirements": {}},
            )
            assert resp.status_code == 200
        assert session_count() < 50
        assert session_count() <= 1
