"""
HTTP tests for the design assistant endpoints.
"""

import json

from fastapi.testclient import TestClient


def _options(client: TestClient, **requirements):
    resp = client.post("/api/design/options", json=requirements)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestDesignOptions:
    def test_four_ranked_options(self, client: TestClient):
        options = _options(client)
        assert [o["id"] for o in options] == ["conservative", "balanced", "aggressive", "modular"]
        assert sum(o["recommended"] for o in options) == 1
        assert all(0 <= o["score"] <= 100 for o in options)

    def test_with_material(self, client: TestClient):
        options = _options(client, material="refractory_gold", priority="reliability")
        assert options[0]["maintenance"] == 82

    def test_unknown_material(self, client: TestClient):
        resp = client.post("/api/design/options", json={"material": "kryptonite"})
        assert resp.status_code == 404

    def test_invalid_requirements(self, client: TestClient):
        resp = client.post("/api/design/options", json={"capacity": -10})
        assert resp.status_code == 422

    def test_score(self, client: TestClient):
        option = _options(client)[1]
        resp = client.post(
            "/api/design/score",
            json={"option": option, "requirements": {}},
        )
        assert resp.status_code == 200
        assert resp.json() == {"score": option["score"]}


class TestDesignStream:
    def test_stream_events(self, client: TestClient):
        resp = client.post(
            "/api/design/options/stream",
            json={"session_id": "stream-test", "requirements": {"capacity": 250}},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/x-ndjson")

        events = [json.loads(line) for line in resp.text.splitlines() if line]
        assert len(events) == 9
        assert [e["progress"] for e in events[:-1]] == sorted(e["progress"] for e in events[:-1])
        final = events[-1]
        assert final["state"] == "options-ready"
        assert final["progress"] == 100
        assert len(final["options"]) == 4

    def test_stream_unknown_material(self, client: TestClient):
        resp = client.post(
            "/api/design/options/stream",
            json={"requirements": {"material": "kryptonite"}},
        )
        assert resp.status_code == 404


class TestDesignApply:
    def test_apply_option(self, client: TestClient):
        option = _options(client, material="hematite")[1]
        resp = client.post(
            "/api/design/apply",
            json={"option": option, "material_key": "hematite", "base": {"F80": 3000}},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        params = body["parameters"]
        assert params["D"] == round(option["diameter"], 1)
        assert params["darsad_bar"] == option["ball_charge"]
        assert params["Cs"] == option["critical_speed"]
        assert params["Wi"] == 12.8
        assert params["F80"] == 3000
        assert body["result"]["p80"] == 375
        assert body["result"]["material_key"] == "hematite"

    def test_apply_bad_base(self, client: TestClient):
        option = _options(client)[0]
        resp = client.post(
            "/api/design/apply",
            json={"option": option, "base": {"takhalkhol": 140}},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"][-1] == "takhalkhol"
