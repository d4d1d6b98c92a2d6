"""
HTTP tests for the calculator, catalog and health endpoints.
"""

from fastapi.testclient import TestClient

from .utils import calc_payload


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "ballmill-backend"}


class TestCalcEndpoints:
    def test_defaults(self, client: TestClient):
        resp = client.get("/api/calc/defaults")
        assert resp.status_code == 200
        body = resp.json()
        assert body["D"] == 3.0
        assert body["Cs"] == 72

    def test_parameters(self, client: TestClient):
        resp = client.get("/api/calc/parameters")
        assert resp.status_code == 200
        items = resp.json()["items"]
        assert len(items) == 10
        assert items[0]["key"] == "D"
        assert items[0]["unit"] == "m"

    def test_calc_mill_happy_path(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload())
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["result"]["p80"] == 250
        assert body["result"]["distribution_key"] == "coarse"
        assert body["display"]["mill_volume"] == 28.274
        assert body["display"]["critical_speed"] == 24.4

    def test_calc_mill_with_material(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(material_key="cement_clinker"))
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["result"]["material_key"] == "cement_clinker"
        assert body["result"]["distribution_key"] == "hard_ores"

    def test_unknown_material(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(material_key="kryptonite"))
        assert resp.status_code == 404
        assert "kryptonite" in resp.json()["detail"]

    def test_missing_and_non_numeric_fields(self, client: TestClient):
        payload = calc_payload(Wi="hard")
        del payload["parameters"]["D"]
        resp = client.post("/api/calc/mill", json=payload)
        assert resp.status_code == 422
        fields = {error["loc"][-1] for error in resp.json()["detail"]}
        assert fields == {"D", "Wi"}

    def test_domain_error(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(Cs=0))
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail == [
            {"loc": ["body", "parameters", "Cs"], "msg": "must be greater than zero", "type": "domain_error"}
        ]

    def test_overflow_is_unprocessable(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(D=1e160))
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail[0]["loc"] == ["body", "parameters", "D"]
        assert detail[0]["type"] == "domain_error"
        assert detail[0]["msg"] == "calculation overflowed"

    def test_boolean_rejected(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(Cs=True))
        assert resp.status_code == 422
        assert [error["loc"][-1] for error in resp.json()["detail"]] == ["Cs"]

    def test_numeric_strings_accepted(self, client: TestClient):
        resp = client.post("/api/calc/mill", json=calc_payload(D="3", L="4.0"))
        assert resp.status_code == 200, resp.text
        assert resp.json()["display"]["mill_volume"] == 28.274


class TestMaterialEndpoints:
    def test_list(self, client: TestClient):
        resp = client.get("/api/materials")
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 13
        assert len(body["items"]) == 13

    def test_get(self, client: TestClient):
        resp = client.get("/api/materials/refractory_gold")
        assert resp.status_code == 200
        body = resp.json()
        assert body["hardness"] == "very-hard"
        assert body["processing_complexity"] == "complex"
        assert body["grindability_stars"] >= 1

    def test_get_unknown(self, client: TestClient):
        resp = client.get("/api/materials/unknown")
        assert resp.status_code == 404


class TestDistributionEndpoints:
    def test_list(self, client: TestClient):
        resp = client.get("/api/distributions")
        assert resp.status_code == 200
        assert resp.json()["total"] == 7

    def test_get(self, client: TestClient):
        resp = client.get("/api/distributions/soft_ores")
        assert resp.status_code == 200
        body = resp.json()
        assert sum(body["percentages"]) == 100
        assert body["power_intensity"] == "low"

    def test_get_unknown(self, client: TestClient):
        assert client.get("/api/distributions/huge").status_code == 404

    def test_select_by_product_size(self, client: TestClient):
        resp = client.get("/api/distributions/select", params={"p80": 50, "wi": 12})
        assert resp.status_code == 200
        assert resp.json()["key"] == "fine"

    def test_select_hard_material_wins(self, client: TestClient):
        resp = client.get(
            "/api/distributions/select",
            params={"p80": 10, "wi": 12, "material_key": "free_gold_quartz"},
        )
        assert resp.status_code == 200
        assert resp.json()["key"] == "hard_ores"

    def test_select_validates_query(self, client: TestClient):
        resp = client.get("/api/distributions/select", params={"p80": 0, "wi": 12})
        assert resp.status_code == 422


class TestAnalysisEndpoint:
    def test_happy_path(self, client: TestClient):
        resp = client.post("/api/calc/analysis", json=calc_payload())
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["display"]["total_power"] == 223
        assert body["analysis_display"]["motor_power"] == 8.46
        assert body["analysis_display"]["throughput"] == 6.7
        assert body["analysis_display"]["toe_angle"] == 132.8
        assert len(body["analysis"]["speed_curve"]) == 20
        assert len(body["analysis"]["charge_curve"]) == 15
        assert body["analysis"]["checks"]["bearing_pressure"] is False

    def test_unknown_material(self, client: TestClient):
        resp = client.post("/api/calc/analysis", json=calc_payload(material_key="kryptonite"))
        assert resp.status_code == 404

    def test_domain_error(self, client: TestClient):
        resp = client.post("/api/calc/analysis", json=calc_payload(darsad_bar=120))
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"] == ["body", "parameters", "darsad_bar"]

    def test_overflow_is_unprocessable(self, client: TestClient):
        resp = client.post("/api/calc/analysis", json=calc_payload(D=1e160))
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["msg"] == "calculation overflowed"
