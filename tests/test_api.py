"""
tests/test_api.py
HTTP read surface, exercised through FastAPI's TestClient.
"""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from api.app import create_app

BASE = "/api/v1"


@pytest.fixture(scope="module")
def client():
    with TestClient(create_app()) as c:
        yield c


class TestReadEndpoints:

    def test_health(self, client):
        r = client.get(f"{BASE}/health")
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "healthy"
        assert body["vessel"] == "CHEMROAD JOURNEY"

    def test_ports(self, client):
        ports = client.get(f"{BASE}/ports").json()["ports"]
        assert [p["name"] for p in ports] == ["Kuala Tanjung", "Kandla", "Port Qasim"]
        assert ports[0]["transit_to_next"] == {"destination": "Kandla", "duration": "7d 15h 50m"}
        assert ports[2]["transit_to_next"] is None

    def test_port_totals(self, client):
        r = client.get(f"{BASE}/ports/Kandla/totals")
        assert r.status_code == 200
        body = r.json()
        assert body["totals"]["laytime"] == 6360
        assert body["totals"]["deduction"] == 270
        assert body["display"]["laytime"] == "4d 10h"
        assert body["by_charterer"]["UNILEVER"]["laytime"] == 6360

    def test_port_name_is_case_insensitive(self, client):
        assert client.get(f"{BASE}/ports/port qasim/proration").status_code == 200

    def test_proration(self, client):
        body = client.get(f"{BASE}/ports/Port Qasim/proration").json()
        assert body["primary_percent"] == "13.0553%"
        assert body["other_percent"] == "86.9447%"
        assert body["primary_share"] + body["other_share"] == pytest.approx(1.0)

    def test_attribution(self, client):
        body = client.get(f"{BASE}/ports/Port Qasim/attribution").json()
        assert len(body["rows"]) == 5
        assert body["total_primary"] == "21h 39m"
        assert body["validation"]["is_valid"] is True
        assert body["validation"]["expected"] == 1299

    @pytest.mark.parametrize("port", ["Kandla", "Kuala Tanjung"])
    def test_attribution_only_for_prorated_statements(self, client, port):
        r = client.get(f"{BASE}/ports/{port}/attribution")
        assert r.status_code == 404
        assert "not prorated" in r.json()["detail"]

    @pytest.mark.parametrize("path", ["totals", "proration", "attribution"])
    def test_unknown_port_404(self, client, path):
        r = client.get(f"{BASE}/ports/Rotterdam/{path}")
        assert r.status_code == 404
        assert "Rotterdam" in r.json()["detail"]

    def test_voyage(self, client):
        body = client.get(f"{BASE}/voyage").json()
        assert body["success"] is True
        assert body["summary"]["status"] == "DEMURRAGE"
        assert body["summary"]["excess_days"] == pytest.approx(2.965, abs=1e-3)
        assert body["ports"]["Kuala Tanjung"]["net_display"] == "2d 2h 15m"
        assert body["transit"]["Kandla -> Port Qasim"] == "16h 10m"
        assert body["guardrail_report"]["passed"] is True


class TestDurationEndpoints:

    def test_parse(self, client):
        body = client.get(f"{BASE}/durations/parse", params={"text": "3d 09h 30m"}).json()
        assert body["minutes"] == 4890
        assert body["canonical"] == "3d 9h 30m"
        assert body["open_ended"] is False

    def test_parse_ongoing(self, client):
        body = client.get(f"{BASE}/durations/parse", params={"text": "ongoing"}).json()
        assert body["minutes"] == 0
        assert body["open_ended"] is True

    def test_format(self, client):
        body = client.get(f"{BASE}/durations/format", params={"minutes": 1299.18}).json()
        assert body["text"] == "21h 39m"

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", "abc"])
    def test_format_non_finite_422(self, client, value):
        r = client.get(f"{BASE}/durations/format", params={"minutes": value})
        assert r.status_code == 422

    def test_missing_param_422(self, client):
        assert client.get(f"{BASE}/durations/parse").status_code == 422


class TestDemurrageEndpoint:

    def test_demurrage(self, client):
        r = client.post(f"{BASE}/demurrage", json={
            "per_port_used_hours": {"Kuala Tanjung": 50.25, "Kandla": 106.0, "Port Qasim": 21.65},
            "allowed_hours": 106.735747,
            "daily_rate": 24000,
        })
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "DEMURRAGE"
        assert body["total_used_hours"] == pytest.approx(177.90)
        assert body["excess_days"] == pytest.approx(2.965, abs=5e-4)

    def test_within_laytime(self, client):
        body = client.post(f"{BASE}/demurrage", json={
            "per_port_used_hours": {"Kandla": 40.0}, "allowed_hours": 106.735747, "daily_rate": 24000,
        }).json()
        assert body["status"] == "WITHIN LAYTIME"
        assert body["demurrage_amount"] == 0
        assert body["laytime_saved_hours"] == pytest.approx(66.7357, abs=1e-3)

    @pytest.mark.parametrize("payload", [
        {"per_port_used_hours": {}, "allowed_hours": 10, "daily_rate": 1},
        {"per_port_used_hours": {"Kandla": -1.0}, "allowed_hours": 10, "daily_rate": 1},
        {"per_port_used_hours": {"Kandla": 1.0}, "allowed_hours": -10, "daily_rate": 1},
        {"per_port_used_hours": [1.0], "allowed_hours": 10, "daily_rate": 1},
    ])
    def test_rejects_bad_input(self, client, payload):
        assert client.post(f"{BASE}/demurrage", json=payload).status_code == 422


class TestErrorHandling:

    def test_unhandled_error_is_json_500(self):
        app = create_app()

        @app.get("/boom")
        async def boom():
            raise RuntimeError("feed unavailable")

        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/boom")
        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "Internal server error",
                            "detail": "feed unavailable"}
