"""
Tests for the Bench Calculator API.

Validates:
1. Sessions: creation, lookup, deletion, history CSV export
2. Each tool endpoint's result and validation errors
3. Workbench defaults fill omitted inputs and are updated by results
"""

import csv
import io

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from fastapi.testclient import TestClient

from backend.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_id(client):
    response = client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["id"]


class TestHealthAndSessions:

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "healthy"

    def test_new_session_has_defaults(self, client, session_id):
        data = client.get(f"/api/sessions/{session_id}").json()
        assert data["workbench"]["resistor"] == 4700.0
        assert data["workbench"]["voltage"] == 10.0
        assert data["history"] == []

    def test_unknown_session_is_404(self, client):
        assert client.get("/api/sessions/nope").status_code == 404
        response = client.post("/api/snap", json={"value": 100})
        assert response.status_code == 200
        response = client.post("/api/resistor/encode", json={"session_id": "nope"})
        assert response.status_code == 404

    def test_delete(self, client, session_id):
        assert client.delete(f"/api/sessions/{session_id}").status_code == 204
        assert client.get(f"/api/sessions/{session_id}").status_code == 404
        assert client.delete(f"/api/sessions/{session_id}").status_code == 404


class TestResistorRoutes:

    def test_snap(self, client):
        data = client.post("/api/snap", json={"value": 4835}).json()
        assert data["snapped"] == pytest.approx(4700.0)
        assert data["error_pct"] < 0
        assert data["display"] == "4.7k"

    def test_snap_rejects_non_positive(self, client):
        assert client.post("/api/snap", json={"value": 0}).status_code == 422

    def test_parse(self, client):
        data = client.post("/api/parse", json={"text": "4.7k"}).json()
        assert data["value"] == pytest.approx(4700.0)
        assert data["display"] == "4.7k"

    def test_parse_unknown_suffix(self, client):
        response = client.post("/api/parse", json={"text": "4.7x"})
        assert response.status_code == 400
        assert "Unknown suffix" in response.json()["detail"]

    def test_decode(self, client):
        data = client.post("/api/resistor/decode", json={"d1": 4, "d2": 7, "multiplier": 2}).json()
        assert data["resistance"] == 4700.0
        assert data["bands"] == ["Yellow", "Violet", "Red", "Gold"]
        assert data["tolerance_pct"] == 5.0
        assert data["workbench"]["resistor"] == 4700.0

    def test_decode_multiplier_out_of_range(self, client):
        response = client.post("/api/resistor/decode", json={"d1": 4, "d2": 7, "multiplier": 7})
        assert response.status_code == 422

    def test_encode(self, client):
        data = client.post("/api/resistor/encode", json={"resistance": 4835}).json()
        assert data["supported"] is True
        assert data["e24"] == pytest.approx(4700.0)
        assert (data["d1"], data["d2"], data["multiplier"]) == (4, 7, 2)
        assert data["bands"] == ["Yellow", "Violet", "Red", "Gold"]

    def test_encode_unsupported(self, client):
        data = client.post("/api/resistor/encode", json={"resistance": 4.7}).json()
        assert data["supported"] is False
        assert data["bands"] is None
        assert "4-band" in data["message"]

    def test_encode_uses_workbench_default(self, client, session_id):
        data = client.post("/api/resistor/encode", json={"session_id": session_id}).json()
        assert data["target"] == 4700.0
        assert data["supported"] is True


class TestCalculatorRoutes:

    def test_ohms_law_voltage_snaps_resistor(self, client):
        data = client.post("/api/ohms-law", json={
            "mode": "V", "current": 0.001, "resistance": 4835,
        }).json()
        assert data["value"] == pytest.approx(4.7)
        assert data["unit"] == "V"
        assert data["workbench"]["voltage"] == pytest.approx(4.7)

    def test_ohms_law_resistance_zero_current(self, client):
        response = client.post("/api/ohms-law", json={"mode": "R", "voltage": 5, "current": 0})
        assert response.status_code == 400
        assert "Current cannot be zero" in response.json()["detail"]

    def test_ohms_law_power_from_defaults(self, client):
        data = client.post("/api/ohms-law", json={"mode": "P"}).json()
        assert data["value"] == pytest.approx(10.0 * 0.001)

    def test_voltage_divider(self, client):
        data = client.post("/api/voltage-divider", json={"vin": 10, "r1": 1000, "r2": 1000}).json()
        assert data["vout"] == pytest.approx(5.0)

    def test_voltage_divider_zero_total(self, client):
        response = client.post("/api/voltage-divider", json={"vin": 10, "r1": 0, "r2": 0})
        assert response.status_code == 400

    def test_led_resistor(self, client):
        data = client.post("/api/led-resistor", json={"vs": 9, "vf": 2, "current": 0.015}).json()
        assert data["r_standard"] == pytest.approx(470.0)
        assert data["i_actual"] == pytest.approx(7.0 / 470.0)
        assert data["workbench"]["resistor"] == pytest.approx(470.0)

    def test_led_supply_too_low(self, client):
        response = client.post("/api/led-resistor", json={"vs": 1.5, "vf": 2, "current": 0.01})
        assert response.status_code == 400


class TestTransientRoute:

    def test_rc_summary(self, client):
        data = client.post("/api/transient", json={
            "topology": "rc", "vs": 5, "r": 1000, "c": 1e-6,
        }).json()
        assert data["t_total"] == pytest.approx(5e-3)
        assert data["summary"]["peak_v_c"] == pytest.approx(5.0, rel=0.01)
        assert data["summary"]["peak_e_l"] == 0.0
        assert data["summary_text"].startswith("PkV:5.0V")
        assert data["traces"] is None

    def test_traces_and_charts(self, client):
        data = client.post("/api/transient", json={
            "topology": "rlc", "vs": 5, "r": 10, "l": 0.01, "c": 1e-6,
            "include_traces": True, "max_points": 100, "render_charts": True,
        }).json()
        assert len(data["traces"]["v_c"]) == 100
        assert data["traces"]["time"][0] == 0.0
        assert len(data["charts"]) == 4
        assert "Loop Current I(t)" in data["charts"][0]

    def test_traces_reach_end_of_window(self, client):
        """Downsampled traces span the whole window even when max_points does not divide 1000."""
        data = client.post("/api/transient", json={
            "topology": "rc", "vs": 5, "r": 1000, "c": 1e-6,
            "include_traces": True, "max_points": 400,
        }).json()
        time = data["traces"]["time"]
        assert len(time) == 400
        assert time[0] == 0.0
        assert time[-1] >= 0.99 * data["t_total"]
        assert data["traces"]["v_c"][-1] == pytest.approx(5.0, rel=0.01)

    def test_rl_has_no_capacitor_charts(self, client):
        data = client.post("/api/transient", json={
            "topology": "rl", "vs": 5, "r": 100, "l": 0.01, "render_charts": True,
        }).json()
        assert data["c"] == 0.0
        assert len(data["charts"]) == 2
        assert data["summary_text"].startswith("PkI:")

    def test_lc_uses_internal_resistance(self, client):
        data = client.post("/api/transient", json={"topology": "lc", "vs": 5}).json()
        assert data["r"] == pytest.approx(0.1)
        assert data["l"] == pytest.approx(10e-3)
        assert data["c"] == pytest.approx(1e-6)

    def test_zero_resistance_rejected(self, client):
        response = client.post("/api/transient", json={"topology": "rc", "vs": 5, "r": 0})
        assert response.status_code == 400

    def test_unknown_topology(self, client):
        response = client.post("/api/transient", json={"topology": "rlcx", "vs": 5})
        assert response.status_code == 422


class TestAmplifierRoute:

    def test_non_inverting_gain_11(self, client):
        data = client.post("/api/opamp-gain", json={"mode": "non_inverting", "target_gain": 11}).json()
        assert data["best"]["r1"] == pytest.approx(1000.0)
        assert data["best"]["r2"] == pytest.approx(10000.0)
        assert data["best"]["error_pct"] == pytest.approx(0.0, abs=1e-9)
        assert data["candidates"]
        assert data["workbench"]["resistor"] == pytest.approx(1000.0)

    def test_unity_gain(self, client):
        data = client.post("/api/opamp-gain", json={"mode": "non_inverting", "target_gain": 1}).json()
        assert data["best"] is None
        assert "follower" in data["message"]

    def test_non_inverting_below_one(self, client):
        response = client.post("/api/opamp-gain", json={"mode": "non_inverting", "target_gain": 0.5})
        assert response.status_code == 400
        assert ">= 1" in response.json()["detail"]


class TestSessionFlow:
    """Results update the workbench and land in the history."""

    def test_workbench_carries_between_tools(self, client, session_id):
        client.post("/api/led-resistor", json={
            "session_id": session_id, "vs": 5, "vf": 2, "current": 0.02,
        })
        # omitted resistance comes from the LED result (150Ω)
        data = client.post("/api/resistor/encode", json={"session_id": session_id}).json()
        assert data["target"] == pytest.approx(150.0)
        assert data["bands"] == ["Brown", "Green", "Brown", "Gold"]

        history = client.get(f"/api/sessions/{session_id}").json()["history"]
        assert [r["tool_name"] for r in history] == ["LED Resistor Calc", "4-Band Encode"]

    def test_out_of_range_encode_is_not_recorded(self, client, session_id):
        data = client.post("/api/resistor/encode", json={
            "session_id": session_id, "resistance": 4.7,
        }).json()
        assert data["supported"] is False

        session = client.get(f"/api/sessions/{session_id}").json()
        assert session["history"] == []
        # the snapped value is still the next default
        assert session["workbench"]["resistor"] == pytest.approx(4.7)

    def test_failed_calls_are_not_recorded(self, client, session_id):
        client.post("/api/ohms-law", json={
            "session_id": session_id, "mode": "R", "voltage": 5, "current": 0,
        })
        assert client.get(f"/api/sessions/{session_id}").json()["history"] == []

    def test_history_csv(self, client, session_id):
        client.post("/api/voltage-divider", json={
            "session_id": session_id, "vin": 10, "r1": 1000, "r2": 1000,
        })
        response = client.get(f"/api/sessions/{session_id}/history/csv", params={"filename": "result1"})
        assert response.status_code == 200
        assert 'filename="result1.csv"' in response.headers["content-disposition"]
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["Tool Name", "Inputs", "Results"]
        assert rows[1][0] == "Voltage Divider"
        assert rows[1][2] == "Vout=5.0000 V"

    def test_history_json(self, client, session_id):
        client.post("/api/resistor/decode", json={
            "session_id": session_id, "d1": 1, "d2": 0, "multiplier": 3,
        })
        data = client.get(f"/api/sessions/{session_id}/history/json").json()
        assert len(data["records"]) == 1
        assert data["records"][0]["tool_name"] == "4-Band Decode"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
