"""
Tests for history record text.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from backend.records import (
    decode_record,
    encode_record,
    ohms_law_record,
    opamp_record,
    transient_record,
    transient_summary_text,
)
from engine.calculators import OhmsLawMode
from engine.color_code import BandCode
from engine.gain import AmplifierMode, GainDesign
from engine.history import MAX_FIELD_LEN
from engine.transient import CircuitTopology, TraceSummary

SUMMARY = TraceSummary(
    peak_v_c=4.97, peak_current=0.0049, peak_e_c=1.23e-5, peak_e_l=4.5e-7, final_energy=1.2e-5,
)


class TestRecords:

    def test_decode(self):
        record = decode_record(BandCode(4, 7, 2), 4700.0)
        assert record.tool_name == "4-Band Decode"
        assert "Yellow-Violet-Red-Gold" in record.details
        assert record.result.startswith("4.7kOhms +/- 5%")

    def test_encode(self):
        record = encode_record(4835.0, 4700.0, BandCode(4, 7, 2))
        assert record.result == "4.7kOhms -> Yellow-Violet-Red-Gold (5%, Gold)"
        assert len(record.details) <= MAX_FIELD_LEN

    def test_ohms_law(self):
        record = ohms_law_record(OhmsLawMode.VOLTAGE, None, 0.001, 4700.0, 4.7)
        assert record.tool_name == "Ohm's Law (V)"
        assert record.result == "4.7 V"

    def test_opamp(self):
        design = GainDesign(r1=1000.0, r2_ideal=10000.0, r2=10000.0, actual_gain=11.0, error_pct=0.0)
        record = opamp_record(AmplifierMode.NON_INVERTING, 11.0, design)
        assert record.details == "Non-Inv, Tgt G=11.00"
        assert record.result == "R1=1k, R2=10k, G=11.00"


class TestTransientSummaryText:

    def test_rc_reports_capacitor_only(self):
        assert transient_summary_text(CircuitTopology.RC, SUMMARY) == "PkV:5.0V Ec:1.23e-05J"

    def test_rl_reports_inductor_only(self):
        assert transient_summary_text(CircuitTopology.RL, SUMMARY) == "PkI:4.90e-03A El:4.50e-07J"

    @pytest.mark.parametrize("topology", [CircuitTopology.LC, CircuitTopology.RLC])
    def test_second_order_reports_both(self, topology):
        assert transient_summary_text(topology, SUMMARY) == "Ec:1.23e-05J El:4.50e-07J"

    def test_record(self):
        record = transient_record(CircuitTopology.RLC, 5.0, SUMMARY)
        assert record.tool_name == "RLC Analyser"
        assert record.details == "RLC circuit, Vs=5.0V"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
