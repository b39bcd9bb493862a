"""
tests/test_engine.py
End-to-end voyage calculation and guardrail checks on the reference voyage.
"""
import sys
from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from calculation_engine.engine import VoyageLaytimeEngine
from guardrails.guardrail_layer import (
    GuardrailLayer,
    ProrationValidator,
    StatementValidator,
    SummaryValidator,
    TimelineValidator,
)
from timeline.models import EventKind, TimelineEvent
from voyage_feed.chemroad_journey import VOYAGE_FEED
from voyage_feed.feed_store import VoyageFeedStore

YEAR = 2024


@pytest.fixture(scope="module")
def store() -> VoyageFeedStore:
    return VoyageFeedStore()


@pytest.fixture(scope="module")
def result(store):
    return VoyageLaytimeEngine(store=store, year=YEAR).calculate()


class TestFeedStore:

    def test_voyage(self, store):
        v = store.voyage
        assert v.vessel == "CHEMROAD JOURNEY"
        assert v.voyage_number == 124
        assert v.primary_charterer == "UNILEVER"
        assert store.port_names() == ["Kuala Tanjung", "Kandla", "Port Qasim"]

    def test_get_port(self, store):
        assert store.get_port("port qasim").un_locode == "PKPQM"
        assert store.get_port("Rotterdam") is None

    def test_granularity(self, store):
        assert len(store.cargoes("parcel")) == 6
        assert len(store.cargoes("tank")) == 8
        assert len(store.cargoes("hold")) == 6

    def test_reload_rebuilds(self):
        s = VoyageFeedStore()
        first = s.voyage
        s.reload()
        assert s.voyage is not first
        assert s.voyage == first


class TestVoyageLaytimeEngine:

    def test_all_ports_calculated(self, result):
        assert list(result.ports) == ["Kuala Tanjung", "Kandla", "Port Qasim"]
        assert result.warnings == []

    def test_per_port_used_hours(self, result):
        assert result.ports["Kuala Tanjung"].used_hours == pytest.approx(50.25)
        assert result.ports["Kandla"].used_hours == pytest.approx(106.0)
        assert result.ports["Port Qasim"].used_hours == pytest.approx(21.65, abs=0.02)

    def test_demurrage(self, result):
        s = result.summary
        assert s.status == "DEMURRAGE"
        assert s.total_used_hours == pytest.approx(177.90, abs=0.02)
        assert s.excess_days == pytest.approx(2.965, abs=1e-3)
        assert s.demurrage_amount == pytest.approx(71_167.44, abs=5.0)

    def test_transit(self, result):
        assert result.transit_minutes == {
            "Kuala Tanjung -> Kandla": 11030,
            "Kandla -> Port Qasim": 970,
        }

    def test_voyage_totals(self, result):
        assert result.voyage_totals.laytime == 2655 + 6360 + 525
        assert set(result.charterer_totals) == {"UNILEVER", "OTHER"}

    def test_proration_for(self, store):
        engine = VoyageLaytimeEngine(store=store, year=YEAR)
        assert engine.proration_for("Port Qasim").primary_share == pytest.approx(0.130553, abs=1e-6)
        assert engine.proration_for("Nowhere") is None
        assert engine.attribution_table("Nowhere") is None
        assert engine.port_laytime("Nowhere") is None

    def test_port_lookup_goes_through_store(self, store):
        mock_store = MagicMock()
        mock_store.voyage = store.voyage
        mock_store.get_port.return_value = None
        engine = VoyageLaytimeEngine(store=mock_store, year=YEAR)
        assert engine.port_laytime("Kandla") is None
        mock_store.get_port.assert_called_once_with("Kandla")

    def test_failing_port_is_isolated(self, store):
        class _FlakyEngine(VoyageLaytimeEngine):
            def port_laytime(self, port):
                if port.name == "Kandla":
                    raise RuntimeError("bad statement")
                return super().port_laytime(port)

        r = _FlakyEngine(store=store, year=YEAR).calculate()
        assert list(r.ports) == ["Kuala Tanjung", "Port Qasim"]
        assert len(r.warnings) == 1 and "Kandla" in r.warnings[0]
        assert r.summary.total_used_hours == pytest.approx(50.25 + 21.65, abs=0.02)
        # the transit leg out of a failed port is still recorded
        assert "Kandla -> Port Qasim" in r.transit_minutes


class TestGuardrails:

    def test_reference_voyage_passes(self, result, store):
        report = GuardrailLayer().validate_voyage(result, store.voyage)
        assert report["passed"], report["issues"]
        assert report["port_checks"]["Port Qasim"]["is_valid"]
        assert report["port_checks"]["Kandla"]["stated"] == 6360
        assert 0.0 <= report["confidence_score"] <= 1.0

    def test_statement_mismatch_flagged(self, result):
        strict = StatementValidator(tolerance_minutes=0.0)
        report = strict.validate(result)
        # Port Qasim's unrounded total is a fraction of a minute off the stated 21h 39m
        assert not report.passed
        assert any("Port Qasim" in i for i in report.issues)

    def test_proration_validator(self, result, store):
        assert ProrationValidator().validate(result, store.voyage).passed

    def test_timeline_out_of_order(self, store):
        kandla = store.get_port("Kandla")
        late = TimelineEvent("01 May 00:00", "Backdated entry", EventKind.SHARED, "waiting",
                             ("CARGO1",), duration="0m")
        voyage = replace(store.voyage, ports=(replace(kandla, timeline=kandla.timeline + (late,)),))
        report = TimelineValidator().validate(voyage, YEAR)
        assert not report.passed

    def test_timeline_warnings(self, store):
        odd = TimelineEvent("99 Zzz 00:00", "?", EventKind.SHARED, "bunkering", ("GHOST",))
        voyage = replace(store.voyage, ports=(replace(store.get_port("Kandla"), timeline=(odd,)),))
        report = TimelineValidator().validate(voyage, YEAR)
        assert report.passed
        assert len(report.warnings) == 3

    def test_summary_validator(self, result):
        assert SummaryValidator().validate(result.summary).passed
        tampered = replace(result.summary, demurrage_amount=1.0)
        assert not SummaryValidator().validate(tampered).passed
        assert not SummaryValidator().validate(None).passed

    def test_feed_is_internally_consistent(self):
        # durations are the elapsed time to the next event
        from timeline.durations import minutes_between, parse_duration
        for name, port in VOYAGE_FEED["port_operations"].items():
            events = port["timeline"]
            for cur, nxt in zip(events, events[1:]):
                if cur["duration"] in ("0m", "ongoing"):
                    continue
                gap = minutes_between(cur["time"], nxt["time"], YEAR)
                assert parse_duration(cur["duration"]) == gap, (name, cur["event"])
