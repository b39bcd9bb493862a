"""
tests/test_aggregator.py
Time-type bucketing, per-cargo / per-charterer totals and port contributions.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from calculation_engine.aggregator import (
    METHOD_GROSS_MINUS_DEDUCTIONS,
    METHOD_NET,
    METHOD_PRORATED,
    METHOD_TIMELINE,
    TimeTypeTotals,
    aggregate,
    aggregate_by_cargo,
    aggregate_by_charterer,
    aggregate_voyage,
    port_contribution,
)
from timeline.models import Cargo, EventKind, Port, TimelineEvent
from voyage_feed.feed_store import VoyageFeedStore

YEAR = 2024


def _ev(time_type, duration, kind="shared", cargoes=("A",), cargo=None, event="x"):
    return TimelineEvent(
        time="1 May 00:00", event=event, kind=EventKind(kind), time_type_tag=time_type,
        active_cargoes=tuple(cargoes), cargo=cargo, duration=duration,
    )


@pytest.fixture(scope="module")
def store() -> VoyageFeedStore:
    return VoyageFeedStore()


class TestAggregate:

    def test_buckets(self):
        totals = aggregate([
            _ev("waiting", "1h"),
            _ev("laytime", "2h 30m"),
            _ev("deduction", "15m"),
            _ev("non-unilever", "45m"),
        ])
        assert (totals.waiting, totals.laytime, totals.deduction, totals.non_primary) == (60, 150, 15, 45)

    def test_sentinels_contribute_nothing(self):
        totals = aggregate([_ev("laytime", "ongoing"), _ev("laytime", "0m"), _ev("laytime", "30m")])
        assert totals.laytime == 30

    def test_unbucketed_types_are_recorded(self):
        totals = aggregate([_ev("post-ops", "2h"), _ev("bunkering", "20m"), _ev("waiting", "10m")])
        assert totals.ignored == {"post-ops": 120, "bunkering": 20}
        assert totals.waiting == 10

    def test_additivity_on_every_port(self, store):
        for port in store.voyage.ports:
            totals = aggregate(port.timeline)
            assert totals.counted_total == sum(e.duration_minutes for e in port.timeline)

    def test_empty_timeline(self):
        assert aggregate([]).counted_total == 0

    def test_add(self):
        a = TimeTypeTotals(waiting=10, laytime=20, ignored={"post-ops": 5})
        b = TimeTypeTotals(laytime=1, deduction=2, non_primary=3, ignored={"post-ops": 1, "x": 2})
        c = a + b
        assert (c.waiting, c.laytime, c.deduction, c.non_primary) == (10, 21, 2, 3)
        assert c.ignored == {"post-ops": 6, "x": 2}
        assert a.ignored == {"post-ops": 5}


class TestPortTotals:

    def test_kuala_tanjung(self, store):
        totals = aggregate(store.get_port("Kuala Tanjung").timeline)
        # the open block after Made Fast is excluded
        assert totals.laytime == 2655
        assert totals.waiting == 320
        assert totals.deduction == 115

    def test_kandla(self, store):
        totals = aggregate(store.get_port("Kandla").timeline)
        assert totals.laytime == 6360
        assert totals.deduction == 270
        assert totals.waiting == 840

    def test_port_qasim(self, store):
        totals = aggregate(store.get_port("Port Qasim").timeline)
        assert totals.waiting == 135 + 360 + 5805 + 105 + 20
        assert totals.deduction == 280 + 10
        assert totals.laytime == 30 + 495
        assert totals.non_primary == 740 + 70 + 45 + 75 + 75 + 45


class TestByCargo:

    def test_shared_counts_for_every_active_cargo(self):
        result = aggregate_by_cargo([_ev("waiting", "1h", cargoes=("A", "B"))])
        assert result["A"].waiting == 60
        assert result["B"].waiting == 60

    def test_individual_counts_for_own_cargo(self):
        result = aggregate_by_cargo([_ev("laytime", "1h", kind="individual", cargoes=("A", "B"), cargo="B")])
        assert "A" not in result
        assert result["B"].laytime == 60

    def test_port_qasim_primary_cargo(self, store):
        result = aggregate_by_cargo(store.get_port("Port Qasim").timeline)
        assert result["CARGO2"].laytime == 525
        assert result["CARGO2"].deduction == 280 + 10


class TestByCharterer:

    def test_counted_once_per_charterer(self):
        cargoes = [Cargo("A", "a", "OTHER"), Cargo("B", "b", "OTHER"), Cargo("C", "c", "UNILEVER")]
        result = aggregate_by_charterer([_ev("waiting", "1h", cargoes=("A", "B", "C"))], cargoes)
        assert result["OTHER"].waiting == 60
        assert result["UNILEVER"].waiting == 60

    def test_unknown_cargo(self):
        result = aggregate_by_charterer([_ev("waiting", "1h", cargoes=("Z",))], [])
        assert result["UNKNOWN"].waiting == 60


class TestPortContribution:

    def test_kuala_tanjung_net_laytime(self, store):
        pl = port_contribution(store.get_port("Kuala Tanjung"), None, "UNILEVER", YEAR)
        assert pl.method == METHOD_NET
        assert pl.net_minutes == 3015
        assert pl.used_hours == pytest.approx(50.25)

    def test_kandla_gross_minus_deductions(self, store):
        pl = port_contribution(store.get_port("Kandla"), None, "UNILEVER", YEAR)
        assert pl.method == METHOD_GROSS_MINUS_DEDUCTIONS
        assert pl.gross_minutes == 6630
        assert pl.deduction_minutes == 270
        assert pl.net_minutes == 6360
        assert pl.stated_net_minutes == 6360
        assert pl.used_hours == pytest.approx(106.0)

    def test_port_qasim_from_stated_percentages(self, store):
        # without a volume basis the statement's own percentages are used
        pl = port_contribution(store.get_port("Port Qasim"), None, "UNILEVER", YEAR)
        assert pl.method == METHOD_PRORATED
        assert pl.attribution is not None
        assert pl.stated_net_minutes == 1299
        assert abs(pl.net_minutes - 1299) <= 1.0

    def test_no_report_uses_buckets(self):
        port = Port(name="Somewhere", timeline=(
            _ev("laytime", "3h"), _ev("deduction", "30m"), _ev("waiting", "1h"),
        ))
        pl = port_contribution(port, None, "UNILEVER", YEAR)
        assert pl.method == METHOD_TIMELINE
        assert pl.gross_minutes == 210
        assert pl.net_minutes == 180
        assert pl.waiting_minutes == 60
        assert pl.stated_net_minutes is None


class TestVoyage:

    def test_voyage_total_is_sum_of_ports(self, store):
        result = aggregate_voyage(store.voyage.ports)
        assert set(result.per_port) == {"Kuala Tanjung", "Kandla", "Port Qasim"}
        assert result.total.laytime == sum(t.laytime for t in result.per_port.values())
        assert result.total.counted_total == sum(t.counted_total for t in result.per_port.values())
