"""
calculation_engine/aggregator.py
Time-type totals per port, per cargo, per charterer and per voyage, and each
port's contribution to the voyage's used laytime.
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from calculation_engine.attribution import AttributionTable, build_attribution_table
from calculation_engine.proration import ProrationBasis, parse_percent
from monitoring import get_logger
from timeline.durations import parse_duration
from timeline.models import (
    Cargo,
    GrossMinusDeductionsReport,
    NetLaytimeReport,
    Port,
    ProratedReport,
    TimelineEvent,
    TimeType,
)

log = get_logger(__name__)

UNKNOWN_CHARTERER = "UNKNOWN"


@dataclass
class TimeTypeTotals:
    """
    Minutes per time-type bucket.  Types without a bucket (post-ops and
    anything unrecognized) are kept in `ignored`, keyed by their raw tag, so
    the buckets plus ignored always add up to the timeline's countable time.
    """
    waiting: int = 0
    laytime: int = 0
    deduction: int = 0
    non_primary: int = 0
    ignored: dict[str, int] = field(default_factory=dict)

    @property
    def counted_total(self) -> int:
        return self.waiting + self.laytime + self.deduction + self.non_primary + sum(self.ignored.values())

    def add_event(self, event: TimelineEvent) -> None:
        minutes = event.duration_minutes
        if not minutes:
            return
        tt = event.time_type
        if tt is TimeType.WAITING:
            self.waiting += minutes
        elif tt is TimeType.LAYTIME:
            self.laytime += minutes
        elif tt is TimeType.DEDUCTION:
            self.deduction += minutes
        elif tt is TimeType.NON_PRIMARY:
            self.non_primary += minutes
        else:
            tag = event.time_type_tag or TimeType.UNRECOGNIZED.value
            self.ignored[tag] = self.ignored.get(tag, 0) + minutes

    def __add__(self, other: "TimeTypeTotals") -> "TimeTypeTotals":
        if not isinstance(other, TimeTypeTotals):
            return NotImplemented
        ignored = dict(self.ignored)
        for tag, minutes in other.ignored.items():
            ignored[tag] = ignored.get(tag, 0) + minutes
        return TimeTypeTotals(
            waiting=self.waiting + other.waiting,
            laytime=self.laytime + other.laytime,
            deduction=self.deduction + other.deduction,
            non_primary=self.non_primary + other.non_primary,
            ignored=ignored,
        )

    def to_dict(self) -> dict:
        return {
            "waiting": self.waiting,
            "laytime": self.laytime,
            "deduction": self.deduction,
            "non_primary": self.non_primary,
            "ignored": dict(self.ignored),
            "counted_total": self.counted_total,
        }


def aggregate(timeline: Iterable[TimelineEvent]) -> TimeTypeTotals:
    """Bucket every event's duration; "ongoing" and "0m" contribute nothing."""
    totals = TimeTypeTotals()
    for event in timeline:
        totals.add_event(event)
    return totals


def aggregate_by_cargo(timeline: Iterable[TimelineEvent]) -> dict[str, TimeTypeTotals]:
    """
    Per-cargo totals.  A shared event counts in full for every cargo active
    at that moment; an individual event only for its own cargo.
    """
    result: dict[str, TimeTypeTotals] = {}
    for event in timeline:
        for cargo_id in event.attributed_cargoes:
            result.setdefault(cargo_id, TimeTypeTotals()).add_event(event)
    return result


def aggregate_by_charterer(
    timeline: Iterable[TimelineEvent], cargoes: Iterable[Cargo]
) -> dict[str, TimeTypeTotals]:
    """
    Per-charterer totals.  An event touching several cargoes of the same
    charterer is still counted once for that charterer.
    """
    owner = {c.cargo_id: c.charterer for c in cargoes}
    result: dict[str, TimeTypeTotals] = {}
    for event in timeline:
        charterers = {owner.get(cid, UNKNOWN_CHARTERER) for cid in event.attributed_cargoes}
        for charterer in sorted(charterers):
            result.setdefault(charterer, TimeTypeTotals()).add_event(event)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Port contribution
# ─────────────────────────────────────────────────────────────────────────────
METHOD_NET = "net-laytime"
METHOD_GROSS_MINUS_DEDUCTIONS = "gross-minus-deductions"
METHOD_PRORATED = "prorated-attribution"
METHOD_TIMELINE = "timeline-buckets"


@dataclass
class PortLaytime:
    """One port's used laytime, derived the way that port's statement reports it."""
    port: str
    method: str
    gross_minutes: float
    deduction_minutes: float
    net_minutes: float
    waiting_minutes: int
    totals: TimeTypeTotals
    stated_net_minutes: Optional[int] = None
    attribution: Optional[AttributionTable] = None

    @property
    def used_hours(self) -> float:
        return self.net_minutes / 60


def _stated_proration(report: ProratedReport) -> ProrationBasis:
    # percentages stand in for volumes; only the ratio matters
    return ProrationBasis.from_volumes(
        parse_percent(report.primary_proration), parse_percent(report.other_proration)
    )


def port_contribution(
    port: Port,
    proration: Optional[ProrationBasis],
    primary_charterer: str,
    year: int,
) -> PortLaytime:
    """
    Used laytime at one port.

    Each port's statement follows its own convention and they are kept as
    found:
      NetLaytimeReport            net = stated total laytime
      GrossMinusDeductionsReport  net = gross - deductions
      ProratedReport              net = attribution table's primary total
      no report                   net = laytime bucket
    """
    totals = aggregate(port.timeline)
    report = port.laytime_report

    if isinstance(report, NetLaytimeReport):
        net = parse_duration(report.total_laytime)
        result = PortLaytime(
            port=port.name, method=METHOD_NET,
            gross_minutes=net, deduction_minutes=0, net_minutes=net,
            waiting_minutes=totals.waiting, totals=totals, stated_net_minutes=net,
        )
    elif isinstance(report, GrossMinusDeductionsReport):
        gross = parse_duration(report.gross_time)
        deductions = parse_duration(report.deductions)
        net = gross - deductions
        stated = parse_duration(report.net_laytime) if report.net_laytime else net
        result = PortLaytime(
            port=port.name, method=METHOD_GROSS_MINUS_DEDUCTIONS,
            gross_minutes=gross, deduction_minutes=deductions, net_minutes=net,
            waiting_minutes=totals.waiting, totals=totals, stated_net_minutes=stated,
        )
    elif isinstance(report, ProratedReport):
        basis = proration if proration is not None else _stated_proration(report)
        table = build_attribution_table(
            port.timeline, basis, primary_charterer, year, port=port.name
        )
        result = PortLaytime(
            port=port.name, method=METHOD_PRORATED,
            gross_minutes=table.total_gross_minutes,
            deduction_minutes=table.total_deduction_minutes,
            net_minutes=table.total_primary_minutes,
            waiting_minutes=totals.waiting, totals=totals,
            stated_net_minutes=parse_duration(report.primary_laytime) or None,
            attribution=table,
        )
    else:
        result = PortLaytime(
            port=port.name, method=METHOD_TIMELINE,
            gross_minutes=totals.laytime + totals.deduction,
            deduction_minutes=totals.deduction, net_minutes=totals.laytime,
            waiting_minutes=totals.waiting, totals=totals,
        )

    log.debug(
        "Port contribution",
        port=port.name,
        method=result.method,
        net_minutes=round(result.net_minutes, 2),
        stated=result.stated_net_minutes,
    )
    return result


@dataclass
class VoyageTotals:
    per_port: dict[str, TimeTypeTotals] = field(default_factory=dict)
    total: TimeTypeTotals = field(default_factory=TimeTypeTotals)


def aggregate_voyage(ports: Sequence[Port]) -> VoyageTotals:
    result = VoyageTotals()
    for port in ports:
        totals = aggregate(port.timeline)
        result.per_port[port.name] = totals
        result.total = result.total + totals
    return result
