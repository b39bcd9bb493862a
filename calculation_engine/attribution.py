"""
calculation_engine/attribution.py
Time attribution table for a port shared between charterers (Port Qasim).

Each period runs between two key events and carries an allocation method:
  prorated         : split by the port's ProrationBasis
  excluded         : counts for neither charterer
  full-to-primary  : all to the primary charterer
  full-to-other    : all to the other charterers
A period whose start or end key event cannot be found is left out of the
table rather than zero-filled.  The primary charterer's net laytime at the
port is the unrounded sum of the periods' primary minutes.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

from calculation_engine.proration import ProrationBasis
from monitoring import get_logger
from timeline.durations import format_duration, minutes_between, parse_duration
from timeline.key_events import (
    LAYTIME_COMMENCED,
    MADE_FAST,
    OTHERS_COMMENCED,
    PRIMARY_COMMENCED,
    PRIMARY_COMPLETED,
    PRIMARY_DEDUCTION,
    SHIFTING_COMMENCED,
    Phrase,
    ResolvedKeyEvent,
    resolve_key_events,
)
from timeline.models import TimelineEvent

log = get_logger(__name__)


class Allocation(str, Enum):
    PRORATED = "prorated"
    EXCLUDED = "excluded"
    FULL_TO_PRIMARY = "full-to-primary"
    FULL_TO_OTHER = "full-to-other"


@dataclass(frozen=True)
class PeriodDefinition:
    name: str
    start_key: str
    end_key: str
    allocation: Allocation
    # key of an event whose duration is taken off the primary's time in this period
    deduction_key: Optional[str] = None


DEFAULT_PERIODS: tuple[PeriodDefinition, ...] = (
    PeriodDefinition("Waiting for Berth", LAYTIME_COMMENCED, SHIFTING_COMMENCED, Allocation.PRORATED),
    PeriodDefinition("Shifting", SHIFTING_COMMENCED, MADE_FAST, Allocation.EXCLUDED),
    PeriodDefinition("Waiting at Berth", MADE_FAST, OTHERS_COMMENCED, Allocation.PRORATED),
    PeriodDefinition("Other Charterer Operations", OTHERS_COMMENCED, PRIMARY_COMMENCED, Allocation.FULL_TO_OTHER),
    PeriodDefinition(
        "Primary Charterer Operations", PRIMARY_COMMENCED, PRIMARY_COMPLETED,
        Allocation.FULL_TO_PRIMARY, deduction_key=PRIMARY_DEDUCTION,
    ),
)


@dataclass(frozen=True)
class AttributionRow:
    period: str
    start_time: str
    end_time: str
    allocation: Allocation
    gross_minutes: float
    primary_minutes: float
    other_minutes: float
    deduction_minutes: float = 0.0
    note: str = ""

    @property
    def time_range(self) -> str:
        return f"{self.start_time} - {self.end_time}"


@dataclass(frozen=True)
class AttributionValidation:
    is_valid: bool
    expected: float
    actual: float
    difference: float


@dataclass
class AttributionTable:
    port: str
    primary_charterer: str
    proration: ProrationBasis
    rows: list[AttributionRow] = field(default_factory=list)
    key_events: dict[str, str] = field(default_factory=dict)
    omitted_periods: list[str] = field(default_factory=list)

    @property
    def total_gross_minutes(self) -> float:
        return sum(r.gross_minutes for r in self.rows)

    @property
    def total_primary_minutes(self) -> float:
        return sum(r.primary_minutes for r in self.rows)

    @property
    def total_other_minutes(self) -> float:
        return sum(r.other_minutes for r in self.rows)

    @property
    def total_deduction_minutes(self) -> float:
        return sum(r.deduction_minutes for r in self.rows)

    def validate(self, expected: Union[float, int, str], tolerance: float = 1.0) -> AttributionValidation:
        """
        Compare the primary total with a known figure (minutes or "21h 39m").
        A caller concern: reported, never raised.
        """
        expected_minutes = float(parse_duration(expected)) if isinstance(expected, str) else float(expected)
        actual = self.total_primary_minutes
        difference = actual - expected_minutes
        return AttributionValidation(
            is_valid=abs(difference) <= tolerance,
            expected=expected_minutes,
            actual=actual,
            difference=difference,
        )


def _allocate(allocation: Allocation, gross: float, proration: ProrationBasis) -> tuple[float, float]:
    if allocation is Allocation.PRORATED:
        return proration.split(gross)
    if allocation is Allocation.FULL_TO_PRIMARY:
        return gross, 0.0
    if allocation is Allocation.FULL_TO_OTHER:
        return 0.0, gross
    return 0.0, 0.0


def _note(allocation: Allocation, proration: ProrationBasis, primary: str) -> str:
    if allocation is Allocation.PRORATED:
        return f"({proration.describe()})"
    if allocation is Allocation.FULL_TO_PRIMARY:
        return f"(100% to {primary})"
    if allocation is Allocation.FULL_TO_OTHER:
        return f"(Excluded from {primary})"
    return "(Excluded from laytime)"


def _deduction_within(
    deduction: Optional[ResolvedKeyEvent], start: str, end: str, year: int
) -> float:
    """Duration of the deduction event if it starts inside [start, end], else 0."""
    if deduction is None:
        return 0.0
    offset = minutes_between(start, deduction.time, year)
    span = minutes_between(start, end, year)
    if offset is None or span is None or not 0 <= offset <= span:
        return 0.0
    return float(deduction.event.duration_minutes)


def build_attribution_table(
    timeline: Sequence[TimelineEvent],
    proration: ProrationBasis,
    primary_charterer: str,
    year: int,
    port: str = "",
    periods: Sequence[PeriodDefinition] = DEFAULT_PERIODS,
    patterns: Optional[Mapping[str, Sequence[Phrase]]] = None,
) -> AttributionTable:
    """Resolve key events, then allocate each fully-bounded period."""
    keys = resolve_key_events(timeline, primary_charterer, patterns)
    table = AttributionTable(
        port=port,
        primary_charterer=primary_charterer,
        proration=proration,
        key_events={k: v.time for k, v in keys.items()},
    )

    for period in periods:
        start, end = keys.get(period.start_key), keys.get(period.end_key)
        if start is None or end is None:
            table.omitted_periods.append(period.name)
            log.debug("Attribution period omitted", port=port, period=period.name,
                      start_found=start is not None, end_found=end is not None)
            continue

        gross = minutes_between(start.time, end.time, year)
        if gross is None or gross < 0:
            table.omitted_periods.append(period.name)
            log.warning("Attribution period has unusable bounds", port=port,
                        period=period.name, start=start.time, end=end.time)
            continue

        primary_minutes, other_minutes = _allocate(period.allocation, gross, proration)
        note = _note(period.allocation, proration, primary_charterer)

        deduction = 0.0
        if period.deduction_key:
            deduction = _deduction_within(keys.get(period.deduction_key), start.time, end.time, year)
            if deduction:
                primary_minutes -= deduction
                note += f" Less: {format_duration(deduction)} {keys[period.deduction_key].event.event}"

        table.rows.append(AttributionRow(
            period=period.name,
            start_time=start.time,
            end_time=end.time,
            allocation=period.allocation,
            gross_minutes=gross,
            primary_minutes=primary_minutes,
            other_minutes=other_minutes,
            deduction_minutes=deduction,
            note=note,
        ))

    log.info(
        "Attribution table built",
        port=port,
        periods=len(table.rows),
        omitted=table.omitted_periods,
        primary_total=format_duration(table.total_primary_minutes),
    )
    return table
