"""
timeline/models.py
Shared voyage dataclasses used by the feed store, the calculation engine,
the guardrails and the API.  Kept in a separate module to avoid circular imports.
"""
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from timeline.durations import (
    is_instantaneous,
    is_open_ended,
    parse_duration,
)


def _id_tuple(value: Any) -> tuple[str, ...]:
    """A lone string is one id, not a sequence of characters."""
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(v) for v in value if v)
    return ()


class TimeType(str, Enum):
    """
    Time classification of a timeline event.

    The tag vocabulary changed between revisions of the feed, so this is an
    open set: known historic spellings are folded in via TIME_TYPE_ALIASES and
    anything else lands on UNRECOGNIZED instead of raising.
    """
    WAITING = "waiting"
    LAYTIME = "laytime"
    DEDUCTION = "deduction"
    NON_PRIMARY = "non-primary-charterer"
    POST_OPS = "post-ops"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_tag(cls, tag: Any) -> "TimeType":
        key = str(tag or "").strip().lower()
        key = TIME_TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.UNRECOGNIZED


TIME_TYPE_ALIASES: dict[str, str] = {
    "non-unilever":       "non-primary-charterer",
    "non-primary":        "non-primary-charterer",
    "other-charterer":    "non-primary-charterer",
    "deductions":         "deduction",
    "wait":               "waiting",
    "post-operations":    "post-ops",
}


class EventKind(str, Enum):
    SHARED = "shared"
    INDIVIDUAL = "individual"

    @classmethod
    def from_tag(cls, tag: Any) -> "EventKind":
        if str(tag or "").strip().lower() == cls.INDIVIDUAL.value:
            return cls.INDIVIDUAL
        return cls.SHARED


# ─────────────────────────────────────────────────────────────────────────────
# Timeline events
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TimelineEvent:
    """
    One dated occurrence at a port.

    duration is the elapsed time until the next event, as written on the
    statement ("4h 05m"), or one of the sentinels "0m" / "ongoing".
    """
    time: str
    event: str
    kind: EventKind = EventKind.SHARED
    time_type_tag: str = ""
    active_cargoes: tuple[str, ...] = ()
    cargo: Optional[str] = None
    duration: str = "0m"

    @property
    def time_type(self) -> TimeType:
        return TimeType.from_tag(self.time_type_tag)

    @property
    def is_shared(self) -> bool:
        return self.kind is EventKind.SHARED

    @property
    def is_open_ended(self) -> bool:
        return is_open_ended(self.duration)

    @property
    def duration_minutes(self) -> int:
        """Countable minutes: 0 for the "ongoing" and "0m" sentinels."""
        if self.is_open_ended or is_instantaneous(self.duration):
            return 0
        return parse_duration(self.duration)

    @property
    def attributed_cargoes(self) -> tuple[str, ...]:
        """Cargoes this event's time belongs to."""
        if self.kind is EventKind.INDIVIDUAL and self.cargo:
            return (self.cargo,)
        return self.active_cargoes

    @classmethod
    def from_feed(cls, raw: dict[str, Any]) -> "TimelineEvent":
        if not isinstance(raw, dict):
            raw = {}
        cargo = raw.get("cargo")
        return cls(
            time=str(raw.get("time") or ""),
            event=str(raw.get("event") or ""),
            kind=EventKind.from_tag(raw.get("type")),
            time_type_tag=str(raw.get("time_type") or ""),
            active_cargoes=_id_tuple(raw.get("active_cargoes")),
            cargo=str(cargo) if cargo else None,
            duration=str(raw.get("duration") or "0m"),
        )


Timeline = tuple[TimelineEvent, ...]


# ─────────────────────────────────────────────────────────────────────────────
# Cargo parcels / tanks
# ─────────────────────────────────────────────────────────────────────────────
_QUANTITY_RE = re.compile(r"\s*MT\s*$", re.IGNORECASE)


def parse_quantity(quantity: Any) -> float:
    """'3,003.315 MT' -> 3003.315. Anything unreadable is 0.0."""
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        return float(quantity)
    text = _QUANTITY_RE.sub("", str(quantity or "")).replace(",", "").strip()
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


@dataclass(frozen=True)
class Cargo:
    """
    A charterer's parcel, or one tank of it.

    Tank rows repeat the full parcel quantity and point at the parcel through
    parent_cargo; anything summing volumes must go through parcel_id.
    """
    cargo_id: str
    name: str
    charterer: str
    quantity: str = "0 MT"
    abbreviation: str = ""
    load_port: str = "Unknown"
    discharge_port: str = "Unknown"
    tanks: tuple[str, ...] = ()
    parent_cargo: Optional[str] = None

    @property
    def parcel_id(self) -> str:
        return self.parent_cargo or self.cargo_id

    @property
    def volume_mt(self) -> float:
        return parse_quantity(self.quantity)

    def calls_at(self, port_name: str) -> bool:
        return port_name in (self.load_port, self.discharge_port)

    def is_chartered_by(self, charterer: Optional[str]) -> bool:
        if not isinstance(charterer, str):
            return False
        return self.charterer.strip().upper() == charterer.strip().upper()

    @classmethod
    def from_feed(cls, cargo_id: str, raw: dict[str, Any]) -> "Cargo":
        if not isinstance(raw, dict):
            raw = {}
        tanks = _id_tuple(raw.get("tanks")) or _id_tuple(raw.get("tank"))
        return cls(
            cargo_id=cargo_id,
            name=str(raw.get("name") or cargo_id),
            charterer=str(raw.get("charterer") or "OTHER"),
            quantity=str(raw.get("quantity") or "0 MT"),
            abbreviation=str(raw.get("abbreviation") or ""),
            load_port=str(raw.get("load_port") or "Unknown"),
            discharge_port=str(raw.get("discharge_port") or "Unknown"),
            tanks=tanks,
            parent_cargo=raw.get("parent_cargo"),
        )


# ─────────────────────────────────────────────────────────────────────────────
# Laytime statement summaries: one shape per port reporting convention
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class NetLaytimeReport:
    """Statement gives one net figure (Kuala Tanjung)."""
    total_laytime: str
    primary_share: str = "100%"
    block_time_method: bool = True


@dataclass(frozen=True)
class GrossMinusDeductionsReport:
    """Statement gives gross block time and deductions (Kandla)."""
    gross_time: str
    deductions: str
    net_laytime: str = ""
    primary_share: str = "100%"
    block_time_method: bool = True


@dataclass(frozen=True)
class ProratedReport:
    """Statement prorates shared time and gives the primary charterer's net (Port Qasim)."""
    total_port_time: str
    primary_proration: str
    other_proration: str
    primary_laytime: str
    primary_deductions: str = ""
    block_time_method: bool = True


LaytimeReport = Union[NetLaytimeReport, GrossMinusDeductionsReport, ProratedReport]


def laytime_report_from_feed(raw: Optional[dict[str, Any]]) -> Optional[LaytimeReport]:
    """Pick the report shape from the keys present; None for anything unknown."""
    if not raw:
        return None
    block = bool(raw.get("block_time_method", True))
    if "proration" in raw:
        proration = raw.get("proration") or {}
        return ProratedReport(
            total_port_time=str(raw.get("total_port_time") or ""),
            primary_proration=str(proration.get("primary") or "0%"),
            other_proration=str(proration.get("other") or "0%"),
            primary_laytime=str(raw.get("primary_laytime") or ""),
            primary_deductions=str(raw.get("primary_deductions") or ""),
            block_time_method=block,
        )
    if "gross_time" in raw:
        return GrossMinusDeductionsReport(
            gross_time=str(raw.get("gross_time") or ""),
            deductions=str(raw.get("deductions") or ""),
            net_laytime=str(raw.get("net_laytime") or ""),
            primary_share=str(raw.get("primary_share") or "100%"),
            block_time_method=block,
        )
    if "total_laytime" in raw:
        return NetLaytimeReport(
            total_laytime=str(raw.get("total_laytime") or ""),
            primary_share=str(raw.get("primary_share") or "100%"),
            block_time_method=block,
        )
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Ports / voyage
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TransitLeg:
    destination: str
    duration: str


@dataclass(frozen=True)
class Port:
    name: str
    country: str = ""
    berth: str = ""
    un_locode: str = ""
    timeline: Timeline = ()
    laytime_report: Optional[LaytimeReport] = None
    transit_to_next: Optional[TransitLeg] = None

    @classmethod
    def from_feed(cls, name: str, raw: dict[str, Any]) -> "Port":
        transit = raw.get("transit_to_next")
        return cls(
            name=name,
            country=str(raw.get("country") or ""),
            berth=str(raw.get("berth") or ""),
            un_locode=str(raw.get("un_locode") or ""),
            timeline=tuple(TimelineEvent.from_feed(e) for e in raw.get("timeline") or ()),
            laytime_report=laytime_report_from_feed(raw.get("laytime_calculation")),
            transit_to_next=(
                TransitLeg(str(transit.get("destination") or ""), str(transit.get("duration") or ""))
                if transit else None
            ),
        )


@dataclass(frozen=True)
class Voyage:
    """
    The whole static feed, typed.  Charter-party terms are voyage constants,
    not derived from any clause parser.
    """
    vessel: str
    voyage_number: int
    primary_charterer: str
    allowed_hours: float
    daily_rate: float
    ports: tuple[Port, ...] = ()
    cargoes: tuple[Cargo, ...] = ()
    tanks: tuple[Cargo, ...] = ()
    currency: str = "USD"
    metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def port(self, name: str) -> Optional[Port]:
        for p in self.ports:
            if p.name.lower() == (name or "").strip().lower():
                return p
        return None

    @property
    def port_names(self) -> list[str]:
        return [p.name for p in self.ports]
