"""
calculation_engine/proration.py
Volume-based proration of shared port time between charterers.

The primary charterer's share of a shared window is its cargo volume over
the total volume of every parcel worked at that port.  Shares are never
rounded here; rounding happens once, when a figure is displayed.
"""
from dataclasses import dataclass
from typing import Iterable

from monitoring import get_logger
from timeline.models import Cargo, parse_quantity

log = get_logger(__name__)


@dataclass(frozen=True)
class ProrationBasis:
    primary_volume: float
    other_volume: float
    total_volume: float
    primary_share: float
    other_share: float

    @classmethod
    def from_volumes(cls, primary_volume: float, other_volume: float) -> "ProrationBasis":
        total = primary_volume + other_volume
        if total <= 0:
            return cls(primary_volume, other_volume, 0.0, 0.0, 0.0)
        return cls(
            primary_volume=primary_volume,
            other_volume=other_volume,
            total_volume=total,
            primary_share=primary_volume / total,
            other_share=other_volume / total,
        )

    @property
    def primary_percent(self) -> float:
        return self.primary_share * 100

    @property
    def other_percent(self) -> float:
        return self.other_share * 100

    def split(self, shared_minutes: float) -> tuple[float, float]:
        """(primary, other) minutes of a shared window, unrounded."""
        return shared_minutes * self.primary_share, shared_minutes * self.other_share

    def describe(self) -> str:
        return f"{self.primary_percent:.2f}% / {self.other_percent:.2f}%"


def parse_percent(text) -> float:
    """'13.0553%' -> 0.130553. Unreadable input is 0.0."""
    return parse_quantity(str(text or "").strip().rstrip("%")) / 100


def cargoes_at_port(cargoes: Iterable[Cargo], port_name: str) -> list[Cargo]:
    """Parcels loaded or discharged at port_name."""
    return [c for c in cargoes if c.calls_at(port_name)]


def compute_proration(cargoes: Iterable[Cargo], primary_charterer: str) -> ProrationBasis:
    """
    Partition volumes by charterer and derive shares.

    Rows may be parcels or tanks; tank rows carry their parcel's full
    quantity, so each parcel is counted once (first row seen wins).
    An empty or zero-volume set gives 0% / 0%.
    """
    seen: set[str] = set()
    primary_volume = 0.0
    other_volume = 0.0

    for cargo in cargoes:
        if cargo.parcel_id in seen:
            continue
        seen.add(cargo.parcel_id)
        if cargo.is_chartered_by(primary_charterer):
            primary_volume += cargo.volume_mt
        else:
            other_volume += cargo.volume_mt

    basis = ProrationBasis.from_volumes(primary_volume, other_volume)
    log.debug(
        "Proration basis",
        primary=primary_charterer,
        parcels=len(seen),
        primary_volume=primary_volume,
        other_volume=other_volume,
        primary_share=round(basis.primary_share, 6),
    )
    return basis
