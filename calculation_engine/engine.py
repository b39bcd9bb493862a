"""
calculation_engine/engine.py
Runs every port of a voyage through the laytime components and produces the
voyage demurrage position.
"""
from dataclasses import dataclass, field
from typing import Optional, Union

from calculation_engine.aggregator import (
    PortLaytime,
    TimeTypeTotals,
    aggregate_by_charterer,
    port_contribution,
)
from calculation_engine.attribution import AttributionTable, build_attribution_table
from calculation_engine.demurrage import VoyageLaytimeSummary, summarize
from calculation_engine.proration import ProrationBasis, cargoes_at_port, compute_proration
from config.settings import settings
from monitoring import DEMURRAGE_GAUGE, ENGINE_RUNS, get_logger, timed
from timeline.durations import format_duration, parse_duration
from timeline.models import Port
from voyage_feed.feed_store import VoyageFeedStore

log = get_logger(__name__)


@dataclass
class VoyageLaytimeResult:
    """Aggregated laytime position for one voyage."""
    vessel: str
    voyage_number: int
    primary_charterer: str
    ports: dict[str, PortLaytime] = field(default_factory=dict)
    voyage_totals: TimeTypeTotals = field(default_factory=TimeTypeTotals)
    charterer_totals: dict[str, TimeTypeTotals] = field(default_factory=dict)
    transit_minutes: dict[str, int] = field(default_factory=dict)
    summary: Optional[VoyageLaytimeSummary] = None
    warnings: list[str] = field(default_factory=list)
    calculation_metadata: dict = field(default_factory=dict)

    @property
    def total_transit_minutes(self) -> int:
        return sum(self.transit_minutes.values())


class VoyageLaytimeEngine:
    """
    Wires the voyage feed to the aggregator, proration, attribution and
    demurrage components.  Each port is independent; one that fails is
    reported in warnings and left out of the totals.
    """

    def __init__(self, store: Optional[VoyageFeedStore] = None, year: Optional[int] = None) -> None:
        self._store = store or VoyageFeedStore()
        self._year = year or settings.reference_year

    @property
    def year(self) -> int:
        return self._year

    def _port(self, port: Union[Port, str]) -> Optional[Port]:
        return port if isinstance(port, Port) else self._store.get_port(port)

    def proration_for(self, port: Union[Port, str]) -> Optional[ProrationBasis]:
        """Volume basis over the parcels loaded or discharged at the port."""
        p = self._port(port)
        if p is None:
            return None
        voyage = self._store.voyage
        parcels = cargoes_at_port(self._store.cargoes("parcel"), p.name)
        return compute_proration(parcels, voyage.primary_charterer)

    def attribution_table(self, port: Union[Port, str]) -> Optional[AttributionTable]:
        p = self._port(port)
        if p is None:
            return None
        return build_attribution_table(
            p.timeline,
            self.proration_for(p),
            self._store.voyage.primary_charterer,
            self._year,
            port=p.name,
        )

    def port_laytime(self, port: Union[Port, str]) -> Optional[PortLaytime]:
        p = self._port(port)
        if p is None:
            return None
        return port_contribution(
            p, self.proration_for(p), self._store.voyage.primary_charterer, self._year
        )

    @timed("voyage_calculation")
    def calculate(self) -> VoyageLaytimeResult:
        voyage = self._store.voyage
        log.info(
            "Starting laytime calculation",
            vessel=voyage.vessel,
            voyage=voyage.voyage_number,
            ports=voyage.port_names,
            year=self._year,
        )

        result = VoyageLaytimeResult(
            vessel=voyage.vessel,
            voyage_number=voyage.voyage_number,
            primary_charterer=voyage.primary_charterer,
        )
        cargoes = self._store.cargoes("parcel")

        for port in voyage.ports:
            try:
                pl = self.port_laytime(port)
                result.ports[port.name] = pl
                result.voyage_totals = result.voyage_totals + pl.totals
                for charterer, totals in aggregate_by_charterer(port.timeline, cargoes).items():
                    prev = result.charterer_totals.get(charterer, TimeTypeTotals())
                    result.charterer_totals[charterer] = prev + totals
                log.info(
                    "Port calculated",
                    port=port.name,
                    method=pl.method,
                    used=format_duration(pl.net_minutes),
                    used_hours=round(pl.used_hours, 4),
                )
            except Exception as exc:
                msg = f"Laytime calculation failed for {port.name}: {exc}"
                log.error(msg)
                result.warnings.append(msg)

            if port.transit_to_next:
                leg = f"{port.name} -> {port.transit_to_next.destination}"
                result.transit_minutes[leg] = parse_duration(port.transit_to_next.duration)

        result.summary = summarize(
            {name: pl.used_hours for name, pl in result.ports.items()},
            voyage.allowed_hours,
            voyage.daily_rate,
        )

        result.calculation_metadata = {
            "reference_year": self._year,
            "ports_calculated": list(result.ports),
            "methods": {name: pl.method for name, pl in result.ports.items()},
            "currency": voyage.currency,
        }

        ENGINE_RUNS.labels(status="partial" if result.warnings else "success").inc()
        DEMURRAGE_GAUGE.set(result.summary.demurrage_amount)
        log.info(
            "Laytime calculation complete",
            used_hours=round(result.summary.total_used_hours, 4),
            allowed_hours=result.summary.allowed_hours,
            status=result.summary.status,
            demurrage=result.summary.demurrage_amount,
        )
        return result
