"""
voyage_feed/feed_store.py
Typed, cached view over the static voyage feed.
"""
from typing import Any, Optional

from monitoring import get_logger
from timeline.models import Cargo, Port, Voyage
from voyage_feed.chemroad_journey import VOYAGE_FEED

log = get_logger(__name__)

GRANULARITIES = ("parcel", "tank")


class VoyageFeedStore:
    """
    Read-only interface to one voyage feed.
    Converts the raw dicts to a Voyage on first access and caches it.
    """

    def __init__(self, feed: Optional[dict[str, Any]] = None) -> None:
        self._feed = feed if feed is not None else VOYAGE_FEED
        self._voyage: Optional[Voyage] = None

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def voyage(self) -> Voyage:
        if self._voyage is None:
            self._voyage = self._load()
        return self._voyage

    def reload(self) -> None:
        self._voyage = None
        log.info("Voyage feed cache cleared, will rebuild on next access")

    def get_port(self, name: str) -> Optional[Port]:
        return self.voyage.port(name)

    def port_names(self) -> list[str]:
        return self.voyage.port_names

    def cargoes(self, granularity: str = "parcel") -> list[Cargo]:
        """Cargo rows at parcel or tank granularity; anything else falls back to parcels."""
        if granularity not in GRANULARITIES:
            log.warning("Unknown cargo granularity, using parcels", granularity=granularity)
            granularity = "parcel"
        rows = self.voyage.tanks if granularity == "tank" else self.voyage.cargoes
        return list(rows)

    # ── Private ───────────────────────────────────────────────────────────────

    def _load(self) -> Voyage:
        feed = self._feed
        info = feed.get("vessel_info") or {}
        terms = feed.get("charter_terms") or {}
        ports_raw = feed.get("port_operations") or {}

        # call order comes from the vessel info when present
        order = info.get("ports") or list(ports_raw)
        ports = tuple(Port.from_feed(name, ports_raw[name]) for name in order if name in ports_raw)

        voyage = Voyage(
            vessel=str(info.get("vessel") or ""),
            voyage_number=int(info.get("voyage") or 0),
            primary_charterer=str(terms.get("primary_charterer") or ""),
            allowed_hours=float(terms.get("allowed_hours") or 0.0),
            daily_rate=float(terms.get("daily_rate") or 0.0),
            ports=ports,
            cargoes=tuple(Cargo.from_feed(cid, raw) for cid, raw in (feed.get("cargoes") or {}).items()),
            tanks=tuple(Cargo.from_feed(tid, raw) for tid, raw in (feed.get("tanks") or {}).items()),
            currency=str(terms.get("currency") or "USD"),
            metadata={
                "total_voyage_duration": info.get("total_voyage_duration", ""),
                "abbreviations": feed.get("abbreviations") or {},
            },
        )
        log.info(
            "Voyage feed loaded",
            vessel=voyage.vessel,
            voyage=voyage.voyage_number,
            ports=len(voyage.ports),
            cargoes=len(voyage.cargoes),
            tanks=len(voyage.tanks),
        )
        return voyage
