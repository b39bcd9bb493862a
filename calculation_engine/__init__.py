"""calculation_engine package"""
from timeline.durations import format_duration, format_hours, parse_duration
from .aggregator import (
    PortLaytime, TimeTypeTotals, VoyageTotals, aggregate, aggregate_by_cargo,
    aggregate_by_charterer, aggregate_voyage, port_contribution,
)
from .attribution import (
    DEFAULT_PERIODS, Allocation, AttributionRow, AttributionTable,
    AttributionValidation, PeriodDefinition, build_attribution_table,
)
from .demurrage import VoyageLaytimeSummary, summarize
from .engine import VoyageLaytimeEngine, VoyageLaytimeResult
from .proration import ProrationBasis, cargoes_at_port, compute_proration, parse_percent
__all__ = [
    "format_duration","format_hours","parse_duration",
    "PortLaytime","TimeTypeTotals","VoyageTotals","aggregate","aggregate_by_cargo",
    "aggregate_by_charterer","aggregate_voyage","port_contribution",
    "DEFAULT_PERIODS","Allocation","AttributionRow","AttributionTable",
    "AttributionValidation","PeriodDefinition","build_attribution_table",
    "VoyageLaytimeSummary","summarize",
    "VoyageLaytimeEngine","VoyageLaytimeResult",
    "ProrationBasis","cargoes_at_port","compute_proration","parse_percent",
]
