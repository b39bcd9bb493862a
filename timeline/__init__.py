"""timeline package"""
from .durations import (
    format_duration, format_hours, is_instantaneous, is_open_ended,
    minutes_between, parse_duration, parse_event_time,
)
from .models import (
    Cargo, EventKind, GrossMinusDeductionsReport, NetLaytimeReport, Port,
    ProratedReport, TimelineEvent, TimeType, TransitLeg, Voyage, parse_quantity,
)
from .traversal import active_cargoes_at, events_by_time_type, find_event, find_event_index
__all__ = [
    "format_duration","format_hours","is_instantaneous","is_open_ended",
    "minutes_between","parse_duration","parse_event_time",
    "Cargo","EventKind","GrossMinusDeductionsReport","NetLaytimeReport","Port",
    "ProratedReport","TimelineEvent","TimeType","TransitLeg","Voyage","parse_quantity",
    "active_cargoes_at","events_by_time_type","find_event","find_event_index",
]
