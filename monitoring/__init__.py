"""monitoring package"""
from .logger import (
    timed,
    async_timed,
    start_metrics_server,
    get_logger,
    ENGINE_RUNS,
    CALC_LATENCY,
    VALIDATION_FAILURES,
    DEMURRAGE_GAUGE,
)

__all__ = [
    "timed", "async_timed", "start_metrics_server",
    "get_logger", "ENGINE_RUNS", "CALC_LATENCY", "VALIDATION_FAILURES",
    "DEMURRAGE_GAUGE",
]
