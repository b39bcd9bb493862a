"""
calculation_engine/demurrage.py
Voyage demurrage: used laytime against the charter-party allowance.
"""
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

HOURS_PER_DAY = 24

STATUS_DEMURRAGE = "DEMURRAGE"
STATUS_WITHIN_LAYTIME = "WITHIN LAYTIME"


@dataclass(frozen=True)
class VoyageLaytimeSummary:
    total_used_hours: float
    allowed_hours: float
    signed_excess_hours: float
    excess_hours: float
    excess_days: float
    laytime_saved_hours: float
    daily_rate: float
    demurrage_amount: float
    status: str

    @property
    def used_days(self) -> float:
        return self.total_used_hours / HOURS_PER_DAY

    @property
    def allowed_days(self) -> float:
        return self.allowed_hours / HOURS_PER_DAY

    @property
    def on_demurrage(self) -> bool:
        return self.status == STATUS_DEMURRAGE


def _total_used_hours(per_port_used_hours) -> float:
    if isinstance(per_port_used_hours, Mapping):
        values = per_port_used_hours.values()
    elif isinstance(per_port_used_hours, (int, float)):
        values = (per_port_used_hours,)
    elif isinstance(per_port_used_hours, Iterable) and not isinstance(per_port_used_hours, str):
        values = per_port_used_hours
    else:
        return 0.0
    # non-numeric or non-finite entries contribute nothing
    return float(sum(
        v for v in values
        if isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
    ))


def summarize(
    per_port_used_hours: Union[float, Iterable[float], Mapping[str, float]],
    allowed_hours: float,
    daily_rate: float,
) -> VoyageLaytimeSummary:
    """
    Compare total used laytime with the allowance.

    per_port_used_hours may be a port name -> hours map, the per-port figures
    as a sequence, or a single voyage total. excess_days keeps its sign; only
    the amount is floored at zero, and it is rounded to cents once, here.
    """
    total_used = _total_used_hours(per_port_used_hours)

    signed = total_used - allowed_hours
    excess_days = signed / HOURS_PER_DAY
    amount = round(max(0.0, excess_days) * daily_rate, 2)

    return VoyageLaytimeSummary(
        total_used_hours=total_used,
        allowed_hours=allowed_hours,
        signed_excess_hours=signed,
        excess_hours=max(0.0, signed),
        excess_days=excess_days,
        laytime_saved_hours=max(0.0, -signed),
        daily_rate=daily_rate,
        demurrage_amount=amount,
        status=STATUS_DEMURRAGE if signed > 0 else STATUS_WITHIN_LAYTIME,
    )
