"""
api/models.py
Pydantic request/response models.
"""
import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class TimeTypeTotalsModel(BaseModel):
    waiting:       int
    laytime:       int
    deduction:     int
    non_primary:   int
    ignored:       dict[str, int] = {}
    counted_total: int


class PortTotalsResponse(BaseModel):
    port:      str
    totals:    TimeTypeTotalsModel
    by_cargo:  dict[str, TimeTypeTotalsModel]
    by_charterer: dict[str, TimeTypeTotalsModel]
    display:   dict[str, str] = {}


class ProrationResponse(BaseModel):
    port:              str
    primary_charterer: str
    primary_volume:    float
    other_volume:      float
    total_volume:      float
    primary_share:     float
    other_share:       float
    primary_percent:   str   # formatted e.g. "13.0553%"
    other_percent:     str


class AttributionRowModel(BaseModel):
    period:            str
    time_range:        str
    allocation:        str
    gross:             str
    primary:           str
    other:             str
    gross_minutes:     float
    primary_minutes:   float
    other_minutes:     float
    deduction_minutes: float
    note:              str


class AttributionValidationModel(BaseModel):
    is_valid:   bool
    expected:   float
    actual:     float
    difference: float


class AttributionResponse(BaseModel):
    port:              str
    primary_charterer: str
    proration:         str
    rows:              list[AttributionRowModel]
    omitted_periods:   list[str] = []
    key_events:        dict[str, str] = {}
    total_primary:     str
    total_primary_minutes: float
    validation:        Optional[AttributionValidationModel] = None


class PortLaytimeModel(BaseModel):
    port:               str
    method:             str
    gross_minutes:      float
    deduction_minutes:  float
    net_minutes:        float
    net_display:        str
    used_hours:         float
    waiting_minutes:    int
    stated_net_minutes: Optional[int] = None


class DemurrageRequest(BaseModel):
    per_port_used_hours: dict[str, float] = Field(..., min_length=1, description="Used laytime per port name, hours")
    allowed_hours:       float            = Field(..., ge=0, allow_inf_nan=False)
    daily_rate:          float            = Field(..., ge=0, allow_inf_nan=False, description="Demurrage rate per day")

    @model_validator(mode="after")
    def no_negative_usage(self):
        for port, hours in self.per_port_used_hours.items():
            if not math.isfinite(hours) or hours < 0:
                raise ValueError(f"per_port_used_hours[{port!r}] must be a finite, non-negative number")
        return self


class DemurrageResponse(BaseModel):
    total_used_hours:    float
    allowed_hours:       float
    excess_hours:        float
    excess_days:         float
    laytime_saved_hours: float
    used_days:           float
    allowed_days:        float
    daily_rate:          float
    demurrage_amount:    float
    status:              str


class GuardrailReport(BaseModel):
    passed:           bool
    confidence_score: float
    issues:           list[str]
    warnings:         list[str]
    port_checks:      dict[str, dict[str, Any]]


class VoyageResponse(BaseModel):
    success:              bool
    timestamp:            str = Field(default_factory=lambda: datetime.utcnow().isoformat())
    vessel:               str
    voyage_number:        int
    primary_charterer:    str
    currency:             str
    ports:                dict[str, PortLaytimeModel]
    voyage_totals:        TimeTypeTotalsModel
    charterer_totals:     dict[str, TimeTypeTotalsModel]
    transit:              dict[str, str]
    summary:              DemurrageResponse
    guardrail_report:     GuardrailReport
    warnings:             list[str]      = []
    calculation_metadata: dict[str, Any] = {}


class DurationParseResponse(BaseModel):
    text:      str
    minutes:   int
    open_ended: bool
    canonical: str


class DurationFormatResponse(BaseModel):
    minutes: float
    text:    str


class ErrorResponse(BaseModel):
    success: bool          = False
    error:   str
    detail:  Optional[str] = None
