"""
api/routes.py
REST endpoints (read-only views over the voyage calculation).
"""
import time

from fastapi import APIRouter, HTTPException, Query

from api.models import (
    AttributionResponse,
    AttributionRowModel,
    AttributionValidationModel,
    DemurrageRequest,
    DemurrageResponse,
    DurationFormatResponse,
    DurationParseResponse,
    GuardrailReport,
    PortLaytimeModel,
    PortTotalsResponse,
    ProrationResponse,
    TimeTypeTotalsModel,
    VoyageResponse,
)
from calculation_engine.aggregator import (
    PortLaytime,
    TimeTypeTotals,
    aggregate,
    aggregate_by_cargo,
    aggregate_by_charterer,
)
from calculation_engine.demurrage import VoyageLaytimeSummary, summarize
from calculation_engine.engine import VoyageLaytimeEngine
from config.settings import settings
from guardrails.guardrail_layer import GuardrailLayer
from monitoring import async_timed
from timeline.durations import format_duration, is_open_ended, parse_duration
from timeline.models import Port, ProratedReport
from voyage_feed.feed_store import VoyageFeedStore

router = APIRouter()

_store     = VoyageFeedStore()
_engine    = VoyageLaytimeEngine(store=_store)
_guardrail = GuardrailLayer()


def _log():
    from monitoring import get_logger
    return get_logger(__name__)


def _port_or_404(name: str) -> Port:
    port = _store.get_port(name)
    if port is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown port '{name}'. Known ports: {', '.join(_store.port_names())}.",
        )
    return port


def _totals_model(totals: TimeTypeTotals) -> TimeTypeTotalsModel:
    return TimeTypeTotalsModel(**totals.to_dict())


def _summary_model(summary: VoyageLaytimeSummary) -> DemurrageResponse:
    return DemurrageResponse(
        total_used_hours    =round(summary.total_used_hours, 4),
        allowed_hours       =summary.allowed_hours,
        excess_hours        =round(summary.excess_hours, 4),
        excess_days         =round(summary.excess_days, 6),
        laytime_saved_hours =round(summary.laytime_saved_hours, 4),
        used_days           =round(summary.used_days, 6),
        allowed_days        =round(summary.allowed_days, 6),
        daily_rate          =summary.daily_rate,
        demurrage_amount    =summary.demurrage_amount,
        status              =summary.status,
    )


def _port_laytime_model(pl: PortLaytime) -> PortLaytimeModel:
    return PortLaytimeModel(
        port               =pl.port,
        method             =pl.method,
        gross_minutes      =round(pl.gross_minutes, 2),
        deduction_minutes  =round(pl.deduction_minutes, 2),
        net_minutes        =round(pl.net_minutes, 2),
        net_display        =format_duration(pl.net_minutes),
        used_hours         =round(pl.used_hours, 4),
        waiting_minutes    =pl.waiting_minutes,
        stated_net_minutes =pl.stated_net_minutes,
    )


# GET /health

@router.get("/health", summary="Health check")
async def health() -> dict:
    voyage = _store.voyage
    return {
        "status": "healthy",
        "vessel": voyage.vessel,
        "voyage": voyage.voyage_number,
        "ports": voyage.port_names,
        "cargoes": len(voyage.cargoes),
        "tanks": len(voyage.tanks),
        "reference_year": _engine.year,
    }


# GET /ports

@router.get("/ports", summary="List the voyage's port calls")
async def list_ports() -> dict:
    return {
        "ports": [
            {
                "name": p.name,
                "country": p.country,
                "berth": p.berth,
                "un_locode": p.un_locode,
                "events": len(p.timeline),
                "transit_to_next": (
                    {"destination": p.transit_to_next.destination, "duration": p.transit_to_next.duration}
                    if p.transit_to_next else None
                ),
            }
            for p in _store.voyage.ports
        ]
    }


# GET /ports/{port}/totals

@router.get("/ports/{port}/totals", response_model=PortTotalsResponse, summary="Time-type totals for one port")
async def port_totals(port: str) -> PortTotalsResponse:
    p = _port_or_404(port)
    totals = aggregate(p.timeline)
    return PortTotalsResponse(
        port=p.name,
        totals=_totals_model(totals),
        by_cargo={cid: _totals_model(t) for cid, t in aggregate_by_cargo(p.timeline).items()},
        by_charterer={
            ch: _totals_model(t)
            for ch, t in aggregate_by_charterer(p.timeline, _store.cargoes("parcel")).items()
        },
        display={
            "waiting": format_duration(totals.waiting),
            "laytime": format_duration(totals.laytime),
            "deduction": format_duration(totals.deduction),
            "non_primary": format_duration(totals.non_primary),
        },
    )


# GET /ports/{port}/proration

@router.get("/ports/{port}/proration", response_model=ProrationResponse, summary="Volume proration basis")
async def port_proration(port: str) -> ProrationResponse:
    p = _port_or_404(port)
    basis = _engine.proration_for(p)
    return ProrationResponse(
        port=p.name,
        primary_charterer=_store.voyage.primary_charterer,
        primary_volume=round(basis.primary_volume, 3),
        other_volume=round(basis.other_volume, 3),
        total_volume=round(basis.total_volume, 3),
        primary_share=basis.primary_share,
        other_share=basis.other_share,
        primary_percent=f"{basis.primary_percent:.4f}%",
        other_percent=f"{basis.other_percent:.4f}%",
    )


# GET /ports/{port}/attribution

@router.get(
    "/ports/{port}/attribution",
    response_model=AttributionResponse,
    summary="Period-by-period time attribution between charterers",
)
async def port_attribution(port: str) -> AttributionResponse:
    p = _port_or_404(port)
    if not isinstance(p.laytime_report, ProratedReport):
        raise HTTPException(
            status_code=404,
            detail=f"No charterer attribution for '{p.name}': its laytime statement is not prorated.",
        )
    table = _engine.attribution_table(p)
    pl = _engine.port_laytime(p)

    validation = None
    if pl is not None and pl.stated_net_minutes is not None:
        v = table.validate(pl.stated_net_minutes, tolerance=settings.validation_tolerance_minutes)
        validation = AttributionValidationModel(
            is_valid=v.is_valid,
            expected=v.expected,
            actual=round(v.actual, 2),
            difference=round(v.difference, 2),
        )

    return AttributionResponse(
        port=p.name,
        primary_charterer=table.primary_charterer,
        proration=table.proration.describe(),
        rows=[
            AttributionRowModel(
                period=r.period,
                time_range=r.time_range,
                allocation=r.allocation.value,
                gross=format_duration(r.gross_minutes),
                primary=format_duration(r.primary_minutes),
                other=format_duration(r.other_minutes),
                gross_minutes=r.gross_minutes,
                primary_minutes=round(r.primary_minutes, 4),
                other_minutes=round(r.other_minutes, 4),
                deduction_minutes=r.deduction_minutes,
                note=r.note,
            )
            for r in table.rows
        ],
        omitted_periods=table.omitted_periods,
        key_events=table.key_events,
        total_primary=format_duration(table.total_primary_minutes),
        total_primary_minutes=round(table.total_primary_minutes, 4),
        validation=validation,
    )


# GET /voyage

@router.get("/voyage", response_model=VoyageResponse, summary="Full voyage laytime and demurrage position")
@async_timed("api_voyage")
async def voyage_position() -> VoyageResponse:
    log = _log()
    t0 = time.perf_counter()

    voyage = _store.voyage
    result = _engine.calculate()
    gr = _guardrail.validate_voyage(result, voyage)

    log.info(
        "Voyage position served",
        elapsed_ms=round((time.perf_counter() - t0) * 1000),
        status=result.summary.status,
        passed=gr["passed"],
    )

    return VoyageResponse(
        success              =True,
        vessel               =result.vessel,
        voyage_number        =result.voyage_number,
        primary_charterer    =result.primary_charterer,
        currency             =voyage.currency,
        ports                ={name: _port_laytime_model(pl) for name, pl in result.ports.items()},
        voyage_totals        =_totals_model(result.voyage_totals),
        charterer_totals     ={ch: _totals_model(t) for ch, t in result.charterer_totals.items()},
        transit              ={leg: format_duration(m) for leg, m in result.transit_minutes.items()},
        summary              =_summary_model(result.summary),
        guardrail_report     =GuardrailReport(**gr),
        warnings             =result.warnings,
        calculation_metadata =result.calculation_metadata,
    )


# POST /demurrage

@router.post("/demurrage", response_model=DemurrageResponse, summary="Demurrage for given used laytime")
async def demurrage(request: DemurrageRequest) -> DemurrageResponse:
    summary = summarize(request.per_port_used_hours, request.allowed_hours, request.daily_rate)
    _log().info("Demurrage computed", status=summary.status, amount=summary.demurrage_amount)
    return _summary_model(summary)


# GET /durations/*

@router.get("/durations/parse", response_model=DurationParseResponse, summary="Parse a duration string")
async def parse_duration_text(text: str = Query(..., description='e.g. "3d 09h 30m"')) -> DurationParseResponse:
    minutes = parse_duration(text)
    return DurationParseResponse(
        text=text,
        minutes=minutes,
        open_ended=is_open_ended(text),
        canonical=format_duration(minutes),
    )


@router.get("/durations/format", response_model=DurationFormatResponse, summary="Format minutes as a duration")
async def format_minutes(minutes: float = Query(..., allow_inf_nan=False, description="Minutes, may be fractional")) -> DurationFormatResponse:
    return DurationFormatResponse(minutes=minutes, text=format_duration(minutes))
