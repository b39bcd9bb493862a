"""
guardrails/guardrail_layer.py
Laytime statement checks, run on a finished calculation:
  1. StatementValidator: computed net laytime vs. the figure on each port's statement
  2. ProrationValidator: share sums and stated proration percentages
  3. TimelineValidator : event order, timestamps, cargo ids, time-type tags
  4. SummaryValidator  : demurrage amount and status vs. the excess
Nothing here stops a calculation; failures are reported to the caller.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from calculation_engine.demurrage import STATUS_DEMURRAGE, STATUS_WITHIN_LAYTIME, VoyageLaytimeSummary
from calculation_engine.engine import VoyageLaytimeResult
from calculation_engine.proration import parse_percent
from config.settings import settings
from monitoring import VALIDATION_FAILURES, get_logger
from timeline.durations import format_duration, parse_event_time
from timeline.models import ProratedReport, TimeType, Voyage

log = get_logger(__name__)

# stated proration percentages carry four decimals
_PERCENT_TOLERANCE = 0.0005


@dataclass
class ValidationReport:
    passed: bool
    confidence_score: float
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    port_checks: dict[str, dict[str, Any]] = field(default_factory=dict)


# ── 1. Statement Validator ────────────────────────────────────────────────────

class StatementValidator:

    def __init__(self, tolerance_minutes: Optional[float] = None) -> None:
        self.tolerance = (
            settings.validation_tolerance_minutes if tolerance_minutes is None else tolerance_minutes
        )

    def validate(self, result: VoyageLaytimeResult) -> ValidationReport:
        issues: list[str] = []
        warnings: list[str] = []
        checks: dict[str, dict[str, Any]] = {}
        score = 1.0

        for name, pl in result.ports.items():
            if pl.stated_net_minutes is None:
                warnings.append(f"{name}: no stated net laytime to check against ({pl.method})")
                checks[name] = {"method": pl.method, "computed": pl.net_minutes, "stated": None, "is_valid": None}
                continue

            difference = pl.net_minutes - pl.stated_net_minutes
            ok = abs(difference) <= self.tolerance
            checks[name] = {
                "method": pl.method,
                "computed": round(pl.net_minutes, 2),
                "computed_display": format_duration(pl.net_minutes),
                "stated": pl.stated_net_minutes,
                "stated_display": format_duration(pl.stated_net_minutes),
                "difference": round(difference, 2),
                "is_valid": ok,
            }
            if not ok:
                issues.append(
                    f"{name}: computed {format_duration(pl.net_minutes)} differs from stated "
                    f"{format_duration(pl.stated_net_minutes)} by {difference:+.2f} min"
                )
                score -= 0.3

        return ValidationReport(
            passed=len(issues) == 0,
            confidence_score=max(0.0, score),
            issues=issues,
            warnings=warnings,
            port_checks=checks,
        )


# ── 2. Proration Validator ────────────────────────────────────────────────────

class ProrationValidator:

    def validate(self, result: VoyageLaytimeResult, voyage: Voyage) -> ValidationReport:
        issues: list[str] = []
        warnings: list[str] = []
        score = 1.0

        for name, pl in result.ports.items():
            if pl.attribution is None:
                continue
            basis = pl.attribution.proration
            if basis.total_volume <= 0:
                warnings.append(f"{name}: zero cargo volume, shares are 0% / 0%")
                score -= 0.1
                continue

            share_sum = basis.primary_share + basis.other_share
            if abs(share_sum - 1.0) > settings.share_tolerance:
                issues.append(f"{name}: shares sum to {share_sum!r}, expected 1.0")
                score -= 0.3

            port = voyage.port(name)
            report = port.laytime_report if port else None
            if isinstance(report, ProratedReport):
                stated = parse_percent(report.primary_proration) * 100
                if abs(basis.primary_percent - stated) > _PERCENT_TOLERANCE:
                    issues.append(
                        f"{name}: computed primary share {basis.primary_percent:.4f}% "
                        f"differs from stated {report.primary_proration}"
                    )
                    score -= 0.2

            if pl.attribution.omitted_periods:
                warnings.append(
                    f"{name}: attribution periods omitted ({', '.join(pl.attribution.omitted_periods)})"
                )

        return ValidationReport(
            passed=len(issues) == 0,
            confidence_score=max(0.0, score),
            issues=issues,
            warnings=warnings,
        )


# ── 3. Timeline Validator ─────────────────────────────────────────────────────

class TimelineValidator:

    def validate(self, voyage: Voyage, year: Optional[int] = None) -> ValidationReport:
        year = year or settings.reference_year
        known_ids = {c.cargo_id for c in voyage.cargoes} | {t.cargo_id for t in voyage.tanks}
        issues: list[str] = []
        warnings: list[str] = []
        score = 1.0

        for port in voyage.ports:
            previous = None
            for i, event in enumerate(port.timeline):
                when = parse_event_time(event.time, year)
                if when is None:
                    warnings.append(f"{port.name}[{i}]: unreadable timestamp {event.time!r}")
                    score -= 0.05
                else:
                    if previous is not None and when < previous:
                        issues.append(
                            f"{port.name}[{i}]: '{event.event}' at {event.time} is earlier than the event before it"
                        )
                        score -= 0.2
                    previous = when

                if event.time_type is TimeType.UNRECOGNIZED:
                    warnings.append(f"{port.name}[{i}]: unrecognized time type {event.time_type_tag!r}")
                    score -= 0.05

                unknown = [c for c in event.attributed_cargoes if c not in known_ids]
                if unknown:
                    warnings.append(f"{port.name}[{i}]: unknown cargo ids {unknown}")
                    score -= 0.05

        return ValidationReport(
            passed=len(issues) == 0,
            confidence_score=max(0.0, score),
            issues=issues,
            warnings=warnings,
        )


# ── 4. Summary Validator ──────────────────────────────────────────────────────

class SummaryValidator:

    def validate(self, summary: Optional[VoyageLaytimeSummary]) -> ValidationReport:
        if summary is None:
            return ValidationReport(passed=False, confidence_score=0.0, issues=["No demurrage summary"])

        issues: list[str] = []
        expected_amount = round(max(0.0, summary.excess_days) * summary.daily_rate, 2)
        if abs(summary.demurrage_amount - expected_amount) > 0.01:
            issues.append(
                f"Demurrage ${summary.demurrage_amount:,.2f} does not match "
                f"excess x rate ${expected_amount:,.2f}"
            )
        if summary.demurrage_amount < 0:
            issues.append("Demurrage amount cannot be negative")

        expected_status = STATUS_DEMURRAGE if summary.signed_excess_hours > 0 else STATUS_WITHIN_LAYTIME
        if summary.status != expected_status:
            issues.append(f"Status {summary.status!r} inconsistent with excess {summary.signed_excess_hours:+.4f} h")

        return ValidationReport(
            passed=len(issues) == 0,
            confidence_score=1.0 if not issues else 0.5,
            issues=issues,
        )


# ── Guardrail Orchestrator ────────────────────────────────────────────────────

class GuardrailLayer:
    """
    Runs every check and returns one serialisable summary.
    """

    def __init__(self, tolerance_minutes: Optional[float] = None) -> None:
        self._statement_validator = StatementValidator(tolerance_minutes)
        self._proration_validator = ProrationValidator()
        self._timeline_validator  = TimelineValidator()
        self._summary_validator   = SummaryValidator()

    def validate_timeline(self, voyage: Voyage, year: Optional[int] = None) -> ValidationReport:
        report = self._timeline_validator.validate(voyage, year)
        if not report.passed:
            log.warning("Timeline validation failed", issues=report.issues)
            VALIDATION_FAILURES.labels(check_type="timeline").inc()
        return report

    def validate_voyage(self, result: VoyageLaytimeResult, voyage: Voyage) -> dict[str, Any]:
        year = result.calculation_metadata.get("reference_year")
        reports = {
            "statement": self._statement_validator.validate(result),
            "proration": self._proration_validator.validate(result, voyage),
            "timeline":  self._timeline_validator.validate(voyage, year),
            "summary":   self._summary_validator.validate(result.summary),
        }

        issues = [i for r in reports.values() for i in r.issues]
        warnings = list(result.warnings) + [w for r in reports.values() for w in r.warnings]
        passed = all(r.passed for r in reports.values())
        confidence = round(min(r.confidence_score for r in reports.values()), 3)

        for check_type, report in reports.items():
            if not report.passed:
                VALIDATION_FAILURES.labels(check_type=check_type).inc()

        log.info(
            "Guardrail voyage check",
            passed=passed,
            confidence=confidence,
            issues=len(issues),
            warnings=len(warnings),
        )

        return {
            "passed": passed,
            "confidence_score": confidence,
            "issues": issues,
            "warnings": warnings,
            "port_checks": reports["statement"].port_checks,
        }
