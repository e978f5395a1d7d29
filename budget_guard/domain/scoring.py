"""Risk scoring engine - core business logic for budget fraud assessment"""

import math
from datetime import date, datetime
from typing import List, Sequence, Tuple

from budget_guard.domain.exceptions import InvalidInputError
from budget_guard.domain.models import (
    Anomaly,
    AnomalyKind,
    BudgetSnapshot,
    HistoricalComparison,
    RiskAssessment,
    Severity,
)
from budget_guard.domain.thresholds import DEFAULT_THRESHOLDS, RiskThresholds
from budget_guard.utils.date_utils import as_utc, window_fraction

RAPID_SPENDING_MESSAGE = "Rapid spending detected in early project phase"

FLAG_PREFIXES = {
    Severity.HIGH: "High Risk",
    Severity.MEDIUM: "Medium Risk",
}

Instant = date | datetime


def validate_snapshot(snapshot: BudgetSnapshot) -> None:
    """
    Reject snapshots the engine cannot assess.

    Every ratio divides by the allocation and every time-based metric divides
    by the window length, so both must be strictly positive. Negative spend and
    overspend are valid inputs.

    Raises:
        InvalidInputError: Non-finite amounts, allocation <= 0, bounds that are
            not dates, or end <= start
    """
    for name in ("allocated_amount", "spent_amount"):
        value = getattr(snapshot, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{name} must be a number, got {type(value).__name__}")
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be finite, got {value}")

    for name in ("start_date", "end_date"):
        value = getattr(snapshot, name)
        if not isinstance(value, (date, datetime)):
            raise InvalidInputError(f"{name} must be a date or datetime, got {type(value).__name__}")

    if snapshot.allocated_amount <= 0:
        raise InvalidInputError(
            f"allocated_amount must be positive, got {snapshot.allocated_amount}"
        )

    if as_utc(snapshot.end_date) <= as_utc(snapshot.start_date):
        raise InvalidInputError(
            f"end_date ({snapshot.end_date}) must be after start_date ({snapshot.start_date})"
        )


def elapsed_fraction(snapshot: BudgetSnapshot, now: Instant) -> float:
    """Share of the budget window elapsed at `now`; below 0 before start, above 1 after end"""
    return window_fraction(snapshot.start_date, snapshot.end_date, now)


def expected_spending(snapshot: BudgetSnapshot, now: Instant) -> float:
    """
    Linear interpolation of the allocation over the elapsed window.

    Not clamped: evaluating outside the window extrapolates.
    """
    return elapsed_fraction(snapshot, now) * snapshot.allocated_amount


def spending_variance(snapshot: BudgetSnapshot, now: Instant) -> float:
    """Distance between actual and time-linear expected spend, normalised by allocation"""
    expected = expected_spending(snapshot, now)
    return abs(snapshot.spent_amount - expected) / snapshot.allocated_amount


def transaction_frequency(snapshot: BudgetSnapshot) -> float:
    # Utilization ratio; no transaction-level data reaches the engine
    return snapshot.spent_amount / snapshot.allocated_amount


def allocation_deviation(snapshot: BudgetSnapshot) -> float:
    return abs(snapshot.spent_amount - snapshot.allocated_amount) / snapshot.allocated_amount


def is_rapid_spending(
    snapshot: BudgetSnapshot,
    now: Instant,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """True when most of the allocation is gone within the first quarter of the window"""
    return (
        transaction_frequency(snapshot) > thresholds.rapid_spending_utilization
        and elapsed_fraction(snapshot, now) < thresholds.rapid_spending_elapsed_fraction
    )


def compare_with_historical_data(
    snapshot: BudgetSnapshot,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> HistoricalComparison:
    """
    Placeholder prior-year comparison.

    No prior-year data is stored anywhere yet, so previous_year is derived
    from the current allocation and variance is fixed.
    """
    return HistoricalComparison(
        previous_year=snapshot.allocated_amount * thresholds.historical_previous_year_factor,
        current_year=snapshot.allocated_amount,
        variance=thresholds.historical_variance,
    )


def _require_finite(**ratios: float) -> None:
    # A tiny positive allocation can still overflow a ratio to inf
    for name, value in ratios.items():
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} is not finite ({value}); allocation too small to assess")


def _detect(
    variance: float,
    rapid: bool,
    deviation: float,
    thresholds: RiskThresholds,
) -> List[Anomaly]:
    anomalies = []

    if variance > thresholds.spending_variance:
        anomalies.append(
            Anomaly(
                kind=AnomalyKind.SPENDING_VARIANCE,
                severity=Severity.HIGH,
                message=f"Unusual spending variance detected ({variance * 100:.1f}%)",
            )
        )

    if rapid:
        anomalies.append(
            Anomaly(
                kind=AnomalyKind.RAPID_SPENDING,
                severity=Severity.HIGH,
                message=RAPID_SPENDING_MESSAGE,
            )
        )

    if deviation > thresholds.allocation_deviation:
        anomalies.append(
            Anomaly(
                kind=AnomalyKind.ALLOCATION_DEVIATION,
                severity=Severity.MEDIUM,
                message=f"Significant deviation from allocated budget ({deviation * 100:.1f}%)",
            )
        )

    return anomalies


def detect_anomalies(
    snapshot: BudgetSnapshot,
    now: Instant,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> List[Anomaly]:
    """
    Run every anomaly check, in a fixed order.

    Checks are independent: a snapshot can trip any combination of
    spending variance (high), rapid spending (high) and allocation
    deviation (medium).
    """
    validate_snapshot(snapshot)
    variance = spending_variance(snapshot, now)
    deviation = allocation_deviation(snapshot)
    _require_finite(spending_variance=variance, allocation_deviation=deviation)
    return _detect(variance, is_rapid_spending(snapshot, now, thresholds), deviation, thresholds)


def format_flags(anomalies: Sequence[Anomaly]) -> Tuple[str, ...]:
    """Severity-prefixed flags in detection order; low severity anomalies are not surfaced"""
    return tuple(
        f"{FLAG_PREFIXES[anomaly.severity]}: {anomaly.message}"
        for anomaly in anomalies
        if anomaly.severity in FLAG_PREFIXES
    )


def severity_points(severity: Severity, thresholds: RiskThresholds = DEFAULT_THRESHOLDS) -> int:
    if severity is Severity.HIGH:
        return thresholds.high_severity_points
    elif severity is Severity.MEDIUM:
        return thresholds.medium_severity_points
    return thresholds.low_severity_points


def calculate_risk_score(
    anomalies: Sequence[Anomaly],
    variance: float,
    frequency: float,
    deviation: float,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> int:
    """
    Additive point score, clamped to [0, max_score].

    Scoring:
    - 30 / 20 / 10 points per high / medium / low anomaly
    - +20 when spending variance exceeds its threshold
    - +15 when utilization exceeds 80%
    - +15 when allocation deviation exceeds its threshold

    Variance and allocation deviation are also anomaly triggers, so each
    contributes twice (anomaly points plus bonus).
    """
    total = sum(severity_points(anomaly.severity, thresholds) for anomaly in anomalies)

    if variance > thresholds.spending_variance:
        total += thresholds.spending_variance_bonus

    if frequency > thresholds.high_utilization:
        total += thresholds.high_utilization_bonus

    if deviation > thresholds.allocation_deviation:
        total += thresholds.allocation_deviation_bonus

    return max(0, min(total, thresholds.max_score))


def assess(
    snapshot: BudgetSnapshot,
    now: Instant,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> RiskAssessment:
    """
    Main entry point: score a budget snapshot at the instant `now`.

    Pure and deterministic. Either returns a complete assessment or raises.

    Raises:
        InvalidInputError: Snapshot fails validation (see validate_snapshot)
    """
    validate_snapshot(snapshot)

    variance = spending_variance(snapshot, now)
    frequency = transaction_frequency(snapshot)
    deviation = allocation_deviation(snapshot)
    rapid = is_rapid_spending(snapshot, now, thresholds)
    _require_finite(
        spending_variance=variance,
        transaction_frequency=frequency,
        allocation_deviation=deviation,
    )

    anomalies = _detect(variance, rapid, deviation, thresholds)
    score = calculate_risk_score(anomalies, variance, frequency, deviation, thresholds)

    return RiskAssessment(
        score=score,
        flags=format_flags(anomalies),
        spending_variance=variance,
        transaction_frequency=frequency,
        allocation_deviation=deviation,
        historical_comparison=compare_with_historical_data(snapshot, thresholds),
        anomalies=tuple(anomalies),
    )
