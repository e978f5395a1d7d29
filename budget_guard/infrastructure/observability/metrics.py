"""Prometheus metrics for monitoring risk bands, anomaly rates, and rejected budgets"""

from prometheus_client import Counter, Histogram

from budget_guard.domain.models import RiskAssessment

# Assessment metrics
assessment_counter = Counter(
    "budget_guard_assessment_total",
    "Total budget risk assessments",
    ["band"],  # high | medium | low
)

anomaly_counter = Counter(
    "budget_guard_anomaly_total",
    "Anomalies detected by kind and severity",
    ["kind", "severity"],
)

risk_score_histogram = Histogram(
    "budget_guard_risk_score",
    "Distribution of risk scores",
    buckets=[0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Validation metrics
invalid_input_counter = Counter(
    "budget_guard_invalid_input_total",
    "Budgets rejected before assessment",
)


def record_assessment(assessment: RiskAssessment, band: str) -> None:
    """Record assessment metrics for monitoring band distribution and anomaly mix"""
    assessment_counter.labels(band=band).inc()
    risk_score_histogram.observe(assessment.score)

    for anomaly in assessment.anomalies:
        anomaly_counter.labels(kind=anomaly.kind.value, severity=anomaly.severity.value).inc()


def record_invalid_input() -> None:
    invalid_input_counter.inc()
