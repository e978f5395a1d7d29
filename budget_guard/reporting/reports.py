"""Fraud report builders - run the risk engine over budget records"""

import logging
import time
from datetime import datetime
from typing import Iterable, Optional

from budget_guard.config import load_thresholds, settings
from budget_guard.domain.classification import determine_risk_band
from budget_guard.domain.exceptions import InvalidInputError
from budget_guard.domain.models import BudgetRecord, RiskAssessment
from budget_guard.domain.scoring import assess
from budget_guard.domain.thresholds import RiskThresholds
from budget_guard.infrastructure.observability.logging import log_assessment
from budget_guard.infrastructure.observability.metrics import record_assessment, record_invalid_input
from budget_guard.reporting.schemas import (
    FraudAnalysis,
    FraudReport,
    FraudReportList,
    HistoricalComparisonSchema,
)
from budget_guard.utils.date_utils import as_utc, utc_now

logger = logging.getLogger(__name__)


def build_fraud_analysis(assessment: RiskAssessment, analysed_at: datetime) -> FraudAnalysis:
    """Convert an engine result into its persistable form"""
    comparison = assessment.historical_comparison
    return FraudAnalysis(
        risk_score=assessment.score,
        fraud_flags=list(assessment.flags),
        last_analysis_date=analysed_at,
        spending_variance=assessment.spending_variance,
        transaction_frequency=assessment.transaction_frequency,
        allocation_deviation=assessment.allocation_deviation,
        historical_comparison=HistoricalComparisonSchema(
            previous_year=comparison.previous_year,
            current_year=comparison.current_year,
            variance=comparison.variance,
        ),
    )


def analyze_budget(
    record: BudgetRecord,
    now: Optional[datetime] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> FraudReport:
    """
    Assess a single budget and build its fraud report.

    `now` is both the evaluation instant and the reported
    last_analysis_date; it defaults to the current UTC time.

    Raises:
        InvalidInputError: Budget cannot be assessed (logged and counted first)
    """
    start_time = time.time()
    analysed_at = as_utc(now) if now is not None else utc_now()
    thresholds = thresholds or load_thresholds(settings)

    try:
        assessment = assess(record.to_snapshot(), analysed_at, thresholds)
    except InvalidInputError as e:
        record_invalid_input()
        logger.warning(f"Budget rejected: {e}", extra={"budget_id": record.budget_id})
        raise

    band = determine_risk_band(assessment.score)
    analysis = build_fraud_analysis(assessment, analysed_at)

    duration_ms = (time.time() - start_time) * 1000
    record_assessment(assessment, band.value)
    log_assessment(
        record.budget_id,
        record.department,
        assessment.score,
        band.value,
        [anomaly.kind.value for anomaly in assessment.anomalies],
        duration_ms,
    )

    return FraudReport(
        budget_id=record.budget_id,
        project_name=record.project_name,
        department=record.department,
        allocated_amount=record.allocated_amount,
        spent_amount=record.spent_amount,
        status=record.status.value,
        risk_level=band.value,
        **analysis.model_dump(),
    )


def build_fraud_reports(
    records: Iterable[BudgetRecord],
    now: Optional[datetime] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> FraudReportList:
    """
    Assess many budgets against one shared evaluation instant.

    Budgets that fail validation are left out of `reports` and their ids
    listed in `skipped`; the remaining reports keep input order.
    """
    analysed_at = as_utc(now) if now is not None else utc_now()
    thresholds = thresholds or load_thresholds(settings)

    reports = []
    skipped = []
    for record in records:
        try:
            reports.append(analyze_budget(record, analysed_at, thresholds))
        except InvalidInputError:
            skipped.append(record.budget_id)

    return FraudReportList(reports=reports, skipped=skipped)
