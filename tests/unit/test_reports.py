"""Unit tests for fraud report building"""

import logging
import pytest
from datetime import datetime, timedelta, timezone
from prometheus_client import REGISTRY
from budget_guard.domain.exceptions import InvalidInputError
from budget_guard.domain.models import BudgetRecord, BudgetStatus
from budget_guard.domain.scoring import assess
from budget_guard.domain.thresholds import RiskThresholds
from budget_guard.reporting.reports import analyze_budget, build_fraud_analysis, build_fraud_reports


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_build_fraud_analysis(overspent_early_snapshot, two_months_in):
    """Test engine result converts to its persistable shape"""
    assessment = assess(overspent_early_snapshot, two_months_in)
    analysis = build_fraud_analysis(assessment, two_months_in)

    assert analysis.risk_score == 95
    assert analysis.fraud_flags == list(assessment.flags)
    assert analysis.last_analysis_date == two_months_in
    assert analysis.historical_comparison.previous_year == pytest.approx(900_000)
    assert analysis.historical_comparison.current_year == 1_000_000
    assert analysis.historical_comparison.variance == 0.1


def test_analyze_budget_report(budget_records, two_months_in):
    """Test single-budget report carries identity, band and analysis"""
    report = analyze_budget(budget_records[0], two_months_in)

    assert report.budget_id == "b-roads"
    assert report.department == "Transport"
    assert report.status == "active"
    assert report.risk_score == 95
    assert report.risk_level == "high"
    assert report.last_analysis_date == two_months_in.replace(tzinfo=timezone.utc)
    assert report.fraud_flags[0].startswith("High Risk:")

    payload = report.model_dump(mode="json")
    assert payload["historical_comparison"] == {
        "previous_year": 900_000.0,
        "current_year": 1_000_000.0,
        "variance": 0.1,
    }


def test_analyze_budget_defaults_to_current_time(budget_records):
    before = datetime.now(timezone.utc)
    report = analyze_budget(budget_records[0])
    after = datetime.now(timezone.utc)

    assert before <= report.last_analysis_date <= after


def test_analyze_budget_uses_given_thresholds(budget_records, two_months_in):
    """Test caller-supplied thresholds override settings"""
    lenient = RiskThresholds(spending_variance=0.9, rapid_spending_utilization=0.99)
    report = analyze_budget(budget_records[0], two_months_in, lenient)

    # Only the utilization bonus remains
    assert report.fraud_flags == []
    assert report.risk_score == 15
    assert report.risk_level == "low"


def test_analyze_budget_rejects_invalid_budget(budget_records, two_months_in):
    """Test rejected budgets raise and are counted"""
    before = sample("budget_guard_invalid_input_total")

    with pytest.raises(InvalidInputError):
        analyze_budget(budget_records[1], two_months_in)

    assert sample("budget_guard_invalid_input_total") == before + 1


def test_analyze_budget_records_metrics(budget_records, two_months_in):
    before_band = sample("budget_guard_assessment_total", band="high")
    before_rapid = sample("budget_guard_anomaly_total", kind="rapid_spending", severity="high")

    analyze_budget(budget_records[0], two_months_in)

    assert sample("budget_guard_assessment_total", band="high") == before_band + 1
    assert sample("budget_guard_anomaly_total", kind="rapid_spending", severity="high") == before_rapid + 1


def test_analyze_budget_logs_outcome(budget_records, two_months_in, caplog):
    caplog.set_level(logging.INFO)

    analyze_budget(budget_records[0], two_months_in)

    records = [r for r in caplog.records if r.getMessage() == "Risk assessment completed"]
    assert len(records) == 1
    assert records[0].budget_id == "b-roads"
    assert records[0].risk_score == 95
    assert records[0].anomalies == ["spending_variance", "rapid_spending"]


def test_build_fraud_reports_skips_invalid(budget_records, two_months_in):
    """Test listing keeps order, shares one instant, and skips unassessable budgets"""
    result = build_fraud_reports(budget_records, two_months_in)

    assert [r.budget_id for r in result.reports] == ["b-roads", "b-schools"]
    assert result.skipped == ["b-empty"]
    assert {r.last_analysis_date for r in result.reports} == {two_months_in.replace(tzinfo=timezone.utc)}

    schools = result.reports[1]
    assert schools.status == "completed"
    # 17.5% spent vs 16.7% expected; 82.5% under allocation
    assert schools.fraud_flags == ["Medium Risk: Significant deviation from allocated budget (82.5%)"]
    assert schools.risk_score == 35
    assert schools.risk_level == "low"


def test_build_fraud_reports_skips_malformed_dates(budget_records, two_months_in):
    """Test one record with a string date lands in skipped without aborting the listing"""
    bad = BudgetRecord(
        budget_id="b-bad-dates",
        project_name="Clinic Refit",
        department="Health",
        allocated_amount=50_000,
        spent_amount=1_000,
        start_date="2024-01-01",
        end_date=datetime(2024, 12, 31),
    )

    result = build_fraud_reports([budget_records[0], bad], two_months_in)

    assert [r.budget_id for r in result.reports] == ["b-roads"]
    assert result.skipped == ["b-bad-dates"]


def test_budget_record_status_from_string():
    """Test store-supplied status strings are coerced, unknown ones rejected on construction"""
    fields = dict(
        budget_id="b-1",
        project_name="Water Points",
        department="Water",
        allocated_amount=10_000,
        spent_amount=0,
        start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 12, 31),
    )

    assert BudgetRecord(status="cancelled", **fields).status is BudgetStatus.CANCELLED
    assert analyze_budget(BudgetRecord(status="completed", **fields), datetime(2024, 2, 1)).status == "completed"

    with pytest.raises(ValueError):
        BudgetRecord(status="archived", **fields)


def test_build_fraud_reports_empty():
    result = build_fraud_reports([], datetime(2024, 6, 1) + timedelta(days=1))
    assert result.reports == []
    assert result.skipped == []
