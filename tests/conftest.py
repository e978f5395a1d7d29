"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from budget_guard.domain.models import BudgetRecord, BudgetSnapshot, BudgetStatus


WINDOW_START = datetime(2024, 1, 1)


@pytest.fixture
def window_start() -> datetime:
    return WINDOW_START


@pytest.fixture
def overspent_early_snapshot() -> BudgetSnapshot:
    """95% of a $1M allocation spent two months into a one-year window"""
    return BudgetSnapshot(
        allocated_amount=1_000_000,
        spent_amount=950_000,
        start_date=WINDOW_START,
        end_date=WINDOW_START + timedelta(days=360),
    )


@pytest.fixture
def two_months_in() -> datetime:
    return WINDOW_START + timedelta(days=60)


@pytest.fixture
def budget_records() -> list[BudgetRecord]:
    """Mix of healthy, suspicious, and unassessable budgets"""
    end = WINDOW_START + timedelta(days=360)
    return [
        BudgetRecord(
            budget_id="b-roads",
            project_name="Rural Roads Upgrade",
            department="Transport",
            allocated_amount=1_000_000,
            spent_amount=950_000,
            start_date=WINDOW_START,
            end_date=end,
        ),
        BudgetRecord(
            budget_id="b-empty",
            project_name="Unfunded Pilot",
            department="Health",
            allocated_amount=0,
            spent_amount=0,
            start_date=WINDOW_START,
            end_date=end,
        ),
        BudgetRecord(
            budget_id="b-schools",
            project_name="School Feeding Programme",
            department="Education",
            allocated_amount=200_000,
            spent_amount=35_000,
            start_date=WINDOW_START,
            end_date=end,
            status=BudgetStatus.COMPLETED,
        ),
    ]
