"""Pydantic schemas for fraud report serialization"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class HistoricalComparisonSchema(BaseModel):
    """Prior-year vs current-year allocation"""

    previous_year: float
    current_year: float
    variance: float


class FraudAnalysis(BaseModel):
    """Latest risk assessment, in the shape stored alongside a budget record"""

    risk_score: int = Field(..., ge=0, le=100)
    fraud_flags: List[str]
    last_analysis_date: datetime
    spending_variance: float
    transaction_frequency: float
    allocation_deviation: float
    historical_comparison: HistoricalComparisonSchema


class FraudReport(FraudAnalysis):
    """Risk assessment of one budget, with the budget's identifying fields"""

    budget_id: str
    project_name: str
    department: str
    allocated_amount: float
    spent_amount: float
    status: str
    risk_level: str


class FraudReportList(BaseModel):
    """Reports for every assessable budget plus ids of rejected ones"""

    reports: List[FraudReport]
    skipped: List[str] = Field(default_factory=list)
