"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Tuple


class AnomalyKind(str, Enum):
    SPENDING_VARIANCE = "spending_variance"
    RAPID_SPENDING = "rapid_spending"
    ALLOCATION_DEVIATION = "allocation_deviation"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BudgetStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class BudgetSnapshot:
    """Allocation, spend and active window of a budget at assessment time"""

    allocated_amount: float
    spent_amount: float
    start_date: date | datetime
    end_date: date | datetime


@dataclass(frozen=True)
class Anomaly:
    """Single detected deviation pattern"""

    kind: AnomalyKind
    severity: Severity
    message: str


@dataclass(frozen=True)
class HistoricalComparison:
    """Prior-year vs current-year allocation comparison"""

    previous_year: float
    current_year: float
    variance: float


@dataclass(frozen=True)
class RiskAssessment:
    """Output of the risk engine"""

    score: int
    flags: Tuple[str, ...]
    spending_variance: float
    transaction_frequency: float
    allocation_deviation: float
    historical_comparison: HistoricalComparison
    anomalies: Tuple[Anomaly, ...] = field(default=())


@dataclass(frozen=True)
class BudgetRecord:
    """Budget as held by the budget store, with identifying metadata"""

    budget_id: str
    project_name: str
    department: str
    allocated_amount: float
    spent_amount: float
    start_date: date | datetime
    end_date: date | datetime
    status: BudgetStatus = BudgetStatus.ACTIVE

    def __post_init__(self) -> None:
        # Accept plain strings from the store; unknown statuses raise ValueError here
        object.__setattr__(self, "status", BudgetStatus(self.status))

    def to_snapshot(self) -> BudgetSnapshot:
        return BudgetSnapshot(
            allocated_amount=self.allocated_amount,
            spent_amount=self.spent_amount,
            start_date=self.start_date,
            end_date=self.end_date,
        )
