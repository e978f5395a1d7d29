"""Immutable thresholds and point weights for the risk engine"""

from dataclasses import dataclass

# Risk bands, applied by callers to RiskAssessment.score
HIGH_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 50


@dataclass(frozen=True)
class RiskThresholds:
    """
    Every constant the scoring engine uses.

    spending_variance_bonus and allocation_deviation_bonus are added on top of
    the anomaly points for the same conditions, so those two conditions count
    twice. Set either bonus to 0 to drop the double count.
    """

    # Anomaly triggers
    spending_variance: float = 0.30
    rapid_spending_utilization: float = 0.80  # share of allocation spent
    rapid_spending_elapsed_fraction: float = 0.25  # first quarter of the window
    allocation_deviation: float = 0.20

    # Standalone utilization trigger (spent / allocated)
    high_utilization: float = 0.80

    # Points per anomaly severity
    high_severity_points: int = 30
    medium_severity_points: int = 20
    low_severity_points: int = 10

    # Standalone bonuses
    spending_variance_bonus: int = 20
    high_utilization_bonus: int = 15
    allocation_deviation_bonus: int = 15

    max_score: int = 100

    # Placeholder historical comparison
    historical_previous_year_factor: float = 0.9
    historical_variance: float = 0.1


DEFAULT_THRESHOLDS = RiskThresholds()
