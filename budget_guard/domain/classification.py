"""Risk band classification applied by callers to an engine score"""

from enum import Enum

from budget_guard.domain.thresholds import HIGH_RISK_THRESHOLD, MEDIUM_RISK_THRESHOLD


class RiskBand(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def determine_risk_band(score: int) -> RiskBand:
    """
    Map a risk score to its band.

    Score bands:
    - 70+:     high
    - 50 - 69: medium
    - < 50:    low
    """
    if score >= HIGH_RISK_THRESHOLD:
        return RiskBand.HIGH
    elif score >= MEDIUM_RISK_THRESHOLD:
        return RiskBand.MEDIUM
    else:
        return RiskBand.LOW
