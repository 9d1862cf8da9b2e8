"""Risk classification - Pure functions.

Maps the number of significant earthquakes near a location to a
coarse, ordered risk level.
"""

from enum import Enum
from functools import total_ordering


@total_ordering
class RiskLevel(Enum):
    """Ordered risk levels, lowest first."""
    MINIMAL = "MINIMAL"
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"

    @property
    def severity(self) -> int:
        """Position in the ordering (MINIMAL == 0)."""
        return list(RiskLevel).index(self)

    def __lt__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity < other.severity


# (exclusive lower bound on significant count, level), highest first
_THRESHOLDS: list[tuple[int, RiskLevel]] = [
    (10, RiskLevel.HIGH),
    (3, RiskLevel.MODERATE),
    (0, RiskLevel.LOW),
]


def classify_risk(significant_count: int) -> RiskLevel:
    """Classify risk from a count of significant earthquakes.

    Pure function.

    Args:
        significant_count: Number of M4+ events in the observed window

    Returns:
        HIGH above 10, MODERATE above 3, LOW above 0, else MINIMAL

    Raises:
        ValueError: If the count is negative
    """
    if significant_count < 0:
        raise ValueError(f"significant_count must be non-negative, got {significant_count}")

    for threshold, level in _THRESHOLDS:
        if significant_count > threshold:
            return level
    return RiskLevel.MINIMAL
