"""Geohazard assessment - Pure functions.

Combines an earthquake feed and the volcano list for one location into
a HazardAssessment. Fetching both inputs is the orchestrator's job.
"""

from dataclasses import dataclass

from geohazards.core.earthquake import Earthquake, EarthquakeFeed, count_significant
from geohazards.core.geo import GeoPoint
from geohazards.core.risk import RiskLevel, classify_risk
from geohazards.core.volcano import RankedVolcano, Volcano, rank_by_distance


# Nearest volcanoes kept in a report
MAX_NEARBY_VOLCANOES = 20


@dataclass(frozen=True)
class HazardAssessment:
    """Combined earthquake and volcano picture around a location.

    Attributes:
        center: Assessed location
        radius_km: Assessment radius
        risk_level: Level derived from the significant event count
        total_earthquakes: Event count reported by USGS
        significant_earthquakes: Events at or above M4
        earthquakes: Events in upstream order (largest first)
        nearby_volcanoes: Volcanoes within the radius, nearest first
    """
    center: GeoPoint
    radius_km: float
    risk_level: RiskLevel
    total_earthquakes: int
    significant_earthquakes: int
    earthquakes: tuple[Earthquake, ...]
    nearby_volcanoes: tuple[RankedVolcano, ...]


def assess_hazards(
    center: GeoPoint,
    radius_km: float,
    feed: EarthquakeFeed,
    volcanoes: list[Volcano],
    max_volcanoes: int = MAX_NEARBY_VOLCANOES,
) -> HazardAssessment:
    """Build a hazard assessment for a location.

    Pure function.

    Args:
        center: Location to assess
        radius_km: Radius used for both the earthquake query and volcanoes
        feed: Earthquakes already fetched for center/radius
        volcanoes: Full volcano list
        max_volcanoes: Keep at most this many nearby volcanoes

    Returns:
        HazardAssessment
    """
    nearby = rank_by_distance(volcanoes, center, radius_km, limit=max_volcanoes)
    significant = count_significant(feed.earthquakes)

    return HazardAssessment(
        center=center,
        radius_km=radius_km,
        risk_level=classify_risk(significant),
        total_earthquakes=feed.count,
        significant_earthquakes=significant,
        earthquakes=feed.earthquakes,
        nearby_volcanoes=tuple(nearby),
    )
