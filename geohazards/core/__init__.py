"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake and volcano parsing
- Geo/distance calculations
- Volcano ranking and search
- Risk classification
- Upstream query construction
- Response formatting

All functions here are deterministic and have no I/O.
"""

from geohazards.core.earthquake import Earthquake, EarthquakeFeed, parse_earthquake, parse_feed
from geohazards.core.errors import (
    EventNotFound,
    GeohazardError,
    InvalidInput,
    UpstreamMalformed,
    UpstreamUnavailable,
)
from geohazards.core.geo import GeoPoint, calculate_distance
from geohazards.core.query import EarthquakeQuery, build_query_params
from geohazards.core.report import HazardAssessment, assess_hazards
from geohazards.core.risk import RiskLevel, classify_risk
from geohazards.core.volcano import (
    RankedVolcano,
    Volcano,
    parse_volcanoes,
    rank_by_distance,
    search_volcanoes,
)

__all__ = [
    # Earthquake
    "Earthquake",
    "EarthquakeFeed",
    "parse_earthquake",
    "parse_feed",
    # Errors
    "GeohazardError",
    "InvalidInput",
    "UpstreamUnavailable",
    "UpstreamMalformed",
    "EventNotFound",
    # Geo
    "GeoPoint",
    "calculate_distance",
    # Query
    "EarthquakeQuery",
    "build_query_params",
    # Report
    "HazardAssessment",
    "assess_hazards",
    # Risk
    "RiskLevel",
    "classify_risk",
    # Volcano
    "Volcano",
    "RankedVolcano",
    "parse_volcanoes",
    "rank_by_distance",
    "search_volcanoes",
]
