"""Unit tests for response formatting.

Pure function tests - build typed inputs, check the response dicts.
"""

from datetime import datetime, timedelta, timezone

import pytest

from geohazards.core.catalog import OPERATIONS
from geohazards.core.earthquake import Earthquake, EarthquakeFeed
from geohazards.core.formatter import (
    REPORT_DATA_SOURCES,
    format_lookup,
    format_overview,
    format_quantity,
    format_report,
    format_search,
    format_time,
    format_top,
    format_volcano_search,
    round_half_up,
)
from geohazards.core.geo import GeoPoint
from geohazards.core.inputs import SearchRequest, TopRequest, VolcanoSearchRequest
from geohazards.core.report import HazardAssessment
from geohazards.core.risk import RiskLevel
from geohazards.core.volcano import RankedVolcano, Volcano


NOW = datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake for testing."""
    return Earthquake(
        id="us12345",
        magnitude=4.5,
        place="10km NE of San Francisco, CA",
        time=datetime(2023, 12, 19, 12, 0, 0, tzinfo=timezone.utc),
        latitude=37.7749,
        longitude=-122.4194,
        depth_km=10.5,
        url="https://earthquake.usgs.gov/earthquakes/eventpage/us12345",
        felt=150,
        alert="green",
        significance=312,
        tsunami=False,
        mag_type="ml",
    )


@pytest.fixture
def sample_volcano():
    return Volcano(
        vnum="283030",
        name="Fujisan",
        country="Japan",
        subregion="Honshu",
        latitude=35.3606,
        longitude=138.7274,
        elevation_m=3776.0,
        observatory="jma",
        webpage="https://volcano.si.edu/volcano.cfm?vn=283030",
    )


class TestFormatTime:
    def test_utc_with_milliseconds(self):
        value = datetime(2024, 3, 15, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert format_time(value) == "2024-03-15T12:30:45.123Z"

    def test_whole_seconds(self):
        assert format_time(NOW) == "2024-03-15T12:00:00.000Z"

    def test_converts_to_utc(self):
        value = datetime(2024, 3, 15, 21, 0, 0, tzinfo=timezone(timedelta(hours=9)))

        assert format_time(value) == "2024-03-15T12:00:00.000Z"


class TestFormatQuantity:
    def test_whole_number(self):
        assert format_quantity(3776.0, "m") == "3776 m"

    def test_fraction(self):
        assert format_quantity(10.5, "km") == "10.5 km"

    def test_negative(self):
        assert format_quantity(-642.0, "m") == "-642 m"

    def test_none(self):
        assert format_quantity(None, "m") is None


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [(0.4, 0), (0.5, 1), (2.5, 3), (80.49, 80), (80.5, 81)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestFormatOverview:
    def test_overview(self, sample_earthquake):
        result = format_overview(
            EarthquakeFeed(count=7, earthquakes=(sample_earthquake,)),
            list(OPERATIONS),
            NOW,
        )

        assert result["summary"] == "7 significant earthquakes (M4+) in last 24 hours"
        assert result["latestQuakes"] == [{
            "magnitude": 4.5,
            "location": "10km NE of San Francisco, CA",
            "time": "2023-12-19T12:00:00.000Z",
            "depth": "10.5 km",
        }]
        assert result["fetchedAt"] == "2024-03-15T12:00:00.000Z"
        assert "USGS" in result["dataSource"]

    def test_endpoints_list_paid_operations(self, sample_earthquake):
        result = format_overview(EarthquakeFeed(0, ()), list(OPERATIONS), NOW)

        assert set(result["endpoints"]) == {"lookup", "search", "top", "volcanoSearch", "report"}


class TestFormatLookup:
    def test_lookup(self, sample_earthquake):
        result = format_lookup(sample_earthquake, NOW)

        assert result["id"] == "us12345"
        assert result["magnitudeType"] == "ml"
        assert result["coordinates"] == {
            "latitude": 37.7749,
            "longitude": -122.4194,
            "depth": "10.5 km",
        }
        assert result["tsunami"] is False
        assert result["alert"] == "green"
        assert result["significance"] == 312
        assert result["feltReports"] == 150
        assert result["detailUrl"].endswith("us12345")


class TestFormatSearch:
    def test_search(self, sample_earthquake):
        request = SearchRequest(latitude=37.0, longitude=-122.0, radius_km=100)

        result = format_search(EarthquakeFeed(1, (sample_earthquake,)), request, NOW)

        assert result["totalFound"] == 1
        assert result["searchParams"] == {
            "latitude": 37.0,
            "longitude": -122.0,
            "radiusKm": 100,
            "minMagnitude": 4,
            "maxMagnitude": None,
            "days": 7,
        }
        quake = result["earthquakes"][0]
        assert quake["id"] == "us12345"
        assert quake["depth"] == "10.5 km"
        assert quake["coordinates"] == {"lat": 37.7749, "lng": -122.4194}


class TestFormatTop:
    def test_ranks_start_at_one(self, sample_earthquake):
        second = Earthquake(
            id="us2", magnitude=4.1, place="Elsewhere", time=NOW,
            latitude=0.0, longitude=0.0, depth_km=5.0,
        )
        start = datetime(2024, 3, 8, 12, 0, 0, tzinfo=timezone.utc)

        result = format_top(EarthquakeFeed(2, (sample_earthquake, second)), TopRequest(), start, NOW)

        assert result["period"] == "week"
        assert result["periodStart"] == "2024-03-08T12:00:00.000Z"
        assert result["periodEnd"] == "2024-03-15T12:00:00.000Z"
        assert result["totalSignificant"] == 2
        assert [q["rank"] for q in result["topEarthquakes"]] == [1, 2]
        assert [q["id"] for q in result["topEarthquakes"]] == ["us12345", "us2"]


class TestFormatVolcanoSearch:
    def test_text_search(self, sample_volcano):
        request = VolcanoSearchRequest(country="japan", limit=20)

        result = format_volcano_search([sample_volcano], request, NOW)

        assert result["totalMatches"] == 1
        assert result["returned"] == 1
        assert result["searchParams"] == {"country": "japan", "name": None}
        assert result["volcanoes"][0] == {
            "id": "283030",
            "name": "Fujisan",
            "country": "Japan",
            "region": "Honshu",
            "coordinates": {"latitude": 35.3606, "longitude": 138.7274},
            "elevation": "3776 m",
            "observatory": "jma",
            "infoUrl": "https://volcano.si.edu/volcano.cfm?vn=283030",
        }

    def test_limit_applies_after_counting(self, sample_volcano):
        request = VolcanoSearchRequest(limit=2)

        result = format_volcano_search([sample_volcano] * 5, request, NOW)

        assert result["totalMatches"] == 5
        assert result["returned"] == 2
        assert len(result["volcanoes"]) == 2

    def test_radius_search_has_distance(self, sample_volcano):
        request = VolcanoSearchRequest(latitude=35.68, longitude=139.65, radius_km=200)

        result = format_volcano_search([RankedVolcano(sample_volcano, 90.6)], request, NOW)

        assert result["volcanoes"][0]["distanceKm"] == 91
        assert result["searchParams"]["radiusKm"] == 200


class TestFormatReport:
    def test_report(self, sample_earthquake, sample_volcano):
        assessment = HazardAssessment(
            center=GeoPoint(35.68, 139.65),
            radius_km=300,
            risk_level=RiskLevel.LOW,
            total_earthquakes=1,
            significant_earthquakes=1,
            earthquakes=(sample_earthquake,),
            nearby_volcanoes=(RankedVolcano(sample_volcano, 90.49),),
        )

        result = format_report(assessment, NOW)

        assert result["location"] == {"latitude": 35.68, "longitude": 139.65}
        assert result["radiusKm"] == 300
        assert result["riskAssessment"] == {
            "level": "LOW",
            "earthquakesLast30Days": 1,
            "significantQuakes": 1,
            "nearbyVolcanoes": 1,
        }
        assert result["recentEarthquakes"][0]["id"] == "us12345"
        assert result["nearbyVolcanoes"] == [{
            "name": "Fujisan",
            "country": "Japan",
            "distanceKm": 90,
            "elevation": "3776 m",
            "observatory": "jma",
        }]
        assert result["dataSources"] == REPORT_DATA_SOURCES
        assert result["fetchedAt"] == "2024-03-15T12:00:00.000Z"

    def test_recent_earthquakes_preview_capped_at_15(self, sample_earthquake):
        quakes = tuple(sample_earthquake for _ in range(40))
        assessment = HazardAssessment(
            center=GeoPoint(0, 0),
            radius_km=300,
            risk_level=RiskLevel.HIGH,
            total_earthquakes=40,
            significant_earthquakes=40,
            earthquakes=quakes,
            nearby_volcanoes=(),
        )

        result = format_report(assessment, NOW)

        assert len(result["recentEarthquakes"]) == 15
        assert result["riskAssessment"]["earthquakesLast30Days"] == 40
        assert result["nearbyVolcanoes"] == []
