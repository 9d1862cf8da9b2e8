"""Unit tests for earthquake parsing.

No mocks needed - parsing is a pure function of the GeoJSON dict.
"""

import copy
from datetime import datetime, timezone

import pytest

from geohazards.core.earthquake import (
    Earthquake,
    count_significant,
    filter_by_magnitude,
    parse_earthquake,
    parse_feed,
)
from geohazards.core.errors import UpstreamMalformed


# Sample USGS GeoJSON feature for testing
SAMPLE_FEATURE = {
    "type": "Feature",
    "id": "nc75095866",
    "properties": {
        "mag": 4.2,
        "place": "10km NE of San Francisco, CA",
        "time": 1703001600000,  # 2023-12-19 16:00:00 UTC
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
        "felt": 150,
        "alert": "green",
        "tsunami": 0,
        "sig": 271,
        "magType": "ml",
    },
    "geometry": {
        "type": "Point",
        "coordinates": [-122.4194, 37.7749, 10.5],  # lon, lat, depth
    },
}

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "metadata": {"count": 1},
    "features": [SAMPLE_FEATURE],
}


def _feature(**overrides):
    feature = copy.deepcopy(SAMPLE_FEATURE)
    feature["properties"].update(overrides)
    return feature


def _quake(magnitude):
    return Earthquake(
        id=f"m{magnitude}",
        magnitude=magnitude,
        place="Somewhere",
        time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        latitude=0.0,
        longitude=0.0,
        depth_km=10.0,
    )


class TestParseEarthquake:
    """Tests for parse_earthquake() pure function."""

    def test_parses_valid_feature(self):
        """Should parse a valid GeoJSON feature into Earthquake."""
        result = parse_earthquake(SAMPLE_FEATURE)

        assert result.id == "nc75095866"
        assert result.magnitude == 4.2
        assert result.place == "10km NE of San Francisco, CA"
        assert result.latitude == 37.7749
        assert result.longitude == -122.4194
        assert result.depth_km == 10.5
        assert result.felt == 150
        assert result.alert == "green"
        assert result.significance == 271
        assert result.tsunami is False
        assert result.mag_type == "ml"

    def test_parses_time_correctly(self):
        """Should convert milliseconds to datetime."""
        result = parse_earthquake(SAMPLE_FEATURE)

        assert result.time == datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)

    def test_tsunami_flag(self):
        """tsunami=1 maps to True."""
        assert parse_earthquake(_feature(tsunami=1)).tsunami is True

    def test_optional_fields_default(self):
        """Null optional properties fall back to defaults."""
        result = parse_earthquake(_feature(
            place=None, felt=None, alert=None, sig=None, url=None, magType=None,
        ))

        assert result.place == "Unknown location"
        assert result.felt is None
        assert result.alert is None
        assert result.significance is None
        assert result.url == ""
        assert result.mag_type == ""

    def test_missing_magnitude_raises(self):
        """A feature without a magnitude is malformed, not skipped."""
        with pytest.raises(UpstreamMalformed, match="mag"):
            parse_earthquake(_feature(mag=None))

    def test_missing_time_raises(self):
        feature = copy.deepcopy(SAMPLE_FEATURE)
        del feature["properties"]["time"]

        with pytest.raises(UpstreamMalformed, match="time"):
            parse_earthquake(feature)

    def test_missing_id_raises(self):
        feature = copy.deepcopy(SAMPLE_FEATURE)
        del feature["id"]

        with pytest.raises(UpstreamMalformed):
            parse_earthquake(feature)

    def test_short_coordinates_raise(self):
        feature = copy.deepcopy(SAMPLE_FEATURE)
        feature["geometry"]["coordinates"] = [-122.4, 37.7]

        with pytest.raises(UpstreamMalformed, match="coordinates"):
            parse_earthquake(feature)

    def test_missing_geometry_raises(self):
        feature = copy.deepcopy(SAMPLE_FEATURE)
        del feature["geometry"]

        with pytest.raises(UpstreamMalformed):
            parse_earthquake(feature)

    def test_non_numeric_magnitude_raises(self):
        with pytest.raises(UpstreamMalformed):
            parse_earthquake(_feature(mag="big"))

    def test_out_of_range_latitude_raises(self):
        feature = copy.deepcopy(SAMPLE_FEATURE)
        feature["geometry"]["coordinates"] = [-122.4, 95.0, 10.0]

        with pytest.raises(UpstreamMalformed, match="out-of-range"):
            parse_earthquake(feature)

    def test_non_dict_raises(self):
        with pytest.raises(UpstreamMalformed):
            parse_earthquake(["not", "a", "feature"])

    @pytest.mark.parametrize("time_ms", [1e20, -1e20])
    def test_unrepresentable_time_raises(self, time_ms):
        """A timestamp outside the datetime range is malformed data."""
        with pytest.raises(UpstreamMalformed, match="time"):
            parse_earthquake(_feature(time=time_ms))

    def test_infinite_time_raises(self):
        with pytest.raises(UpstreamMalformed, match="time"):
            parse_earthquake(_feature(time=float("inf")))

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), "many"])
    def test_unusable_felt_and_sig_dropped(self, value):
        result = parse_earthquake(_feature(felt=value, sig=value))

        assert result.felt is None
        assert result.significance is None


class TestParseFeed:
    """Tests for parse_feed()."""

    def test_parses_collection(self):
        feed = parse_feed(SAMPLE_GEOJSON)

        assert feed.count == 1
        assert len(feed.earthquakes) == 1
        assert feed.earthquakes[0].id == "nc75095866"

    def test_preserves_upstream_order(self):
        """Order is USGS's (e.g. by magnitude), not re-sorted by time."""
        small_recent = copy.deepcopy(SAMPLE_FEATURE)
        small_recent["id"] = "small"
        small_recent["properties"]["mag"] = 2.1
        small_recent["properties"]["time"] = 1703001700000

        big_old = copy.deepcopy(SAMPLE_FEATURE)
        big_old["id"] = "big"
        big_old["properties"]["mag"] = 6.3
        big_old["properties"]["time"] = 1702001600000

        feed = parse_feed({"metadata": {"count": 2}, "features": [big_old, small_recent]})

        assert [e.id for e in feed.earthquakes] == ["big", "small"]

    def test_empty_collection(self):
        feed = parse_feed({"metadata": {"count": 0}, "features": []})

        assert feed.count == 0
        assert feed.earthquakes == ()

    def test_missing_metadata_raises(self):
        with pytest.raises(UpstreamMalformed, match="metadata"):
            parse_feed({"features": []})

    @pytest.mark.parametrize("count", [float("inf"), float("nan"), "lots", None])
    def test_unusable_count_raises(self, count):
        with pytest.raises(UpstreamMalformed, match="count"):
            parse_feed({"metadata": {"count": count}, "features": []})

    def test_missing_features_raises(self):
        with pytest.raises(UpstreamMalformed, match="features"):
            parse_feed({"metadata": {"count": 0}})

    def test_one_bad_feature_fails_whole_feed(self):
        bad = _feature(mag=None)

        with pytest.raises(UpstreamMalformed):
            parse_feed({"metadata": {"count": 2}, "features": [SAMPLE_FEATURE, bad]})

    def test_non_dict_raises(self):
        with pytest.raises(UpstreamMalformed):
            parse_feed([])


class TestFilterByMagnitude:
    """Tests for filter_by_magnitude() pure function."""

    def test_min_is_inclusive(self):
        result = filter_by_magnitude([_quake(3.9), _quake(4.0), _quake(5.1)], min_magnitude=4.0)

        assert [e.magnitude for e in result] == [4.0, 5.1]

    def test_max_is_inclusive(self):
        result = filter_by_magnitude([_quake(3.9), _quake(4.0), _quake(5.1)], max_magnitude=4.0)

        assert [e.magnitude for e in result] == [3.9, 4.0]

    def test_no_bounds_returns_all(self):
        quakes = (_quake(1.0), _quake(2.0))

        assert filter_by_magnitude(quakes) == list(quakes)


class TestCountSignificant:
    """Tests for count_significant()."""

    def test_counts_m4_and_above(self):
        quakes = [_quake(2.5), _quake(3.99), _quake(4.0), _quake(6.2)]

        assert count_significant(quakes) == 2

    def test_empty(self):
        assert count_significant(()) == 0
