"""Tests for representation lookup and DMS formatting."""

import pytest

from gpsfeed.errors import UnknownTypeError
from gpsfeed.position import Representation, format_dms
from gpsfeed.position.representation import CoordinateSystem, SpeedUnit


class TestRepresentation:
    """Tests for Representation.from_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("WGS84", Representation.WGS84),
            ("DMS.km/h", Representation.DMS_KMH),
            ("DMS.mph", Representation.DMS_MPH),
            ("DMS.kn", Representation.DMS_KN),
        ],
    )
    def test_wire_names(self, name, expected):
        assert Representation.from_name(name) is expected

    def test_none_selects_wgs84(self):
        assert Representation.from_name(None) is Representation.WGS84

    def test_unknown_name(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            Representation.from_name("UTM")
        assert exc_info.value.code == "unknown-type"

    def test_names_are_case_sensitive(self):
        with pytest.raises(UnknownTypeError):
            Representation.from_name("wgs84")

    def test_dms_types_share_coordinate_system(self):
        dms = [r for r in Representation if r.coordinates is CoordinateSystem.DMS]
        assert len(dms) == 3
        assert len({r.speed_unit for r in dms}) == 3


class TestSpeedUnit:
    """Tests for SpeedUnit conversions."""

    def test_kilometers_per_hour(self):
        assert SpeedUnit.KILOMETERS_PER_HOUR.from_meters_per_second(10.0) == pytest.approx(36.0)

    def test_miles_per_hour(self):
        assert SpeedUnit.MILES_PER_HOUR.from_meters_per_second(1609.344 / 3600) == pytest.approx(1.0)

    def test_knots(self):
        assert SpeedUnit.KNOTS.from_meters_per_second(1852 / 3600) == pytest.approx(1.0)


class TestFormatDMS:
    """Tests for format_dms function."""

    def test_north_latitude(self):
        assert format_dms(48.1173, is_latitude=True) == "48°7'2.280\"N"

    def test_south_latitude(self):
        assert format_dms(-33.5, is_latitude=True) == "33°30'0.000\"S"

    def test_east_longitude(self):
        assert format_dms(11.5, is_latitude=False) == "11°30'0.000\"E"

    def test_west_longitude_from_eastward_value(self):
        assert format_dms(360 - (11 + 31 / 60), is_latitude=False) == "11°31'0.000\"W"

    def test_antimeridian_is_east(self):
        assert format_dms(180.0, is_latitude=False) == "180°0'0.000\"E"

    def test_seconds_carry_into_minutes(self):
        assert format_dms(10 + 59.99999 / 3600, is_latitude=True) == "10°1'0.000\"N"
