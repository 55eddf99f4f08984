"""Tests for GGA sentence parsing."""

import pytest

from gpsfeed.nmea import parse_gga

GGA_FIX = "123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,"


class TestParseGGA:
    """Tests for parse_gga function."""

    def test_valid_gga_with_fix(self):
        result = parse_gga(GGA_FIX)
        assert result is not None
        assert result.time_of_day_millis == 45319000
        assert result.latitude_degrees == pytest.approx(48.1173, rel=1e-6)
        assert result.longitude_degrees == pytest.approx(11.5166667, rel=1e-6)
        assert result.altitude_meters == pytest.approx(545.4)

    def test_gga_supplies_no_speed_or_track(self):
        result = parse_gga(GGA_FIX)
        assert result is not None
        assert result.speed_meters_per_second is None
        assert result.track_degrees is None

    def test_gga_no_fix_rejected(self):
        assert parse_gga("123519,4807.038,N,01131.000,E,0,00,,545.4,M,,M,,") is None

    def test_gga_empty_fix_quality_rejected(self):
        assert parse_gga("123519,4807.038,N,01131.000,E,,08,0.9,545.4,M,46.9,M,,") is None

    def test_gga_rtk_fixed(self):
        assert parse_gga("123519.00,4807.038,N,01131.000,E,4,12,0.5,545.4,M,47.0,M,,") is not None

    def test_gga_southern_western_hemisphere(self):
        result = parse_gga("123519.00,3356.123,S,15112.456,W,2,10,0.8,100.0,M,20.0,M,,")
        assert result is not None
        assert result.latitude_degrees == pytest.approx(-33.93538333, rel=1e-6)
        assert result.longitude_degrees == pytest.approx(360 - 151.2076, rel=1e-6)

    def test_gga_empty_altitude_rejected(self):
        assert parse_gga("123519,4807.038,N,01131.000,E,1,08,0.9,,,46.9,M,,") is None

    def test_gga_fix_with_empty_coordinates_rejected(self):
        assert parse_gga("123519,,,,,1,08,0.9,545.4,M,46.9,M,,") is None

    def test_gga_empty_latitude_hemisphere_rejected(self):
        assert parse_gga("123519,4807.038,,01131.000,E,1,08,0.9,545.4,M,46.9,M,,") is None

    def test_gga_altitude_in_wrong_unit_rejected(self):
        assert parse_gga("123519,4807.038,N,01131.000,E,1,08,0.9,545.4,F,46.9,M,,") is None

    def test_gga_bad_hemisphere_rejected(self):
        assert parse_gga("123519,4807.038,X,01131.000,E,1,08,0.9,545.4,M,46.9,M,,") is None

    def test_gga_bad_time_rejected(self):
        assert parse_gga("253519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,") is None

    def test_gga_malformed_too_few_fields(self):
        assert parse_gga("123519,4807.038,N") is None

    def test_gga_too_many_fields(self):
        assert parse_gga(GGA_FIX + ",extra") is None

    def test_zedf9p_gga_rtk_fixed(self):
        result = parse_gga("081836.00,3723.46587,N,12202.26957,W,4,12,0.7,10.5,M,-30.0,M,1.0,0000")
        assert result is not None
        assert result.altitude_meters == pytest.approx(10.5)
