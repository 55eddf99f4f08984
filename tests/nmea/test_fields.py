"""Tests for NMEA field tokenizing and per-field decoding."""

import pytest

from gpsfeed.nmea.fields import (
    altitude_field,
    float_field,
    latitude_field,
    longitude_field,
    split_fields,
    time_field,
)


class TestSplitFields:
    """Tests for split_fields function."""

    def test_exact_arity(self):
        assert split_fields("a,b,c", 3) == ["a", "b", "c"]

    def test_empty_fields_are_kept(self):
        assert split_fields("a,,", 3) == ["a", "", ""]

    def test_too_few(self):
        assert split_fields("a,b", 3) is None

    def test_too_many(self):
        assert split_fields("a,b,c,d", 3) is None


class TestHemispheres:
    """Tests for coordinate fields and their hemisphere indicator."""

    def test_north_is_positive(self):
        assert latitude_field("4807.038", "N") == pytest.approx(48.1173)

    def test_south_is_negated(self):
        assert latitude_field("4807.038", "S") == pytest.approx(-48.1173)

    def test_east_is_unchanged(self):
        assert longitude_field("4807.038", "E") == pytest.approx(48.1173)

    def test_west_is_stored_eastward(self):
        assert longitude_field("4807.038", "W") == pytest.approx(360 - 48.1173)

    def test_latitude_rejects_east(self):
        with pytest.raises(ValueError):
            latitude_field("4807.038", "E")

    def test_longitude_rejects_north(self):
        with pytest.raises(ValueError):
            longitude_field("01131.000", "N")

    def test_multi_character_hemisphere_rejected(self):
        with pytest.raises(ValueError):
            latitude_field("4807.038", "NN")

    def test_lowercase_hemisphere_rejected(self):
        with pytest.raises(ValueError):
            latitude_field("4807.038", "n")

    @pytest.mark.parametrize("field", [latitude_field, longitude_field])
    def test_empty_pair_rejected(self, field):
        with pytest.raises(ValueError):
            field("", "")

    def test_hemisphere_without_value_rejected(self):
        with pytest.raises(ValueError):
            latitude_field("", "N")

    def test_value_without_hemisphere_rejected(self):
        with pytest.raises(ValueError):
            longitude_field("01131.000", "")


class TestScalarFields:
    """Tests for time, float and altitude fields."""

    def test_time_field(self):
        assert time_field("123519") == 45319000

    def test_time_field_rejects_empty(self):
        with pytest.raises(ValueError):
            time_field("")

    def test_float_field_empty_is_absent(self):
        assert float_field("") is None

    def test_float_field_rejects_garbage(self):
        with pytest.raises(ValueError):
            float_field("fast")

    @pytest.mark.parametrize(
        "value", ["nan", "NaN", "inf", "-inf", "1e3", "1_0", " 1 ", "\u0661", "1.2.3", "."]
    )
    def test_float_field_rejects_non_nmea_decimals(self, value):
        with pytest.raises(ValueError):
            float_field(value)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("022.4", 22.4), ("-3.5", -3.5), ("+7", 7.0), ("12.", 12.0), (".5", 0.5)],
    )
    def test_float_field_accepts_plain_decimals(self, value, expected):
        assert float_field(value) == pytest.approx(expected)

    def test_altitude_in_meters(self):
        assert altitude_field("545.4", "M") == pytest.approx(545.4)

    def test_altitude_in_feet_rejected(self):
        with pytest.raises(ValueError):
            altitude_field("545.4", "F")

    def test_altitude_empty_pair_rejected(self):
        with pytest.raises(ValueError):
            altitude_field("", "")

    def test_altitude_without_unit_rejected(self):
        with pytest.raises(ValueError):
            altitude_field("545.4", "")

    def test_altitude_unit_without_value_rejected(self):
        with pytest.raises(ValueError):
            altitude_field("", "M")
