"""Tests for parameter list parsing and the typed store."""

import math

import pytest

from projections.exceptions import MalformedParameter
from projections.parameters import (
    ParameterStore,
    ParameterToken,
    parse_angle,
    parse_parameters,
    parse_real,
    tokenize,
)


class TestTokenize:
    def test_plus_and_whitespace_delimiters(self):
        tokens = tokenize("+proj=bipc +bns +a=6400000")
        assert tokens == [
            ParameterToken("proj", "bipc"),
            ParameterToken("bns"),
            ParameterToken("a", "6400000"),
        ]

    def test_plus_without_spaces(self):
        assert [t.key for t in tokenize("+proj=merc+lat_ts=30+over")] == ["proj", "lat_ts", "over"]

    def test_signed_value_and_exponent_are_not_split(self):
        store = parse_parameters("+x_0=+500 +a=6.4e+6")
        assert store.as_real("x_0") == 500.0
        assert store.as_real("a") == 6.4e6

    def test_empty_key_rejected(self):
        with pytest.raises(MalformedParameter):
            ParameterToken.parse("=5")


class TestParameterStore:
    def test_flag_present_and_absent(self):
        store = parse_parameters("+proj=bipc +bns")
        assert store.as_flag("bns") is True
        assert store.as_flag("over") is False

    def test_flag_with_value_still_true(self):
        assert parse_parameters("+bns=0").as_flag("bns") is True

    def test_missing_keys_return_default(self):
        store = parse_parameters("+proj=bipc")
        assert store.as_real("a") is None
        assert store.as_real("a", 1.0) == 1.0
        assert store.as_angle("lon_0", 0.0) == 0.0
        assert store.as_string("ellps") is None

    def test_last_occurrence_wins(self):
        store = parse_parameters("+a=1 +b=2 +a=3")
        assert store.as_real("a") == 3.0
        assert len(store) == 2
        assert list(store) == ["b", "a"]

    def test_known_key_validated_at_parse_time(self):
        with pytest.raises(MalformedParameter) as excinfo:
            parse_parameters("+proj=merc +a=abc")
        assert excinfo.value.key == "a"

    def test_known_key_without_value_rejected(self):
        with pytest.raises(MalformedParameter):
            parse_parameters("+proj=merc +a")

    def test_unknown_key_kept_unvalidated(self):
        store = parse_parameters("+proj=merc +towgs84=0,0,0")
        assert store.as_string("towgs84") == "0,0,0"

    def test_flag_as_string_is_empty(self):
        assert parse_parameters("+over").as_string("over") == ""

    def test_int_value(self):
        store = parse_parameters("+zone=18")
        assert store.as_int("zone") == 18
        with pytest.raises(MalformedParameter):
            parse_parameters("+zone=eighteen").as_int("zone")

    def test_to_text_round_trip(self):
        store = parse_parameters("+proj=bipc +bns +lon_0=-90")
        assert store.to_text() == "+proj=bipc +bns +lon_0=-90"
        assert parse_parameters(store.to_text()) == store

    def test_from_mapping(self):
        store = ParameterStore.from_mapping({"proj": "merc", "over": True, "bns": False, "R": 6371000})
        assert store.as_string("proj") == "merc"
        assert store.as_flag("over")
        assert "bns" not in store
        assert store.as_real("R") == 6371000.0

    def test_equal_stores_hash_equal(self):
        assert hash(parse_parameters("+a=1 +bns")) == hash(parse_parameters("+a=1 +bns"))


class TestValueParsers:
    def test_fraction(self):
        assert parse_real("1/298.257223563") == pytest.approx(1 / 298.257223563)

    def test_non_finite_rejected(self):
        with pytest.raises(MalformedParameter):
            parse_real("inf", "a")
        with pytest.raises(MalformedParameter):
            parse_real("1/0", "a")

    def test_decimal_degrees(self):
        assert parse_angle("-90") == pytest.approx(-math.pi / 2)

    def test_exponent_notation(self):
        assert parse_angle("1e+1") == pytest.approx(math.radians(10))
        assert parse_angle("-2.5E1") == pytest.approx(math.radians(-25))
        assert parse_angle("1e1W") == pytest.approx(math.radians(-10))
        assert parse_parameters("+proj=merc +lat_ts=1e+1").as_angle("lat_ts") == pytest.approx(
            math.radians(10)
        )

    def test_exponent_overflow_rejected(self):
        with pytest.raises(MalformedParameter):
            parse_angle("1e400", "lon_0")

    def test_single_letter_hemisphere_still_wins(self):
        assert parse_angle("12E") == pytest.approx(math.radians(12))

    def test_dms_with_hemisphere(self):
        expected = -math.radians(12 + 30 / 60 + 15 / 3600)
        assert parse_angle("12d30'15\"W") == pytest.approx(expected)
        assert parse_angle("12d30'15\"S") == pytest.approx(expected)
        assert parse_angle("12d30'15\"N") == pytest.approx(-expected)

    def test_degrees_and_minutes(self):
        assert parse_angle("45d30'") == pytest.approx(math.radians(45.5))

    def test_radians_suffix(self):
        assert parse_angle("0.5r") == 0.5

    def test_garbage_rejected(self):
        with pytest.raises(MalformedParameter):
            parse_angle("north", "lat_0")
