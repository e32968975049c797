"""Tests for version validation and parsing."""

from __future__ import annotations

import pytest

from spork.core.errors import InvalidVersionFormat
from spork.core.versions import is_integer_string, is_valid_version, parse_version
from spork.models.versioning import Version


class TestIsValidVersion:
    @pytest.mark.parametrize(
        "value",
        ["0.0.0", "1.2.3", "10.20.30", "001.2.3", "2.3.1", "999999.0.1"],
    )
    def test_three_numeric_components_are_valid(self, value: str):
        assert is_valid_version(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "1",
            "1.2",
            "1.2.3.4",
            "1..3",
            "1.2.",
            ".1.2",
            "a.b.c",
            "1.2.x",
            "1.2.3-beta",
            "1.2.3+build",
            "= 1.2.3",
            "v1.2.3",
            "1. 2.3",
            "notaversion",
        ],
    )
    def test_other_shapes_are_invalid(self, value: str):
        assert is_valid_version(value) is False

    def test_signed_components_pass_the_integer_pattern(self):
        assert is_valid_version("+1.2.3") is True
        assert is_valid_version("1.-2.3") is True


class TestIsIntegerString:
    def test_digits(self):
        assert is_integer_string("42")

    def test_sign(self):
        assert is_integer_string("-7")
        assert is_integer_string("+7")

    def test_rejects_trailing_newline(self):
        assert not is_integer_string("7\n")

    def test_rejects_lone_sign(self):
        assert not is_integer_string("-")


class TestParseVersion:
    def test_parse(self):
        assert parse_version("2.3.1") == Version(major=2, minor=3, patch=1)

    def test_leading_zeros_normalize(self):
        assert parse_version("01.02.03").canonical() == "1.2.3"

    def test_invalid_raises(self):
        with pytest.raises(InvalidVersionFormat, match="isn't a valid version number"):
            parse_version("notaversion")

    def test_negative_component_raises(self):
        with pytest.raises(InvalidVersionFormat):
            parse_version("1.-2.3")

    def test_invalid_version_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_version("1.2")
