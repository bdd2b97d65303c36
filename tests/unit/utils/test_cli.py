from __future__ import annotations

import click
import pytest

from smcstats.utils import parse_list, parse_list_floats


class TestParseList:
    @pytest.mark.smoke
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            ("mean", ["mean"]),
            (" mean , var ,", ["mean", "var"]),
            (5, [5]),
        ],
    )
    def test_values(self, value, expected):
        assert parse_list(None, None, value) == expected


class TestParseListFloats:
    @pytest.mark.smoke
    def test_valid(self):
        assert parse_list_floats(None, None, "0.025, 0.5,1") == [0.025, 0.5, 1.0]
        assert parse_list_floats(None, None, None) is None

    @pytest.mark.smoke
    def test_invalid(self):
        with pytest.raises(click.BadParameter, match="'half'"):
            parse_list_floats(None, None, "0.5,half")
