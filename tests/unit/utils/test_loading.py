from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from smcstats.utils import load_observations


class TestLoadObservations:
    @pytest.mark.smoke
    def test_json(self, tmp_path: Path):
        path = tmp_path / "particles.json"
        path.write_text(json.dumps({"values": [1, 2.5, None], "weights": [1, 0, 2]}))

        values, weights = load_observations(path)

        assert values[:2] == [1.0, 2.5]
        assert math.isnan(values[2])
        assert weights == [1.0, 0.0, 2.0]

    @pytest.mark.smoke
    def test_json_default_weights(self, tmp_path: Path):
        path = tmp_path / "particles.json"
        path.write_text(json.dumps({"values": [3, 4]}))

        assert load_observations(str(path)) == ([3.0, 4.0], [1.0, 1.0])

    @pytest.mark.sanity
    @pytest.mark.parametrize(
        "content",
        [
            {"values": [1, 2], "weights": [1, None]},
            {"values": [1, {"x": 2}]},
            {"values": 3},
        ],
        ids=["null_weight", "object_value", "scalar_values"],
    )
    def test_json_non_numeric(self, tmp_path: Path, content):
        path = tmp_path / "particles.json"
        path.write_text(json.dumps(content))

        with pytest.raises(ValueError, match="non-numeric"):
            load_observations(path)

    @pytest.mark.sanity
    def test_json_without_values(self, tmp_path: Path):
        path = tmp_path / "particles.json"
        path.write_text(json.dumps([1, 2, 3]))

        with pytest.raises(ValueError, match="'values' list"):
            load_observations(path)

    @pytest.mark.smoke
    def test_csv_with_header(self, tmp_path: Path):
        path = tmp_path / "particles.CSV"
        path.write_text("value,weight\n1.5,0.25\nNA,0.5\n\n3,\n")

        values, weights = load_observations(path)

        assert values[0] == 1.5
        assert math.isnan(values[1])
        assert values[2] == 3.0
        assert weights == [0.25, 0.5, 1.0]

    @pytest.mark.smoke
    def test_csv_values_only(self, tmp_path: Path):
        path = tmp_path / "particles.csv"
        path.write_text("4\n5\n6\n")

        assert load_observations(path) == ([4.0, 5.0, 6.0], [1.0, 1.0, 1.0])

    @pytest.mark.sanity
    def test_csv_invalid_row(self, tmp_path: Path):
        path = tmp_path / "particles.csv"
        path.write_text("value,weight\n1,1\nabc,1\n")

        with pytest.raises(ValueError, match="abc"):
            load_observations(path)

    @pytest.mark.sanity
    def test_unsupported_suffix(self, tmp_path: Path):
        path = tmp_path / "particles.parquet"
        path.write_text("")

        with pytest.raises(ValueError, match="Unsupported file type '.parquet'"):
            load_observations(path)
