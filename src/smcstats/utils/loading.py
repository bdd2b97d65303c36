"""
Loading of paired values and weights from JSON or CSV files.

JSON files hold an object with a ``values`` list and an optional ``weights``
list. CSV files hold one observation per row: a value column and an optional
weight column, with an optional header row. Missing weights default to 1.0 and
missing values (empty cells or ``NA``) map to NaN, which the accumulators treat
as an ordinary float.
"""

from __future__ import annotations

import csv
import json
import math
from pathlib import Path

__all__ = ["MISSING_TOKENS", "load_observations"]

MISSING_TOKENS = frozenset({"", "na", "nan", "null", "none"})


def load_observations(path: str | Path) -> tuple[list[float], list[float]]:
    """
    Load values and weights from a file.

    :param path: Path to a ``.json`` or ``.csv`` file
    :return: Values and weights as lists of floats
    :raises ValueError: If the file type is unsupported or its content is invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(
        f"Unsupported file type '{suffix}' for {path}; expected .json or .csv"
    )


def _parse_float(token: str | float | int | None) -> float:
    if token is None:
        return math.nan
    if isinstance(token, str) and token.strip().lower() in MISSING_TOKENS:
        return math.nan

    return float(token)


def _load_json(path: Path) -> tuple[list[float], list[float]]:
    with path.open() as file:
        content = json.load(file)

    if not isinstance(content, dict) or "values" not in content:
        raise ValueError(f"{path} must hold an object with a 'values' list")

    try:
        values = [_parse_float(value) for value in content["values"]]
        weights = (
            [float(weight) for weight in content["weights"]]
            if content.get("weights") is not None
            else [1.0] * len(values)
        )
    except TypeError as err:
        raise ValueError(f"{path} holds a non-numeric value or weight: {err}") from err

    return values, weights


def _load_csv(path: Path) -> tuple[list[float], list[float]]:
    values: list[float] = []
    weights: list[float] = []

    with path.open(newline="") as file:
        for index, row in enumerate(csv.reader(file)):
            if not row:
                continue
            try:
                value = _parse_float(row[0])
                weight = float(row[1]) if len(row) > 1 and row[1].strip() else 1.0
            except ValueError:
                if index == 0:
                    # header row
                    continue
                raise

            values.append(value)
            weights.append(weight)

    return values, weights
