from __future__ import annotations

import numpy as np
import pytest

from smcstats.accumulators import (
    DEFAULT_QUANTILE_TOLERANCE,
    WeightedQuantileAccumulator,
    check_probs,
)
from smcstats.errors import (
    AccumulatorStateError,
    DegenerateInputError,
    InvalidArgumentError,
)


def accumulate(values, weights, probs, **kwargs) -> WeightedQuantileAccumulator:
    accu = WeightedQuantileAccumulator(probs, **kwargs)
    accu.init()
    for value, weight in zip(values, weights, strict=True):
        accu.push(value, weight)

    return accu


def reference_quantile(values, weights, prob) -> float:
    values = np.asarray(values, dtype=float)
    weights = np.asarray(weights, dtype=float)
    order = np.argsort(values, kind="stable")
    cumulative = np.cumsum(weights[order])
    index = np.argmax(cumulative >= prob * cumulative[-1])

    return float(values[order][index])


class TestCheckProbs:
    @pytest.mark.smoke
    def test_valid(self):
        assert check_probs([0, 0.025, 0.5, 1]) == [0.0, 0.025, 0.5, 1.0]
        assert check_probs(np.array([0.25, 0.75])) == [0.25, 0.75]

    @pytest.mark.smoke
    @pytest.mark.parametrize(
        "probs", [[-0.1], [1.5], [0.5, float("nan")], ["half"], [None]]
    )
    def test_invalid(self, probs):
        with pytest.raises(InvalidArgumentError):
            check_probs(probs)


class TestWeightedQuantileAccumulator:
    @pytest.mark.smoke
    def test_initialization(self):
        accu = WeightedQuantileAccumulator([0.25, 0.5])

        assert accu.probs == (0.25, 0.5)
        assert accu.tolerance == DEFAULT_QUANTILE_TOLERANCE
        assert not accu.initialized
        accu.init()
        assert accu.initialized
        assert accu.count == 0

    @pytest.mark.smoke
    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"probs": [1.1]}, "probabilities"),
            ({"probs": [0.5], "tolerance": -1.0}, "tolerance"),
        ],
    )
    def test_invalid_initialization(self, kwargs, match):
        with pytest.raises(InvalidArgumentError, match=match):
            WeightedQuantileAccumulator(**kwargs)

    @pytest.mark.smoke
    def test_equal_weight_median(self):
        accu = accumulate([10.0, 20.0, 30.0, 40.0], [1.0] * 4, [0.5])

        # lowest value whose cumulative weight reaches half the total
        assert accu.quantile(0) == 20.0

    @pytest.mark.smoke
    def test_weighted_levels(self):
        accu = accumulate(
            [3.0, 1.0, 2.0], [0.5, 0.2, 0.3], [0.0, 0.1, 0.2, 0.5, 0.51, 1.0]
        )

        assert accu.quantiles() == [1.0, 1.0, 1.0, 2.0, 3.0, 3.0]

    @pytest.mark.sanity
    def test_rounding_tolerance(self):
        values = [float(value) for value in range(1, 11)]
        weights = [0.1] * 10
        accu = accumulate(values, weights, [0.3, 0.7, 0.8])

        assert accu.quantiles() == [3.0, 7.0, 8.0]

    @pytest.mark.sanity
    def test_zero_weights_are_ignored(self):
        accu = accumulate([100.0, 1.0, 2.0, -50.0], [0.0, 1.0, 1.0, 0.0], [0.0, 1.0])

        assert accu.quantiles() == [1.0, 2.0]
        assert accu.count == 4

    @pytest.mark.sanity
    def test_duplicate_values(self):
        accu = accumulate([2.0, 1.0, 2.0, 2.0], [1.0, 1.0, 1.0, 1.0], [0.25, 0.26])

        assert accu.quantiles() == [1.0, 2.0]

    @pytest.mark.regression
    def test_matches_reference(self):
        rng = np.random.default_rng(seed=11)
        values = rng.normal(size=500)
        weights = rng.exponential(size=500)
        probs = [0.0, 0.025, 0.25, 0.5, 0.75, 0.975, 1.0]
        accu = accumulate(values, weights, probs)

        assert accu.quantiles() == [
            reference_quantile(values, weights, prob) for prob in probs
        ]

    @pytest.mark.sanity
    def test_median_of_single_level(self):
        rng = np.random.default_rng(seed=5)
        values = rng.integers(0, 20, size=101).astype(float)
        weights = rng.uniform(size=101)
        median = accumulate(values, weights, [0.5])
        several = accumulate(values, weights, [0.1, 0.5, 0.9])

        assert median.quantile(0) == several.quantile(1)

    @pytest.mark.smoke
    @pytest.mark.parametrize(
        ("values", "weights"),
        [([], []), ([1.0, 2.0], [0.0, 0.0])],
        ids=["empty", "zero_weight"],
    )
    def test_degenerate(self, values, weights):
        accu = accumulate(values, weights, [0.5])

        with pytest.raises(DegenerateInputError):
            accu.quantile(0)
        with pytest.raises(DegenerateInputError):
            accu.quantiles()

    @pytest.mark.smoke
    @pytest.mark.parametrize("index", [-1, 2])
    def test_index_out_of_range(self, index):
        accu = accumulate([1.0], [1.0], [0.1, 0.9])

        with pytest.raises(InvalidArgumentError):
            accu.quantile(index)

    @pytest.mark.smoke
    def test_invalid_weight(self):
        accu = accumulate([], [], [0.5])

        with pytest.raises(InvalidArgumentError):
            accu.push(1.0, -2.0)
        assert accu.count == 0

    @pytest.mark.smoke
    def test_lifecycle(self):
        accu = WeightedQuantileAccumulator([0.5])

        with pytest.raises(AccumulatorStateError):
            accu.push(1.0, 1.0)
        with pytest.raises(AccumulatorStateError):
            accu.quantile(0)
        accu.init()
        with pytest.raises(AccumulatorStateError):
            accu.init()

    @pytest.mark.sanity
    def test_push_after_query(self):
        accu = accumulate([1.0, 2.0], [1.0, 1.0], [1.0])
        assert accu.quantile(0) == 2.0

        accu.push(5.0, 1.0)
        assert accu.quantile(0) == 5.0

    @pytest.mark.regression
    def test_merge_matches_whole_stream(self):
        rng = np.random.default_rng(seed=17)
        values = rng.gamma(2.0, size=300)
        weights = rng.uniform(size=300)
        probs = [0.05, 0.5, 0.95]
        whole = accumulate(values, weights, probs)
        left = accumulate(values[:120], weights[:120], probs)
        right = accumulate(values[120:], weights[120:], [0.3])
        left.merge(right)

        assert left.count == 300
        assert left.probs == tuple(probs)
        assert left.quantiles() == whole.quantiles()
