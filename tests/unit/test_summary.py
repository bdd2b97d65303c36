from __future__ import annotations

import numpy as np
import pytest
from loguru import logger

from smcstats.errors import (
    DegenerateInputError,
    InvalidArgumentError,
    LengthMismatchError,
)
from smcstats.facade import AccumulationFacade
from smcstats.schemas import EssDiagnosis, MomentStatistics, ParticleSummary
from smcstats.settings import AccumulationSettings
from smcstats.summary import (
    diagnose_particles,
    effective_sample_size,
    summarize_particles,
)


@pytest.fixture
def warnings_log():
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


class TestEffectiveSampleSize:
    @pytest.mark.smoke
    def test_equal_weights(self):
        assert effective_sample_size([1.0] * 50) == pytest.approx(50.0)
        assert effective_sample_size([0.02] * 50) == pytest.approx(50.0)

    @pytest.mark.smoke
    def test_single_particle_carries_everything(self):
        assert effective_sample_size([0.0, 0.0, 5.0, 0.0]) == pytest.approx(1.0)

    @pytest.mark.sanity
    def test_matches_definition(self):
        weights = np.random.default_rng(seed=1).exponential(size=1000)

        assert effective_sample_size(weights) == pytest.approx(
            np.sum(weights) ** 2 / np.sum(weights**2)
        )

    @pytest.mark.sanity
    def test_extreme_scales(self):
        assert effective_sample_size([1e-200, 1e-200]) == pytest.approx(2.0)
        assert effective_sample_size([1e200, 1e200, 1e200]) == pytest.approx(3.0)

    @pytest.mark.smoke
    @pytest.mark.parametrize(
        ("weights", "error_class"),
        [
            ([1.0, -1.0], InvalidArgumentError),
            ([1.0, float("nan")], InvalidArgumentError),
            ([0.0, 0.0], DegenerateInputError),
            ([], DegenerateInputError),
        ],
    )
    def test_invalid(self, weights, error_class):
        with pytest.raises(error_class):
            effective_sample_size(weights)


class TestDiagnoseParticles:
    @pytest.mark.smoke
    def test_good(self, warnings_log: list[str]):
        diagnosis = diagnose_particles([1.0] * 100)

        assert isinstance(diagnosis, EssDiagnosis)
        assert diagnosis.ess == pytest.approx(100.0)
        assert diagnosis.threshold == 30.0
        assert diagnosis.valid
        assert warnings_log == []

    @pytest.mark.smoke
    def test_bad_warns(self, warnings_log: list[str]):
        diagnosis = diagnose_particles([1.0] * 10)

        assert not diagnosis.valid
        assert len(warnings_log) == 1
        assert "effective sample size is too low" in warnings_log[0]

    @pytest.mark.sanity
    def test_threshold_sources(self):
        facade = AccumulationFacade(AccumulationSettings(ess_threshold=5.0))

        assert diagnose_particles([1.0] * 10, facade=facade).valid
        assert not diagnose_particles([1.0] * 10, ess_threshold=10, facade=facade).valid
        assert diagnose_particles([1.0] * 10, ess_threshold=9.5).valid

    @pytest.mark.smoke
    def test_invalid_threshold(self):
        with pytest.raises(InvalidArgumentError):
            diagnose_particles([1.0, 1.0], ess_threshold=-1.0)


class TestSummarizeParticles:
    @pytest.mark.smoke
    def test_continuous_defaults(self):
        summary = summarize_particles([1.0, 2.0, 3.0, 4.0], [1.0, 1.0, 1.0, 1.0])

        assert isinstance(summary, ParticleSummary)
        assert summary.n_part == 4
        assert summary.ess == pytest.approx(4.0)
        assert summary.moments.as_dict() == {"mean": 2.5}
        assert summary.quantiles is None
        assert summary.mode is None

    @pytest.mark.smoke
    def test_full_summary(self):
        summary = summarize_particles(
            [10.0, 20.0, 30.0, 40.0],
            [1.0, 1.0, 1.0, 1.0],
            probs=[0.025, 0.5, 0.975],
            order=2,
            mode=True,
        )

        assert summary.moments.as_dict() == pytest.approx({"mean": 25.0, "var": 125.0})
        assert summary.quantiles.as_pairs() == [
            ("0.025", 10.0),
            ("0.5", 20.0),
            ("0.975", 40.0),
        ]
        assert summary.mode == 10.0

    @pytest.mark.smoke
    def test_discrete_defaults(self):
        summary = summarize_particles(
            [0, 1, 1, 2], [0.1, 0.4, 0.3, 0.2], discrete=True
        )

        assert summary.mode == 1.0
        assert summary.moments == MomentStatistics()

    @pytest.mark.sanity
    def test_discrete_with_moments(self):
        summary = summarize_particles(
            [0, 1, 1, 2], [1.0, 1.0, 1.0, 1.0], order=1, mode=False, discrete=True
        )

        assert summary.mode is None
        assert summary.moments.mean == pytest.approx(1.0)

    @pytest.mark.smoke
    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            summarize_particles([1.0, 2.0], [1.0])

    @pytest.mark.sanity
    def test_numpy_integer_order(self):
        summary = summarize_particles(
            [1.0, 2.0, 3.0, 4.0], [1.0, 1.0, 1.0, 1.0], order=np.int64(2)
        )

        assert summary.moments.as_dict() == pytest.approx({"mean": 2.5, "var": 1.25})

    @pytest.mark.smoke
    @pytest.mark.parametrize("order", [-1, 5, 1.5, True])
    def test_invalid_order(self, order):
        with pytest.raises(InvalidArgumentError):
            summarize_particles([1.0, 2.0], [1.0, 1.0], order=order)

    @pytest.mark.sanity
    def test_rejected_request_raises(self):
        with pytest.raises(DegenerateInputError):
            summarize_particles([3.0, 3.0], [1.0, 1.0], order=3)
        with pytest.raises(InvalidArgumentError):
            summarize_particles([3.0, 4.0], [1.0, 1.0], probs=[1.2])
