"""Tests for series truncation."""

import numpy as np
import pytest

from vsop87.terms import BodyTables, TermTableStore
from vsop87.truncate import TruncationConfig, round_sig, truncate_series, truncate_store
from vsop87.variants import Variant


class TestRoundSig:
    def test_values(self):
        assert round_sig(123456.0, 2) == 120000.0
        assert round_sig(-0.00123456, 3) == -0.00123
        assert round_sig(0.0, 3) == 0.0


class TestTruncateSeries:
    COEFFS = np.array([
        [1.0, 0.1, 10.0],
        [1.0e-3, 0.2, 20.0],
        [1.0e-6, 0.3, 30.0],
    ])

    def test_threshold(self):
        kept = truncate_series(self.COEFFS, 0, 1.0e-4, TruncationConfig())
        assert kept.shape == (2, 3)

    def test_power_of_t(self):
        # With t_max = 10 a t^2 term grows by 100
        kept = truncate_series(self.COEFFS, 2, 5.0e-5, TruncationConfig(t_max=10.0))
        assert kept.shape == (3, 3)

    def test_sig_figs(self):
        kept = truncate_series(np.array([[1.23456, 2.34567, 3.45678]]), 0, 0.0, TruncationConfig(sig_figs=3))
        assert kept.tolist() == [[1.23, 2.35, 3.46]]

    def test_empty(self):
        assert truncate_series(np.zeros((0, 3)), 0, 1.0, TruncationConfig()).shape == (0, 3)


class TestTruncateStore:
    def test_distance_scaled_threshold(self, jupiter_store):
        # Threshold 0.002 * 5.2 AU drops the two t^1 terms of X
        truncated = truncate_store(jupiter_store, TruncationConfig(tolerance=0.002))
        tables = truncated.series('A', 'JUPITER')
        assert tables.term_count == 7
        assert len(tables.powers(0)) == 1
        assert len(tables.powers(1)[1]) == 1
        assert jupiter_store.series('A', 'JUPITER').term_count == 9

    def test_angles_not_scaled(self):
        tables = BodyTables.from_groups([
            (0, 0, [1.0e-7, 0.0, 1.0]),  # longitude, radians
            (2, 0, [1.0e-7, 0.0, 1.0]),  # radius, AU
        ])
        store = TermTableStore({(Variant.D, 'NEPTUNE'): tables})
        truncated = truncate_store(store, TruncationConfig(tolerance=1.0e-8))
        kept = truncated.series('D', 'NEPTUNE')
        assert len(kept.powers(0)[0]) == 1
        assert kept.powers(2) == ()

    def test_zero_tolerance_keeps_everything(self, synthetic_store):
        truncated = truncate_store(synthetic_store, TruncationConfig(tolerance=0.0))
        assert truncated.term_count() == synthetic_store.term_count()
        assert truncated.series('', 'EMB') == synthetic_store.series('', 'EMB')
