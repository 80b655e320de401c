"""Tests for the check-file validation and the JPL DE comparison helpers."""

import math
from types import SimpleNamespace

import numpy as np
import pytest

from vsop87.reader import CheckRecord, read_check_file
from vsop87.solvers import solve
from vsop87.timescale import J2000
from vsop87.validation import (AU_KM, ErrorStats, SegmentIndex, compare_pos_vel_functions, compare_with_jpl_de,
                               dms_string, generate_test_times, run_check_records, vsop87_pos_vel)
from vsop87.variants import Variant

from conftest import write_check_file


class TestCheckRecords:
    def test_exact_values(self, jupiter_store, synthetic_store, tmp_path):
        store = jupiter_store.merged(synthetic_store)
        cases = [('A', 'JUPITER'), ('D', 'EARTH'), ('', 'EARTH-MOON')]
        rows = []
        for letter, body in cases:
            for jd in (J2000, J2000 - 36525.0):
                rows.append((letter, body, jd, solve(body, letter, jd, store).values))
        path = tmp_path / 'vsop87.chk'
        write_check_file(path, rows)

        results = run_check_records(read_check_file(path), store)
        assert len(results) == 6
        for result in results:
            assert result.error_pos < 1e-9
            assert result.error_vel < 1e-6

    def test_detects_errors(self, jupiter_store):
        values = list(solve('JUPITER', 'A', J2000, jupiter_store).values)
        values[0] += 0.01
        record = CheckRecord(Variant.A, 'JUPITER', J2000, tuple(values))
        result, = run_check_records([record], jupiter_store)
        assert result.error_pos > 1e-3
        assert result.error_vel < 1e-12

    def test_mean_longitude_wraps(self, synthetic_store):
        values = list(solve('EARTH-MOON', '', J2000, synthetic_store).values)
        values[1] += 2.0 * math.pi
        record = CheckRecord(Variant.VSOP87, 'EARTH-MOON', J2000, tuple(values))
        result, = run_check_records([record], synthetic_store)
        assert result.error_pos < 1e-12


class TestStatistics:
    def test_stats(self):
        s = ErrorStats.of([1.0, 2.0, 3.0])
        assert s.n == 3
        assert s.mean == 2.0
        assert (s.min, s.max) == (1.0, 3.0)
        assert 'n=3' in str(s)

    def test_stats_empty(self):
        with pytest.raises(ValueError):
            ErrorStats.of([])

    def test_dms_string(self):
        x = math.radians(30.0 + 15.0 / 60.0 + 20.0 / 3600.0)
        assert dms_string(x) == '30°15\'20"'
        assert dms_string(-x) == '-30°15\'20"'
        assert dms_string(math.radians(5.0 / 3600.0), 1) == '5.0"'
        assert dms_string(math.radians(2.0 / 60.0 + 3.0 / 3600.0)) == "2'3\""

    def test_generate_test_times(self):
        times = generate_test_times(5, (100,))
        jds = times['(-100,100)']
        assert len(jds) == 5
        assert jds[0] == pytest.approx(J2000 - 36525.0)
        assert jds[2] == pytest.approx(J2000)

    def test_compare_identical_functions(self, jupiter_store):
        fn = vsop87_pos_vel('JUPITER', jupiter_store)
        err_p, err_v = compare_pos_vel_functions(fn, fn, [J2000, J2000 + 10.0])
        assert err_p.max == 0.0
        assert err_v.max == 0.0
        assert err_p.n == 2


def fake_segment(center, target, offset, start_jd=2400000.0, end_jd=2500000.0):
    return SimpleNamespace(
        center=center, target=target, start_jd=start_jd, end_jd=end_jd,
        compute_and_differentiate=lambda jd: (np.array(offset, dtype=float), np.array(offset, dtype=float) * 0.01),
    )


class TestJplHelpers:
    KERNEL = SimpleNamespace(segments=[
        fake_segment(0, 10, [1.0, 0.0, 0.0]),
        fake_segment(0, 5, [100.0, 20.0, 3.0]),
        fake_segment(0, 5, [-100.0, 0.0, 0.0], start_jd=2500000.0, end_jd=2600000.0),
    ])

    def test_route(self):
        pos, vel = SegmentIndex(self.KERNEL.segments).pos_vel([10, 0, 5], J2000)
        assert pos.tolist() == [99.0, 20.0, 3.0]
        assert vel.tolist() == pytest.approx([0.99, 0.2, 0.03])

    def test_segment_by_date(self):
        index = SegmentIndex(self.KERNEL.segments)
        assert index.segment(0, 5, 2550000.0).compute_and_differentiate(0.0)[0][0] == -100.0
        with pytest.raises(ValueError):
            index.segment(0, 5, 2700000.0)
        with pytest.raises(ValueError):
            index.segment(0, 6, J2000)

    def test_vsop87_pos_vel_units(self, jupiter_store):
        pos, vel = vsop87_pos_vel('JUPITER', jupiter_store)(J2000)
        rect = solve('JUPITER', 'A', J2000, jupiter_store)
        assert np.linalg.norm(pos) == pytest.approx(np.linalg.norm(rect.values[:3]) * AU_KM, rel=1e-9)
        assert np.linalg.norm(vel) == pytest.approx(np.linalg.norm(rect.values[3:]) * AU_KM, rel=1e-9)

    def test_compare_with_jpl_de(self, jupiter_store):
        reference = vsop87_pos_vel('JUPITER', jupiter_store)
        routes = []

        def jpl_pos_vel(route, jd):
            routes.append(route)
            return reference(jd)

        results = compare_with_jpl_de(jpl_pos_vel, ['JUPITER'], [J2000, J2000 + 1.0], jupiter_store)
        err_p, err_v = results['JUPITER']
        assert err_p.max == 0.0
        assert err_v.n == 2
        assert routes[0] == [10, 0, 5]
