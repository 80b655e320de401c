"""Tests for the term table store and its loaders."""

import json

import numpy as np
import pytest

from vsop87 import config, terms
from vsop87.errors import TermTableError
from vsop87.terms import BodyTables, TermSeries, TermTableStore, default_store, load_directory
from vsop87.variants import Variant

from conftest import jupiter_a_tables


class TestTermSeries:
    def test_terms_and_coeffs(self):
        series = TermSeries([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert len(series) == 2
        assert series.coeffs.shape == (2, 3)
        assert series.terms[1].amplitude == 4.0
        assert series.terms[1].frequency == 6.0
        assert list(series)[0] == (1.0, 2.0, 3.0)

    def test_read_only(self):
        series = TermSeries([1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            series.coeffs[0, 0] = 5.0

    def test_equality(self):
        assert TermSeries([1.0, 2.0, 3.0]) == TermSeries(np.array([[1.0, 2.0, 3.0]]))
        assert TermSeries([1.0, 2.0, 3.0]) != TermSeries([1.0, 2.0, 4.0])


class TestBodyTables:
    def test_groups_for_same_slot_are_concatenated(self):
        tables = BodyTables.from_groups([
            (0, 0, [1.0, 0.0, 0.0]),
            (0, 0, [2.0, 0.0, 0.0]),
            (2, 1, [3.0, 0.0, 0.0]),
        ])
        assert tables.variable_count == 3
        assert [term.amplitude for term in tables.powers(0)[0]] == [1.0, 2.0]
        assert tables.powers(1) == ()
        assert len(tables.powers(2)[0]) == 0
        assert tables.max_power(2) == 1
        assert tables.term_count == 3

    def test_missing_variable(self):
        assert jupiter_a_tables().powers(5) == ()

    def test_groups_skip_empty_slots(self):
        tables = BodyTables.from_groups([(0, 2, [1.0, 0.0, 0.0])])
        assert [(v, p) for v, p, _ in tables.groups()] == [(0, 2)]

    def test_negative_slot(self):
        with pytest.raises(ValueError):
            BodyTables.from_groups([(-1, 0, [1.0, 0.0, 0.0])])


class TestTermTableStore:
    def test_lookup(self, jupiter_store):
        assert ('A', 'jupiter') in jupiter_store
        assert jupiter_store.series('VSOP87A', 'Jupiter') == jupiter_a_tables()
        assert jupiter_store.bodies('A') == ['JUPITER']
        assert jupiter_store.variants() == [Variant.A]

    def test_missing_tables(self, jupiter_store):
        with pytest.raises(TermTableError) as info:
            jupiter_store.series('A', 'SATURN')
        assert 'VSOP87_DATA_DIR' in str(info.value)

    def test_missing_tables_is_key_error(self, jupiter_store):
        with pytest.raises(KeyError):
            jupiter_store.series('B', 'JUPITER')

    def test_body_not_in_version(self, jupiter_store):
        # The main version has the Earth-Moon barycenter, not the Earth
        with pytest.raises(TermTableError):
            jupiter_store.series(Variant.VSOP87, 'EARTH')
        with pytest.raises(TermTableError):
            jupiter_store.series(Variant.D, 'SUN')

    def test_merged_prefers_other(self, jupiter_store):
        other = TermTableStore({('A', 'JUPITER'): BodyTables.from_groups([(0, 0, [1.0, 0.0, 0.0])])})
        merged = jupiter_store.merged(other)
        assert merged.series('A', 'JUPITER').term_count == 1
        assert jupiter_store.series('A', 'JUPITER').term_count == 9

    def test_json_round_trip(self, jupiter_store, tmp_path):
        path = tmp_path / 'vsop87a.json'
        jupiter_store.write_json('A', path, comment='test', version='x')
        obj = json.loads(path.read_text())
        assert obj['variant'] == 'A'
        assert obj['version'] == 'x'
        loaded = TermTableStore.from_json(str(path))
        assert loaded.series('A', 'JUPITER') == jupiter_a_tables()

    def test_json_main_version(self, synthetic_store):
        obj = synthetic_store.to_json(Variant.VSOP87)
        assert obj['variant'] == 'VSOP87'
        assert list(obj['bodies']) == ['EARTH-MOON']
        loaded = TermTableStore.from_json(obj)
        assert loaded.series('', 'EMB') == synthetic_store.series(Variant.VSOP87, 'EARTH-MOON')

    def test_json_missing_key(self):
        with pytest.raises(ValueError):
            TermTableStore.from_json({'bodies': {}})

    def test_from_vsop87_files(self, raw_dir):
        store = TermTableStore.from_vsop87_files(raw_dir)
        assert list(store.keys()) == [(Variant.A, 'JUPITER')]
        assert store.series('A', 'JUPITER') == jupiter_a_tables()

    def test_from_vsop87_files_filters_versions(self, raw_dir):
        assert len(TermTableStore.from_vsop87_files(raw_dir, ['B', 'D'])) == 0


class TestDefaultStore:
    def test_bundled_earth(self):
        store = terms.bundled_store()
        assert ('D', 'EARTH') in store
        assert store.series('D', 'EARTH').variable_count == 3

    def test_cached(self):
        assert default_store() is default_store()

    def test_data_dir(self, raw_dir):
        config.set_data_dir(raw_dir)
        terms.reset_default_store()
        store = default_store()
        assert ('A', 'JUPITER') in store
        assert ('D', 'EARTH') in store

    def test_load_directory_raw_files_win(self, raw_dir):
        replacement = TermTableStore({('A', 'JUPITER'): BodyTables.from_groups([(0, 0, [1.0, 0.0, 0.0])])})
        replacement.write_json('A', raw_dir / 'vsop87a.json')
        store = load_directory(raw_dir)
        assert store.series('A', 'JUPITER') == jupiter_a_tables()
