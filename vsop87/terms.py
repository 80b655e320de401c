"""
Term Table Store: the periodic series of VSOP87, per version and body.

Each series slot (body, variable, power of t) is an ordered list of terms
`(a, b, c)` contributing `a * cos(b + c*t)`. Tables are loaded once and never
mutated afterwards; numpy arrays are marked read-only.

JSON data format (one file per version):
```
{
    "_comment": "...",
    "variant": "D",
    "version": "...",
    "bodies": { "EARTH": [ { "coord": 0, "alpha": 0, "coeffs": [a0, b0, c0, a1, ...] }, ... ] }
}
```
`coord` is the 0-based variable index, `alpha` the power of t.
"""
from collections import namedtuple
import glob
import importlib.resources
import json
import logging
import os
import threading

import numpy as np

from . import config
from .errors import TermTableError
from .reader import read_vsop87_file, vsop87_file_name
from .variants import Variant, normalize_body

logger = logging.getLogger(__name__)

Term = namedtuple('Term', ['amplitude', 'phase', 'frequency'])

class TermSeries:
    """
    Immutable series of terms for one (body, variable, power) slot.
    """
    __slots__ = ('_coeffs', '_terms')

    def __init__(self, coeffs=()):
        coeffs = np.array(coeffs, dtype=np.float64).reshape(-1, 3)
        coeffs.flags.writeable = False
        self._coeffs = coeffs
        self._terms = tuple(Term(*row) for row in coeffs.tolist())

    @property
    def coeffs(self) -> np.ndarray:
        """
        Read-only array of shape (n, 3) with columns amplitude, phase, frequency.
        """
        return self._coeffs

    @property
    def terms(self):
        return self._terms

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms)

    def __eq__(self, other):
        if not isinstance(other, TermSeries):
            return NotImplemented
        return self._terms == other._terms

    def __hash__(self):
        return hash(self._terms)

    def __repr__(self):
        return f'TermSeries({len(self)} terms)'

EMPTY_SERIES = TermSeries()

class BodyTables:
    """
    Series of one body under one version, indexed `[variable][power]`.
    """
    def __init__(self, series):
        self._series = tuple(tuple(powers) for powers in series)

    @classmethod
    def from_groups(cls, groups):
        """
        Builds the tables from `(variable, power, coeffs)` groups, where coeffs
        is a flat [a, b, c, ...] list or an (n, 3) array. Groups for the same
        slot are concatenated in the given order.
        """
        slots = {}
        for variable, power, coeffs in groups:
            if variable < 0 or power < 0:
                raise ValueError(f'Invalid series slot ({variable}, {power})')
            rows = np.asarray(coeffs, dtype=np.float64).reshape(-1, 3)
            slots.setdefault((variable, power), []).append(rows)
        if not slots:
            return cls([])
        variable_count = max(variable for variable, _ in slots) + 1
        series = []
        for variable in range(variable_count):
            powers = [power for v, power in slots if v == variable]
            max_power = max(powers) if powers else -1
            series.append([
                TermSeries(np.concatenate(slots[variable, power])) if (variable, power) in slots else EMPTY_SERIES
                for power in range(max_power + 1)
            ])
        return cls(series)

    @property
    def variable_count(self) -> int:
        return len(self._series)

    def powers(self, variable: int):
        """
        Series for the variable, one per power of t starting from t^0.
        Variables without tables give an empty tuple.
        """
        if variable >= len(self._series):
            return ()
        return self._series[variable]

    def max_power(self, variable: int) -> int:
        return len(self.powers(variable)) - 1

    @property
    def term_count(self) -> int:
        return sum(len(series) for powers in self._series for series in powers)

    def groups(self):
        """
        Yields `(variable, power, series)` for every non-empty slot.
        """
        for variable, powers in enumerate(self._series):
            for power, series in enumerate(powers):
                if len(series) > 0:
                    yield variable, power, series

    def __eq__(self, other):
        if not isinstance(other, BodyTables):
            return NotImplemented
        return self._series == other._series

    def __repr__(self):
        return f'BodyTables({self.variable_count} variables, {self.term_count} terms)'

class TermTableStore:
    """
    Read-only mapping `(Variant, body) -> BodyTables`.
    """
    def __init__(self, tables=None):
        self._tables = {}
        for (variant, body), body_tables in (tables or {}).items():
            self._tables[Variant.parse(variant), normalize_body(body)] = body_tables

    def series(self, variant, body) -> BodyTables:
        variant = Variant.parse(variant)
        body = normalize_body(body)
        if body not in variant.bodies:
            raise TermTableError(f'{variant.file_prefix} has no series for {body}')
        try:
            return self._tables[variant, body]
        except KeyError:
            raise TermTableError(
                f'{variant.file_prefix} tables for {body} are not loaded; '
                f'set VSOP87_DATA_DIR or load them with TermTableStore.from_vsop87_files()'
            ) from None

    def __contains__(self, key):
        variant, body = key
        return (Variant.parse(variant), normalize_body(body)) in self._tables

    def __len__(self):
        return len(self._tables)

    def keys(self):
        return self._tables.keys()

    def variants(self):
        return sorted({variant for variant, _ in self._tables}, key=lambda v: v.value)

    def bodies(self, variant):
        variant = Variant.parse(variant)
        return [body for body in variant.bodies if (variant, body) in self._tables]

    def term_count(self) -> int:
        return sum(tables.term_count for tables in self._tables.values())

    def merged(self, other: 'TermTableStore') -> 'TermTableStore':
        """
        Returns a new store with the tables of both; other wins on conflicts.
        """
        tables = dict(self._tables)
        tables.update(other._tables)
        return TermTableStore(tables)

    @classmethod
    def from_json(cls, source):
        """
        Here source can be a path to a json file or the json object itself.
        """
        if not isinstance(source, dict):
            source = load_json(source)
        try:
            variant = Variant.parse(source['variant'])
            bodies = source['bodies']
        except KeyError as e:
            raise ValueError(f'Term table json is missing {e}') from None
        tables = {}
        for body_name, groups in bodies.items():
            tables[variant, body_name] = BodyTables.from_groups(
                (group['coord'], group['alpha'], group['coeffs']) for group in groups
            )
        store = cls(tables)
        _log_term_counts(f'json {variant.file_prefix}', store)
        return store

    @classmethod
    def from_vsop87_files(cls, directory, variants=None):
        """
        Reads the official VSOP87 files found in directory. Missing files are
        skipped; variants defaults to all six versions.
        """
        variants = [Variant.parse(v) for v in variants] if variants is not None else list(Variant)
        tables = {}
        for variant in variants:
            for body in variant.bodies:
                path = os.path.join(directory, vsop87_file_name(variant, body))
                if not os.path.exists(path):
                    continue
                tables[variant, body] = BodyTables.from_groups(
                    (variable, power, (a, b, c)) for variable, power, a, b, c in read_vsop87_file(path)
                )
        store = cls(tables)
        _log_term_counts(f'VSOP87 files in {directory}', store)
        return store

    def to_json(self, variant, comment='', version=''):
        """
        Returns the json object of one version in the data format above.
        """
        variant = Variant.parse(variant)
        bodies = {}
        for body in self.bodies(variant):
            bodies[body] = [
                {'coord': variable, 'alpha': power, 'coeffs': series.coeffs.ravel().tolist()}
                for variable, power, series in self._tables[variant, body].groups()
            ]
        return {'_comment': comment, 'variant': variant.value or 'VSOP87', 'version': version, 'bodies': bodies}

    def write_json(self, variant, path, comment='', version=''):
        obj = self.to_json(variant, comment, version)
        with open(path, 'w') as f:
            json.dump(obj, f, indent=None, separators=(',', ':'))
        logger.info('Wrote %s tables to %s', Variant.parse(variant).file_prefix, path)

    def __repr__(self):
        return f'TermTableStore({len(self)} tables, {self.term_count()} terms)'

def load_json(file_name):
    with open(file_name, 'r') as f:
        return json.load(f)

def _log_term_counts(source, store):
    term_count = {f'{variant.file_prefix} {body}': tables.term_count for (variant, body), tables in store._tables.items()}
    logger.info('Loaded %d terms from %s: %s', sum(term_count.values()), source, term_count)

def bundled_store() -> TermTableStore:
    """
    Store with the truncated tables shipped inside the package.
    """
    store = TermTableStore()
    data = importlib.resources.files('vsop87') / 'data'
    for entry in sorted(data.iterdir(), key=lambda p: p.name):
        if entry.name.endswith('.json'):
            store = store.merged(TermTableStore.from_json(json.loads(entry.read_text())))
    return store

def load_directory(directory) -> TermTableStore:
    """
    Loads every json table in directory and every raw VSOP87 file next to them.
    Raw files win over json for the same version and body.
    """
    store = TermTableStore()
    for path in sorted(glob.glob(os.path.join(directory, '*.json'))):
        store = store.merged(TermTableStore.from_json(path))
    return store.merged(TermTableStore.from_vsop87_files(directory))

_default_store = None
_default_store_lock = threading.Lock()

def default_store() -> TermTableStore:
    """
    Process-wide store, initialised on first use: bundled tables overridden by
    whatever is found in the configured data directory.
    """
    global _default_store
    if _default_store is None:
        with _default_store_lock:
            if _default_store is None:
                store = bundled_store()
                data_dir = config.get_data_dir()
                if data_dir is not None:
                    store = store.merged(load_directory(data_dir))
                _default_store = store
    return _default_store

def reset_default_store():
    """
    Drops the cached default store so that the next call reloads it.
    """
    global _default_store
    with _default_store_lock:
        _default_store = None
