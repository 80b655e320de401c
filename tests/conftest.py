import math

import pytest

from vsop87 import config, terms
from vsop87.terms import BodyTables, TermTableStore
from vsop87.variants import Variant

# Leading terms of the VSOP87A series of Jupiter (X, Y, Z), enough to give a
# realistic heliocentric orbit: a ~ 5.2 AU, small eccentricity, i ~ 1.3 deg.
JUPITER_A_GROUPS = [
    (0, 0, [5.19663470114, 0.59945082355, 529.69096508814,
            0.36662642320, 3.14159265359, 0.0,
            0.12593937922, 0.48418529450, 1059.38193017]),
    (0, 1, [0.00882389251, 3.14159265359, 0.0,
            0.00635297172, 0.10662156868, 1162.47470440780]),
    (1, 0, [5.19520046589, 5.31203162731, 529.69096508814,
            0.12592862602, 5.11181502830, 1059.38193017]),
    (1, 1, [0.01694798253, 3.14159265359, 0.0]),
    (2, 0, [0.11823100489, 3.55844646343, 529.69096508814]),
]

def jupiter_a_tables():
    return BodyTables.from_groups(JUPITER_A_GROUPS)

def circular_tables(radius, frequency, phase=0.0):
    """
    Rectangular series of a circular orbit in the ecliptic: X = r cos(phase + n t),
    Y = r sin(phase + n t), Z = 0.
    """
    return BodyTables.from_groups([
        (0, 0, [radius, phase, frequency]),
        (1, 0, [radius, phase - math.pi / 2.0, frequency]),
    ])

@pytest.fixture
def jupiter_store():
    return TermTableStore({(Variant.A, 'JUPITER'): jupiter_a_tables()})

@pytest.fixture
def synthetic_store():
    """
    Small tables for every representation: elliptic (main version), spherical
    (B, D), rectangular (C) and barycentric (E, with the Sun).
    """
    elliptic = BodyTables.from_groups([
        (0, 0, [1.0000010178, 0.0, 0.0]),
        (1, 0, [1.75347045953, 0.0, 0.0]),
        (1, 1, [6283.0758499914, 0.0, 0.0]),
        (2, 0, [-0.0037408165, 0.0, 0.0]),
        (3, 0, [0.0162844766, 0.0, 0.0]),
        (4, 0, [0.0000001, 0.0, 0.0]),
        (5, 0, [0.0000001, 0.0, 0.0]),
    ])
    spherical = BodyTables.from_groups([
        (0, 0, [1.75347046, 0.0, 0.0, 0.03341656, 4.6692568, 6283.07585]),
        (0, 1, [6283.31966747, 0.0, 0.0]),
        (1, 0, [0.0000028, 3.199, 84334.662]),
        (2, 0, [1.00013989, 0.0, 0.0, 0.016707, 3.0984635, 6283.07585]),
        (2, 1, [0.00103019, 1.10749, 6283.07585]),
    ])
    return TermTableStore({
        (Variant.VSOP87, 'EARTH-MOON'): elliptic,
        (Variant.B, 'EARTH'): spherical,
        (Variant.D, 'EARTH'): spherical,
        (Variant.C, 'MARS'): circular_tables(1.52, 3340.6, 0.3),
        (Variant.E, 'JUPITER'): circular_tables(5.2, 529.69, 1.0),
        (Variant.E, 'SUN'): circular_tables(0.005, 529.69, 1.0 + math.pi),
    })

def _term_line(iv, ib, ic, it, n, a, b, c):
    return (f' {iv}{ib}{ic}{it}{n:5d}' + '  0' * 12
            + f'{0.0:15.11f}{0.0:18.11f}{a:18.11f}{b:14.11f}{c:20.11f}')

def write_vsop87_file(path, version, body_index, groups):
    """
    Writes groups [(variable, power, [a, b, c, ...])] in the layout of the
    official distribution files.
    """
    lines = []
    for variable, power, coeffs in groups:
        count = len(coeffs) // 3
        lines.append(f' VSOP87 VERSION {version}{body_index}    BODY      VARIABLE {variable+1} (XYZ)       *T**{power}{count:7d} TERMS')
        for n in range(count):
            a, b, c = coeffs[3*n:3*n+3]
            lines.append(_term_line(1, body_index, variable + 1, power, n + 1, a, b, c))
    path.write_text('\n'.join(lines) + '\n')

def _place(fields, width=72):
    line = [' '] * width
    for column, text in fields:
        line[column:column+len(text)] = list(text)
    return ''.join(line).rstrip()

def write_check_file(path, records):
    """
    records: [(variant letter, body, jd, six values)] in the vsop87.chk layout.
    """
    lines = []
    for letter, body, jd, values in records:
        lines.append(f' VSOP87{letter:<1}  {body:<12}JD{jd:<11}  01/01/2000 12h TDB')
        lines.append(_place([(3, f'{values[0]:14.10f}'), (30, f'{values[1]:14.10f}'), (57, f'{values[2]:14.10f}')]))
        lines.append(_place([(3, f'{values[3]:14.10f}'), (30, f'{values[4]:14.10f}'), (57, f'{values[5]:14.10f}')]))
    path.write_text('\n'.join(lines) + '\n')

@pytest.fixture
def raw_dir(tmp_path):
    """
    Directory with a VSOP87A file for Jupiter in the official format.
    """
    write_vsop87_file(tmp_path / 'VSOP87A.jup', 'A', 5, JUPITER_A_GROUPS)
    return tmp_path

@pytest.fixture(autouse=True)
def _isolated_config():
    """
    Every test starts from the default settings and a fresh default store.
    """
    data_dir = config.get_data_dir()
    mode = config.get_evaluator_mode()
    config.set_data_dir(None)
    config.set_evaluator_mode('auto')
    terms.reset_default_store()
    yield
    config.set_data_dir(data_dir)
    config.set_evaluator_mode(mode)
    terms.reset_default_store()
