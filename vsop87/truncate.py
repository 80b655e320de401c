"""
Truncates VSOP87 series: drops terms whose contribution stays below a
tolerance over |t| <= t_max and rounds the coefficients of the kept ones.
Smaller tables evaluate faster and ship as smaller data files.

The tolerance is in radians for angular variables and is multiplied by the
mean distance of the body for variables measured in AU, so that it is
roughly an angular error as seen from the Sun.
"""
from dataclasses import dataclass
import logging

import numpy as np

from .terms import BodyTables, TermTableStore
from .variants import ELLIPTIC, SPHERICAL

logger = logging.getLogger(__name__)

MEAN_DISTANCE_FROM_SUN = {
    'MERCURY': 0.39,
    'VENUS': 0.72,
    'EARTH': 1.0,
    'EARTH-MOON': 1.0,
    'MARS': 1.52,
    'JUPITER': 5.2,
    'SATURN': 9.54,
    'URANUS': 19.2,
    'NEPTUNE': 30.06,
    'SUN': 0.01,
}

@dataclass
class TruncationConfig:
    """
    t_max is the assumed maximum |t| in Julian millennia. tolerance is the
    largest contribution a dropped term may have. sig_figs, if set, is the
    number of significant figures kept in every coefficient.
    """
    t_max: float = 1.0
    tolerance: float = 1.0e-8
    sig_figs: int = None

def _is_distance(representation, variable):
    # Variables measured in AU; everything else is an angle or dimensionless.
    if representation == SPHERICAL:
        return variable == 2
    if representation == ELLIPTIC:
        return variable == 0
    return True

def round_sig(x: float, sig_figs: int) -> float:
    """
    Rounds number to given number of significant figures
    """
    if x == 0 or not np.isfinite(x):
        return x
    return float(f'{x:.{sig_figs-1}e}')

def truncate_series(coeffs: np.ndarray, alpha: int, threshold: float, config: TruncationConfig) -> np.ndarray:
    """
    Returns the kept rows of an (n,3) coefficient array.
    """
    if coeffs.shape[0] == 0:
        return coeffs
    # Largest contribution of a*t^alpha*cos(...) over |t| <= t_max
    contribution = np.abs(coeffs[:, 0]) * np.power(config.t_max, alpha)
    kept = coeffs[contribution >= threshold]
    if config.sig_figs is not None:
        kept = np.array([[round_sig(x, config.sig_figs) for x in row] for row in kept.tolist()]).reshape(-1, 3)
    return kept

def truncate_store(store: TermTableStore, config: TruncationConfig = None) -> TermTableStore:
    """
    Returns a new store with every table truncated.
    """
    config = config or TruncationConfig()
    tables = {}
    term_count = {}
    for variant, body in store.keys():
        representation = variant.representation
        groups = []
        for variable, alpha, series in store.series(variant, body).groups():
            threshold = config.tolerance
            if _is_distance(representation, variable):
                threshold *= MEAN_DISTANCE_FROM_SUN[body]
            kept = truncate_series(series.coeffs, alpha, threshold, config)
            if kept.shape[0] > 0:
                groups.append((variable, alpha, kept))
        tables[variant, body] = BodyTables.from_groups(groups)
        term_count[f'{variant.file_prefix} {body}'] = (store.series(variant, body).term_count, tables[variant, body].term_count)

    logger.info('Truncated with %s, terms (before, after): %s', config, term_count)
    return TermTableStore(tables)
