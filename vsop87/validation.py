"""
Checks the series evaluation against the reference values of vsop87.chk and
measures errors against a JPL DE ephemeris (needs the `jpl` extra, jplephem).
"""
from dataclasses import dataclass
import contextlib
import logging

import numpy as np

from .coordinates import VSOP87_TO_FK5, spherical_to_rectangular, SphericalCoordinates
from .solvers import solve
from .variants import ELLIPTIC, SPHERICAL, Variant

logger = logging.getLogger(__name__)

AU_KM = 149597870.691  # AU in km

# NAIF id chains from the body to the Sun through the DE segments.
JPL_DE_ROUTES = {
    'MERCURY': [10, 0, 1, 199],
    'VENUS': [10, 0, 2, 299],
    'EARTH-MOON': [10, 0, 3],
    'EARTH': [10, 0, 3, 399],
    'MARS': [10, 0, 4],
    'JUPITER': [10, 0, 5],
    'SATURN': [10, 0, 6],
    'URANUS': [10, 0, 7],
    'NEPTUNE': [10, 0, 8],
}

@dataclass(frozen=True)
class CheckResult:
    record: object
    computed: tuple
    error_pos: float
    error_vel: float

def _state(variant, values):
    # Rectangular position and velocity-like vectors to compare; spherical
    # values are compared in rectangular form.
    values = np.asarray(values, dtype=float)
    if variant.representation == SPHERICAL:
        p = spherical_to_rectangular(SphericalCoordinates(*values[:3])).to_array()
        return p, values[3:]
    return values[:3], values[3:]

def run_check_records(records, store=None):
    """
    Evaluates every record of vsop87.chk (see `reader.read_check_file`) and
    returns CheckResult with relative errors of the two value triples.
    For elliptic elements the absolute difference is reported instead.
    """
    results = []
    for record in records:
        computed = solve(record.body, record.variant, record.julian_day, store)
        if record.variant.representation == ELLIPTIC:
            diff = np.abs(np.array(computed.values) - np.array(record.values))
            # Mean longitude may differ by a full turn
            diff[1] = min(diff[1], abs(diff[1] - 2.0 * np.pi))
            error_pos, error_vel = float(np.max(diff[:3])), float(np.max(diff[3:]))
        else:
            p, v = _state(record.variant, computed.values)
            p0, v0 = _state(record.variant, record.values)
            error_pos = float(np.linalg.norm(p - p0) / np.linalg.norm(p0))
            error_vel = float(np.linalg.norm(v - v0) / np.linalg.norm(v0)) if np.any(v0) else 0.0
        results.append(CheckResult(record, computed.values, error_pos, error_vel))
    return results

@dataclass(frozen=True)
class ErrorStats:
    """
    Summary of a set of relative errors.
    """
    n: int
    mean: float
    std: float
    min: float
    max: float

    @classmethod
    def of(cls, errors):
        errors = np.asarray(errors, dtype=float)
        if errors.size == 0:
            raise ValueError('No errors to summarize')
        return cls(int(errors.size), float(errors.mean()), float(errors.std()),
                   float(errors.min()), float(errors.max()))

    def __str__(self):
        return f'n={self.n} mean={self.mean:.3e} max={self.max:.3e}'

def dms_string(angle: float, arcsec_digits=0) -> str:
    """
    Angle in radians as degrees, arcminutes and arcseconds, e.g. 30°15'20".
    Leading zero fields are left out.
    """
    sign = '-' if angle < 0.0 else ''
    degrees, arcseconds = divmod(abs(np.degrees(angle)) * 3600.0, 3600.0)
    arcminutes, arcseconds = divmod(arcseconds, 60.0)
    fields = []
    if degrees:
        fields.append(f'{int(degrees)}°')
    if degrees or arcminutes:
        fields.append(f"{int(arcminutes)}'")
    fields.append(f'{arcseconds:.{arcsec_digits}f}"')
    return sign + ''.join(fields)

def generate_test_times(num, interval_radii=(5000, 2000, 1000, 500, 200, 100, 50, 30)):
    """
    Returns {interval label: num evenly spaced Julian Days} for the intervals
    (J2000.0-r, J2000.0+r), r in Julian years.
    """
    times = {}
    for r in interval_radii:
        days = r * 365.25
        times[f'(-{r},{r})'] = list(2451545.0 + np.linspace(-days, days, num))
    return times

def _relative_error(x, x_ref):
    return float(np.linalg.norm(x - x_ref) / np.linalg.norm(x_ref))

def compare_pos_vel_functions(pos_vel, pos_vel_ref, times):
    """
    Relative position and velocity errors between two functions jd -> (pos, vel).
    Returns a pair of ErrorStats (position, velocity).
    """
    errors = np.array([
        [_relative_error(p, p0), _relative_error(v, v0)]
        for (p, v), (p0, v0) in ((pos_vel(jd), pos_vel_ref(jd)) for jd in times)
    ]).reshape(-1, 2)
    return ErrorStats.of(errors[:, 0]), ErrorStats.of(errors[:, 1])

def vsop87_pos_vel(body, store=None):
    """
    Heliocentric VSOP87A position and velocity of body in the FK5 equatorial
    frame, km and km/day, as a function of the Julian Day.
    """
    def pos_vel(jd):
        elements = solve(body, Variant.A, jd, store)
        values = np.array(elements.values)
        return VSOP87_TO_FK5 @ values[:3] * AU_KM, VSOP87_TO_FK5 @ values[3:] * AU_KM
    return pos_vel

class SegmentIndex:
    """
    Segments of an SPK kernel by (center, target). A pair can have several
    segments covering consecutive date ranges (de441.bsp).
    """
    def __init__(self, segments):
        self._segments = {}
        for segment in segments:
            self._segments.setdefault((segment.center, segment.target), []).append(segment)

    def segment(self, center: int, target: int, jd: float):
        covering = [s for s in self._segments.get((center, target), ()) if s.start_jd <= jd <= s.end_jd]
        if not covering:
            raise ValueError(f'No segment for {center}->{target} at JD {jd}')
        return covering[0]

    def pos_vel(self, route, jd: float):
        """
        Position (km) and velocity (km/day) of route[-1] relative to route[0]
        along a chain of NAIF ids, e.g. [10, 0, 5] for Jupiter w.r.t. the Sun.
        Links stored in the opposite direction enter with a minus sign.
        """
        pos = np.zeros(3)
        vel = np.zeros(3)
        for start, end in zip(route, route[1:]):
            sign = 1.0 if end > start else -1.0
            rpos, rvel = self.segment(min(start, end), max(start, end), jd).compute_and_differentiate(jd)
            pos += sign * rpos
            vel += sign * rvel
        return pos, vel

@contextlib.contextmanager
def jplephem_pos_vel(jpl_ephemeris_file_path):
    """
    Context manager that opens a DE kernel and provides `fn(route, jd) -> (pos, vel)`.
    """
    from jplephem.spk import SPK

    with SPK.open(jpl_ephemeris_file_path) as kernel:
        index = SegmentIndex(kernel.segments)
        logger.info('Opened JPL ephemeris %s with %d segments', jpl_ephemeris_file_path, len(kernel.segments))
        yield index.pos_vel

def compare_with_jpl_de(jpl_pos_vel, bodies, times, store=None):
    """
    Errors of VSOP87A against a DE ephemeris function from jplephem_pos_vel.
    Returns {body: (position error stats, velocity error stats)}.
    """
    results = {}
    for body in bodies:
        route = JPL_DE_ROUTES[body]
        results[body] = compare_pos_vel_functions(
            vsop87_pos_vel(body, store), lambda jd: jpl_pos_vel(route, jd), times)
    return results
