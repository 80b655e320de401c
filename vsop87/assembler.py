"""
Variable Assembler: sums the series of one body over all powers of t.

Each variable is `sum_alpha t^alpha * S_alpha(t)` where S_alpha is the series
of that power. For the coordinate versions (A-E) the series give three
variables; the remaining three slots are their rates per day, obtained by
differentiating the series analytically.
"""
import math

from .coordinates import TWO_PI, VSOP87Elements
from .evaluator import get_evaluator
from .terms import default_store
from .timescale import DAYS_PER_MILLENNIUM
from .variants import ELLIPTIC, SPHERICAL, Variant, normalize_body

# Index of the variable reduced to [0, 2pi) per representation.
LONGITUDE_INDEX = {ELLIPTIC: 1, SPHERICAL: 0}

class VariableAssembler:
    """
    Computes VSOP87Elements for a body and version. Holds no mutable state, so
    one assembler can be shared between threads.
    """
    def __init__(self, store=None, evaluator=None):
        """
        store defaults to `terms.default_store()` and evaluator to the one
        selected by `evaluator.get_evaluator()`, both resolved on each call.
        """
        self._store = store
        self._evaluator = evaluator

    @property
    def store(self):
        return self._store if self._store is not None else default_store()

    @property
    def evaluator(self):
        return self._evaluator if self._evaluator is not None else get_evaluator()

    def variable(self, powers, t: float, with_rate=False):
        """
        Returns (value, rate per millennium) of one variable from its series
        per power of t. The rate is 0.0 unless with_rate is set.
        """
        evaluator = self.evaluator
        n = len(powers)
        # Repeated products overflow to inf where float ** would raise
        t_pow = [1.0] * n
        for k in range(1, n):
            t_pow[k] = t_pow[k-1] * t
        t_pow_p = [k * t_pow[k-1] if k > 0 else 0.0 for k in range(n)]

        value = 0.0
        rate = 0.0
        for alpha, series in enumerate(powers):
            if len(series) == 0:
                continue
            s = evaluator.value(series, t)
            value += t_pow[alpha] * s
            if with_rate:
                rate += t_pow_p[alpha] * s + t_pow[alpha] * evaluator.rate(series, t)
        return value, rate

    def assemble(self, body: str, variant, t: float) -> VSOP87Elements:
        """
        The six slots of `variant` for body at t (Julian millennia since J2000.0).
        A non-finite t gives NaN in every slot.
        """
        variant = Variant.parse(variant)
        body = normalize_body(body)
        tables = self.store.series(variant, body)
        if not math.isfinite(t):
            return VSOP87Elements(variant, body, (math.nan,) * 6)

        representation = variant.representation
        if representation == ELLIPTIC:
            values = [self.variable(tables.powers(k), t)[0] for k in range(6)]
        else:
            state = [self.variable(tables.powers(k), t, with_rate=True) for k in range(3)]
            values = [value for value, _ in state] + [rate / DAYS_PER_MILLENNIUM for _, rate in state]

        longitude = LONGITUDE_INDEX.get(representation)
        if longitude is not None:
            values[longitude] %= TWO_PI
        return VSOP87Elements(variant, body, tuple(values))

_default_assembler = VariableAssembler()

def assemble(body: str, variant, t: float, store=None) -> VSOP87Elements:
    if store is None:
        return _default_assembler.assemble(body, variant, t)
    return VariableAssembler(store).assemble(body, variant, t)
