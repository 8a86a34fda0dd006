"""Float helpers that return inf/nan on degenerate inputs instead of raising.

The estimator performs unchecked arithmetic: a zero denominator yields a
non-finite value that flows through to the result.
"""
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext


def div(num: float, den: float) -> float:
    """IEEE-754 division: x/0 is +-inf, 0/0 is nan."""
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        # Signed zero in the denominator flips the sign, as in IEEE arithmetic.
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def ceil(x: float) -> int | float:
    """Ceiling for finite values; non-finite values pass through."""
    if not math.isfinite(x):
        return x
    return math.ceil(x)


def round_half_up(x: float) -> int | float:
    """Round to the nearest integer with halves going toward +inf; non-finite values pass through."""
    if not math.isfinite(x):
        return x
    return math.floor(x + 0.5)


def max_of(*values: float) -> int | float:
    """max() that returns nan when any argument is nan."""
    if any(isinstance(v, float) and math.isnan(v) for v in values):
        return math.nan
    return max(values)


def fixed(x: float, digits: int = 1) -> str:
    """
    Format with a fixed number of decimals, rounding the exact binary value half-up.
    Magnitudes of 1e21 and above fall back to the shortest exponent form (1e+30).
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if abs(x) >= 1e21:
        return repr(float(x))
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        ctx.prec = 64
        return str(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))
