import math

from scipy import special


def logistic(x, midpoint, steepness, max_value=1.0):
    """
    Soft threshold curve:
      max_value / (1 + exp(-steepness * (x - midpoint)))
    Both branches only ever exponentiate a non-positive number, so very large
    arguments saturate at 0 or max_value instead of overflowing.
    """
    z = steepness * (x - midpoint)
    if z >= 0:
        return max_value / (1.0 + math.exp(-z))
    e = math.exp(z)
    return max_value * e / (1.0 + e)


def erf(x):
    return float(special.erf(x))


def erf_inv(x):
    """Inverse error function on (-1, 1); returns +-inf at the bounds."""
    return float(special.erfinv(x))
