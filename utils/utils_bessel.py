# utils/utils_bessel.py

"""
Bessel functions of the first and second kind, their derivatives, and the
zeros of Jn and Jn' used as cutoff eigenvalues of circular guides.

Integer order n >= 0, real argument x. Values come from scipy.special
(jv, yv, jvp, yvp); this module adds order validation, the sentinels of Yn
at the singular origin and the zero tables with a Newton-Raphson fallback.
"""

import math
from functools import lru_cache

from loguru import logger
from scipy import special as sp

from utils.utils_constants import NEWTON_MAX_ITER, NEWTON_TOL
from utils.utils_errors import InvalidArgumentError, RootFindingError

# ------------------------------------------------------------------------------
# Zero tables, n = 0..4 and p = 1..5
# ------------------------------------------------------------------------------

# p-th positive zero of Jn(x) (TM cutoffs of the circular guide)
BESSEL_J_ZEROS = {
    0: (2.404825557695773, 5.520078110286311, 8.653727912911013,
        11.791534439014281, 14.930917708487787),
    1: (3.831705970207512, 7.015586669815619, 10.173468135062722,
        13.323691936314223, 16.470630050877634),
    2: (5.135622301840683, 8.417244140399865, 11.619841172149059,
        14.795951782351260, 17.959819494987826),
    3: (6.380161895923983, 9.761023129981670, 13.015200721698434,
        16.223466160318768, 19.409415226435012),
    4: (7.588342434503804, 11.064709488501185, 14.372536671617590,
        17.615966049804833, 20.826932956962388),
}

# p-th positive zero of Jn'(x) (TE cutoffs); x = 0 is excluded for n = 0
BESSEL_J_PRIME_ZEROS = {
    0: (3.831705970207512, 7.015586669815619, 10.173468135062722,
        13.323691936314223, 16.470630050877634),
    1: (1.841183781340659, 5.331442773525033, 8.536316366346285,
        11.706004902592064, 14.863588633909034),
    2: (3.054236928227140, 6.706133194158460, 9.969467823087596,
        13.170370856016123, 16.347522318321783),
    3: (4.201188941210528, 8.015236598375951, 11.345924310743007,
        14.585848286167028, 17.788747866836730),
    4: (5.317553126083997, 9.282396285241617, 12.681908442638891,
        15.964107037731551, 19.196028800048904),
}


def _check_index(name: str, value, minimum: int) -> int:
    """
    Validate an order or root index: an integer (or integral float) >= minimum.
    Returns the value as a Python int.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {value!r}") from None
    if not as_float.is_integer() or as_float < minimum:
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {value!r}")
    return int(as_float)



# ------------------------------------------------------------------------------
# Evaluation
# ------------------------------------------------------------------------------

def bessel_j(n: int, x: float) -> float:
    """
    Bessel function of the first kind Jn(x).

    Parameters:
    - n : integer order (n >= 0)
    - x : real argument; Jn(-x) = (-1)^n Jn(x)

    Returns:
    - Jn(x); J0(0) = 1 and Jn(0) = 0 for n > 0 exactly.
    """
    n = _check_index("order n", n, 0)
    if x == 0:
        return 1.0 if n == 0 else 0.0
    return float(sp.jv(n, x))


def bessel_j_prime(n: int, x: float) -> float:
    """Derivative Jn'(x); J0' = -J1 and Jn' = (J(n-1) - J(n+1)) / 2."""
    n = _check_index("order n", n, 0)
    return float(sp.jvp(n, x))


def bessel_y(n: int, x: float) -> float:
    """
    Bessel function of the second kind Yn(x).

    Yn is singular at the origin: for x <= 0 the sentinel -inf is returned
    instead of raising. Callers must check math.isfinite() before further
    arithmetic.
    """
    n = _check_index("order n", n, 0)
    if x <= 0:
        return -math.inf
    return float(sp.yv(n, x))


def bessel_y_prime(n: int, x: float) -> float:
    """
    Derivative Yn'(x).
    For x <= 0 returns +inf (Yn rises from -inf at the origin).
    """
    n = _check_index("order n", n, 0)
    if x <= 0:
        return math.inf
    return float(sp.yvp(n, x))


# ------------------------------------------------------------------------------
# Zeros
# ------------------------------------------------------------------------------

@lru_cache(maxsize=256)
def find_bessel_j_zero(n: int, p: int) -> float:
    """
    Newton-Raphson refinement of the p-th zero of Jn, starting from
    n + 1.8 n^(1/3) + (p - 0.5) pi.
    """
    x = n + 1.8 * n ** (1.0 / 3.0) + (p - 0.5) * math.pi
    for _ in range(NEWTON_MAX_ITER):
        dx = -bessel_j(n, x) / bessel_j_prime(n, x)
        x += dx
        if not math.isfinite(x):
            break
        if abs(dx) < NEWTON_TOL:
            break
    if not math.isfinite(x) or x <= 0:
        raise RootFindingError(f"Newton iteration for zero #{p} of J{n} diverged")
    return x


@lru_cache(maxsize=256)
def find_bessel_j_prime_zero(n: int, p: int) -> float:
    """
    Newton-Raphson refinement of the p-th zero of Jn'.

    Jn'' = (n^2/x^2 - 1) Jn - Jn'/x supplies the derivative of the target.
    The first extremum of Jn sits near n + 0.8086 n^(1/3); later ones are
    started a further (p - 0.75) pi out.
    """
    if n == 0:
        x = (p + 0.25) * math.pi
    elif p == 1:
        x = n + 0.8086 * n ** (1.0 / 3.0)
    else:
        x = n + 0.8086 * n ** (1.0 / 3.0) + (p - 0.75) * math.pi
    for _ in range(NEWTON_MAX_ITER):
        jp = bessel_j_prime(n, x)
        jpp = (n * n / (x * x) - 1.0) * bessel_j(n, x) - jp / x
        dx = -jp / jpp
        x += dx
        if not math.isfinite(x):
            break
        if abs(dx) < NEWTON_TOL:
            break
    if not math.isfinite(x) or x <= 0:
        raise RootFindingError(f"Newton iteration for zero #{p} of J{n}' diverged")
    return x


def bessel_j_zero(n: int, p: int) -> float:
    """
    p-th positive root of Jn(x) = 0.

    Parameters:
    - n : order (integer >= 0)
    - p : root index (integer >= 1)

    Tabulated for n <= 4, p <= 5; Newton-Raphson otherwise.
    """
    n = _check_index("order n", n, 0)
    p = _check_index("root index p", p, 1)
    table = BESSEL_J_ZEROS.get(n)
    if table is not None and p <= len(table):
        return table[p - 1]
    logger.debug(f"J{n} zero #{p} not tabulated, refining numerically")
    return find_bessel_j_zero(n, p)


def bessel_j_prime_zero(n: int, p: int) -> float:
    """
    p-th positive root of Jn'(x) = 0 (x = 0 not counted).
    Tabulated for n <= 4, p <= 5; Newton-Raphson otherwise.
    """
    n = _check_index("order n", n, 0)
    p = _check_index("root index p", p, 1)
    table = BESSEL_J_PRIME_ZEROS.get(n)
    if table is not None and p <= len(table):
        return table[p - 1]
    logger.debug(f"J{n}' zero #{p} not tabulated, refining numerically")
    return find_bessel_j_prime_zero(n, p)


def bessel_j_max(n: int) -> float:
    """
    max |Jn(x)| over x >= 0: J0(0) = 1 for n = 0, |Jn| at the first zero of Jn'
    otherwise.
    """
    n = _check_index("order n", n, 0)
    if n == 0:
        return 1.0
    return abs(bessel_j(n, bessel_j_prime_zero(n, 1)))
