'''
Numeric kernels that numpy and scipy either lack or define differently.

All of them follow IEEE-754 semantics: bad input yields nan or an infinity
rather than an exception, except where an integral argument is required.
'''

from fractions import Fraction
import math
import secrets

from .util import DomainError, RandomSourceError


FT_PER_M = 3.280839895
J_PER_FT_LB = 1.3558179483314004
L_PER_GAL = 3.785411784
KG_PER_LB = 0.45359237
W_PER_HP = 745.699872

# Speed of light, m/s
C = 299792458.0

MAX_RAND = 32767

# What ilogb reports for 0 and for inf/nan, as a 32-bit C int would.
_ILOGB_ZERO = -2 ** 31
_ILOGB_NAN = 2 ** 31 - 1


def integral(x):
    '''
    Truncate x toward zero, for operators taking an integer argument.
    '''
    if not math.isfinite(x):
        raise DomainError('Expected a finite number, got {}'.format(x))
    return int(x)


def round_half_away(x):
    '''
    Nearest integer, rounding half away from zero.
    '''
    if not math.isfinite(x):
        return x
    t = math.trunc(x)
    if abs(x - t) >= 0.5:
        t += 1 if x > 0 else -1
    return math.copysign(float(t), x)


def pow10(x):
    # Parsing gets correct rounding, overflow to inf and underflow to 0.
    return float('1e{}'.format(integral(x)))


def ilogb(x):
    if x == 0:
        return float(_ILOGB_ZERO)
    if not math.isfinite(x):
        return float(_ILOGB_NAN)
    return float(math.frexp(x)[1] - 1)


def logb(x):
    if x == 0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    if math.isnan(x):
        return x
    return float(math.frexp(x)[1] - 1)


def dim(x, y):
    '''
    x - y if positive, otherwise 0.
    '''
    v = x - y
    if math.isnan(v) or v > 0:
        return v
    return 0.0


def remainder(x, y):
    '''
    IEEE 754 remainder of x/y.
    '''
    if math.isnan(x) or math.isnan(y) or math.isinf(x) or y == 0:
        return math.nan
    return math.remainder(x, y)


def fma(x, y, z):
    '''
    x * y + z, rounded once.
    '''
    if not all(map(math.isfinite, (x, y, z))):
        return x * y + z
    exact = Fraction(x) * Fraction(y) + Fraction(z)
    try:
        return float(exact)
    except OverflowError:
        return math.inf if exact > 0 else -math.inf


def randbelow(n):
    '''
    Cryptographically random integer in [0, n), as a float.
    '''
    if n <= 0:
        raise DomainError('Random bound must be positive, got {}'.format(n))
    try:
        return float(secrets.randbelow(n))
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError('Random source failed: {}'.format(e)) from e
