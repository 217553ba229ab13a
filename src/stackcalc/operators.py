'''
Operator registry: every token the calculator can apply to the stack.
'''

from collections import namedtuple
import math

import numpy
from scipy import special

from . import functions
from .functions import (FT_PER_M, J_PER_FT_LB, L_PER_GAL, KG_PER_LB,
                        W_PER_HP, C, MAX_RAND, integral)
from .stats import Welford
from .util import RPNError, UnknownOperator, wrap_user_errors


# arity is the number of elements popped, or None for whole-stack operators.
Operator = namedtuple('Operator', ['doc', 'arity', 'f'])


def _ieee(f, *args):
    '''
    Apply f to float64 arguments, quietly, giving inf/nan instead of warnings.
    '''
    with numpy.errstate(all='ignore'):
        return float(f(*map(numpy.float64, args)))


def _constant(doc, value):
    return Operator(doc, 0, lambda stack: [value])


def _unary(doc, f):
    def apply(stack):
        return [_ieee(f, stack.pop())]
    return Operator(doc, 1, apply)


def _binary(doc, f):
    def apply(stack):
        return [_ieee(f, *stack.pop_reversed(2))]
    return Operator(doc, 2, apply)


def _ternary(doc, f):
    def apply(stack):
        return [_ieee(f, *stack.pop_reversed(3))]
    return Operator(doc, 3, apply)


def _predicate(doc, test):
    '''
    1 or 0 according to test on the top of the stack, which stays put.
    '''
    def apply(stack):
        return [1.0 if test(stack.top()) else 0.0]
    return Operator(doc, 0, apply)


def _aggregate(doc, statistic):
    '''
    Statistic over a copy of the whole stack, pushed on top of it.
    '''
    def apply(stack):
        return [float(statistic(stack.copy()))]
    return Operator(doc, None, apply)


def _bessel(f):
    return lambda n, x: f(integral(n), x)


def _swap(stack):
    stack.swap()
    return []


def _sort(stack):
    stack.sort()
    return []


def _pop(stack):
    stack.pop()
    return []


def _frexp(stack):
    mantissa, exponent = math.frexp(stack.pop())
    return [mantissa, float(exponent)]


def _rand(stack):
    return [functions.randbelow(MAX_RAND)]


def _randn(stack):
    return [functions.randbelow(integral(stack.pop()))]


class Registry:
    '''
    Mapping of tokens to operators.

    Built once from the namespaces below, merged in order, so later
    namespaces win on collision. Not meant to be mutated afterwards.
    '''

    NAMED = {
        # Arithmetic
        '+': _binary('addition', numpy.add),
        '-': _binary('subtraction', numpy.subtract),
        '*': _binary('multiplication', numpy.multiply),
        '/': _binary('division', numpy.true_divide),
        '<<': _binary('left shift, x * 2^y',
                      lambda x, y: x * numpy.exp2(y)),
        '>>': _binary('right shift, x / 2^y',
                      lambda x, y: x / numpy.exp2(y)),
        '!': _unary('factorial, by way of the gamma function',
                    lambda x: x * special.gamma(x)),
        '++': _unary('increment', lambda x: x + 1),
        '--': _unary('decrement', lambda x: x - 1),
        'neg': _unary('negate', numpy.negative),
        'abs': _unary('absolute value', numpy.fabs),
        'pow10': _unary('10^x, x truncated to an integer', functions.pow10),
        'ilogb': _unary('binary exponent of x, as an integer',
                        functions.ilogb),
        'frexp': Operator('split x into a fraction in [0.5, 1) and a power '
                          'of two, pushing both', 1, _frexp),

        # Predicates; these read the top without popping it
        'signbit': _predicate('1 if the sign bit of x is set, else 0',
                              lambda x: math.copysign(1.0, x) < 0),
        'isinf': _predicate('1 if x is +inf, else 0',
                            lambda x: x == math.inf),
        'isninf': _predicate('1 if x is -inf, else 0',
                             lambda x: x == -math.inf),
        'isnan': _predicate('1 if x is nan, else 0', math.isnan),

        # Bessel functions of integral order n: n x jn
        'jn': _binary('order-n Bessel function of the first kind',
                      _bessel(special.jv)),
        'yn': _binary('order-n Bessel function of the second kind',
                      _bessel(special.yn)),

        # Ballistics: yards to target, then target speed
        'mil': _binary('given yards to target and target speed in mph, '
                       'target speed in milliradians per second',
                       lambda yds, mph:
                       1000 * numpy.arctan((mph * 1760 / 3600) / yds)),
        'mph': _binary('given yards to target and target speed in '
                       'milliradians per second, target speed in mph',
                       lambda yds, mils:
                       yds * numpy.tan(mils / 1000) * 3600 / 1760),

        # Whole stack
        'sum': _aggregate('sum of the entire stack',
                          lambda values: sum(values, 0.0)),
        'avg': _aggregate('average (mean) of the entire stack',
                          lambda values: Welford(values).mean),
        'sd': _aggregate('standard deviation of the entire stack',
                         lambda values: Welford(values).stddev()),
        'var': _aggregate('variance of the entire stack',
                          lambda values: Welford(values).variance()),
        'max': _aggregate('maximum value of the entire stack',
                          lambda values: Welford(values).max),
        'min': _aggregate('minimum value of the entire stack',
                          lambda values: Welford(values).min),

        # Physics and unit conversions
        'lor': _unary('lorentz factor of speed x in m/s',
                      lambda x: 1 / numpy.sqrt(1 - x * x / (C * C))),
        'cf': _unary('celsius to fahrenheit', lambda x: x * 9 / 5 + 32),
        'fc': _unary('fahrenheit to celsius', lambda x: (x - 32) * 5 / 9),
        'fm': _unary('feet to meters', lambda x: x / FT_PER_M),
        'mf': _unary('meters to feet', lambda x: x * FT_PER_M),
        'fj': _unary('foot-lbs to joules', lambda x: x * J_PER_FT_LB),
        'jf': _unary('joules to foot-lbs', lambda x: x / J_PER_FT_LB),
        'gl': _unary('gallons to liters', lambda x: x * L_PER_GAL),
        'lg': _unary('liters to gallons', lambda x: x / L_PER_GAL),
        'pk': _unary('pounds to kilograms', lambda x: x * KG_PER_LB),
        'kp': _unary('kilograms to pounds', lambda x: x / KG_PER_LB),
        'hw': _unary('horsepower to watts', lambda x: x * W_PER_HP),
        'wh': _unary('watts to horsepower', lambda x: x / W_PER_HP),
        # Curve fits
        'pas': _unary('pasteurization time in seconds at x degrees '
                      'fahrenheit',
                      lambda x: numpy.exp(x * -0.231) * 1.23e15 * 60),
        'pr': _unary('atmospheric pressure in inHg at an altitude of x feet',
                     lambda x: 29.9212524 *
                     (1 - 1e-5 * 2.25577 * (x / FT_PER_M)) ** 5.25588),

        # Random
        'r': Operator('random integer from 0 to {}'.format(MAX_RAND),
                      0, _rand),
        'rn': Operator('random integer from 0 to x', 1, _randn),

        # Stack manipulation
        'sw': Operator('swap the top two elements', None, _swap),
        'swa': Operator('swap the top two elements', None, _swap),
        'swap': Operator('swap the top two elements', None, _swap),
        'sort': Operator('sort the entire stack', None, _sort),
        'p': Operator('pop an element off the stack', 1, _pop),
        'pop': Operator('pop an element off the stack', 1, _pop),
        'noop': Operator('no op', 0, lambda stack: []),
    }

    UNARY = {
        'acos': _unary('arccosine, in radians', numpy.arccos),
        'acosh': _unary('inverse hyperbolic cosine', numpy.arccosh),
        'asin': _unary('arcsine, in radians', numpy.arcsin),
        'asinh': _unary('inverse hyperbolic sine', numpy.arcsinh),
        'atan': _unary('arctangent, in radians', numpy.arctan),
        'cbrt': _unary('cube root', numpy.cbrt),
        'ceil': _unary('least integer value greater than or equal to x',
                       numpy.ceil),
        'cos': _unary('cosine', numpy.cos),
        'cosh': _unary('hyperbolic cosine', numpy.cosh),
        'erf': _unary('error function', special.erf),
        'erfc': _unary('complementary error function', special.erfc),
        'erfcinv': _unary('inverse of erfc', special.erfcinv),
        'erfinv': _unary('inverse error function', special.erfinv),
        'exp': _unary('e^x', numpy.exp),
        'exp2': _unary('2^x', numpy.exp2),
        'expm1': _unary('e^x - 1, accurate when x is near zero',
                        numpy.expm1),
        'floor': _unary('greatest integer value less than or equal to x',
                        numpy.floor),
        'gamma': _unary('gamma function', special.gamma),
        'j0': _unary('order-zero Bessel function of the first kind',
                     special.j0),
        'j1': _unary('order-one Bessel function of the first kind',
                     special.j1),
        'log': _unary('natural logarithm', numpy.log),
        'log10': _unary('decimal logarithm', numpy.log10),
        'log1p': _unary('log(1 + x), accurate when x is near zero',
                        numpy.log1p),
        'log2': _unary('binary logarithm', numpy.log2),
        'logb': _unary('binary exponent of x', functions.logb),
        'round': _unary('nearest integer, rounding half away from zero',
                        functions.round_half_away),
        'roundtoeven': _unary('nearest integer, rounding ties to even',
                              numpy.rint),
        'sin': _unary('sine', numpy.sin),
        'sinh': _unary('hyperbolic sine', numpy.sinh),
        'sqrt': _unary('square root', numpy.sqrt),
        'tan': _unary('tangent', numpy.tan),
        'tanh': _unary('hyperbolic tangent', numpy.tanh),
        'trunc': _unary('integer part of x', numpy.trunc),
        'y0': _unary('order-zero Bessel function of the second kind',
                     special.y0),
        'y1': _unary('order-one Bessel function of the second kind',
                     special.y1),
    }

    BINARY = {
        '%': _binary('floating-point remainder of x/y', numpy.fmod),
        'mod': _binary('floating-point remainder of x/y', numpy.fmod),
        '**': _binary('x^y', numpy.power),
        '^': _binary('x^y', numpy.power),
        'pow': _binary('x^y', numpy.power),
        'atan2': _binary('arctangent of x/y, using the signs of both',
                         numpy.arctan2),
        'dim': _binary('maximum of x-y or 0', functions.dim),
        'hypot': _binary('sqrt(x*x + y*y), avoiding overflow and underflow',
                         numpy.hypot),
        'nextafter': _binary('next representable float after x towards y',
                             numpy.nextafter),
        'remainder': _binary('IEEE 754 remainder of x/y',
                             functions.remainder),
    }

    TERNARY = {
        'fma': _ternary('fused multiply-add, x*y + z rounded once',
                        functions.fma),
    }

    CONSTANTS = {
        'c': _constant('speed of light in m/s', C),
        'e': _constant("euler's number", math.e),
        'inf': _constant('positive infinity', math.inf),
        'ninf': _constant('negative infinity', -math.inf),
        'nan': _constant('not a number', math.nan),
        'ln2': _constant('natural log of 2', math.log(2)),
        'ln10': _constant('natural log of 10', math.log(10)),
        'log2e': _constant('1 / ln2', 1 / math.log(2)),
        'log10e': _constant('1 / ln10', 1 / math.log(10)),
        'phi': _constant('golden ratio', (1 + math.sqrt(5)) / 2),
        'pi': _constant("ratio of a circle's circumference to its diameter",
                        math.pi),
        'sqrt2': _constant('square root of 2', math.sqrt(2)),
        'sqrte': _constant('square root of e', math.sqrt(math.e)),
        'sqrtphi': _constant('square root of the golden ratio',
                             math.sqrt((1 + math.sqrt(5)) / 2)),
        'sqrtpi': _constant('square root of pi', math.sqrt(math.pi)),
    }

    def __init__(self):
        self.operators = dict()
        cls = type(self)
        for namespace in cls.NAMED, cls.UNARY, cls.BINARY, cls.TERNARY, \
                cls.CONSTANTS:
            self.operators.update(namespace)

    def run(self, token, stack):
        '''
        Apply the operator named token to stack, pushing its results.

        On failure, the stack is left exactly as it was and the error is
        re-raised.
        '''
        try:
            op = self.operators[token]
        except KeyError:
            raise UnknownOperator(token) from None
        saved = stack.copy()
        try:
            results = self._call(token, op, stack)
        except RPNError:
            stack.restore(saved)
            raise
        for result in results:
            stack.push(result)

    @wrap_user_errors('Cannot apply {1}')
    def _call(self, token, op, stack):
        return list(op.f(stack))

    def help(self):
        '''
        One line per operator, sorted, with the descriptions aligned.
        '''
        width = max(map(len, self.operators))
        return '\n'.join('{:<{}} - {}'.format(token, width,
                                               self.operators[token].doc)
                         for token in self)

    def __contains__(self, token):
        return token in self.operators

    def __getitem__(self, token):
        return self.operators[token]

    def __iter__(self):
        return iter(sorted(self.operators))
