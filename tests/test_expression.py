'''
Expression evaluator tests
'''

import math

from stackcalc.expression import Evaluator
from stackcalc.stack import Stack
from stackcalc.util import ExpressionError

from pytest import raises, mark, approx


def value(line, *values):
    return Evaluator().value(line, values)


def test_arithmetic():
    assert value('2+3*4') == 14
    assert value('(2+3)*4') == 20
    assert value('-1234') == -1234
    assert value('7 % 4') == 3
    assert value('7 // 2') == 3


def test_power_spellings():
    assert value('2^10') == 1024
    assert value('2**10') == 1024


def test_thousands_separators():
    assert value('1_234 + 1') == 1235


def test_division_by_zero_is_inf():
    assert value('1/0') == math.inf


def test_stack_is_top_first():
    assert value('s[0]', 1, 2, 3) == 3
    assert value('s[-1]', 1, 2, 3) == 1
    assert value('stack[1] - s[0]', 10, 4) == 6


def test_stack_slices():
    assert value('sum(s[0:2])', 1, 2, 3) == 5


def test_stack_functions():
    assert value('len(s)', 1, 2, 3) == 3
    assert value('sum(s)', 1, 2, 3) == 6
    assert value('max(s)', 1, 5, 3) == 5
    assert value('min(4, 2, 8)') == 2
    assert value('mean(s)', 1, 2, 3, 4) == 2.5
    assert value('median(s)', 5, 1, 3) == 3


def test_math_functions():
    assert value('abs(-2)') == 2
    assert value('floor(2.7) + ceil(2.1)') == 5
    assert value('round(2.4)') == 2
    assert value('int(-2.7)') == -2


def test_conditionals():
    assert value('1 if 2 > 1 else 0') == 1
    assert value('10 if !(1 > 2) && 2 >= 2 else 20') == 10


def test_chained_comparison():
    assert value('1 if 1 < 2 < 3 else 0') == 1
    assert value('1 if 1 < 3 < 2 else 0') == 0


@mark.parametrize('line', ['', ' ', 'pi', 'e', 's', '+', '-', '!', '**',
                           '++', '<<', 'sqrt', 'sum', '1 2', '2 +', '1 < 2',
                           'true', '?', 'help', "'x'", 's[5]', 's[0.5]',
                           'foo(1)', '__import__', 'abs(s)', 'max()',
                           'lambda: 1', '[1, 2]', 's[0](1)', 'round(1, x=2)'])
def test_not_expressions(line):
    with raises(ExpressionError):
        value(line, 1, 2)


def test_evaluate_pushes():
    stack = Stack([1, 2])
    assert Evaluator().evaluate('s[0] * 10', stack) == 20
    assert stack.copy() == [1, 2, 20]


def test_failure_does_not_push():
    stack = Stack([1, 2])
    with raises(ExpressionError):
        Evaluator().evaluate('s[9]', stack)
    assert stack.copy() == [1, 2]


def test_nan_index():
    with raises(ExpressionError):
        value('s[0/0]', 1)


def test_float_results():
    assert value('0.1 + 0.2') == approx(0.3)
    assert isinstance(value('len(s)', 1), float)


@mark.parametrize('depth', [5000, 10000])
def test_deep_nesting(depth):
    with raises(ExpressionError):
        value('-' * depth + '1')
