'''
Stack tests
'''

from stackcalc.stack import Stack
from stackcalc.util import InsufficientStack

from pytest import raises


def test_push():
    stack = Stack()
    for _ in range(3):
        stack.push(10)
    assert len(stack) == 3
    assert stack.copy() == [10.0, 10.0, 10.0]


def test_pop_n_topmost_first():
    stack = Stack([1, 2, 3])
    assert stack.pop_n(3) == [3, 2, 1]
    assert stack.empty()
    stack = Stack([1, 2, 3])
    assert stack.pop_n(2) == [3, 2]
    assert stack.copy() == [1]


def test_pop_reversed_pushed_order():
    stack = Stack([1, 2, 3])
    assert stack.pop_reversed(3) == [1, 2, 3]
    stack = Stack([1, 2, 3])
    assert stack.pop_reversed(2) == [2, 3]


def test_pop_n_then_push_back_round_trips():
    stack = Stack([4, 8, 15, 16, 23, 42])
    for value in reversed(stack.pop_n(4)):
        stack.push(value)
    assert stack.copy() == [4, 8, 15, 16, 23, 42]


def test_insufficient_leaves_stack_alone():
    stack = Stack([1, 2])
    with raises(InsufficientStack, match='Less than 3 element'):
        stack.pop_n(3)
    with raises(InsufficientStack):
        stack.pop_reversed(3)
    assert stack.copy() == [1, 2]
    stack.clear()
    with raises(InsufficientStack):
        stack.pop()
    with raises(InsufficientStack):
        stack.swap()


def test_swap():
    stack = Stack([1, 2, 3])
    stack.swap()
    assert stack.pop_n(2) == [2, 3]


def test_swap_is_its_own_inverse():
    stack = Stack([1, 2, 3])
    stack.swap()
    stack.swap()
    assert stack.copy() == [1, 2, 3]


def test_swap_one_element():
    stack = Stack([1])
    with raises(InsufficientStack):
        stack.swap()
    assert stack.copy() == [1]


def test_clear():
    stack = Stack([1, 2, 3])
    assert len(stack) == 3
    stack.clear()
    assert len(stack) == 0
    assert stack.empty()


def test_sort():
    stack = Stack([3, 1, 2])
    stack.sort()
    assert stack.render() == '[ 1  2  3 ]'
    empty = Stack()
    empty.sort()
    assert empty.copy() == []


def test_top():
    stack = Stack([1, 2])
    assert stack.top() == 2
    assert len(stack) == 2


def test_top_of_empty_is_zero():
    assert Stack().top() == 0.0


def test_copy_is_independent():
    stack = Stack([1, 2])
    snapshot = stack.copy()
    stack.push(3)
    snapshot.append(99)
    assert snapshot == [1, 2, 99]
    assert stack.copy() == [1, 2, 3]


def test_restore():
    stack = Stack([1, 2, 3])
    snapshot = stack.copy()
    stack.pop_n(2)
    stack.restore(snapshot)
    assert stack.copy() == [1, 2, 3]


def test_render():
    assert Stack().render() == '[  ]'
    assert str(Stack()) == '[  ]'
    assert Stack([1, 2, 3]).render() == '[ 1  2  3 ]'
    assert Stack([0.5, -2, 1e20]).render() == '[ 0.5  -2  1e+20 ]'
    assert Stack([0.1 + 0.2]).render() == '[ 0.30000000000000004 ]'


def test_render_fixed():
    assert Stack([1, 2.5]).render_fixed() == '[ 1.000000  2.500000 ]'
    assert Stack().render_fixed() == '[  ]'
