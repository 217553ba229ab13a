'''
Infix expression evaluation, with the stack visible as a read-only variable.

Expressions are lexed and rewritten into Python syntax by the Lexer, parsed
with ast, and walked here against a whitelist of node types. Arithmetic is
done in numpy float64, so 1/0 is inf rather than an exception.
'''

import ast
import numbers
import operator
import statistics

import numpy

from .lexer import Lexer
from .util import ExpressionError


def _reduce_stack(f):
    '''
    Allow f(s) as well as f(a, b, ...).
    '''
    def wrapped(*args):
        if len(args) == 1 and isinstance(args[0], (tuple, list)):
            args = args[0]
        if not args:
            raise ExpressionError('{}() of nothing'.format(f.__name__))
        return f(args)
    wrapped.__name__ = f.__name__
    return wrapped


class Evaluator:
    '''
    Evaluates a line as an expression and pushes the numeric result.

    The stack is bound to the names in STACK_NAMES as a tuple, top first,
    so s[0] is the top of the stack.
    '''

    STACK_NAMES = {'s', 'stack'}

    BINARY = {
        ast.Add: operator.add,
        ast.Sub: operator.sub,
        ast.Mult: operator.mul,
        ast.Div: operator.truediv,
        ast.FloorDiv: operator.floordiv,
        ast.Mod: operator.mod,
        ast.Pow: operator.pow,
    }
    UNARY = {
        ast.UAdd: operator.pos,
        ast.USub: operator.neg,
        ast.Not: operator.not_,
    }
    COMPARE = {
        ast.Eq: operator.eq,
        ast.NotEq: operator.ne,
        ast.Lt: operator.lt,
        ast.LtE: operator.le,
        ast.Gt: operator.gt,
        ast.GtE: operator.ge,
    }
    FUNCTIONS = {
        'abs': numpy.fabs,
        'ceil': numpy.ceil,
        'floor': numpy.floor,
        'round': numpy.round,
        'int': numpy.trunc,
        'float': numpy.float64,
        'len': len,
        'sum': _reduce_stack(sum),
        'max': _reduce_stack(max),
        'min': _reduce_stack(min),
        'mean': _reduce_stack(statistics.fmean),
        'median': _reduce_stack(statistics.median),
    }

    def __init__(self, lexer=None):
        self.lexer = lexer or Lexer()

    def evaluate(self, line, stack):
        '''
        Evaluate line and push the result onto stack.

        Raises ExpressionError, leaving stack alone, if line isn't an
        expression or its value isn't a number.
        '''
        value = self.value(line, stack.copy())
        stack.push(value)
        return value

    def value(self, line, values=()):
        '''
        Evaluate line with the stack contents values, bottom first.
        '''
        source = self.lexer.translate(line)
        try:
            tree = ast.parse(source.strip(), mode='eval')
        except (SyntaxError, ValueError, RecursionError, MemoryError) as e:
            # deeply nested input can exhaust the parser itself
            raise ExpressionError('Invalid expression {}'.format(line)) \
                from e
        env = dict.fromkeys(type(self).STACK_NAMES,
                            tuple(map(numpy.float64, reversed(values))))
        try:
            with numpy.errstate(all='ignore'):
                result = self._eval(tree.body, env)
        except ExpressionError:
            raise
        except (ArithmeticError, TypeError, ValueError, IndexError,
                RecursionError) as e:
            raise ExpressionError('Cannot evaluate {}: {}'.format(line, e)) \
                from e
        return self._coerce(line, result)

    def _coerce(self, line, result):
        if isinstance(result, (bool, numpy.bool_)) or \
           not isinstance(result, (numbers.Real, numpy.number)):
            raise ExpressionError('{} is not a number'.format(line))
        return float(result)

    def _eval(self, node, env):
        cls = type(self)
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool):
                return node.value
            if isinstance(node.value, (int, float)):
                return numpy.float64(node.value)
        elif isinstance(node, ast.Name):
            if node.id in env:
                return env[node.id]
            raise ExpressionError('Unknown name {}'.format(node.id))
        elif isinstance(node, ast.BinOp) and type(node.op) in cls.BINARY:
            return cls.BINARY[type(node.op)](self._eval(node.left, env),
                                             self._eval(node.right, env))
        elif isinstance(node, ast.UnaryOp) and type(node.op) in cls.UNARY:
            return cls.UNARY[type(node.op)](self._eval(node.operand, env))
        elif isinstance(node, ast.BoolOp):
            return self._boolop(node, env)
        elif isinstance(node, ast.Compare):
            return self._compare(node, env)
        elif isinstance(node, ast.IfExp):
            if self._eval(node.test, env):
                return self._eval(node.body, env)
            return self._eval(node.orelse, env)
        elif isinstance(node, ast.Subscript):
            return self._subscript(node, env)
        elif isinstance(node, ast.Call):
            return self._call(node, env)
        raise ExpressionError('Unsupported expression {}'
                              .format(type(node).__name__))

    def _boolop(self, node, env):
        # Short-circuits, like Python's own and/or.
        value = None
        for operand in node.values:
            value = self._eval(operand, env)
            if isinstance(node.op, ast.And) and not value:
                return value
            if isinstance(node.op, ast.Or) and value:
                return value
        return value

    def _compare(self, node, env):
        left = self._eval(node.left, env)
        for op, comparator in zip(node.ops, node.comparators):
            if type(op) not in type(self).COMPARE:
                raise ExpressionError('Unsupported comparison {}'
                                      .format(type(op).__name__))
            right = self._eval(comparator, env)
            if not type(self).COMPARE[type(op)](left, right):
                return False
            left = right
        return True

    def _subscript(self, node, env):
        sequence = self._eval(node.value, env)
        if not isinstance(sequence, tuple):
            raise ExpressionError('Only the stack can be indexed')
        index = node.slice
        if isinstance(index, ast.Slice):
            return sequence[slice(*(self._index(part, env)
                                    for part in (index.lower, index.upper,
                                                 index.step)))]
        return sequence[self._index(index, env)]

    def _index(self, node, env):
        if node is None:
            return None
        value = self._eval(node, env)
        if isinstance(value, tuple) or value != int(value):
            raise ExpressionError('Index must be an integer')
        return int(value)

    def _call(self, node, env):
        if not isinstance(node.func, ast.Name) or \
           node.func.id not in type(self).FUNCTIONS or node.keywords:
            raise ExpressionError('Unsupported call')
        args = [self._eval(arg, env) for arg in node.args]
        return type(self).FUNCTIONS[node.func.id](*args)
