'''
RPN calculator.

Each line typed at the prompt is, in this order, an infix expression (which
can read the stack as s, top first), an operator acting on the stack (+,
sqrt, sum, pi, ...), or a REPL command (help, clear, sort, swap, pop, quit).
Anything else is ignored. The prompt shows the stack.

Everything is a 64-bit float: 1 0 / is inf, -1 sqrt is nan.
'''

from .cascade import Cascade
from .cli import CLI
from .commands import CommandHandler
from .expression import Evaluator
from .lexer import Lexer
from .operators import Registry
from .stack import Stack


__all__ = 'Stack', 'Registry', 'Lexer', 'Evaluator', 'CommandHandler', \
          'Cascade', 'CLI'
