import logging

from .commands import CommandHandler
from .expression import Evaluator
from .operators import Registry
from .stack import Stack
from .util import ExpressionError, UnknownOperator


logger = logging.getLogger(__name__)


class Cascade:
    '''
    Resolves one line of input against the calculator.

    Tries, in order, an infix expression, an operator, then a REPL command;
    the first that accepts the line wins. A line none of them accepts is
    quietly ignored, so mistyped operators do nothing rather than complain.
    Only the errors of a stage that recognised the line reach the caller.
    '''

    def __init__(self, stack=None, registry=None, evaluator=None,
                 commands=None, out=None):
        self.stack = stack if stack is not None else Stack()
        self.registry = registry if registry is not None else Registry()
        self.evaluator = evaluator or Evaluator()
        self.commands = commands or CommandHandler(self.stack, self.registry,
                                                   out=out)

    def feed(self, line):
        '''
        Run line on the stack.

        Returns the name of the stage that handled it, or None.
        '''
        try:
            self.evaluator.evaluate(line, self.stack)
        except ExpressionError as e:
            logger.debug('not an expression: %s', e)
        else:
            logger.debug('%r evaluated as an expression', line)
            return 'expression'

        try:
            self.registry.run(line, self.stack)
        except UnknownOperator:
            pass
        else:
            logger.debug('%r ran as an operator', line)
            return 'operator'

        if self.commands.handle(line):
            logger.debug('%r ran as a command', line)
            return 'command'
        logger.debug('%r ignored', line)
        return None
