from pytest import fixture

from stackcalc.cascade import Cascade
from stackcalc.operators import Registry
from stackcalc.stack import Stack


class FakeSession:
    '''
    Stands in for a PromptSession: answers prompts from a script of lines.

    Exceptions in the script are raised instead of returned, and running
    out of lines is end of input.
    '''

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def prompt(self, message):
        self.prompts.append(message)
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException) or \
           isinstance(line, type) and issubclass(line, BaseException):
            raise line
        return line


@fixture
def stack():
    return Stack()


@fixture(scope='session')
def registry():
    return Registry()


@fixture
def cascade(stack, registry):
    return Cascade(stack=stack, registry=registry)


@fixture
def run(stack, registry):
    '''
    Push values, run an operator on them, and return the stack contents.
    '''
    def run(token, *values):
        for value in values:
            stack.push(value)
        registry.run(token, stack)
        return stack.copy()
    return run
