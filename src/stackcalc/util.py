from functools import wraps


class RPNError(Exception):
    pass


class InsufficientStack(RPNError):
    def __init__(self, n):
        super().__init__('Less than {} element(s) on stack'.format(n))
        self.n = n


class UnknownOperator(RPNError):
    def __init__(self, token):
        super().__init__('No operator {}'.format(repr(token)))
        self.token = token


class ExpressionError(RPNError):
    pass


class RandomSourceError(RPNError):
    pass


class DomainError(RPNError):
    pass


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts exceptions to RPNErrors.

    Passes through RPNErrors. The message is formatted with the wrapped
    callable's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator


def general(value):
    '''
    Shortest round-trip representation of a float, without a trailing .0.
    '''
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


def fixed(value):
    '''
    printf-style %f representation of a float.
    '''
    return '{:f}'.format(float(value))
