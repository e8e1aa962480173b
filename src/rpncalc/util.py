from enum import Enum
from functools import wraps
from typing import NamedTuple, Optional


class RPNError(Exception):
    pass


class InsufficientOperands(RPNError):
    '''
    Binary operation attempted with nothing on the stack.
    '''


class DivisionByZero(RPNError, ZeroDivisionError):
    '''
    Division attempted with a zero accumulator.
    '''


class UnknownOperator(RPNError, KeyError):
    pass


class Failure(Enum):
    '''
    Named ways a binary operation can fail, without touching the model.
    '''
    INSUFFICIENT_OPERANDS = (InsufficientOperands,
                             "Not enough operands: push the first operand "
                             "before applying an operator")
    DIVISION_BY_ZERO = (DivisionByZero, 'Division by zero')

    @property
    def error(self):
        return self.value[0]

    @property
    def message(self):
        return self.value[1]

    def exception(self):
        '''
        Build the exception to raise for this failure.
        '''
        return self.error(self.message)


class Result(NamedTuple):
    '''
    Outcome of a binary operation: either a value, or a failure.

    Exactly one of the two is set.
    '''
    value: Optional[float]
    failure: Optional[Failure]

    @classmethod
    def success(cls, value):
        return cls(value, None)

    @classmethod
    def failed(cls, failure):
        return cls(None, failure)

    @property
    def ok(self):
        return self.failure is None

    def __bool__(self):
        return self.ok

    def unwrap(self):
        '''
        Return the value, or raise the exception matching the failure.
        '''
        if self.failure is not None:
            raise self.failure.exception()
        return self.value


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts exceptions to user errors.

    Passes through RPNErrors. Positional and keyword arguments of the wrapped
    call are available to ``fmt``.
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
