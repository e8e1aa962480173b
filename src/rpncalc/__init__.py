'''
RPN calculator model.

An accumulator, the value being edited or displayed, and a stack of operands.
Binary operators combine the top of the stack with the accumulator, leaving
the result in the accumulator. Observers are told about every change of
state.

Comes with a small command shell on top, which is just another observer.
'''

from .cli import CLI
from .lexer import Lexer
from .model import CalculatorModel
from .util import (RPNError, InsufficientOperands, DivisionByZero,
                   UnknownOperator, Failure, Result)


__all__ = ('CalculatorModel', 'Lexer', 'CLI',
           'RPNError', 'InsufficientOperands', 'DivisionByZero',
           'UnknownOperator', 'Failure', 'Result')
