from collections import deque
from functools import partial
import logging
import operator

from .util import Failure, Result, UnknownOperator


logger = logging.getLogger(__name__)


def _ignore():
    pass


class CalculatorModel:
    '''
    RPN calculator state: an accumulator and an operand stack.

    The accumulator is the value being edited or displayed. The stack holds
    operands, last pushed on top. Binary operators take their left operand
    from the top of the stack and their right operand from the accumulator,
    and leave the result in the accumulator.

    Every change of state is reported, once and after the fact, to every
    listener, in registration order, as ``listener(accumulator, snapshot)``
    where ``snapshot`` is a fresh list of the stack, top first. Operations
    that fail or have nothing to do report nothing. Listener exceptions are
    not caught.

    Not thread-safe; serialize access yourself.
    '''

    # Binary operators: symbol -> (name, function of (left, right)).
    OPERATORS = {
        '+': ('add', operator.__add__),
        '-': ('sub', operator.__sub__),
        '*': ('mul', operator.__mul__),
        '/': ('div', operator.__truediv__),
    }

    def __init__(self):
        self._accumulator = 0.0
        # Bottom on the left, top on the right.
        self._stack = deque()
        self._listeners = []

    def __len__(self):
        return len(self._stack)

    def __repr__(self):
        return '{}(accumulator={!r}, stack={!r})'.format(
            type(self).__name__, self._accumulator, list(self._stack))

    # Listeners

    def add_listener(self, listener):
        '''
        Register listener to be called after every change of state.

        ``None`` is silently ignored.

        :returns: A callable that unregisters the listener.
        '''
        if listener is None:
            return _ignore
        self._listeners.append(listener)
        return partial(self.remove_listener, listener)

    def remove_listener(self, listener):
        '''
        Unregister listener. Does nothing if it isn't registered.
        '''
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify_change(self):
        snapshot = self.get_stack_snapshot()
        logger.debug('accumulator=%r stack=%r, notifying %d listener(s)',
                     self._accumulator, snapshot, len(self._listeners))
        # Copy, so listeners may unregister themselves.
        for listener in list(self._listeners):
            listener(self._accumulator, snapshot)

    # Accessors

    @property
    def accumulator(self):
        return self._accumulator

    def get_accumulator(self):
        return self._accumulator

    def get_stack_snapshot(self):
        '''
        Return a copy of the stack, top first.
        '''
        return list(reversed(self._stack))

    def stack_size(self):
        return len(self._stack)

    # Accumulator

    def set_accumulator(self, value):
        '''
        Set the accumulator (e.g., user input).
        '''
        self._accumulator = float(value)
        self._notify_change()

    def clear_accumulator(self):
        self._accumulator = 0.0
        self._notify_change()

    # Stack

    def push(self):
        '''
        Push the accumulator on top of the stack. The accumulator is kept.
        '''
        self._stack.append(self._accumulator)
        self._notify_change()

    def pop(self):
        '''
        Move the top of the stack into the accumulator, if any.
        '''
        if self._stack:
            self._accumulator = self._stack.pop()
            self._notify_change()

    def drop(self):
        '''
        Discard the top of the stack, if any. The accumulator is kept.
        '''
        if self._stack:
            self._stack.pop()
            self._notify_change()

    def drop_all(self):
        '''
        Clear the whole stack, if not already empty.
        '''
        if self._stack:
            self._stack.clear()
            self._notify_change()

    def swap(self):
        '''
        Exchange the accumulator and the top of the stack, if any.
        '''
        if self._stack:
            self._accumulator, self._stack[-1] = \
                self._stack[-1], self._accumulator
            self._notify_change()

    # Binary operators

    def attempt(self, symbol):
        '''
        Apply binary operator to the top of the stack and the accumulator.

        On success, the top of the stack is consumed and the result lands in
        the accumulator. On failure nothing changes and nobody is notified.

        :param symbol: One of ``OPERATORS``.
        :returns: A ``Result`` holding the new accumulator, or the failure.
        :raises UnknownOperator: symbol is not a binary operator.
        '''
        try:
            name, f = type(self).OPERATORS[symbol]
        except KeyError:
            raise UnknownOperator(symbol) from None
        if not self._stack:
            return self._failed(name, Failure.INSUFFICIENT_OPERANDS)
        # Compute before popping: a zero divisor must not lose the operand.
        try:
            result = f(self._stack[-1], self._accumulator)
        except ZeroDivisionError:
            return self._failed(name, Failure.DIVISION_BY_ZERO)
        self._stack.pop()
        self._accumulator = result
        self._notify_change()
        return Result.success(result)

    def _failed(self, name, failure):
        logger.debug('%s failed: %s', name, failure.message)
        return Result.failed(failure)

    def add(self):
        '''
        (top of stack) + accumulator -> accumulator
        '''
        return self.attempt('+').unwrap()

    def sub(self):
        '''
        (top of stack) - accumulator -> accumulator
        '''
        return self.attempt('-').unwrap()

    def mul(self):
        '''
        (top of stack) * accumulator -> accumulator
        '''
        return self.attempt('*').unwrap()

    def div(self):
        '''
        (top of stack) / accumulator -> accumulator

        Raises DivisionByZero, leaving the stack alone, if the accumulator is
        zero.
        '''
        return self.attempt('/').unwrap()
