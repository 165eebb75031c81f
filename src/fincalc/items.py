'''
Things that live on the calculator stack, other than operations.

A stack item is exactly one of a Number, an Operation or an Error (see
fincalc.operation.StackItem). Errors are ordinary values: a failed
calculation pushes one instead of raising.
'''

from collections import namedtuple
from enum import Enum

from .number import Number


class ErrorKind(Enum):
    # Fewer items on the stack than the operation consumes.
    INSUFFICIENT_OPERANDS = 'insufficient operands'
    # An operand popped by the operation is not a Number.
    NON_NUMERIC_OPERAND = 'non-numeric operand'
    # Operand outside the formula's domain, or no finite result.
    DOMAIN = 'domain error'
    # Error supplied as program data instead of produced by an operation.
    POISONED_INPUT = 'poisoned input'


class Error:
    '''
    Immutable failed result: a human readable message and its kind.

    Errors built directly by callers are program data, hence POISONED_INPUT
    unless told otherwise.
    '''

    __slots__ = ('_message', '_kind')

    def __init__(self, message, kind=ErrorKind.POISONED_INPUT):
        if not isinstance(kind, ErrorKind):
            raise TypeError('Not an ErrorKind: {!r}'.format(kind))
        object.__setattr__(self, '_message', str(message))
        object.__setattr__(self, '_kind', kind)

    @property
    def message(self):
        return self._message

    @property
    def kind(self):
        return self._kind

    def __setattr__(self, name, value):
        raise AttributeError('Error is immutable')

    def __delattr__(self, name):
        raise AttributeError('Error is immutable')

    def __eq__(self, other):
        if isinstance(other, Error):
            return (self._message, self._kind) == (other._message, other._kind)
        return NotImplemented

    def __hash__(self):
        return hash((Error, self._message, self._kind))

    def __repr__(self):
        return 'Error({!r}, {})'.format(self._message, self._kind)

    def __str__(self):
        return 'Error: ' + self._message


def insufficient_operands(name, required, actual):
    return Error('{} requires {} operand(s), but stack has {}'.format(
                     name, required, actual),
                 ErrorKind.INSUFFICIENT_OPERANDS)


def non_numeric_operand(name):
    return Error('{} requires numeric operands'.format(name),
                 ErrorKind.NON_NUMERIC_OPERAND)


def domain_error(name, reason):
    return Error('{}: {}'.format(name, reason), ErrorKind.DOMAIN)


# Help text for one operand of an operation; no computational weight.
OperandDescriptor = namedtuple('OperandDescriptor', 'name description')

X = OperandDescriptor('x', 'operand')
Y = OperandDescriptor('y', 'operand')


__all__ = ('Number', 'Error', 'ErrorKind', 'OperandDescriptor',
           'insufficient_operands', 'non_numeric_operand', 'domain_error')
