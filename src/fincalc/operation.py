'''
The contract every calculation on the stack follows.

An Operation wraps a plain function of Decimals. The function's positional
parameters are its operands, in the order they were pushed; it returns a
Decimal or int for exact results, or a float for lossy scientific ones, and
raises DomainViolation when an operand is out of range. Operation.execute
does the rest: arity checks, popping, type checks, and turning every failure
into an Error item, so each execution consumes its arity and pushes exactly
one item.
'''

from decimal import Decimal, localcontext
from functools import update_wrapper
from inspect import signature as getsignature, Parameter
from typing import Union
import logging
import math

from .number import Number, WORKING
from .items import (Error, ErrorKind, OperandDescriptor, X, Y, domain_error,
                    insufficient_operands, non_numeric_operand)

logger = logging.getLogger(__name__)

UNDEFINED = 'result is undefined or infinite'


class DomainViolation(Exception):
    '''
    Raised by an operation's function when an operand is out of its domain.

    Never escapes Operation.execute; becomes "<NAME>: <reason>".
    '''

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason

    def to_error(self, name):
        return domain_error(name, self.reason)


class ZeroDivisor(DomainViolation):
    '''
    Division (or remainder) by zero. Its message stands on its own.
    '''

    def __init__(self, reason='Division by zero'):
        super().__init__(reason)

    def to_error(self, name):
        return Error(self.reason, ErrorKind.DOMAIN)


def _arity(f):
    '''
    Return number of non-default positional arguments.
    '''
    parameters = getsignature(f).parameters.values()
    kinds = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    positionals = [parameter
                   for parameter
                   in parameters
                   if parameter.kind in kinds and
                   parameter.default == Parameter.empty]
    return len(positionals)


class Operation:
    '''
    Stateless, reusable calculation on a working stack.

    :param function: The calculation, taking one Decimal per operand.
    :param name: Stable upper case name; used in error messages.
    :param symbol: Short display symbol (e.g. ÷, PMT); defaults to name.
    :param description: One-line description, for help.
    :param example: Worked example text, for help.
    :param operands: (name, meaning) pairs, bottom of the stack first.
    :param aliases: Other spellings the lexer accepts.
    :param category: Heading to list the operation under.
    :param context: Decimal context the function runs in.
    '''

    def __init__(self, function, name, symbol=None, description='',
                 example='', operands=None, aliases=(), category=None,
                 context=WORKING):
        self.function = function
        self.name = name
        self.symbol = symbol or name
        self.description = description
        self.example = example
        self.aliases = tuple(aliases)
        self.category = category
        self.context = context
        self.arity = _arity(function)
        if operands is None:
            # Generic x, y for the simple cases.
            operands = [X, Y][:self.arity]
        self.operands = tuple(OperandDescriptor(*operand)
                              for operand
                              in operands)
        if len(self.operands) != self.arity:
            raise ValueError('{} takes {} operand(s) but describes {}'.format(
                name, self.arity, len(self.operands)))
        update_wrapper(self, function, updated=())

    def execute(self, stack):
        '''
        Run against the working stack, in place, and return it.

        Fewer than arity items: an error is appended, nothing popped.
        Otherwise exactly arity items are popped and exactly one pushed.
        '''
        if len(stack) < self.arity:
            stack.append(insufficient_operands(self.name, self.arity,
                                               len(stack)))
            return stack
        # Topmost first off the stack; the function wants push order.
        args = [stack.pop() for _ in range(self.arity)][::-1]
        if not all(isinstance(arg, Number) for arg in args):
            stack.append(non_numeric_operand(self.name))
            return stack
        stack.append(self._compute([arg.value for arg in args]))
        return stack

    def _compute(self, values):
        try:
            with localcontext(self.context):
                result = self.function(*values)
        except DomainViolation as e:
            return e.to_error(self.name)
        except (ArithmeticError, ValueError) as e:
            logger.debug('%s(%s) failed: %r', self.name,
                         ', '.join(map(str, values)), e)
            return domain_error(self.name, UNDEFINED)
        return self._wrap(result)

    def _wrap(self, result):
        if isinstance(result, float):
            if not math.isfinite(result):
                return domain_error(self.name, UNDEFINED)
            return Number.from_float(result)
        if isinstance(result, Decimal) and not result.is_finite():
            return domain_error(self.name, UNDEFINED)
        return Number.of(result)

    def __repr__(self):
        return '<Operation {} ({}/{})>'.format(self.symbol, self.name,
                                               self.arity)


def operation(name, **kwargs):
    '''
    Decorator turning a function into an Operation; see Operation.
    '''
    def decorator(f):
        return Operation(f, name, **kwargs)
    return decorator


StackItem = Union[Number, Operation, Error]
