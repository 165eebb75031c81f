'''
Runs a program, left to right, against a fresh working stack.

A program is a sequence of stack items: Numbers are pushed, Operations are
executed, and an Error given as data poisons the whole program. Evaluation
halts at the first Error, wherever it comes from.
'''

import logging

from .number import Number
from .items import Error
from .operation import Operation

logger = logging.getLogger(__name__)


def evaluate(program):
    '''
    Terminal working stack of program, bottom first.

    An Error in the program itself: [that error], nothing else kept.
    An Operation producing an Error: the stack as it stands, error on top.
    Otherwise the stack once the program is exhausted; more than one item
    left over is for the caller to interpret.
    '''
    stack = []
    for position, item in enumerate(program):
        if isinstance(item, Number):
            stack.append(item)
        elif isinstance(item, Error):
            logger.debug('Poisoned input at %d: %s', position, item.message)
            return [item]
        elif isinstance(item, Operation):
            item.execute(stack)
            if isinstance(stack[-1], Error):
                logger.debug('%s failed at %d: %s', item.name, position,
                             stack[-1].message)
                return stack
        else:
            raise TypeError('Not a stack item: {!r}'.format(item))
    return stack


def evaluate_to_number(program):
    '''
    The sole Number left by program, or None.
    '''
    stack = evaluate(program)
    if len(stack) == 1 and isinstance(stack[0], Number):
        return stack[0]
    return None


def evaluate_for_error(program):
    '''
    The Error program halted on, or None.
    '''
    stack = evaluate(program)
    if stack and isinstance(stack[-1], Error):
        return stack[-1]
    return None
