'''
Financial and scientific RPN calculator.

A program is a sequence of stack items, Numbers, Operations and Errors,
evaluated left to right against a working stack:

>>> from fincalc import Number, REGISTRY, evaluate
>>> evaluate([Number.of(3), Number.of(4), REGISTRY.lookup('+')])
[Number('7')]

Numbers are exact decimals. Failures never raise; they leave an Error on the
stack and stop the program.
'''

from .util import FinCalcError
from .number import (Number, NumericConfig, RoundingMode, configure,
                     get_config, get_precision, get_rounding_mode,
                     reset_config, set_precision, set_rounding_mode)
from .items import Error, ErrorKind, OperandDescriptor
from .operation import DomainViolation, Operation, StackItem, ZeroDivisor
from .registry import REGISTRY, OperationRegistry
from . import operations
from .evaluator import evaluate, evaluate_for_error, evaluate_to_number
from .lexer import Lexer
from .cli import CLI


__all__ = ('Number', 'NumericConfig', 'RoundingMode', 'configure',
           'get_config', 'get_precision', 'get_rounding_mode', 'reset_config',
           'set_precision', 'set_rounding_mode',
           'Error', 'ErrorKind', 'OperandDescriptor',
           'Operation', 'StackItem', 'DomainViolation', 'ZeroDivisor',
           'REGISTRY', 'OperationRegistry', 'operations',
           'evaluate', 'evaluate_to_number', 'evaluate_for_error',
           'Lexer', 'CLI', 'FinCalcError')
