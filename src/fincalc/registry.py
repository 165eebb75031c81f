'''
Every operation the calculator knows, by name, display symbol and alias.
'''

from collections import OrderedDict
import logging

from .operation import Operation
from .util import FinCalcError

logger = logging.getLogger(__name__)


class OperationRegistry:
    '''
    Lookup table from every spelling of an operation to the operation.

    Operations are stateless, so one instance of each serves every program.
    '''

    def __init__(self):
        self._by_symbol = {}
        self._operations = []

    def register(self, op):
        spellings = OrderedDict.fromkeys((op.name, op.symbol) + op.aliases)
        clashes = [spelling
                   for spelling
                   in spellings
                   if spelling in self._by_symbol]
        if clashes:
            raise ValueError('{} clashes with already registered {}'.format(
                op.name, ', '.join(clashes)))
        for spelling in spellings:
            self._by_symbol[spelling] = op
        self._operations.append(op)
        logger.debug('Registered %r', op)
        return op

    def operation(self, name, **kwargs):
        '''
        Decorator turning a function into an Operation, and registering it.
        '''
        def decorator(f):
            return self.register(Operation(f, name, **kwargs))
        return decorator

    def get(self, symbol, default=None):
        return self._by_symbol.get(symbol, default)

    def lookup(self, symbol):
        '''
        Operation spelt symbol, or FinCalcError.
        '''
        try:
            return self._by_symbol[symbol]
        except KeyError:
            raise FinCalcError('No such operation {}'.format(symbol)) from None

    def symbols(self):
        '''
        Every registered spelling, in registration order.
        '''
        return list(self._by_symbol)

    def by_category(self):
        '''
        Operations grouped under their category, both in registration order.
        '''
        groups = OrderedDict()
        for op in self._operations:
            groups.setdefault(op.category, []).append(op)
        return groups

    def __contains__(self, symbol):
        return symbol in self._by_symbol

    def __iter__(self):
        return iter(self._operations)

    def __len__(self):
        return len(self._operations)


REGISTRY = OperationRegistry()
operation = REGISTRY.operation
