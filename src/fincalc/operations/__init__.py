'''
The formula catalogue. Importing this package registers every operation in
fincalc.registry.REGISTRY.
'''

from . import basic, scientific, financial

__all__ = ('basic', 'scientific', 'financial')
