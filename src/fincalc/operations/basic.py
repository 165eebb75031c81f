'''
Four-function arithmetic, remainder and absolute value.

All exact, except division, which is rounded once to the global precision.
'''

from ..number import EXACT, divide
from ..operation import ZeroDivisor
from ..registry import operation

CATEGORY = 'Basic'

_PAIR = [('x', 'first operand'),
         ('y', 'second operand')]


@operation('ADD', symbol='+',
           description='Addition',
           example='3 4 + => 7',
           operands=_PAIR,
           category=CATEGORY,
           context=EXACT)
def add(x, y):
    return x + y


@operation('SUBTRACT', symbol='\N{MINUS SIGN}', aliases=['-'],
           description='Subtraction',
           example='10 4 - => 6',
           operands=[('x', 'minuend'), ('y', 'subtrahend')],
           category=CATEGORY,
           context=EXACT)
def subtract(x, y):
    return x - y


@operation('MULTIPLY', symbol='\N{MULTIPLICATION SIGN}', aliases=['*'],
           description='Multiplication',
           example='6 7 * => 42',
           operands=_PAIR,
           category=CATEGORY,
           context=EXACT)
def multiply(x, y):
    return x * y


@operation('DIVIDE', symbol='\N{DIVISION SIGN}', aliases=['/'],
           description='Division, rounded to the display precision',
           example='10 4 / => 2.5',
           operands=[('dividend', 'The value to be divided'),
                     ('divisor', 'The value to divide by')],
           category=CATEGORY,
           context=EXACT)
def divide_(dividend, divisor):
    if not divisor:
        raise ZeroDivisor()
    return divide(dividend, divisor)


@operation('MOD', aliases=['%'],
           description='Remainder, with the sign of the dividend',
           example='17 5 MOD => 2',
           operands=[('dividend', 'The value to be divided'),
                     ('divisor', 'The value to divide by')],
           category=CATEGORY,
           context=EXACT)
def mod(dividend, divisor):
    if not divisor:
        raise ZeroDivisor('Modulo by zero')
    # Decimal's % truncates towards zero, unlike int's.
    return dividend % divisor


@operation('ABS', symbol='|x|',
           description='Absolute value',
           example='-5 |x| => 5',
           operands=[('x', 'operand')],
           category=CATEGORY,
           context=EXACT)
def absolute(x):
    return abs(x)
