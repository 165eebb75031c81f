'''
Powers, roots, logarithms and trigonometry.

These have no exact decimal algorithm, so they are computed in binary
floating point and their results are LOSSY Numbers (see
Number.from_float). Squaring and the reciprocal stay exact. Angles are in
radians.
'''

import math

from ..number import EXACT, divide
from ..operation import DomainViolation, ZeroDivisor
from ..registry import operation

CATEGORY = 'Scientific'

_X = [('x', 'operand')]
_ANGLE = [('x', 'angle in radians')]


@operation('SQRT', symbol='\N{SQUARE ROOT}', aliases=['sqrt'],
           description='Square root',
           example='16 \N{SQUARE ROOT} => 4',
           operands=_X,
           category=CATEGORY)
def sqrt(x):
    if x < 0:
        raise DomainViolation('cannot take square root of negative number')
    return math.sqrt(x)


@operation('SQUARE', symbol='x\N{SUPERSCRIPT TWO}', aliases=['x^2'],
           description='Square, exactly',
           example='12 x^2 => 144',
           operands=_X,
           category=CATEGORY,
           context=EXACT)
def square(x):
    return x * x


@operation('POW', symbol='x\N{SUPERSCRIPT LATIN SMALL LETTER N}',
           aliases=['^'],
           description='Power',
           example='2 10 ^ => 1024',
           operands=[('base', 'The value to raise'),
                     ('exponent', 'The power to raise it to')],
           category=CATEGORY)
def power(base, exponent):
    # math.pow raises ValueError on a negative base with a fractional
    # exponent, and OverflowError past the float range.
    return math.pow(base, exponent)


@operation('RECIPROCAL', symbol='1/x',
           description='Reciprocal, rounded to the display precision',
           example='4 1/x => 0.25',
           operands=_X,
           category=CATEGORY,
           context=EXACT)
def reciprocal(x):
    if not x:
        raise ZeroDivisor()
    return divide(1, x)


@operation('NTHROOT',
           symbol='\N{SUPERSCRIPT LATIN SMALL LETTER N}\N{SQUARE ROOT}x',
           aliases=['root'],
           description='n-th root; the real root for odd roots of negatives',
           example='27 3 root => 3',
           operands=[('x', 'The value to take the root of'),
                     ('n', 'Root index')],
           category=CATEGORY)
def nth_root(x, n):
    if not n:
        raise DomainViolation('root index cannot be zero')
    integral = n == n.to_integral_value()
    if x < 0 and integral and not n % 2:
        raise DomainViolation('cannot take even root of negative number')
    if x < 0 and integral:
        return -math.pow(-x, 1 / float(n))
    return math.pow(x, 1 / float(n))


@operation('LN', symbol='ln',
           description='Natural logarithm',
           example='1 ln => 0',
           operands=_X,
           category=CATEGORY)
def ln(x):
    if x <= 0:
        raise DomainViolation('cannot take logarithm of non-positive number')
    return math.log(x)


@operation('LOG10', symbol='LOG', aliases=['log'],
           description='Common (base 10) logarithm',
           example='1000 LOG => 3',
           operands=_X,
           category=CATEGORY)
def log10(x):
    if x <= 0:
        raise DomainViolation('cannot take logarithm of non-positive number')
    return math.log10(x)


@operation('EXP', symbol='e^x', aliases=['exp'],
           description='Natural exponential',
           example='0 e^x => 1',
           operands=_X,
           category=CATEGORY)
def exp(x):
    return math.exp(x)


@operation('EXP10', symbol='10^x',
           description='Power of ten',
           example='3 10^x => 1000',
           operands=_X,
           category=CATEGORY)
def exp10(x):
    return math.pow(10, x)


@operation('SIN', symbol='sin',
           description='Sine',
           example='0 sin => 0',
           operands=_ANGLE,
           category=CATEGORY)
def sin(x):
    return math.sin(x)


@operation('COS', symbol='cos',
           description='Cosine',
           example='0 cos => 1',
           operands=_ANGLE,
           category=CATEGORY)
def cos(x):
    return math.cos(x)


@operation('TAN', symbol='tan',
           description='Tangent',
           example='0 tan => 0',
           operands=_ANGLE,
           category=CATEGORY)
def tan(x):
    return math.tan(x)


def _check_unit_interval(x):
    if not -1 <= x <= 1:
        raise DomainViolation('input must be in range [-1, 1]')


@operation('ASIN', symbol='asin',
           description='Arc sine, in radians',
           example='0 asin => 0',
           operands=[('x', 'sine, in [-1, 1]')],
           category=CATEGORY)
def asin(x):
    _check_unit_interval(x)
    return math.asin(x)


@operation('ACOS', aliases=['acos'],
           description='Arc cosine, in radians',
           example='1 acos => 0',
           operands=[('x', 'cosine, in [-1, 1]')],
           category=CATEGORY)
def acos(x):
    _check_unit_interval(x)
    return math.acos(x)


@operation('ATAN', aliases=['atan'],
           description='Arc tangent, in radians',
           example='0 atan => 0',
           operands=[('x', 'tangent')],
           category=CATEGORY)
def atan(x):
    return math.atan(x)
