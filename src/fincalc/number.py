'''
Arbitrary-precision numbers, and the process-wide precision and rounding
used to present them.

Numbers are always exact decimals. The only lossy way in is
Number.from_float, for results of functions that have no exact decimal
algorithm (sines, logarithms, fractional powers).

The global configuration only matters where a result needs an explicit
scale: presentation, division and reciprocal. Chains of arithmetic are never
rounded to it between steps.
'''

from collections import namedtuple
from contextlib import contextmanager
from decimal import Decimal, Context, InvalidOperation
from enum import Enum
from fractions import Fraction
import decimal
import math
import threading

from .util import FinCalcError


class RoundingMode(Enum):
    '''
    Standard rounding policies, as understood by the decimal module.
    '''
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    ZERO_FIVE_UP = decimal.ROUND_05UP

    @classmethod
    def parse(cls, name):
        '''
        Look up a rounding mode by name: half_up, HALF-UP, half-even, ...
        '''
        try:
            return cls[name.strip().upper().replace('-', '_')]
        except KeyError:
            raise FinCalcError(
                'No such rounding mode {}; choose from {}'.format(
                    repr(name),
                    ', '.join(mode.name for mode in cls))) from None


NumericConfig = namedtuple('NumericConfig', 'precision rounding')

DEFAULT_PRECISION = 10
DEFAULT_ROUNDING = RoundingMode.HALF_UP
DEFAULT_CONFIG = NumericConfig(DEFAULT_PRECISION, DEFAULT_ROUNDING)

# Whole snapshots are swapped under the lock, so a reader never sees a
# precision from one update and a rounding mode from another.
_lock = threading.Lock()
_config = DEFAULT_CONFIG


def get_config():
    '''
    Current precision and rounding, read together.
    '''
    with _lock:
        return _config


def get_precision():
    return get_config().precision


def get_rounding_mode():
    return get_config().rounding


def _check_precision(precision):
    # bool is an int, but True digits is nonsense.
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(
            'Precision must be an integer, got: {!r}'.format(precision))
    if precision < 0:
        raise ValueError(
            'Precision must be non-negative, got: {}'.format(precision))
    return precision


def _check_rounding(rounding):
    if rounding is None:
        raise TypeError('Rounding mode cannot be None')
    if isinstance(rounding, str):
        return RoundingMode.parse(rounding)
    if not isinstance(rounding, RoundingMode):
        raise TypeError(
            'Rounding mode must be a RoundingMode, got: {!r}'.format(
                rounding))
    return rounding


def set_precision(precision):
    '''
    Set the number of decimal places used for presentation and division.
    '''
    global _config
    precision = _check_precision(precision)
    with _lock:
        _config = _config._replace(precision=precision)


def set_rounding_mode(rounding):
    '''
    Set the rounding policy used for presentation and division.

    Takes a RoundingMode, or its name.
    '''
    global _config
    rounding = _check_rounding(rounding)
    with _lock:
        _config = _config._replace(rounding=rounding)


def reset_config():
    global _config
    with _lock:
        _config = DEFAULT_CONFIG


@contextmanager
def configure(precision=None, rounding=None):
    '''
    Temporarily change the global configuration, restoring it on exit.
    '''
    global _config
    if precision is not None:
        precision = _check_precision(precision)
    if rounding is not None:
        rounding = _check_rounding(rounding)
    with _lock:
        previous = _config
        _config = NumericConfig(
            previous.precision if precision is None else precision,
            previous.rounding if rounding is None else rounding)
    try:
        yield get_config()
    finally:
        with _lock:
            _config = previous


_TRAPS = [InvalidOperation, decimal.DivisionByZero, decimal.Overflow]

# Sums, differences, products and remainders: as many digits as it takes.
# Never divide in it.
EXACT = Context(prec=decimal.MAX_PREC,
                rounding=decimal.ROUND_HALF_EVEN,
                Emax=decimal.MAX_EMAX,
                Emin=decimal.MIN_EMIN,
                traps=_TRAPS)

# Quotients, powers and logarithms inside formulas; 34 digits, like
# IEEE decimal128. Results are not rounded to the global precision.
WORKING = Context(prec=34,
                  rounding=decimal.ROUND_HALF_EVEN,
                  Emax=999999,
                  Emin=-999999,
                  traps=_TRAPS)


def _context(digits):
    '''
    Context wide enough to hold digits digits without rounding.
    '''
    return Context(prec=max(digits, 1),
                   Emax=decimal.MAX_EMAX,
                   Emin=decimal.MIN_EMIN)


_QUARTER = Decimal('0.25')
_HALF = Decimal('0.5')
_THREE_QUARTERS = Decimal('0.75')


def round_fraction(fraction, places, rounding):
    '''
    Round an exact rational to places decimal places, exactly once.

    The discarded tail is replaced by a stand-in (a quarter, a half or three
    quarters of a unit) that every rounding policy treats the same way as the
    real tail, so no policy ever sees a pre-rounded value.
    '''
    scaled = fraction * 10 ** places
    whole, rest = divmod(abs(scaled.numerator), scaled.denominator)
    approx = Decimal(whole)
    context = _context(approx.adjusted() + 3)
    if rest:
        if 2 * rest < scaled.denominator:
            tail = _QUARTER
        elif 2 * rest == scaled.denominator:
            tail = _HALF
        else:
            tail = _THREE_QUARTERS
        approx = context.add(approx, tail)
    if scaled < 0:
        approx = approx.copy_negate()
    rounded = approx.quantize(Decimal(1), rounding=rounding.value,
                              context=context)
    if not rounded:
        # No negative zero.
        rounded = Decimal(0)
    return rounded.scaleb(-places, context)


def divide(dividend, divisor, config=None):
    '''
    dividend / divisor, as Decimals, at the configured scale and rounding.

    Raises ZeroDivisionError on a zero divisor.
    '''
    if config is None:
        config = get_config()
    quotient = Fraction(dividend) / Fraction(divisor)
    return round_fraction(quotient, config.precision, config.rounding)


class Number:
    '''
    Immutable decimal value on the calculator stack.
    '''

    __slots__ = ('_value',)

    def __init__(self, value):
        if not isinstance(value, Decimal):
            raise TypeError('Number wraps a Decimal, got: {!r}'.format(value))
        if not value.is_finite():
            raise ValueError('Number must be finite, got: {}'.format(value))
        object.__setattr__(self, '_value', value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError('Number is immutable')

    def __delattr__(self, name):
        raise AttributeError('Number is immutable')

    @classmethod
    def of(cls, value):
        '''
        Exact Number from decimal text, an int or a Decimal.

        Never loses precision. Floats are refused; use from_float and own the
        rounding error at the call site.
        '''
        if isinstance(value, bool):
            raise TypeError('Not a number: {!r}'.format(value))
        if isinstance(value, Decimal):
            return cls(value)
        if isinstance(value, int):
            return cls(Decimal(value))
        if isinstance(value, str):
            try:
                return cls(Decimal(value.strip()))
            except InvalidOperation:
                raise ValueError(
                    'Not a decimal number: {!r}'.format(value)) from None
        if isinstance(value, float):
            raise TypeError(
                'Number.of does not take floats; use Number.from_float')
        raise TypeError('Not a number: {!r}'.format(value))

    @classmethod
    def from_float(cls, value):
        '''
        LOSSY Number from a binary float.

        Keeps the float's shortest round-tripping decimal representation, so
        1/3 computed in floating point becomes 0.3333333333333333, not the
        exact binary expansion. Only for scientific results.
        '''
        if not math.isfinite(value):
            raise ValueError('Number must be finite, got: {}'.format(value))
        if value == 0:
            value = 0.0
        return cls(Decimal(repr(float(value))))

    def with_precision(self, config=None):
        '''
        This value rounded to the configured scale and rounding mode.
        '''
        if config is None:
            config = get_config()
        return type(self)(round_fraction(Fraction(self._value),
                                         config.precision, config.rounding))

    def format(self, config=None):
        '''
        Fixed-point text at the configured scale.
        '''
        return '{:f}'.format(self.with_precision(config).value)

    def __eq__(self, other):
        if isinstance(other, Number):
            return self._value == other._value
        return NotImplemented

    def __hash__(self):
        return hash((Number, self._value))

    def __repr__(self):
        return 'Number({!r})'.format(str(self._value))

    def __str__(self):
        return '{:f}'.format(self._value)
