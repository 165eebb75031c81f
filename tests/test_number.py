'''
Number and numeric configuration tests
'''

from decimal import Decimal
import math
import threading

from pytest import raises, mark

from fincalc.util import FinCalcError
from fincalc.number import (Number, NumericConfig, RoundingMode, configure,
                            divide, get_config, get_precision,
                            get_rounding_mode, set_precision,
                            set_rounding_mode, DEFAULT_CONFIG)


def test_exact_text():
    number = Number.of('123.4500')
    assert number.value == Decimal('123.4500')
    assert str(number) == '123.4500'


def test_exact_integer():
    big = 10 ** 40 + 1
    assert Number.of(big).value == Decimal(big)
    assert Number.of(7) == Number.of('7')


def test_refuses_floats():
    with raises(TypeError, match='from_float'):
        Number.of(0.1)


def test_refuses_junk():
    with raises(TypeError):
        Number.of(True)
    with raises(TypeError):
        Number.of(None)
    with raises(ValueError, match='Not a decimal number'):
        Number.of('twelve')
    with raises(ValueError, match='finite'):
        Number.of('NaN')


def test_from_float_is_shortest_repr():
    assert Number.from_float(0.1) == Number.of('0.1')
    assert Number.from_float(-0.0) == Number.of(0)


def test_from_float_refuses_non_finite():
    with raises(ValueError):
        Number.from_float(math.inf)
    with raises(ValueError):
        Number.from_float(math.nan)


def test_immutable():
    number = Number.of(1)
    with raises(AttributeError):
        number._value = Decimal(2)
    with raises(AttributeError):
        del number._value


def test_equality_ignores_trailing_zeros():
    assert Number.of('2.50') == Number.of('2.5')
    assert hash(Number.of('2.50')) == hash(Number.of('2.5'))


def test_defaults():
    assert get_config() == DEFAULT_CONFIG
    assert get_precision() == 10
    assert get_rounding_mode() is RoundingMode.HALF_UP


def test_with_precision_reads_global():
    assert Number.of('2.00000000005').with_precision() == \
        Number.of('2.0000000001')
    with configure(precision=2):
        assert Number.of('1.005').with_precision() == Number.of('1.01')


@mark.parametrize('rounding,value,expected', [
    (RoundingMode.HALF_UP, '2.5', '3'),
    (RoundingMode.HALF_UP, '-2.5', '-3'),
    (RoundingMode.HALF_DOWN, '2.5', '2'),
    (RoundingMode.HALF_EVEN, '2.5', '2'),
    (RoundingMode.HALF_EVEN, '3.5', '4'),
    (RoundingMode.UP, '2.1', '3'),
    (RoundingMode.DOWN, '2.9', '2'),
    (RoundingMode.CEILING, '-2.9', '-2'),
    (RoundingMode.FLOOR, '-2.1', '-3'),
    (RoundingMode.ZERO_FIVE_UP, '2.1', '2'),
    (RoundingMode.ZERO_FIVE_UP, '5.1', '6'),
])
def test_rounding_modes(rounding, value, expected):
    config = NumericConfig(0, rounding)
    assert Number.of(value).format(config) == expected


def test_format_scale():
    config = NumericConfig(2, RoundingMode.HALF_UP)
    assert Number.of('1.5').format(config) == '1.50'
    assert Number.of(7).format() == '7.0000000000'


def test_format_no_negative_zero():
    config = NumericConfig(2, RoundingMode.HALF_UP)
    assert Number.of('-0.001').format(config) == '0.00'


@mark.parametrize('text', ['0.1', '123.456', '-42', '1000000.0000000001'])
def test_round_trip(text):
    assert Decimal(Number.of(text).format()) == Decimal(text)
    config = NumericConfig(20, RoundingMode.DOWN)
    assert Decimal(Number.of(text).format(config)) == Decimal(text)


def test_divide():
    assert divide(Decimal(1), Decimal(3)) == Decimal('0.3333333333')
    assert divide(Decimal(2), Decimal(3)) == Decimal('0.6666666667')
    config = NumericConfig(3, RoundingMode.DOWN)
    assert divide(Decimal(2), Decimal(3), config) == Decimal('0.666')
    with raises(ZeroDivisionError):
        divide(Decimal(1), Decimal(0))


def test_set_precision():
    set_precision(4)
    assert get_precision() == 4
    assert get_rounding_mode() is RoundingMode.HALF_UP
    set_precision(0)
    assert get_precision() == 0


def test_set_precision_rejects():
    with raises(ValueError, match='non-negative'):
        set_precision(-1)
    with raises(TypeError):
        set_precision(1.5)
    with raises(TypeError):
        set_precision(True)
    assert get_precision() == 10


def test_set_rounding_mode():
    set_rounding_mode(RoundingMode.FLOOR)
    assert get_rounding_mode() is RoundingMode.FLOOR
    set_rounding_mode('half-even')
    assert get_rounding_mode() is RoundingMode.HALF_EVEN


def test_set_rounding_mode_rejects():
    with raises(TypeError, match='cannot be None'):
        set_rounding_mode(None)
    with raises(FinCalcError, match='No such rounding mode'):
        set_rounding_mode('sideways')
    assert get_rounding_mode() is RoundingMode.HALF_UP


def test_configure_restores():
    with configure(precision=3, rounding='floor') as config:
        assert config == NumericConfig(3, RoundingMode.FLOOR)
        assert get_config() == config
    assert get_config() == DEFAULT_CONFIG


def test_configure_restores_on_error():
    with raises(RuntimeError):
        with configure(precision=1):
            raise RuntimeError()
    assert get_config() == DEFAULT_CONFIG


def test_readers_never_see_half_updates():
    first = NumericConfig(2, RoundingMode.UP)
    second = NumericConfig(7, RoundingMode.FLOOR)
    seen = set()
    done = threading.Event()

    def writer():
        for _ in range(2000):
            for config in (first, second):
                set_precision(config.precision)
                set_rounding_mode(config.rounding)
        done.set()

    def reader():
        while not done.is_set():
            seen.add(get_config())

    threads = [threading.Thread(target=writer),
               threading.Thread(target=reader)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    # Each setter replaces one field of a whole snapshot; every snapshot
    # read is one some setter wrote.
    assert seen <= {DEFAULT_CONFIG, first, second,
                    NumericConfig(2, RoundingMode.FLOOR),
                    NumericConfig(7, RoundingMode.UP),
                    NumericConfig(2, RoundingMode.HALF_UP)}
