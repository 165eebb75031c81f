'''
Error item tests
'''

from pytest import raises

from fincalc.items import (Error, ErrorKind, domain_error,
                           insufficient_operands, non_numeric_operand)


def test_caller_built_errors_are_poisoned_input():
    error = Error('pre-existing')
    assert error.kind is ErrorKind.POISONED_INPUT
    assert error.message == 'pre-existing'
    assert str(error) == 'Error: pre-existing'


def test_equality_includes_kind():
    assert Error('x') == Error('x')
    assert Error('x') != Error('x', ErrorKind.DOMAIN)
    assert len({Error('x'), Error('x'), Error('y')}) == 2


def test_immutable():
    error = Error('x')
    with raises(AttributeError):
        error._message = 'y'


def test_kind_checked():
    with raises(TypeError):
        Error('x', 'domain')


def test_messages():
    assert insufficient_operands('ADD', 2, 1) == Error(
        'ADD requires 2 operand(s), but stack has 1',
        ErrorKind.INSUFFICIENT_OPERANDS)
    assert non_numeric_operand('SQRT') == Error(
        'SQRT requires numeric operands', ErrorKind.NON_NUMERIC_OPERAND)
    assert domain_error('LN', 'cannot take logarithm of non-positive number') \
        == Error('LN: cannot take logarithm of non-positive number',
                 ErrorKind.DOMAIN)
