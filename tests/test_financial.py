'''
Financial formula tests, mostly the worked examples from the help text
'''

from decimal import Decimal

from pytest import mark

from fincalc.items import Error, ErrorKind
from fincalc.number import Number, NumericConfig, RoundingMode

N = Number.of


def shown(stack, places):
    '''
    Sole item of stack as text at places decimal places.
    '''
    assert len(stack) == 1, stack
    return stack[0].format(NumericConfig(places, RoundingMode.HALF_UP))


def domain(name, reason):
    return [Error('{}: {}'.format(name, reason), ErrorKind.DOMAIN)]


def near(stack, expected, tolerance):
    assert len(stack) == 1, stack
    return abs(stack[0].value - Decimal(expected)) < Decimal(tolerance)


# Time value of money

def test_payment(calc):
    assert shown(calc('200000 0.005 360 PMT'), 2) == '1199.10'
    assert calc('1200 0 12 PMT') == [N(100)]


def test_payment_domain(calc):
    assert calc('200000 0.005 0 PMT') == domain(
        'PMT', 'number of periods must be positive')
    assert calc('200000 -0.005 360 PMT') == domain(
        'PMT', 'interest rate cannot be negative')


def test_payment_is_not_rounded_to_precision(calc):
    # 1199.1010503...; far more than the 10 default places survive.
    value = calc('200000 0.005 360 PMT')[0].value
    assert value != value.quantize(Decimal('1e-10'))


def test_present_value(calc):
    assert near(calc('1199.10 0.005 360 PV'), 200000, 1)
    assert calc('100 0 12 PV') == [N(1200)]


def test_future_value(calc):
    assert shown(calc('10000 0.08 10 FV'), 2) == '21589.25'
    assert calc('10000 0.08 0 FV') == [N(10000)]
    assert calc('10000 -1 5 FV') == [N(0)]


def test_future_value_domain(calc):
    assert calc('10000 0.08 -1 FV') == domain(
        'FV', 'number of periods cannot be negative')
    assert calc('10000 -1.5 10 FV') == domain(
        'FV', 'interest rate cannot be less than -100%')


def test_number_of_periods(calc):
    assert shown(calc('200000 1199.10 0.005 NPER'), 0) == '360'
    assert calc('1200 100 0 NPER') == [N(12)]


def test_number_of_periods_payment_too_small(calc):
    stack = calc('200000 1000 0.005 NPER')
    assert len(stack) == 1
    assert stack[0].kind is ErrorKind.DOMAIN
    assert stack[0].message.startswith(
        'NPER: payment too small - loan would never be repaid (min: 1000')


def test_number_of_periods_domain(calc):
    assert calc('0 100 0.005 NPER') == domain(
        'NPER', 'PV and PMT must be positive')
    assert calc('1000 100 -0.005 NPER') == domain(
        'NPER', 'interest rate cannot be negative')


def test_rate(calc):
    assert near(calc('200000 1199.10 360 RATE'), '0.005', '1e-6')


def test_rate_domain(calc):
    assert calc('200000 1199.10 0 RATE') == domain(
        'RATE', 'number of periods must be positive')
    assert calc('200000 -1 360 RATE') == domain(
        'RATE', 'PV and PMT must be positive')


def test_rate_does_not_converge(calc):
    # Payments that never repay the principal: no positive rate fits.
    assert calc('1000 1 10 RATE') == domain(
        'RATE', 'could not converge to a solution')


# Investment analysis

def test_cagr(calc):
    assert shown(calc('10000 15000 5 CAGR'), 4) == '0.0845'
    assert calc('0 15000 5 CAGR') == domain(
        'CAGR', 'beginning value must be positive')


def test_break_even_point(calc):
    assert calc('50000 100 60 BEP') == [N(1250)]
    assert calc('50000 60 100 BEP') == domain(
        'BEP', 'price must be greater than variable cost')


@mark.parametrize('line,expected', [
    ('100000 25000 PAYBACK', '4'),
    ('100000 120000 PI', '1.2'),
    ('200000 250000 ROI', '0.25'),
    ('200000 150000 ROI', '-0.25'),
])
def test_investment(calc, line, expected):
    assert calc(line) == [N(expected)]


# Real estate

@mark.parametrize('line,expected', [
    ('200000 15000 CAP', '0.075'),
    ('30000 12000 NOI', '18000'),
    ('50000 4000 CoC', '0.08'),
    ('50000 4000 COC', '0.08'),
    ('200000 160000 LTV', '0.8'),
    ('15000 3000 CFAT', '12000'),
    ('80000 32000 OER', '0.4'),
    ('100000 0.05 VACANCY', '5000'),
    ('5000 100000 EGI', '95000'),
    ('2000 300000 PPSF', '150'),
    ('1500 36000 RPSF', '24'),
])
def test_real_estate(calc, line, expected):
    assert calc(line) == [N(expected)]


def test_real_estate_ratios(calc):
    assert shown(calc('18000 22000 DSCR'), 3) == '1.222'
    assert shown(calc('24000 200000 GRM'), 3) == '8.333'


@mark.parametrize('line,name,reason', [
    ('0 15000 CAP', 'CAP', 'property value must be positive'),
    ('0 4000 CoC', 'COC', 'cash invested must be positive'),
    ('0 22000 DSCR', 'DSCR', 'annual debt service must be positive'),
    ('200000 -1 LTV', 'LTV', 'loan amount cannot be negative'),
    ('100000 1.5 VACANCY', 'VACANCY', 'vacancy rate must be between 0 and 1'),
    ('200 100 EGI', 'EGI',
     'vacancy loss cannot exceed potential gross income'),
    ('0 300000 PPSF', 'PPSF', 'square feet must be positive'),
])
def test_real_estate_domain(calc, line, name, reason):
    assert calc(line) == domain(name, reason)


# Loans

def test_remaining_balance(calc):
    assert near(calc('200000 0.005 360 60 REMBAL'), '186108.71', '0.05')
    assert near(calc('200000 0.005 360 360 REMBAL'), 0, '1e-20')
    assert calc('200000 0.005 360 0 REMBAL') == [N(200000)]


def test_remaining_balance_domain(calc):
    assert calc('200000 0.005 360 361 REMBAL') == domain(
        'REMBAL', 'payments made must be between 0 and total periods')
    assert calc('200000 0 360 60 REMBAL') == domain(
        'REMBAL', 'interest rate must be positive')


def test_total_interest(calc):
    assert calc('200000 1199.10 360 TOTINT') == [N(231676)]


def test_apy(calc):
    assert shown(calc('0.06 12 APY'), 4) == '0.0617'
    assert calc('-0.06 12 APY') == domain('APY', 'APR cannot be negative')


def test_debt_to_income(calc):
    assert calc('8000 2400 DTI') == [N('0.3')]


# Bonds

def test_current_yield(calc):
    assert shown(calc('950 60 CY'), 4) == '0.0632'


def test_yield_to_maturity(calc):
    assert shown(calc('950 1000 60 10 YTM'), 4) == '0.0667'


def test_bond_price(calc):
    assert shown(calc('1000 0.03 0.025 20 BONDPRICE'), 2) == '1077.95'
    assert calc('1000 0.03 0 20 BONDPRICE') == [N(1600)]
    # Coupon equal to yield: trades at par.
    assert near(calc('1000 0.05 0.05 10 BONDPRICE'), 1000, '1e-20')


def test_bond_price_domain(calc):
    assert calc('1000 0.03 -0.025 20 BONDPRICE') == domain(
        'BONDPRICE', 'yield rate cannot be negative')


# Options

def test_annualized_option_return(calc):
    assert calc('12.50 0.26 10 AOPT') == [N('0.7592')]
    assert calc('12.50 0 10 AOPT') == domain(
        'AOPT', 'premium must be positive')


def test_covered_call_return(calc):
    assert shown(calc('50 52 1.50 30 CCR'), 4) == '0.8517'
    assert calc('50 52 1.50 0 CCR') == domain(
        'CCR', 'days to expiration must be positive')


# Tax and retirement

def test_tax_and_retirement(calc):
    assert calc('100000 18000 EFFTAX') == [N('0.18')]
    assert calc('0.08 0.25 AFTAXRET') == [N('0.06')]
    assert calc('500000 25.6 RMD') == [N('19531.25')]


def test_tax_and_retirement_domain(calc):
    assert calc('0.08 1.25 AFTAXRET') == domain(
        'AFTAXRET', 'tax rate must be between 0 and 1')
    assert calc('500000 0 RMD') == domain(
        'RMD', 'distribution period must be positive')
