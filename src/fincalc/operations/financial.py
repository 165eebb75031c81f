'''
Financial formulas: time value of money, investment analysis, real estate,
loans, bonds, options, tax and retirement.

Rates are per period and given as decimals (0.005 for half a percent).
Formulas are evaluated in the 34 digit working context and are not rounded
to the display precision; RATE alone is solved in floating point.
'''

import math

from ..operation import DomainViolation
from ..registry import operation
from ..solver import newton

TVM = 'Time value of money'
INVESTMENT = 'Investment analysis'
REAL_ESTATE = 'Real estate'
LOANS = 'Loans'
BONDS = 'Bonds'
OPTIONS = 'Options'
TAX = 'Tax and retirement'

DAYS_PER_YEAR = 365

# Starting guess and bounds for solving RATE.
RATE_GUESS = 0.01
RATE_FLOOR = 0.0001
RATE_CEILING = 0.99


def _positive(value, reason):
    if value <= 0:
        raise DomainViolation(reason)


def _non_negative(value, reason):
    if value < 0:
        raise DomainViolation(reason)


def _fraction(value, reason):
    if not 0 <= value <= 1:
        raise DomainViolation(reason)


# Time value of money

def _annuity_payment(pv, rate, n):
    if not rate:
        return pv / n
    factor = (1 + rate) ** n
    return pv * rate * factor / (factor - 1)


@operation('PMT',
           description='Payment Calculation',
           example='200000 0.005 360 PMT => 1199.10 a month',
           operands=[('PV', 'Present Value (loan amount)'),
                     ('rate', 'Interest rate per period'),
                     ('n', 'Number of periods')],
           category=TVM)
def payment(pv, rate, n):
    _positive(n, 'number of periods must be positive')
    _non_negative(rate, 'interest rate cannot be negative')
    return _annuity_payment(pv, rate, n)


@operation('PV',
           description='Present Value Calculation',
           example='1199.10 0.005 360 PV => 199999.82',
           operands=[('PMT', 'Periodic payment amount'),
                     ('rate', 'Interest rate per period'),
                     ('n', 'Number of periods')],
           category=TVM)
def present_value(pmt, rate, n):
    _positive(n, 'number of periods must be positive')
    _non_negative(rate, 'interest rate cannot be negative')
    if not rate:
        return pmt * n
    factor = (1 + rate) ** n
    return pmt * (factor - 1) / (rate * factor)


@operation('FV',
           description='Future Value Calculation',
           example='10000 0.08 10 FV => 21589.25',
           operands=[('PV', 'Present Value (initial investment)'),
                     ('rate', 'Interest rate per period'),
                     ('n', 'Number of periods')],
           category=TVM)
def future_value(pv, rate, n):
    _non_negative(n, 'number of periods cannot be negative')
    if rate < -1:
        raise DomainViolation('interest rate cannot be less than -100%')
    if not n:
        return pv
    return pv * (1 + rate) ** n


@operation('NPER',
           description='Number of Periods Calculation',
           example='200000 1199.10 0.005 NPER => 360 (months)',
           operands=[('PV', 'Present Value (loan amount)'),
                     ('PMT', 'Periodic payment'),
                     ('rate', 'Interest rate per period')],
           category=TVM)
def number_of_periods(pv, pmt, rate):
    if pv <= 0 or pmt <= 0:
        raise DomainViolation('PV and PMT must be positive')
    _non_negative(rate, 'interest rate cannot be negative')
    if not rate:
        return pv / pmt
    minimum = pv * rate
    if pmt <= minimum:
        raise DomainViolation('payment too small - loan would never be '
                              'repaid (min: {})'.format(minimum))
    n = (pmt / (pmt - minimum)).ln() / (1 + rate).ln()
    if n < 0:
        raise DomainViolation('result is undefined or invalid')
    return n


@operation('RATE',
           description='Interest Rate Calculation',
           example='200000 1199.10 360 RATE => 0.005 (0.5% a month)',
           operands=[('PV', 'Present Value (loan amount)'),
                     ('PMT', 'Periodic payment'),
                     ('n', 'Number of periods')],
           category=TVM)
def interest_rate(pv, pmt, n):
    _positive(n, 'number of periods must be positive')
    if pv <= 0 or pmt <= 0:
        raise DomainViolation('PV and PMT must be positive')
    pv, pmt, n = float(pv), float(pmt), float(n)

    def shortfall(rate):
        factor = math.pow(1 + rate, n)
        return pmt - pv * rate * factor / (factor - 1)

    return newton(shortfall, RATE_GUESS, lower=RATE_FLOOR, upper=RATE_CEILING)


# Investment analysis

@operation('CAGR',
           description='Compound Annual Growth Rate',
           example='10000 15000 5 CAGR => 0.0845',
           operands=[('BeginningValue',
                      'Initial investment or starting value'),
                     ('EndingValue', 'Final value or current value'),
                     ('Years', 'Number of years')],
           category=INVESTMENT)
def compound_annual_growth_rate(begin, end, years):
    _positive(begin, 'beginning value must be positive')
    _positive(end, 'ending value must be positive')
    _positive(years, 'years must be positive')
    return (end / begin) ** (1 / years) - 1


@operation('BEP',
           description='Break-Even Point',
           example='50000 100 60 BEP => 1250 (units)',
           operands=[('FixedCosts',
                      'Total fixed costs (rent, salaries, etc.)'),
                     ('PricePerUnit', 'Selling price per unit'),
                     ('VariableCostPerUnit',
                      'Variable cost to produce one unit')],
           category=INVESTMENT)
def break_even_point(fixed, price, variable):
    _non_negative(fixed, 'fixed costs cannot be negative')
    _positive(price, 'price per unit must be positive')
    _non_negative(variable, 'variable cost cannot be negative')
    margin = price - variable
    _positive(margin, 'price must be greater than variable cost')
    return fixed / margin


@operation('PAYBACK',
           description='Payback Period',
           example='100000 25000 PAYBACK => 4 (years)',
           operands=[('InitialInvestment',
                      'Upfront cost or investment amount'),
                     ('AnnualCashFlow',
                      'Net cash received per year (assumed constant)')],
           category=INVESTMENT)
def payback_period(investment, cashflow):
    _positive(investment, 'initial investment must be positive')
    _positive(cashflow, 'annual cash flow must be positive')
    return investment / cashflow


@operation('PI',
           description='Profitability Index',
           example='100000 120000 PI => 1.2 (above 1, accept)',
           operands=[('InitialInvestment',
                      'Upfront cost or investment amount'),
                     ('PVFutureCashFlows',
                      'Present value of expected future cash flows')],
           category=INVESTMENT)
def profitability_index(investment, pv_flows):
    _positive(investment, 'initial investment must be positive')
    _non_negative(pv_flows, 'PV of future cash flows cannot be negative')
    return pv_flows / investment


@operation('ROI',
           description='Return on Investment',
           example='200000 250000 ROI => 0.25',
           operands=[('CostOfInvestment', 'Initial investment amount'),
                     ('Gain', 'Current value or sale proceeds')],
           category=INVESTMENT)
def return_on_investment(cost, gain):
    _positive(cost, 'cost of investment must be positive')
    return (gain - cost) / cost


# Real estate

@operation('CAP',
           description='Capitalization Rate',
           example='200000 15000 CAP => 0.075',
           operands=[('PropertyValue',
                      'Current market value or purchase price'),
                     ('NOI', 'Net Operating Income (annual)')],
           category=REAL_ESTATE)
def cap_rate(value, noi):
    _positive(value, 'property value must be positive')
    return noi / value


@operation('NOI',
           description='Net Operating Income',
           example='30000 12000 NOI => 18000',
           operands=[('GrossIncome', 'Total rental income (annual)'),
                     ('OpEx', 'Operating expenses (property tax, insurance, '
                              'maintenance)')],
           category=REAL_ESTATE)
def net_operating_income(gross, opex):
    return gross - opex


@operation('COC', symbol='CoC',
           description='Cash-on-Cash Return',
           example='50000 4000 CoC => 0.08',
           operands=[('CashInvested', 'Total cash invested (down payment + '
                                      'closing costs + repairs)'),
                     ('AnnualCashFlow', 'Annual pre-tax cash flow (NOI - '
                                        'debt service)')],
           category=REAL_ESTATE)
def cash_on_cash(invested, cashflow):
    _positive(invested, 'cash invested must be positive')
    return cashflow / invested


@operation('DSCR',
           description='Debt Service Coverage Ratio',
           example='18000 22000 DSCR => 1.222',
           operands=[('AnnualDebtService', 'Total annual loan payments '
                                           '(principal + interest)'),
                     ('NOI', 'Net Operating Income (annual)')],
           category=REAL_ESTATE)
def debt_service_coverage(debt_service, noi):
    _positive(debt_service, 'annual debt service must be positive')
    return noi / debt_service


@operation('LTV',
           description='Loan-to-Value Ratio',
           example='200000 160000 LTV => 0.8',
           operands=[('PropertyValue', 'Appraised value or purchase price'),
                     ('LoanAmount', 'Mortgage loan amount')],
           category=REAL_ESTATE)
def loan_to_value(value, loan):
    _positive(value, 'property value must be positive')
    _non_negative(loan, 'loan amount cannot be negative')
    return loan / value


@operation('GRM',
           description='Gross Rent Multiplier',
           example='24000 200000 GRM => 8.333',
           operands=[('GrossAnnualRent',
                      'Total annual rental income (before expenses)'),
                     ('PropertyPrice',
                      'Purchase price or current market value')],
           category=REAL_ESTATE)
def gross_rent_multiplier(rent, price):
    _positive(rent, 'gross annual rent must be positive')
    _positive(price, 'property price must be positive')
    return price / rent


@operation('CFAT',
           description='Cash Flow After Taxes',
           example='15000 3000 CFAT => 12000',
           operands=[('CashFlowBeforeTaxes',
                      'Net cash flow before tax implications'),
                     ('TaxLiability', 'Total tax owed on the investment')],
           category=REAL_ESTATE)
def cash_flow_after_taxes(cfbt, tax):
    return cfbt - tax


@operation('OER',
           description='Operating Expense Ratio',
           example='80000 32000 OER => 0.4',
           operands=[('GrossOperatingIncome',
                      'Effective gross income after vacancy losses'),
                     ('OperatingExpenses', 'Total operating expenses (taxes, '
                                           'insurance, maintenance, etc.)')],
           category=REAL_ESTATE)
def operating_expense_ratio(goi, opex):
    _positive(goi, 'gross operating income must be positive')
    _non_negative(opex, 'operating expenses cannot be negative')
    return opex / goi


@operation('VACANCY',
           description='Vacancy Loss',
           example='100000 0.05 VACANCY => 5000',
           operands=[('PotentialGrossIncome',
                      'Maximum rental income at 100% occupancy'),
                     ('VacancyRate', 'Expected vacancy rate (as decimal, '
                                     'e.g., 0.05 for 5%)')],
           category=REAL_ESTATE)
def vacancy_loss(pgi, vacancy_rate):
    _non_negative(pgi, 'potential gross income cannot be negative')
    _fraction(vacancy_rate, 'vacancy rate must be between 0 and 1')
    return pgi * vacancy_rate


@operation('EGI',
           description='Effective Gross Income',
           example='5000 100000 EGI => 95000',
           operands=[('VacancyLoss',
                      'Income lost due to vacancy and credit losses'),
                     ('PotentialGrossIncome',
                      'Maximum rental income at 100% occupancy')],
           category=REAL_ESTATE)
def effective_gross_income(vacancy, pgi):
    _non_negative(pgi, 'potential gross income cannot be negative')
    _non_negative(vacancy, 'vacancy loss cannot be negative')
    if vacancy > pgi:
        raise DomainViolation('vacancy loss cannot exceed potential gross '
                              'income')
    return pgi - vacancy


@operation('PPSF',
           description='Price Per Square Foot',
           example='2000 300000 PPSF => 150',
           operands=[('SquareFeet', 'Total square footage of the property'),
                     ('PropertyPrice',
                      'Purchase price or current market value')],
           category=REAL_ESTATE)
def price_per_square_foot(sqft, price):
    _positive(sqft, 'square feet must be positive')
    _positive(price, 'property price must be positive')
    return price / sqft


@operation('RPSF',
           description='Rent Per Square Foot',
           example='1500 36000 RPSF => 24 (a year)',
           operands=[('SquareFeet', 'Rentable square footage'),
                     ('AnnualRent', 'Total annual rental income')],
           category=REAL_ESTATE)
def rent_per_square_foot(sqft, rent):
    _positive(sqft, 'square feet must be positive')
    _non_negative(rent, 'annual rent cannot be negative')
    return rent / sqft


# Loans

@operation('REMBAL',
           description='Remaining Loan Balance',
           example='200000 0.005 360 60 REMBAL => 186108.71',
           operands=[('PV', 'Original loan amount'),
                     ('Rate', 'Interest rate per period'),
                     ('NPer', 'Total number of payment periods'),
                     ('PaymentsMade', 'Number of payments already made')],
           category=LOANS)
def remaining_balance(pv, rate, nper, paid):
    _positive(rate, 'interest rate must be positive')
    _positive(nper, 'number of periods must be positive')
    if not 0 <= paid <= nper:
        raise DomainViolation('payments made must be between 0 and total '
                              'periods')
    _positive(pv, 'present value must be positive')
    installment = _annuity_payment(pv, rate, nper)
    grown = (1 + rate) ** paid
    return pv * grown - installment * (grown - 1) / rate


@operation('TOTINT',
           description='Total Interest Paid',
           example='200000 1199.10 360 TOTINT => 231676',
           operands=[('PV', 'Original loan amount'),
                     ('PMT', 'Payment amount per period'),
                     ('NPer', 'Total number of payment periods')],
           category=LOANS)
def total_interest(pv, pmt, nper):
    _positive(pv, 'present value must be positive')
    _positive(pmt, 'payment must be positive')
    _positive(nper, 'number of periods must be positive')
    return pmt * nper - pv


@operation('APY',
           description='APR to APY Conversion',
           example='0.06 12 APY => 0.0617',
           operands=[('APR', 'Annual Percentage Rate (as decimal, e.g., 0.06 '
                             'for 6%)'),
                     ('CompoundingPeriods',
                      'Number of compounding periods per year')],
           category=LOANS)
def apr_to_apy(apr, periods):
    _non_negative(apr, 'APR cannot be negative')
    _positive(periods, 'compounding periods must be positive')
    return (1 + apr / periods) ** periods - 1


@operation('DTI',
           description='Debt-to-Income Ratio',
           example='8000 2400 DTI => 0.3',
           operands=[('GrossMonthlyIncome', 'Monthly income before taxes'),
                     ('TotalMonthlyDebt', 'Sum of all monthly debt payments')],
           category=LOANS)
def debt_to_income(income, debt):
    _positive(income, 'gross monthly income must be positive')
    _non_negative(debt, 'total monthly debt cannot be negative')
    return debt / income


# Bonds

@operation('CY',
           description='Current Yield',
           example='950 60 CY => 0.0632',
           operands=[('CurrentPrice', 'Current market price of the bond'),
                     ('AnnualCouponPayment',
                      "Bond's annual interest payment")],
           category=BONDS)
def current_yield(price, coupon):
    _positive(price, 'current price must be positive')
    _non_negative(coupon, 'annual coupon cannot be negative')
    return coupon / price


@operation('YTM',
           description='Yield to Maturity (approximation)',
           example='950 1000 60 10 YTM => 0.0667',
           operands=[('CurrentPrice', 'Current market price of the bond'),
                     ('FaceValue', 'Par value of the bond (typically 1000)'),
                     ('AnnualCoupon', 'Annual coupon payment'),
                     ('YearsToMaturity', 'Years until bond matures')],
           category=BONDS)
def yield_to_maturity(price, face, coupon, years):
    _positive(price, 'current price must be positive')
    _positive(face, 'face value must be positive')
    _non_negative(coupon, 'annual coupon cannot be negative')
    _positive(years, 'years to maturity must be positive')
    return (coupon + (face - price) / years) / ((face + price) / 2)


@operation('BONDPRICE',
           description='Bond Price',
           example='1000 0.03 0.025 20 BONDPRICE => 1077.95 (at a premium)',
           operands=[('FaceValue', 'Par value of the bond'),
                     ('CouponRate', 'Coupon rate per period (e.g., 0.03 for '
                                    '3% semi-annual)'),
                     ('YieldRate', 'Market yield rate per period'),
                     ('Periods', 'Number of periods to maturity')],
           category=BONDS)
def bond_price(face, coupon_rate, yield_rate, periods):
    _positive(face, 'face value must be positive')
    _non_negative(coupon_rate, 'coupon rate cannot be negative')
    _non_negative(yield_rate, 'yield rate cannot be negative')
    _positive(periods, 'periods must be positive')
    coupon = face * coupon_rate
    if not yield_rate:
        return coupon * periods + face
    discount = (1 + yield_rate) ** -periods
    return coupon * (1 - discount) / yield_rate + face * discount


# Options

@operation('AOPT',
           description='Annualized Option Return',
           example='12.50 0.26 10 AOPT => 0.7592',
           operands=[('StrikePrice', 'Strike price (capital at risk)'),
                     ('Premium', 'Premium received'),
                     ('Days', 'Days to expiration')],
           category=OPTIONS)
def annualized_option_return(strike, premium, days):
    _positive(strike, 'strike price must be positive')
    _positive(premium, 'premium must be positive')
    _positive(days, 'days to expiration must be positive')
    return premium / days * DAYS_PER_YEAR / strike


@operation('CCR',
           description='Covered Call Return',
           example='50 52 1.50 30 CCR => 0.8517 (if called away)',
           operands=[('StockCost', 'Cost basis of stock'),
                     ('StrikePrice', 'Call strike price'),
                     ('Premium', 'Call premium received'),
                     ('Days', 'Days to expiration')],
           category=OPTIONS)
def covered_call_return(cost, strike, premium, days):
    _positive(cost, 'stock cost must be positive')
    _positive(strike, 'strike price must be positive')
    _non_negative(premium, 'premium cannot be negative')
    _positive(days, 'days to expiration must be positive')
    total = premium + strike - cost
    return total / cost * DAYS_PER_YEAR / days


# Tax and retirement

@operation('EFFTAX',
           description='Effective Tax Rate',
           example='100000 18000 EFFTAX => 0.18',
           operands=[('TotalIncome', 'Gross income before taxes'),
                     ('TotalTax', 'Sum of all taxes paid')],
           category=TAX)
def effective_tax_rate(income, tax):
    _positive(income, 'total income must be positive')
    _non_negative(tax, 'total tax cannot be negative')
    return tax / income


@operation('AFTAXRET',
           description='After-Tax Return',
           example='0.08 0.25 AFTAXRET => 0.06',
           operands=[('PreTaxReturn',
                      'Investment return before taxes (as decimal)'),
                     ('TaxRate', 'Applicable tax rate (as decimal, e.g., 0.25 '
                                 'for 25%)')],
           category=TAX)
def after_tax_return(pre_tax, tax_rate):
    _fraction(tax_rate, 'tax rate must be between 0 and 1')
    return pre_tax * (1 - tax_rate)


@operation('RMD',
           description='Required Minimum Distribution',
           example='500000 25.6 RMD => 19531.25',
           operands=[('AccountBalance',
                      'Total retirement account value as of Dec 31'),
                     ('DistributionPeriod', 'Life expectancy factor from IRS '
                                            'Uniform Lifetime Table')],
           category=TAX)
def required_minimum_distribution(balance, period):
    _non_negative(balance, 'account balance cannot be negative')
    _positive(period, 'distribution period must be positive')
    return balance / period
