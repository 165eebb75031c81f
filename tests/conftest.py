from pytest import Item, fixture

from fincalc import Lexer, reset_config, evaluate
from fincalc.operation import operation


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP -o enable_assertion_pass_hook=true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture(autouse=True)
def numeric_config():
    '''
    Every test starts, and leaves, with the default precision and rounding.
    '''
    reset_config()
    yield
    reset_config()


@fixture
def calc():
    '''
    Evaluate a line of calculator text; return the terminal stack.
    '''
    lexer = Lexer()

    def calc(line):
        return evaluate(lexer.program(line))
    return calc


@fixture
def spy():
    '''
    Unary operation that passes its operand through, recording each call.
    '''
    calls = []

    @operation('SPY', description='Records that it ran')
    def record(x):
        calls.append(x)
        return x
    record.calls = calls
    return record
