from functools import wraps


class FinCalcError(Exception):
    '''
    Mistake made by the user of the calculator, not by the engine.

    Bad configuration values, unlexable program text, unknown operation
    names. The engine itself never raises this; failed calculations are
    Error items on the stack instead.
    '''


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to FinCalcErrors.

    Passes through FinCalcErrors. The message is formatted with the wrapped
    function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except FinCalcError:
                raise
            except Exception as e:
                raise FinCalcError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
