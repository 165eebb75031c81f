'''
Root finding for formulas with no closed form inverse, such as the periodic
rate of an annuity.
'''

import logging
import math

from .operation import DomainViolation

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-10
# Step for the forward difference derivative.
DERIVATIVE_STEP = 1e-8
# Below this the tangent is too flat to follow.
FLAT_DERIVATIVE = 1e-10


class NoConvergence(DomainViolation):
    def __init__(self, reason='could not converge to a solution'):
        super().__init__(reason)


def newton(f, guess, lower=None, upper=None,
           max_iterations=MAX_ITERATIONS, tolerance=TOLERANCE,
           step=DERIVATIVE_STEP):
    '''
    Find x with f(x) = 0 by Newton's method, from guess.

    Iterates are clamped to [lower, upper] when given, but a converged root
    outside them is still returned. Gives up with
    NoConvergence after max_iterations, or on a flat or non-finite tangent.
    '''
    x = guess
    for iteration in range(max_iterations):
        fx = f(x)
        derivative = (f(x + step) - fx) / step
        if not abs(derivative) > FLAT_DERIVATIVE:
            logger.debug('newton: flat derivative %r at x=%r', derivative, x)
            break
        following = x - fx / derivative
        if not (math.isfinite(derivative) and math.isfinite(following)):
            logger.debug('newton: non-finite step from x=%r', x)
            break
        if abs(following - x) < tolerance:
            logger.debug('newton: x=%r after %d iteration(s)',
                         following, iteration + 1)
            return following
        # Clamp after the convergence test, never before.
        if lower is not None:
            following = max(following, lower)
        if upper is not None:
            following = min(following, upper)
        x = following
    else:
        logger.debug('newton: no convergence in %d iterations, last x=%r',
                     max_iterations, x)
    raise NoConvergence()
