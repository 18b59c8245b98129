"""
Refinement drivers: integrate f over [a, b] by calling a quadrature rule
repeatedly until two successive estimates agree.
"""
from typing import Callable, Type
import numpy as np
from .tools.quadrature import DTYPE, Quadrature, MidpointRule, TrapezoidRule
from .tools.exceptions import ConvergenceExceeded

JMAX = 20   # hard cap on refinements
JMIN = 5    # convergence is only tested for loop index j > JMIN


def _check_limits(a: float, b: float, routine: str):
    if not (np.isfinite(a) and np.isfinite(b)):
        raise ValueError(f"{routine}: integration limits must be finite, got a={a}, b={b}")
    if not a < b:
        raise ValueError(f"{routine}: integration limits must satisfy a < b, got a={a}, b={b}")


def _check_eps(eps: float, routine: str):
    if not eps > 0.:
        raise ValueError(f"{routine}: eps must be positive, got {eps}")


def _converge(step: Callable[[], float], eps: float, routine: str,
              verbose: bool = False) -> float:
    """
    Call `step` until the relative change of the estimate drops below `eps`.

    The test is skipped for the first JMIN + 1 calls, so at least seven
    estimates are produced. A NaN estimate never satisfies the test and
    runs the loop to the JMAX budget.

    Raises
    ------
    ConvergenceExceeded
        If JMAX calls do not meet the tolerance.
    """
    s = olds = DTYPE(0.)
    for j in range(JMAX):
        s = step()
        if verbose:
            print(f"{routine}: step {j}  s={s}")
        if j > JMIN:
            if np.abs(s - olds) < eps * np.abs(olds) or (s == 0. and olds == 0.):
                if verbose:
                    print(f"{routine}: converged after {j + 1} steps  s={s}")
                return s
        olds = s
    if verbose:
        print(f"{routine}: no convergence after {JMAX} steps  s={s}")
    raise ConvergenceExceeded(routine, JMAX, s)


def qtrap(f: Callable, a: float, b: float, eps: float = 1e-6,
          verbose: bool = False) -> float:
    """
    Integrate `f` over [a, b] with the extended trapezoidal rule.

    Parameters
    ----------
    f : Callable
        Integrand, f(x) -> float. Must be defined at both endpoints.
    a, b : float
        Integration limits, a < b.
    eps : float, optional
        Relative tolerance between successive estimates. Default: 1e-6
    verbose : bool, optional
        If True, prints every estimate. Default: False

    Returns
    -------
    float
        Integral estimate.

    Raises
    ------
    ConvergenceExceeded
        If 20 refinements do not meet `eps`.
    """
    _check_limits(a, b, "qtrap")
    _check_eps(eps, "qtrap")
    rule = TrapezoidRule(f, a, b)
    return _converge(rule.next, eps, "qtrap", verbose)


def qmid(f: Callable, a: float, b: float, eps: float = 1e-6,
         verbose: bool = False) -> float:
    """
    Integrate `f` over [a, b] with the extended midpoint rule.

    Same stopping policy as `qtrap`, but `f` is never evaluated at the
    endpoints, so integrable singularities at `a` or `b` are allowed.
    Convergence for such integrands is slow; loosen `eps` accordingly.
    """
    _check_limits(a, b, "qmid")
    _check_eps(eps, "qmid")
    rule = MidpointRule(f, a, b)
    return _converge(rule.next, eps, "qmid", verbose)


def qtrapfixed(f: Callable, a: float, b: float, m: int = 5,
               verbose: bool = False) -> float:
    """
    Trapezoidal integration with a fixed amount of work.

    Performs exactly m + 1 refinements (2**m + 1 function evaluations)
    and returns the last estimate, with no convergence test.
    """
    _check_limits(a, b, "qtrapfixed")
    if int(m) != m or m < 0:
        raise ValueError(f"qtrapfixed: m must be a nonnegative integer, got {m}")

    s = DTYPE(0.)
    rule = TrapezoidRule(f, a, b)
    for _ in range(int(m) + 1):
        s = rule.next()
    if verbose:
        print(f"qtrapfixed: {rule.n} steps  s={s}")
    return s


def qsimp(f: Callable, a: float, b: float, eps: float = 1e-6,
          verbose: bool = False) -> float:
    """
    Simpson's rule built on successive trapezoidal refinements.

    Each Simpson estimate combines two trapezoidal levels as
    (4 * st - ost) / 3, cancelling the leading h**2 error term. Same
    stopping policy and failure mode as `qtrap`.
    """
    _check_limits(a, b, "qsimp")
    _check_eps(eps, "qsimp")
    rule = TrapezoidRule(f, a, b)
    ost = DTYPE(0.)

    def step():
        nonlocal ost
        st = rule.next()
        s = (4. * st - ost) / 3.
        ost = st
        return s

    return _converge(step, eps, "qsimp", verbose)


def refinement_history(rule: Type[Quadrature], f: Callable, a: float, b: float,
                       levels: int = 10) -> np.ndarray:
    """
    Estimates produced by the first `levels` refinements of a fresh rule.

    Parameters
    ----------
    rule : Type[Quadrature]
        Rule class, e.g. MidpointRule or TrapezoidRule.
    f : Callable
        Integrand.
    a, b : float
        Integration limits, a < b.
    levels : int, optional
        Number of refinements. Default: 10

    Returns
    -------
    np.ndarray
        Array of shape (levels,); entry k - 1 is the level-k estimate.
    """
    if not (isinstance(rule, type) and issubclass(rule, Quadrature)):
        raise ValueError(f"rule must be a Quadrature subclass, got {rule!r}")
    _check_limits(a, b, "refinement_history")
    if int(levels) != levels or levels < 1:
        raise ValueError(f"levels must be a positive integer, got {levels}")

    q = rule(f, a, b)
    return np.array([q.next() for _ in range(int(levels))], dtype=DTYPE)
