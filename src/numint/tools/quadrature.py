from typing import Callable
import numpy as np

DTYPE = np.float64

class Quadrature:
    """
    Quadrature rule bound to a fixed interval [a, b] and an integrand.

    Each call to `next` refines the estimate of the integral, reusing the
    state left by the previous call.

    Subclasses MUST implement:
      * next() -> float
          Advance the refinement level by one and return the new estimate.

    Attributes
    ----------
    n : int
        Read-only number of refinements performed so far (0 before the
        first `next`). Diagnostic only, drivers never return it.
    a, b : DTYPE
        Integration limits, a < b is assumed and not checked here.
    s : DTYPE
        Most recent estimate. Undefined until `next` has been called once.
    func : Callable
        Integrand, aliased (never copied).
    """
    def __init__(self, func: Callable, a: float, b: float):
        self.func = func
        self.a = DTYPE(a)
        self.b = DTYPE(b)
        self._n = 0

    @property
    def n(self) -> int:
        return self._n

    def next(self) -> float:
        raise NotImplementedError(
            f"{type(self).__name__} must implement next()")


class MidpointRule(Quadrature):
    """
    Extended midpoint rule.

    This is an open formula: `func` is never evaluated at `a` or `b`, so
    integrable singularities at either endpoint are allowed. The number of
    panels triples at every refinement past the first one; the two new
    points placed inside each old panel skip the previous midpoint, so no
    function value is ever computed twice.
    """
    def next(self) -> float:
        self._n += 1
        span = self.b - self.a
        if self._n == 1:
            self.s = span * self.func(0.5 * (self.a + self.b))
            return self.s

        it = 3 ** (self._n - 2)
        tnm = DTYPE(it)
        delta = span / (3. * tnm)
        ddelta = delta + delta
        x = self.a + 0.5 * delta
        total = DTYPE(0.)
        for _ in range(it):
            total += self.func(x)
            x += ddelta
            total += self.func(x)
            x += delta
        self.s = (self.s + span * total / tnm) / 3.
        return self.s


class TrapezoidRule(Quadrature):
    """
    Extended trapezoidal rule (closed formula, samples both endpoints).

    The number of panels doubles at each refinement; only the midpoints of
    the previous panels are evaluated.
    """
    def next(self) -> float:
        self._n += 1
        span = self.b - self.a
        if self._n == 1:
            self.s = 0.5 * span * (self.func(self.a) + self.func(self.b))
            return self.s

        it = 2 ** (self._n - 2)
        tnm = DTYPE(it)
        delta = span / tnm
        x = self.a + 0.5 * delta
        total = DTYPE(0.)
        for _ in range(it):
            total += self.func(x)
            x += delta
        self.s = 0.5 * (self.s + span * total / tnm)
        return self.s
