"""Exceptions raised by the refinement drivers."""


class ConvergenceExceeded(RuntimeError):
    """
    The refinement budget ran out before two successive estimates agreed.

    All attributes travel in `args`, so the exception survives pickling
    (e.g. when raised inside a process pool worker).

    Attributes
    ----------
    routine : str
        Name of the driver that gave up ('qtrap', 'qmid', ...).
    steps : int
        Number of refinements performed.
    estimate : float
        Last estimate produced, kept for inspection only.
    """
    def __init__(self, routine: str, steps: int, estimate: float):
        super().__init__(routine, steps, estimate)
        self.routine = routine
        self.steps = steps
        self.estimate = estimate

    def __str__(self):
        return f"Too many steps in routine {self.routine}"
