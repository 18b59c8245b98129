from .plotting import ConvergencePlotter

__all__ = ['ConvergencePlotter']
