from .drivers import qtrap, qtrapfixed, qmid, qsimp, refinement_history
from .tools.quadrature import Quadrature, MidpointRule, TrapezoidRule
from .tools.exceptions import ConvergenceExceeded

__all__ = ['qtrap', 'qtrapfixed', 'qmid', 'qsimp', 'refinement_history',
           'Quadrature', 'MidpointRule', 'TrapezoidRule', 'ConvergenceExceeded']
