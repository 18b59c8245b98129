import matplotlib.pyplot as plt
import numpy as np
from typing import Optional, Sequence


class ConvergencePlotter:
    """
    Visualize the sequence of estimates produced by a quadrature rule.

    Parameters
    ----------
    estimates : Sequence[float]
        Estimates per refinement level, e.g. from `refinement_history`.
    exact : float, optional
        Exact value of the integral. Required for the error plot.
    """

    def __init__(self, estimates: Sequence[float], exact: Optional[float] = None):
        self.estimates = np.asarray(estimates, dtype=float)
        self.exact = exact
        self.levels = np.arange(1, len(self.estimates) + 1)

    def __plot_estimates__(self, ax):
        ax.plot(self.levels, self.estimates, marker='o', linewidth=2, label='estimate')
        if self.exact is not None:
            ax.axhline(self.exact, color='black', linestyle='--', linewidth=1, label='exact')
        ax.set_xlabel('Refinement level', fontsize=11)
        ax.set_ylabel('Integral', fontsize=11)
        ax.set_title('Estimates per level', fontsize=12, fontweight='bold')
        ax.legend(fontsize=10)
        ax.grid(True, alpha=0.3)

    def __plot_error__(self, ax):
        # Exact hits would be dropped by the log scale
        err = np.abs(self.estimates - self.exact)
        ax.semilogy(self.levels, np.where(err > 0., err, np.nan), marker='o', linewidth=2)
        ax.set_xlabel('Refinement level', fontsize=11)
        ax.set_ylabel('|estimate - exact|', fontsize=11)
        ax.set_title('Absolute error per level', fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3, which='both')

    def plot(self, which='all', figsize=None):
        """
        Main plotting entry point.

        Parameters
        ----------
        which : str
            'estimates', 'error' or 'all' (default: 'all')
        figsize : tuple, optional
            Figure size. If None, a default per option is used.

        Returns
        -------
        (fig, ax) for a single panel, (fig, (ax1, ax2)) for 'all'.
        """
        if which not in ('estimates', 'error', 'all'):
            raise ValueError(f"Invalid option '{which}'. Use 'estimates', 'error' or 'all'")
        if which in ('error', 'all') and self.exact is None:
            raise ValueError(f"Option '{which}' needs the exact value of the integral")

        if figsize is None:
            figsize = (12, 5) if which == 'all' else (8, 5)

        if which == 'all':
            fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)
            self.__plot_estimates__(ax1)
            self.__plot_error__(ax2)
            plt.tight_layout()
            return fig, (ax1, ax2)

        fig, ax = plt.subplots(figsize=figsize)
        if which == 'estimates':
            self.__plot_estimates__(ax)
        else:
            self.__plot_error__(ax)
        plt.tight_layout()
        return fig, ax
