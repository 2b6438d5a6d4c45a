# -*- coding: utf-8 -*-
"""
Created on Fri Apr 12 16:27:40 2019

@author: XiaoTao Wang
"""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from firelib.fire.callers import knee_curve

class KneeCurve(object):
    """
    Plot the sorted cumulative FIRE scores of super-FIRE candidates
    together with the selected cutoff.

    Parameters
    ----------
    scores : 1-D array-like
        Cumulative scores of all candidate segments of a sample.

    cutoff : float
        Returned by :py:func:`firelib.fire.callers.kneeCutoff`.
    """
    def __init__(self, scores, cutoff, sample='', figsize=(4.5, 4)):

        self.scores = np.sort(np.asarray(scores, dtype=float))
        self.cutoff = cutoff
        self.sample = sample
        self.fig = plt.figure(figsize=figsize)

    def plot(self, color='#1F4E79', cutoff_color='#F70000', label_size=9):

        ax = self.fig.add_subplot(111)
        if self.scores.size == 0:
            ax.text(0.5, 0.5, 'No super-FIRE candidates', ha='center', va='center')
            ax.axis('off')
            self.ax = ax
            return

        x, y = knee_curve(self.scores)
        ax.plot(x, y, color=color, linewidth=1.5)
        ax.plot([0, 1], [0, 1], color='#A5ACAF', linestyle='--', linewidth=1)

        if not self.cutoff is None:
            ref = np.where(self.scores == self.cutoff)[0][0]
            ax.scatter([x[ref]], [y[ref]], s=30, c=cutoff_color, zorder=3)
            ax.axhline(y[ref], color=cutoff_color, linestyle=':', linewidth=1)
            ax.set_title('{0} cutoff: {1:.4g}'.format(self.sample, self.cutoff),
                         fontsize=label_size+1)

        ax.set_xlabel('Rank (scaled)', fontsize=label_size)
        ax.set_ylabel('Cumulative FIRE score (scaled)', fontsize=label_size)
        ax.tick_params(labelsize=label_size)
        ax.set_xlim(0, 1.02)
        ax.set_ylim(0, 1.02)

        self.ax = ax

    def outfig(self, outfile, dpi=200, bbox_inches='tight'):

        self.fig.savefig(outfile, dpi=dpi, bbox_inches=bbox_inches)
        plt.close(self.fig)
