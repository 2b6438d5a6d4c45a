# -*- coding: utf-8 -*-
"""
Created on Wed Apr 10 16:43:05 2019

@author: XiaoTao Wang
"""
import logging
import numpy as np
import pandas as pd
from scipy.stats import norm

log = logging.getLogger(__name__)

def logpval(y):
    """
    Negative natural log of the upper tail probability of each value under
    a normal distribution with the sample mean and standard deviation of
    *y*, rounded to 4 decimals.

    If *y* has less than 2 values or no variation, no value can be told
    apart from the rest; all probabilities are then taken as 1 (log-p 0).
    """
    y = np.asarray(y, dtype=float)
    ysd = y.std(ddof=1) if y.size > 1 else 0
    if not ysd > 0:
        log.warning('Scores have zero variance, no bin will be called as FIRE')
        return np.zeros(y.size)

    ym = y.mean()
    p = np.round(-norm.logsf(y, loc=ym, scale=ysd), 4)

    return p

def indicate(p, alpha=0.05):
    """1 if ``p > -log(alpha)`` else 0."""
    return (np.asarray(p) > -np.log(alpha)).astype(int)

def fireCall(table, samples, alpha=0.05):
    """
    Call FIREs for each sample.

    Parameters
    ----------
    table : pandas.DataFrame
        Columns "chr", "start", "end" and the normalized score of each
        sample.

    samples : list of str

    alpha : float
        Significance level. (Default: 0.05)

    Returns
    -------
    final : pandas.DataFrame
        "chr", "start", "end", then "<sample>_FIRES" score columns,
        "<sample>_logpval" columns and "<sample>_indicator" columns.
    """
    keys = ['chr', 'start', 'end']
    fires = table[keys].copy()
    annp = table[keys].copy()
    annf = table[keys].copy()
    for s in samples:
        p = logpval(table[s].values)
        fires['{0}_FIRES'.format(s)] = table[s].values
        annp['{0}_logpval'.format(s)] = p
        annf['{0}_indicator'.format(s)] = indicate(p, alpha)
        log.debug('{0}: {1} FIREs'.format(s, annf['{0}_indicator'.format(s)].sum()))

    final = pd.merge(fires, annp, on=keys, how='outer', sort=False)
    final = pd.merge(final, annf, on=keys, how='outer', sort=False)

    return final

def kneeCutoff(scores):
    """
    Find a cutoff on sorted scores by knee point detection.

    Scores are sorted in ascending order and paired with their ranks
    (1..K); both axes are scaled into [0, 1] by their maxima and the
    points are rotated by 45 degrees. The point with the minimum rotated
    y coordinate (the first one on ties) is the knee, and its original
    score is returned.

    Parameters
    ----------
    scores : 1-D array-like, positive

    Returns
    -------
    cutoff : float or None
        None if *scores* is empty.

    Examples
    --------
    >>> kneeCutoff([5, 5, 5])
    5.0
    >>> kneeCutoff([1, 1, 1, 1, 2, 10])
    2.0
    """
    y = np.sort(np.asarray(scores, dtype=float))
    if y.size == 0:
        return None

    z = np.c_[knee_curve(y)]

    u = np.empty_like(z)
    u[:,0] = 1/np.sqrt(2) * z[:,0] + 1/np.sqrt(2) * z[:,1]
    u[:,1] = -1/np.sqrt(2) * z[:,0] + 1/np.sqrt(2) * z[:,1]

    ref = np.argmin(u[:,1])

    return float(y[ref])

def knee_curve(scores):
    """Scaled (rank, score) pairs of the sorted scores."""
    y = np.sort(np.asarray(scores, dtype=float))
    x = np.arange(1, y.size + 1, dtype=float)

    return x / x.max(), y / y.max()
