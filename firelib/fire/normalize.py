# -*- coding: utf-8 -*-
"""
Created on Wed Apr 10 10:21:37 2019

@author: XiaoTao Wang
"""
import logging, warnings
import numpy as np
import statsmodels.api as sm
from statsmodels.tools.sm_exceptions import ConvergenceWarning, PerfectSeparationError
from firelib.errors import StatFitError

log = logging.getLogger(__name__)

covariates = ['F', 'GC', 'M']

def poissonFit(table, sample):
    """
    Fit a Poisson regression of the cis scores of *sample* on the F, GC
    and M covariates (with intercept).

    A covariate without any variation cannot be separated from the
    intercept; it is left out of the model, i.e. its coefficient is 0.

    Returns
    -------
    coeff : dict
        Coefficients rounded to 8 decimal places, keyed by "const", "F",
        "GC" and "M".
    """
    y = table[sample].values.astype(float)
    if y.sum() <= 0:
        raise StatFitError(sample, 'no cis interactions left after filtering')

    used = []
    for c in covariates:
        if np.ptp(table[c].values) == 0:
            log.warning('{0}: covariate {1} is constant, dropped from the model'.format(sample, c))
        else:
            used.append(c)

    X = np.column_stack([np.ones(y.size)] + [table[c].values.astype(float) for c in used])
    model = sm.GLM(y, X, family=sm.families.Poisson())
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', ConvergenceWarning)
        try:
            fit = model.fit()
        except (ValueError, np.linalg.LinAlgError, PerfectSeparationError) as e:
            raise StatFitError(sample, 'Poisson regression failed: {0}'.format(e)) from e
    if not fit.converged:
        raise StatFitError(sample, 'Poisson regression did not converge')

    params = np.round(np.asarray(fit.params), 8)
    coeff = dict.fromkeys(['const'] + covariates, 0.0)
    coeff['const'] = params[0]
    for c, b in zip(used, params[1:]):
        coeff[c] = b
    log.debug('{0}: {1}'.format(sample, ', '.join('{0}={1}'.format(k, coeff[k]) for k in coeff)))

    return coeff

def expected(table, coeff):
    """Fitted Poisson mean of each bin."""
    eta = coeff['const']
    for c in covariates:
        eta = eta + coeff[c] * table[c].values

    return np.exp(eta)

def HiCNormCis(table, samples):
    """
    Remove the fragment number, GC content and mappability biases of each
    sample independently.

    Parameters
    ----------
    table : pandas.DataFrame
        Filtered bin table with annotation columns and one cis score column
        per sample.

    samples : list of str
        Score columns to normalize.

    Returns
    -------
    scores : pandas.DataFrame
        Columns "chr", "start", "end" followed by the normalized score of
        each sample, ``round(observed / expected, 4)``.
    """
    scores = table[['chr', 'start', 'end']].copy()
    for s in samples:
        log.debug('HiCNormCis: {0}'.format(s))
        coeff = poissonFit(table, s)
        mu = expected(table, coeff)
        if not np.all(np.isfinite(mu) & (mu > 0)):
            raise StatFitError(s, 'zero or non-finite expected values')
        scores[s] = np.round(table[s].values / mu, 4)

    return scores

def quantileNorm(table, samples):
    """
    Quantile normalization across samples. Each value is replaced by the
    mean, over samples, of the sorted values at the same rank. Ties are
    ranked by their original order.
    """
    M = table[samples].values.astype(float)
    order = np.argsort(M, axis=0, kind='mergesort')
    ref = np.sort(M, axis=0).mean(axis=1)

    qq = np.empty_like(M)
    for j in range(M.shape[1]):
        qq[order[:, j], j] = ref

    out = table.copy()
    out[samples] = np.round(qq, 4)

    return out
