# -*- coding: utf-8 -*-
"""
Created on Tue Apr 09 15:08:26 2019

@author: XiaoTao Wang
"""
import logging
import numpy as np
from firelib.genomes import get_build

log = logging.getLogger(__name__)

mappability_cutoff = 0.9

def bad_bins(table, binNum):
    """
    Row positions to be removed because of zero annotation: every bin with
    F, GC or M equal to 0, expanded to all rows within *binNum* positions
    in the table order.
    """
    flag = np.where((table['F'].values == 0) | (table['GC'].values == 0) |
                    (table['M'].values == 0))[0]

    mask = np.zeros(table.shape[0], dtype=bool)
    for j in range(-binNum, binNum + 1):
        idx = flag + j
        idx = idx[(idx >= 0) & (idx < table.shape[0])]
        mask[idx] = True

    return mask

def blacklist_mask(table, gb, res):
    """
    Mask of bins located in the build-specific blacklist (MHC) regions.
    Interval bounds are rounded to the bin boundaries at resolution *res*.
    """
    build = get_build(gb)
    mask = np.zeros(table.shape[0], dtype=bool)
    for chrom, lo, hi in build.blacklist:
        lo = (lo // res) * res
        hi = -(-hi // res) * res
        mask |= (table['chr'].values == chrom) & (table['start'].values > lo) & \
                (table['end'].values <= hi)

    return mask

def filter_count(table, binNum, gb, res, rm_mhc=True, samples=None):
    """
    Remove unusable bins from the genome-wide cis score table. Filters are
    applied in order:

    1. bins with F=0, GC=0 or M=0, together with their neighbors within
       *binNum* rows
    2. bins with mappability <= 0.9
    3. bins in the blacklist region of the genome build (if *rm_mhc*)

    Bins with a missing score in any of *samples* are removed first, so
    that all samples always share the same rows.

    Returns
    -------
    filtered : pandas.DataFrame
        Remaining rows, original order kept.
    """
    y = table
    if samples is not None:
        missing = y[list(samples)].isnull().any(axis=1).values
        if missing.any():
            log.warning('{0} bins without scores in all samples are removed'.format(missing.sum()))
            y = y[~missing]

    bad = bad_bins(y, binNum)
    log.debug('Filter 1: {0} bins near zero F/GC/M bins'.format(bad.sum()))
    y = y[~bad]

    low = y['M'].values <= mappability_cutoff
    log.debug('Filter 2: {0} bins with mappability <= {1}'.format(low.sum(), mappability_cutoff))
    y = y[~low]

    if rm_mhc:
        mhc = blacklist_mask(y, gb, res)
        log.debug('Filter 3: {0} bins within the blacklist region'.format(mhc.sum()))
        y = y[~mhc]

    log.info('{0} of {1} bins retained after filtering'.format(y.shape[0], table.shape[0]))

    return y.reset_index(drop=True)
