# -*- coding: utf-8 -*-
"""
Created on Tue Apr 09 09:47:52 2019

@author: XiaoTao Wang
"""

import logging
import numpy as np
import pandas as pd
from scipy import sparse
from firelib.errors import InputFormatError

log = logging.getLogger(__name__)

class Chrom(object):
    """
    *Chrom* is defined to:

    - Hold the bin annotation of a certain chromosome
    - Calculate cis interaction scores (the raw FIRE scores) of each bin
      from the intra-chromosomal contact matrix of each sample
    - Merge contiguous FIRE bins into super-FIRE candidates

    Parameters
    ----------
    chrom : str
        Chromosome label.

    res : int
        Resolution of the Hi-C data in base-pair unit.

    bins : pandas.DataFrame
        Bin annotation rows (chr, start, end, F, GC, M) of this chromosome,
        in genomic order.

    Attributes
    ----------
    chromLen : int
        Total bin number of the chromosome.

    binNum : int
        Half width of the cis window in bin unit.

    cis : dict, {sample:1-D numpy ndarray}
        Cis interaction scores of each sample, aligned with *bins*.
    """
    defaultwindow = 200000

    def __init__(self, chrom, res, bins):

        self.chrom = chrom
        self.res = res
        self.binNum = self.defaultwindow // res
        self.bins = bins.reset_index(drop=True)
        self.chromLen = self.bins.shape[0]
        self.cis = {}

    def _pixels(self, hicdata):

        if sparse.issparse(hicdata):
            M = sparse.coo_matrix(hicdata)
            x, y, IF = M.row, M.col, M.data.astype(float)
        else:
            M = np.asarray(hicdata, dtype=float)
            x, y = M.nonzero()
            IF = M[x, y]

        IF[np.isnan(IF)] = 0
        # self contacts never contribute
        IF[x == y] = 0

        return x, y, IF

    def calCis(self, hicdata, sample):
        """
        Calculate the cis interaction score of each bin.

        For bin *i* (0-based), the score is the sum of column *i* over rows
        ``[i-binNum, i]`` plus the sum over rows ``[i, i+binNum]``, both
        clipped at the matrix edges. Row *i* appears in both halves, but
        the diagonal is set to 0 beforehand.

        Parameters
        ----------
        hicdata : 2-D numpy ndarray or scipy sparse matrix
            Full (symmetric) contact matrix of the chromosome.

        sample : str
            Sample label.

        Returns
        -------
        scores : 1-D numpy ndarray, float
            Has the same length as *bins*. Bins beyond the matrix size are
            filled with NaN.
        """
        shape = hicdata.shape
        if len(shape) != 2 or shape[0] != shape[1]:
            raise InputFormatError('Contact matrix of {0} ({1}) is not square: {2}'.format(
                sample, self.chrom, shape))

        N = shape[0]
        if N != self.chromLen:
            log.warning('{0} ({1}): matrix size {2} does not match the bin number {3}'.format(
                sample, self.chrom, N, self.chromLen))

        x, y, IF = self._pixels(hicdata)
        mask = (x < self.chromLen) & (y < self.chromLen)
        x, y, IF = x[mask], y[mask], IF[mask]

        upper = (x >= y - self.binNum) & (x <= y)
        lower = (x >= y) & (x <= y + self.binNum)
        scores = np.bincount(y[upper], weights=IF[upper], minlength=self.chromLen) + \
                 np.bincount(y[lower], weights=IF[lower], minlength=self.chromLen)
        scores = scores[:self.chromLen]
        if N < self.chromLen:
            scores[N:] = np.nan

        self.cis[sample] = scores

        return scores

    def cisTable(self, samples):
        """
        Return the annotation of this chromosome with one score column
        per sample appended.
        """
        table = self.bins.copy()
        for s in samples:
            table[s] = self.cis[s]

        return table

    def superSegments(self, sigbins, score):
        """
        Greedily merge significant bins into segments. A segment is
        extended while the start of the next significant bin lies within
        one resolution of the current segment end.

        Parameters
        ----------
        sigbins : pandas.DataFrame
            Significant bins of this chromosome in genomic order, with
            "start", "end" and a *score* column.

        score : str
            Column holding the per-bin score to accumulate.

        Returns
        -------
        segments : pandas.DataFrame
            Columns "chr", "start", "end" and "cum_FIRE_score".
        """
        cols = ['chr', 'start', 'end', 'cum_FIRE_score']
        if sigbins.shape[0] == 0:
            return pd.DataFrame(columns=cols)

        starts = sigbins['start'].values
        ends = sigbins['end'].values
        values = sigbins[score].values

        pairs = []
        start, end = starts[0], ends[0]
        for i in range(1, starts.size):
            if abs(end - starts[i]) <= self.res:
                end = ends[i]
            else:
                pairs.append((start, end))
                start, end = starts[i], ends[i]
        pairs.append((start, end))

        segments = []
        for s, e in pairs:
            mask = (starts >= s) & (ends <= e)
            segments.append([self.chrom, s, e, values[mask].sum()])

        segments = pd.DataFrame(segments, columns=cols)

        return segments
