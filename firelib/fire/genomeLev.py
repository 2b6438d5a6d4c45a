# -*- coding: utf-8 -*-
"""
Created on Thu Apr 11 14:05:26 2019

@author: XiaoTao Wang
"""
import logging
import multiprocessing as mp
import numpy as np
import pandas as pd
from firelib.errors import InputFormatError
from firelib.genomes import get_build, chromosome_list, binsize_label
from firelib.io import check_map, resolution, mapcols
from firelib.fire.chromLev import Chrom
from firelib.fire.filters import filter_count
from firelib.fire.normalize import HiCNormCis, quantileNorm
from firelib.fire.callers import fireCall, kneeCutoff

total_cpu = mp.cpu_count()

log = logging.getLogger(__name__)

def parse_flag(rm_mhc):

    if rm_mhc is None:
        return True
    if isinstance(rm_mhc, (bool, np.bool_)):
        return bool(rm_mhc)
    if isinstance(rm_mhc, str) and rm_mhc.upper() in ('TRUE', 'FALSE'):
        return rm_mhc.upper() == 'TRUE'

    raise InputFormatError('Format for remove mhc is incorrect: {0}, use TRUE or FALSE'.format(rm_mhc))

def _cisWorker(args):

    chrom, samples, loader = args
    for s in samples:
        chrom.calCis(loader(s, chrom.chrom), s)

    return chrom

class Genome(object):
    """
    *Genome* is built on top of :py:class:`firelib.fire.chromLev.Chrom`. We
    use it to:

    - Validate inputs before any computation
    - Calculate cis interaction scores of all autosomes and samples
    - Filter bins, normalize scores within and across samples
    - Call FIREs and super-FIREs

    Parameters
    ----------
    bins : pandas.DataFrame
        Bin annotation with 6 columns (chr, start, end, F, GC, M), sorted by
        chromosome and start. See :py:func:`firelib.io.load_map`.

    samples : list of str
        Sample labels (prefixes).

    loader : callable
        ``loader(sample, chrom)`` returns the N x N contact matrix (numpy
        ndarray or scipy sparse matrix) of *sample* on *chrom*.
        See :py:class:`firelib.io.DenseLoader` and
        :py:class:`firelib.io.CoolerLoader`.

    gb : str
        Genome build, one of hg19, GRCh38, mm9 and mm10.

    rm_mhc : bool or str
        Whether to remove the MHC (blacklist) region. (Default: True)

    alpha : float
        Significance level of FIRE calling. (Default: 0.05)

    Attributes
    ----------
    res : int
        Resolution in base-pair unit.

    binNum : int
        Half width of the cis window in bin unit.

    chroms : list of str
        Autosomes with annotation.

    data : dict, {chrom:Chrom}

    cis : pandas.DataFrame
        Genome-wide cis score table (after :py:meth:`calCis`).

    filtered : pandas.DataFrame
        Cis score table after bin filtering.

    scores : pandas.DataFrame
        Normalized (and quantile normalized if more than one sample) scores.

    fires : pandas.DataFrame
        Final FIRE table.

    superFIREs : dict, {sample:pandas.DataFrame}
    """
    def __init__(self, bins, samples, loader, gb='hg19', rm_mhc=True, alpha=0.05):

        check_map(bins)
        bins = bins.copy()
        bins.columns = mapcols
        bins['chr'] = bins['chr'].astype(str)

        self.build = get_build(gb)
        self.rm_mhc = parse_flag(rm_mhc)
        self.samples = [str(s) for s in samples]
        if not len(self.samples):
            raise InputFormatError('No sample is provided')
        if len(set(self.samples)) != len(self.samples):
            raise InputFormatError('Duplicated sample labels: {0}'.format(', '.join(self.samples)))
        for s in self.samples:
            if s in mapcols:
                raise InputFormatError('Sample label {0} conflicts with the annotation columns'.format(s))

        self.res = resolution(bins)
        self.binNum = Chrom.defaultwindow // self.res
        if self.binNum < 1:
            raise InputFormatError('Resolution {0} is larger than the cis window {1}'.format(
                self.res, Chrom.defaultwindow))
        self.binsize = binsize_label(self.res)
        self.alpha = alpha
        self.loader = loader

        self.data = {}
        self.chroms = []
        for c in chromosome_list(self.build):
            sub = bins[bins['chr'] == c]
            if sub.shape[0] == 0:
                log.warning('{0} has no bins in the annotation, skipped'.format(c))
                continue
            self.chroms.append(c)
            self.data[c] = Chrom(c, self.res, sub)

        if not len(self.chroms):
            raise InputFormatError('None of the {0} autosomes is found in the annotation'.format(self.build.name))

        log.debug('Genome {0}, resolution {1}, {2} samples, {3} chromosomes'.format(
            self.build.name, self.res, len(self.samples), len(self.chroms)))

    def calCis(self, cpu_core=1):
        """
        Calculate cis interaction scores of every sample on every
        chromosome and concatenate them across chromosomes.

        Parameters
        ----------
        cpu_core : int
            Number of processes to launch. Chromosomes are dispatched to
            the worker processes, so *loader* must be picklable when
            *cpu_core* > 1.
        """
        cpu_core = min(cpu_core, total_cpu)
        tasks = [(self.data[c], self.samples, self.loader) for c in self.chroms]
        if cpu_core > 1:
            log.debug('Spawn {0} subprocesses ...'.format(cpu_core))
            pool = mp.Pool(cpu_core)
            try:
                results = pool.map(_cisWorker, tasks)
            finally:
                pool.close()
                pool.join()
        else:
            results = []
            for t in tasks:
                log.debug('Chrom {0}:'.format(t[0].chrom))
                results.append(_cisWorker(t))

        for chrom in results:
            self.data[chrom.chrom] = chrom

        self.cis = pd.concat([self.data[c].cisTable(self.samples) for c in self.chroms],
                             ignore_index=True)

        return self.cis

    def filterBins(self):

        self.filtered = filter_count(self.cis, self.binNum, self.build, self.res,
                                     rm_mhc=self.rm_mhc, samples=self.samples)
        return self.filtered

    def normalize(self):
        """
        HiCNormCis for each sample, followed by quantile normalization when
        more than one sample is provided.
        """
        scores = HiCNormCis(self.filtered, self.samples)
        if len(self.samples) > 1:
            log.debug('Quantile normalization across {0} samples'.format(len(self.samples)))
            scores = quantileNorm(scores, self.samples)

        self.scores = scores

        return scores

    def callFIREs(self):

        self.fires = fireCall(self.scores, self.samples, alpha=self.alpha)

        return self.fires

    def callSuperFIREs(self):
        """
        Merge contiguous FIREs of each sample into super-FIREs.

        The cumulative score of a segment is the sum of the log-p values
        of its FIRE bins. All segments of a sample are pooled across
        chromosomes to determine the cutoff
        (:py:func:`firelib.fire.callers.kneeCutoff`); segments scoring
        below the cutoff are discarded.
        """
        self.superFIREs = {}
        self.cutoffs = {}
        self.segments = {}
        for s in self.samples:
            score = '{0}_logpval'.format(s)
            sig = self.fires[self.fires['{0}_indicator'.format(s)] == 1]
            pool = []
            for c in self.chroms:
                sigbins = sig[sig['chr'] == c]
                segs = self.data[c].superSegments(sigbins, score)
                if segs.shape[0] < 2:
                    log.debug('{0} ({1}): {2} segments'.format(s, c, segs.shape[0]))
                pool.append(segs)

            segs = pd.concat(pool, ignore_index=True)
            segs[['start', 'end']] = segs[['start', 'end']].astype(np.int64)
            segs['cum_FIRE_score'] = segs['cum_FIRE_score'].astype(float)
            self.segments[s] = segs

            cutoff = kneeCutoff(segs['cum_FIRE_score'].values)
            self.cutoffs[s] = cutoff
            if cutoff is None:
                log.warning('{0}: no FIRE is detected, super-FIRE list is empty'.format(s))
                out = segs
            else:
                out = segs[segs['cum_FIRE_score'] >= cutoff].reset_index(drop=True)
            out = out.assign(NegLog10Pvalue=np.round(out['cum_FIRE_score'].values / np.log(10), 4))
            log.debug('{0}: {1} of {2} segments retained, cutoff {3}'.format(
                s, out.shape[0], segs.shape[0], cutoff))
            self.superFIREs[s] = out

        return self.superFIREs

    def run(self, cpu_core=1):
        """
        Run the whole pipeline: cis scores, filtering, normalization,
        FIRE and super-FIRE calling.
        """
        self.calCis(cpu_core=cpu_core)
        self.filterBins()
        self.normalize()
        self.callFIREs()
        self.callSuperFIREs()
