# -*- coding: utf-8 -*-
"""
Created on Mon Apr 08 14:36:09 2019

@author: XiaoTao Wang
"""
import os, logging
import numpy as np
import pandas as pd
from firelib.errors import InputFormatError

log = logging.getLogger(__name__)

mapcols = ['chr', 'start', 'end', 'F', 'GC', 'M']

def load_map(source_fil):
    """
    Load the bin annotation (mappability file) of a genome build,
    restriction enzyme and resolution.

    The file is whitespace-delimited (plain or gzipped), has a header line
    and exactly 6 columns::

        chr     start   end     F       GC      M
        chr1    0       40000   0       0       0
        chr1    40000   80000   48      0.4153  0.9847

    Parameters
    ----------
    source_fil : str
        Path to the annotation file.

    Returns
    -------
    table : pandas.DataFrame
        Columns "chr", "start", "end", "F", "GC" and "M".
    """
    source = os.path.abspath(os.path.expanduser(source_fil))
    if not os.path.exists(source):
        raise InputFormatError('Please enter a mappability file, {0} does not exist'.format(source_fil))

    table = pd.read_csv(source, sep=r'\s+', header=0)
    check_map(table)
    table.columns = mapcols
    table['chr'] = table['chr'].astype(str)

    log.debug('{0} bins loaded from {1}'.format(table.shape[0], source))

    return table

def check_map(table):
    """
    Validate the shape of a bin annotation table.

    Raises
    ------
    InputFormatError
        Empty table, wrong column number, or the first bin does not start
        at 0.
    """
    if table is None or table.shape[0] == 0:
        raise InputFormatError('Please enter a mappability file')
    if table.shape[1] != 6:
        raise InputFormatError('Mappability file should contain 6 columns: chr, start, '
                               'end, F, GC, M; got {0}'.format(table.shape[1]))
    if table.iloc[0, 1] != 0:
        raise InputFormatError('Start of the first bin should be 0 in the mappability file')

def resolution(table):

    return int(table.iloc[0, 2] - table.iloc[0, 1])

class DenseLoader(object):
    """
    Read gzipped N x N contact matrices in plain text.

    The matrix of sample *s* on chromosome *c* is expected at
    ``os.path.join(path, template.format(sample=s, chrom=c))``.
    """
    def __init__(self, template='{sample}_{chrom}.gz', path='.'):

        self.template = template
        self.path = path

    def __call__(self, sample, chrom):

        fil = os.path.join(self.path, self.template.format(sample=sample, chrom=chrom))
        log.debug('Loading {0} ...'.format(fil))
        M = pd.read_csv(fil, sep=r'\s+', header=None).values

        return M

class CoolerLoader(object):
    """
    Fetch intra-chromosomal contact matrices from cool URIs.

    Parameters
    ----------
    uris : dict, {sample:cool URI}

    balance : bool or str
        Passed to :py:meth:`cooler.Cooler.matrix`. FIRE scores are defined on
        raw counts, so the default is False.
    """
    def __init__(self, uris, balance=False):

        self.uris = uris
        self.balance = balance
        self._cache = {}

    def _cooler(self, sample):

        import cooler

        if not sample in self._cache:
            self._cache[sample] = cooler.Cooler(self.uris[sample])

        return self._cache[sample]

    def __call__(self, sample, chrom):

        lib = self._cooler(sample)
        if not chrom in lib.chromnames:
            # chromosome names without the "chr" prefix
            chrom = chrom[3:] if chrom.startswith('chr') else 'chr' + chrom
        log.debug('Fetching {0} of {1} ...'.format(chrom, self.uris[sample]))
        M = lib.matrix(balance=self.balance, sparse=True).fetch(chrom)

        return M

    def __getstate__(self):
        # cooler handles are reopened in subprocesses
        state = self.__dict__.copy()
        state['_cache'] = {}
        return state

def write_fire(table, filename, float_format='%.4f'):
    """
    Write the combined FIRE table: chr, start, end, then the score, log-p
    and indicator columns of every sample.
    """
    log.debug('Output FIRE scores to {0} ...'.format(filename))
    table.to_csv(filename, sep=' ', index=False, float_format=float_format)

def write_superfire(segments, filename, float_format='%.4f'):

    log.debug('Output super-FIREs to {0} ...'.format(filename))
    out = segments[['chr', 'start', 'end', 'NegLog10Pvalue']]
    out.to_csv(filename, sep='\t', index=False, float_format=float_format)

def read_fire(filename):
    """Read a table written by :py:func:`firelib.io.write_fire` back."""
    table = pd.read_csv(filename, sep=' ', header=0)
    table['chr'] = table['chr'].astype(str)
    table[['start', 'end']] = table[['start', 'end']].astype(np.int64)

    return table
