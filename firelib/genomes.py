# -*- coding: utf-8 -*-
"""
Created on Mon Apr 08 11:20:45 2019

@author: XiaoTao Wang
"""
import collections
from firelib.errors import InputFormatError

# blacklist : list of (chrom, lower, upper) in base-pair unit
GenomeBuild = collections.namedtuple('GenomeBuild', ['name', 'autosomes', 'blacklist'])

builds = {
    'hg19': GenomeBuild('hg19', 22, [('chr6', 28477797, 33448354)]),
    'grch38': GenomeBuild('GRCh38', 22, [('chr6', 28510120, 33480577)]),
    'mm9': GenomeBuild('mm9', 19, [('chr17', 33888191, 35744546),
                                   ('chr17', 36230820, 38050373)]),
    'mm10': GenomeBuild('mm10', 19, [('chr17', 33681276, 38548659)])
    }

def get_build(gb):
    """
    Look up a genome build by name (case-insensitive).

    Raises
    ------
    InputFormatError
        If *gb* is not one of hg19, GRCh38, mm9 or mm10.
    """
    if isinstance(gb, GenomeBuild):
        return gb
    key = str(gb).lower()
    if not key in builds:
        raise InputFormatError('Unrecognized genome build: {0}, choose from {1}'.format(
            gb, ', '.join(b.name for b in builds.values())))
    
    return builds[key]

def chromosome_list(gb):
    """Autosome labels of a genome build, i.e. ``['chr1', ..., 'chrN']``."""
    build = get_build(gb)

    return ['chr{0}'.format(i) for i in range(1, build.autosomes + 1)]

def binsize_label(res):

    if res < 1000000:
        return '{0:g}KB'.format(res / 1000)
    else:
        return '{0:g}MB'.format(res / 1000000)
