# -*- coding: utf-8 -*-
"""
Created on Mon Apr 08 11:02:17 2019

@author: XiaoTao Wang
"""

class FireError(Exception):
    """Base class of all errors raised by firelib."""
    pass

class InputFormatError(FireError, ValueError):
    """
    Bad annotation table, unknown genome build, malformed contact matrix or
    invalid flag value. Raised before any computation starts.
    """
    pass

class StatFitError(FireError, RuntimeError):
    """
    The Poisson regression of one sample could not be fitted.

    Parameters
    ----------
    sample : str
        Label of the failing sample.
    """
    def __init__(self, sample, message):

        self.sample = sample
        super(StatFitError, self).__init__('Sample {0}: {1}'.format(sample, message))
