import unittest

import numpy as np
import pandas as pd
from scipy import sparse

from firelib.errors import InputFormatError
from firelib.fire.chromLev import Chrom

def makeBins(chrom, n, res):

    starts = np.arange(n) * res
    return pd.DataFrame({'chr':[chrom]*n, 'start':starts, 'end':starts + res,
                         'F':1.0, 'GC':1.0, 'M':1.0})

class Test_calCis(unittest.TestCase):

    def setUp(self):
        # res 100000 -> window of 2 bins on each side
        self.work = Chrom('chr1', 100000, makeBins('chr1', 6, 100000))
        self.M = np.arange(6)[:,None] * 10 + np.arange(6)
        self.expect = [30, 53, 88, 132, 112, 80]

    def test_window_size(self):
        self.assertEqual(self.work.binNum, 2)
        self.assertEqual(self.work.chromLen, 6)

    def test_boundary_and_interior(self):
        # bins 0-1: left edge; 2-3: interior; 4-5: right edge
        result = self.work.calCis(self.M, 'S')
        self.assertEqual(result.tolist(), self.expect)

    def test_hand_sums(self):
        result = self.work.calCis(self.M, 'S')
        # i=1: rows [0,1] + rows [1,3] of column 1, diagonal 0
        self.assertEqual(result[1], (1 + 0) + (0 + 21 + 31))
        # i=4: rows [4,5] + rows [2,4] of column 4
        self.assertEqual(result[4], (0 + 54) + (24 + 34 + 0))

    def test_diagonal_ignored(self):
        M = self.M.astype(float)
        M[np.diag_indices(6)] = 1000
        result = self.work.calCis(M, 'S')
        self.assertEqual(result.tolist(), self.expect)

    def test_sparse_input(self):
        result = self.work.calCis(sparse.csr_matrix(self.M), 'S')
        self.assertEqual(result.tolist(), self.expect)

    def test_nan_as_zero(self):
        M = self.M.astype(float)
        M[0, 1] = np.nan
        result = self.work.calCis(M, 'S')
        self.assertEqual(result[1], 53 - 1)

    def test_stored_by_sample(self):
        self.work.calCis(self.M, 'A')
        self.work.calCis(self.M * 2, 'B')
        table = self.work.cisTable(['A', 'B'])
        self.assertEqual(list(table.columns), ['chr', 'start', 'end', 'F', 'GC', 'M', 'A', 'B'])
        self.assertEqual(table['B'].tolist(), [2 * v for v in self.expect])

    def test_not_square(self):
        with self.assertRaises(InputFormatError):
            self.work.calCis(np.ones((6, 5)), 'S')

    def test_smaller_matrix(self):
        result = self.work.calCis(np.ones((4, 4)), 'S')
        self.assertTrue(np.isnan(result[4:]).all())
        self.assertFalse(np.isnan(result[:4]).any())

class Test_superSegments(unittest.TestCase):

    def setUp(self):
        self.work = Chrom('chr1', 10, makeBins('chr1', 10, 10))

    def sigbins(self, pairs, scores):
        return pd.DataFrame({'chr':'chr1', 'start':[p[0] for p in pairs],
                             'end':[p[1] for p in pairs], 'S_logpval':scores})

    def test_contiguous(self):
        segs = self.work.superSegments(self.sigbins([(30, 40), (40, 50), (50, 60)], [3, 4, 5]),
                                       'S_logpval')
        self.assertEqual(segs.shape[0], 1)
        self.assertEqual((segs['start'][0], segs['end'][0]), (30, 60))
        self.assertEqual(segs['cum_FIRE_score'][0], 12)

    def test_gap_equal_res_merges(self):
        segs = self.work.superSegments(self.sigbins([(0, 10), (20, 30)], [3, 4]), 'S_logpval')
        self.assertEqual(segs.shape[0], 1)
        self.assertEqual((segs['start'][0], segs['end'][0]), (0, 30))
        self.assertEqual(segs['cum_FIRE_score'][0], 7)

    def test_gap_over_res_splits(self):
        segs = self.work.superSegments(self.sigbins([(0, 10), (21, 31)], [3, 4]), 'S_logpval')
        self.assertEqual(segs.shape[0], 2)
        self.assertEqual(segs['cum_FIRE_score'].tolist(), [3, 4])

    def test_several_segments(self):
        pairs = [(0, 10), (10, 20), (50, 60), (60, 70), (90, 100)]
        segs = self.work.superSegments(self.sigbins(pairs, [1, 2, 3, 4, 5]), 'S_logpval')
        self.assertEqual(segs[['start', 'end']].values.tolist(), [[0, 20], [50, 70], [90, 100]])
        self.assertEqual(segs['cum_FIRE_score'].tolist(), [3, 7, 5])
        self.assertEqual(set(segs['chr']), {'chr1'})

    def test_single_bin(self):
        segs = self.work.superSegments(self.sigbins([(40, 50)], [3.5]), 'S_logpval')
        self.assertEqual(segs.shape[0], 1)
        self.assertEqual(segs['cum_FIRE_score'][0], 3.5)

    def test_no_bins(self):
        segs = self.work.superSegments(self.sigbins([], []), 'S_logpval')
        self.assertEqual(segs.shape[0], 0)
        self.assertEqual(list(segs.columns), ['chr', 'start', 'end', 'cum_FIRE_score'])
