import doctest
import unittest

from firelib.tests import testall
from firelib.fire import callers

class Test_doctests(unittest.TestCase):

    def test_testall(self):
        result = doctest.testmod(testall, optionflags=doctest.REPORT_ONLY_FIRST_FAILURE)
        self.assertEqual(result.failed, 0)
        self.assertTrue(result.attempted > 0)

    def test_callers(self):
        result = doctest.testmod(callers)
        self.assertEqual(result.failed, 0)
