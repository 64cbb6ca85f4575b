#!/usr/bin/env python
# encoding: utf-8

import unittest

from test_formulas import TestConditionalProbabilities, TestMatrix, \
    TestSampleBinary
from test_io import TestConfiguration, TestEmitSnapshot, TestObserver, \
    TestSnapshotChannel
from test_theoretical import TestCreateTheoreticalRBM, TestTheoreticalRBM
from test_training import TestCalcUpdates, TestCD, TestEpoch, TestTrainCD, \
    TestUnpackBatches
from test_utils import TestLogException, TestLogging, TestUtils


all_tests = unittest.TestSuite([
    unittest.TestLoader().loadTestsFromTestCase(test_case)
    for test_case in [
        TestConditionalProbabilities,
        TestSampleBinary,
        TestMatrix,
        TestCD,
        TestCalcUpdates,
        TestEpoch,
        TestTrainCD,
        TestUnpackBatches,
        TestTheoreticalRBM,
        TestCreateTheoreticalRBM,
        TestSnapshotChannel,
        TestEmitSnapshot,
        TestObserver,
        TestConfiguration,
        TestLogException,
        TestUtils,
        TestLogging,
    ]
])


if __name__ == "__main__":
    unittest.TextTestRunner(verbosity=2).run(all_tests)
