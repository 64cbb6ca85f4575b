#!/usr/bin/env python
# encoding: utf-8

"""
    Streaming of snapshots to concurrently running observers.
"""

import json
import os.path as osp
import queue
import tempfile
import threading
import unittest

import matplotlib
matplotlib.use("Agg")

import numpy as np
from numpy.testing import assert_array_equal

import boltzmann
from boltzmann.io import (SnapshotChannel, SnapshotObserver, SnapshotRecorder,
                          emit_snapshot)

log = boltzmann.log


def example_rbm():
    return boltzmann.TheoreticalRBM(
            [[.3, -.2, .1],
             [-.4, .25, .15]],
            [.05, -.1, .2],
            [0., .1])


class TestSnapshotChannel(unittest.TestCase):

    def test_order(self):
        channel = SnapshotChannel()
        for i in range(10):
            self.assertTrue(channel.push(i))
        channel.close()

        self.assertEqual(list(channel), list(range(10)))
        self.assertEqual(channel.num_pushed, 10)
        self.assertEqual(channel.num_dropped, 0)

    def test_bounded_drops_without_blocking(self):
        channel = SnapshotChannel(maxsize=3)
        results = [channel.push(i) for i in range(5)]

        self.assertEqual(results, [True] * 3 + [False] * 2)
        self.assertEqual(len(channel), 3)
        self.assertEqual(channel.num_dropped, 2)

    def test_bounded_with_timeout(self):
        channel = SnapshotChannel(maxsize=1, timeout=.01)
        self.assertTrue(channel.push(0))
        self.assertFalse(channel.push(1))
        self.assertEqual(channel.get(timeout=1.), 0)

    def test_push_after_close(self):
        channel = SnapshotChannel()
        channel.close()
        with self.assertLogs(log, level="DEBUG") as logged:
            for i in range(5):
                self.assertFalse(channel.push(i))

        warnings = [r for r in logged.records if r.levelname == "WARNING"]
        self.assertEqual(len(warnings), 1)
        self.assertEqual(channel.num_dropped, 5)

    def test_iteration_waits_for_close(self):
        channel = SnapshotChannel(poll_interval=.01)
        received = []

        consumer = threading.Thread(
            target=lambda: received.extend(channel))
        consumer.start()

        for i in range(5):
            channel.push(i)
        channel.close()
        consumer.join(5.)

        self.assertFalse(consumer.is_alive())
        self.assertEqual(received, list(range(5)))


class TestEmitSnapshot(unittest.TestCase):

    def test_none(self):
        self.assertFalse(emit_snapshot(None, 1))

    def test_queue(self):
        sink = queue.Queue(maxsize=1)
        self.assertTrue(emit_snapshot(sink, 1))
        self.assertFalse(emit_snapshot(sink, 2))
        self.assertEqual(sink.get_nowait(), 1)

    def test_callable(self):
        received = []
        self.assertTrue(emit_snapshot(received.append, 1))
        self.assertEqual(received, [1])

    def test_unsupported(self):
        with self.assertRaises(TypeError):
            emit_snapshot(object(), 1)


class TestObserver(unittest.TestCase):

    def setUp(self):
        self.rbm = example_rbm()
        self.samples = [[1., 0., 1.], [0., 1., 1.], [1., 1., 0.]]

    def test_observer_receives_all_snapshots_in_order(self):
        expected = []
        self.rbm.train_cd(self.samples, 4, lambda epoch: .1, k=1, seed=42,
                          snapshot_sink=expected.append)

        channel = SnapshotChannel()
        recorder = SnapshotRecorder()
        with SnapshotObserver(channel, recorder) as observer:
            trained = self.rbm.train_cd(self.samples, 4, lambda epoch: .1,
                                        k=1, seed=42, snapshot_sink=channel)

        self.assertFalse(observer.is_alive())
        self.assertEqual(observer.num_received, 12)
        self.assertEqual(len(recorder), 12)
        self.assertEqual(recorder.indices, list(range(12)))
        for received, snapshot in zip(recorder.snapshots, expected):
            for a, b in zip(received, snapshot):
                assert_array_equal(a, b)
        assert_array_equal(recorder.weights[-1], trained.restricted_weights)

    def test_recorder_subsampling(self):
        recorder = SnapshotRecorder(steps_per_snapshot=5)
        snapshots = []

        def callback(snapshot):
            recorder(len(snapshots), snapshot)
            snapshots.append(snapshot)

        self.rbm.train_cd(self.samples, 4, lambda epoch: .1,
                          snapshot_sink=callback)

        self.assertEqual(recorder.indices, [0, 5, 10])
        self.assertEqual(recorder.weights.shape, (3, 2, 3))
        self.assertEqual(recorder.v_biases.shape, (3, 3))
        self.assertEqual(recorder.h_biases.shape, (3, 2))
        assert_array_equal(recorder.weights[1], snapshots[5].weights)

    def test_empty_recorder(self):
        recorder = SnapshotRecorder()
        self.assertEqual(len(recorder), 0)
        self.assertEqual(recorder.weights.size, 0)

    def test_recorder_rejects_invalid_step(self):
        with self.assertRaises(ValueError):
            SnapshotRecorder(steps_per_snapshot=0)

    def test_plot_weight_evolution(self):
        channel = SnapshotChannel()
        recorder = SnapshotRecorder(steps_per_snapshot=2)
        with SnapshotObserver(channel, recorder):
            self.rbm.train_cd(self.samples, 3, lambda epoch: .1,
                              snapshot_sink=channel)

        with tempfile.TemporaryDirectory() as folder:
            recorder.plot_weight_evolution(save=True, plotfolder=folder,
                                           plotname="evolution.png")
            self.assertTrue(osp.isfile(osp.join(folder, "evolution.png")))


class TestConfiguration(unittest.TestCase):

    def test_defaults(self):
        config = boltzmann.config.TrainingConfiguration()

        self.assertEqual(config.epochs, 1)
        self.assertEqual(config.k, 1)
        self.assertEqual(config.seed, 42)
        self.assertIsNone(config.learning_rate_tau)

    def test_unknown_attribute(self):
        config = boltzmann.config.TrainingConfiguration()
        with self.assertRaises(ValueError):
            config.momentum = .9

    def test_unknown_constructor_argument(self):
        with self.assertRaises(ValueError):
            boltzmann.config.TrainingConfiguration(momentum=.9)
        with self.assertRaises(ValueError):
            boltzmann.config.TrainingConfiguration(epoch=10)

    def test_load_rejects_unknown_key(self):
        with tempfile.TemporaryDirectory() as folder:
            path = osp.join(folder, "training.json")
            with open(path, "w") as f:
                json.dump({"epochs": 3, "momentum": .9}, f)

            with self.assertRaises(ValueError):
                boltzmann.config.TrainingConfiguration.load(path)

    def test_write_load(self):
        config = boltzmann.config.TrainingConfiguration(
            epochs=10, k=3, learning_rate=.05, learning_rate_tau=100.)

        with tempfile.TemporaryDirectory() as folder:
            path = config.write(osp.join(folder, "training"))
            self.assertTrue(path.endswith(".json"))
            loaded = boltzmann.config.TrainingConfiguration.load(path)

        self.assertEqual(loaded, config)
        self.assertNotEqual(loaded, boltzmann.config.TrainingConfiguration())

    def test_copy(self):
        config = boltzmann.config.SamplingConfiguration(iterations=5)
        copied = config.copy()

        self.assertEqual(copied, config)
        copied.iterations = 6
        self.assertEqual(config.iterations, 5)

    def test_type_conversion(self):
        config = boltzmann.config.TrainingConfiguration(epochs=3.0)
        self.assertIsInstance(config.epochs, int)

    def test_learning_rate_fn(self):
        constant = boltzmann.config.TrainingConfiguration(learning_rate=.3)
        self.assertEqual(constant.get_learning_rate_fn()(7), .3)

        decaying = boltzmann.config.TrainingConfiguration(
            learning_rate=1., learning_rate_tau=9.)
        fn = decaying.get_learning_rate_fn()
        self.assertAlmostEqual(fn(1), .9)
        self.assertAlmostEqual(fn(11), .45)

    def test_snapshot_channel(self):
        config = boltzmann.config.TrainingConfiguration(
            snapshot_maxsize=2, snapshot_timeout=.5)
        channel = config.create_snapshot_channel()

        self.assertIsInstance(channel, SnapshotChannel)
        self.assertEqual(channel.timeout, .5)

    def test_train_with_configuration(self):
        rbm = example_rbm()
        samples = [[1., 0., 1.], [0., 1., 1.]]
        config = boltzmann.config.TrainingConfiguration(
            epochs=3, k=2, seed=5, learning_rate=.1, learning_rate_tau=10.)

        trained = boltzmann.training.train_with_configuration(rbm, samples,
                                                              config)
        expected = rbm.train_cd(
            samples, 3, boltzmann.training.inverse_decay_rate(.1, 10.),
            k=2, seed=5)

        assert_array_equal(trained.restricted_weights,
                           expected.restricted_weights)
        assert_array_equal(trained.biases, expected.biases)

    def test_sample_with_configuration(self):
        rbm = example_rbm()
        config = boltzmann.config.SamplingConfiguration(iterations=7, seed=3)

        chain = boltzmann.theoretical.sample_with_configuration(
            rbm, np.zeros(5), config)

        self.assertEqual(len(chain), 8)
        for a, b in zip(chain, rbm.sample_gibbs(7, np.zeros(5), seed=3)):
            assert_array_equal(a, b)


if __name__ == "__main__":
    unittest.main()
