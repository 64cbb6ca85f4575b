#!/usr/bin/env python
# encoding: utf-8

"""
    Contrastive divergence (CD-k) training of restricted Boltzmann machines.

    Parameters are handled as read-only `Parameters` tuples
    (weights, v_biases, h_biases); every update creates a new tuple so that
    snapshots handed to observers are never modified afterwards.
"""

import collections as c
import numpy as np
import time
import warnings

from .logcfg import log
from .errors import EmptySampleSet, InvalidProbability, ShapeMismatch
from .formulas import probs_h_given_v, probs_v_given_h
from .sample import create_seeded_rand, sample_binary
from . import io
from . import utils

__all__ = [
        "Parameters",
        "calc_updates",
        "cd",
        "constant_rate",
        "inverse_decay_rate",
        "make_parameters",
        "train_cd",
        "train_cd_epoch",
        "train_with_configuration",
        "unpack_batches",
    ]


Parameters = c.namedtuple("Parameters", "weights v_biases h_biases")


def _freeze(array):
    array.setflags(write=False)
    return array


def make_parameters(weights, v_biases, h_biases):
    """
        Create a read-only Parameters-tuple from copies of the given values.

        Raises ShapeMismatch if weights are not of shape
        (len(h_biases), len(v_biases)).
    """
    weights = np.array(weights, dtype=np.float64)
    v_biases = np.array(v_biases, dtype=np.float64)
    h_biases = np.array(h_biases, dtype=np.float64)

    if v_biases.ndim != 1 or h_biases.ndim != 1:
        msg = "Biases need to be vectors, got shapes {} and {}".format(
            v_biases.shape, h_biases.shape)
        log.error(msg)
        raise ShapeMismatch(msg)

    expected_shape = (h_biases.size, v_biases.size)
    if weights.shape != expected_shape:
        msg = "Weight matrix shape {}, expected {}".format(weights.shape,
                                                           expected_shape)
        log.error(msg)
        raise ShapeMismatch(msg)

    return Parameters(_freeze(weights), _freeze(v_biases), _freeze(h_biases))


def constant_rate(rate):
    def learning_rate_fn(epoch):
        return rate
    return learning_rate_fn


def inverse_decay_rate(rate, tau):
    """
        Learning rate `rate * tau / (tau + epoch)`.
    """
    def learning_rate_fn(epoch):
        return rate * tau / (tau + epoch)
    return learning_rate_fn


def cd(params, v_data, h_data, duration, prng):
    """
        Implements contrastive divergence with `duration` steps (CD-k),
        a duration (k) = 1 is often used and performs reasonably.

        Returns the chain [v_data, h_data, v_1, h_1, ..., v_k, h_k] of length
        2 + 2k. Reconstructions are stored as probabilities, the binary states
        they are computed from are drawn freshly in every step.
    """
    if duration < 0:
        msg = "Number of CD steps must not be negative, got {}".format(
            duration)
        log.error(msg)
        raise ValueError(msg)

    chain = [v_data, h_data]
    for _ in range(duration):
        v_recon = probs_v_given_h(params, sample_binary(prng, chain[-1]))
        chain.append(v_recon)
        chain.append(probs_h_given_v(params, sample_binary(prng, v_recon)))
    return chain


def calc_updates(v_model, h_model, v_data, h_data):
    """
        Calculate the total updates on the model (usually calculated through a
        cd chain), approximating <v_data, h_data> - <v_model, h_model>.
    """
    v_model, h_model, v_data, h_data = (np.asarray(a, dtype=np.float64)
            for a in (v_model, h_model, v_data, h_data))
    return Parameters(
            np.outer(h_data, v_data) - np.outer(h_model, v_model),
            v_data - v_model,
            h_data - h_model)


def train_cd_epoch(params, samples, rate, k, prng, snapshot_sink=None):
    """
        One pass over `samples`, updating the parameters after every single
        sample.

        The positive phase uses the visible probabilities of the sample and
        the hidden probabilities computed from its binary sample, the negative
        phase the end of the CD-k chain.

        Every intermediate parameter set is emitted to `snapshot_sink`.
    """
    for v_probs in samples:
        v_data = sample_binary(prng, v_probs)
        h_probs = probs_h_given_v(params, v_data)
        h_data = sample_binary(prng, h_probs)
        chain = cd(params, v_data, h_data, k, prng)

        updates = calc_updates(chain[-2], chain[-1], v_probs, h_probs)

        params = Parameters(*(_freeze(p + rate * u)
                              for p, u in zip(params, updates)))

        io.emit_snapshot(snapshot_sink, params)

    return params


def unpack_batches(batches):
    """
        Turn a sequence of batches into a flat sequence of samples.

        If `batches` already is a sequence of samples it is returned as list.
    """
    batches = list(batches)

    datum = next((b for b in batches
                  if utils.check_list_array(b) and len(b) > 0), None)
    if datum is not None and utils.check_list_array(datum[0]):
        log.warning("Minibatch learning is an optimization and not "
                    "implemented for the theoretical RBM implementation. "
                    "Unpacking batches and training on singular samples.")
        return [sample for batch in batches for sample in batch]

    return batches


def train_cd(params, batches, epochs, learning_rate_fn, k, seed,
             snapshot_sink=None):
    """
        Train for `epochs` passes over all samples in `batches` with CD-k.

        learning_rate_fn:
            Called with the current epoch (starting at 1), returns the
            learning rate for that epoch. Plain numbers are used as constant
            learning rate.

        seed:
            Seed for the random number generator owned by this training run.
            Identical arguments yield identical results.

        snapshot_sink:
            Receives the parameters after every single update, see
            `io.emit_snapshot`.

        Returns the final Parameters. Inconsistent shapes are detected before
        any update takes place.
    """
    params = make_parameters(*params)
    num_visible = params.v_biases.size

    samples = _check_samples(unpack_batches(batches), num_visible)

    if len(samples) == 0:
        log.warning("No samples to train on, parameters stay unchanged.")
        warnings.warn("Training invoked without samples.", EmptySampleSet)
        return params

    if not callable(learning_rate_fn):
        learning_rate_fn = constant_rate(learning_rate_fn)

    prng = create_seeded_rand(seed)

    log.info("Training on {} samples for {} epochs with CD-{}.".format(
        len(samples), epochs, k))

    t_start = time.time()
    for epoch in range(1, epochs + 1):
        rate = learning_rate_fn(epoch)
        log.debug("Epoch #{}: learning rate {}".format(epoch, rate))

        params = train_cd_epoch(params, samples, rate, k, prng,
                                snapshot_sink=snapshot_sink)

        log.info("Epoch #{}/{} done. ETA: {}".format(
            epoch, epochs, utils.get_eta_str(t_start, epoch, epochs)))

    log.info("Training took {}.".format(utils.get_elapsed_str(t_start)))

    return params


def train_with_configuration(rbm, batches, config, snapshot_sink=None):
    """
        Train `rbm` according to a TrainingConfiguration.

        If no `snapshot_sink` is given, snapshots go nowhere.
    """
    return rbm.train_cd(batches,
                        epochs=config.epochs,
                        learning_rate_fn=config.get_learning_rate_fn(),
                        k=config.k,
                        seed=config.seed,
                        snapshot_sink=snapshot_sink)


def _check_samples(samples, num_visible):
    if len(samples) == 0:
        return samples

    try:
        array = np.array(samples, dtype=np.float64)
    except ValueError:
        msg = "Samples have inconsistent lengths."
        log.error(msg)
        raise ShapeMismatch(msg)

    if array.ndim != 2 or array.shape[1] != num_visible:
        msg = "Samples of shape {} do not fit {} visible units.".format(
            array.shape[1:], num_visible)
        log.error(msg)
        raise ShapeMismatch(msg)

    if not ((array >= 0.) & (array <= 1.)).all():
        msg = "Samples contain values outside of [0, 1]."
        log.error(msg)
        raise InvalidProbability(msg)

    return list(array)
