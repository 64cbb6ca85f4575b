#!/usr/bin/env python
# encoding: utf-8

"""
    Conversion between the restricted weight format of RBMs and the full
    weight matrix of a general Boltzmann machine.

    Restricted weights have the shape (num_hidden, num_visible), the entry
    (i, j) couples hidden unit i with visible unit j.

    In the full format all units are enumerated with the visible units first,
    i.e. unit ids 0..num_visible-1 are visible and
    num_visible..num_visible+num_hidden-1 are hidden. The full matrix is
    symmetric and has a vanishing diagonal.
"""

import numpy as np

from .logcfg import log
from .errors import ShapeMismatch
from . import utils

__all__ = [
        "full_biases",
        "full_matrix",
        "restricted_matrix",
        "split_biases",
    ]


def full_matrix(restricted_weights):
    restricted_weights = np.asarray(restricted_weights, dtype=np.float64)
    if restricted_weights.ndim != 2:
        msg = "Restricted weights need to be 2-dimensional, got shape {}"\
            .format(restricted_weights.shape)
        log.error(msg)
        raise ShapeMismatch(msg)

    num_hidden, num_visible = restricted_weights.shape
    num_units = num_visible + num_hidden

    weights = np.zeros((num_units, num_units))
    weights[num_visible:, :num_visible] = restricted_weights
    weights[:num_visible, num_visible:] = restricted_weights.T

    return weights


def restricted_matrix(weights, num_visible):
    """
        Extract the visible<->hidden block from a full weight matrix.

        Connections within a layer are discarded (with a warning if they are
        not zero).
    """
    weights = np.asarray(weights, dtype=np.float64)
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
        msg = "Full weight matrix needs to be quadratic, got shape {}".format(
            weights.shape)
        log.error(msg)
        raise ShapeMismatch(msg)
    if not 0 < num_visible < weights.shape[0]:
        msg = "Cannot split {} units into {} visible units and a non-empty "\
            "hidden layer.".format(weights.shape[0], num_visible)
        log.error(msg)
        raise ShapeMismatch(msg)

    if not np.allclose(weights, weights.T):
        log.warning("Full weight matrix is not symmetric, using the "
                    "hidden->visible block.")

    intra_layer = utils.fill_diagonal(weights.copy(), 0.)
    intra_layer[num_visible:, :num_visible] = 0.
    intra_layer[:num_visible, num_visible:] = 0.
    if np.any(intra_layer != 0.):
        log.warning("Discarding intra-layer connections.")

    return weights[num_visible:, :num_visible].copy()


def full_biases(v_biases, h_biases):
    return np.r_[np.asarray(v_biases, dtype=np.float64),
                 np.asarray(h_biases, dtype=np.float64)]


def split_biases(biases, num_visible):
    biases = np.asarray(biases, dtype=np.float64)
    return biases[:num_visible].copy(), biases[num_visible:].copy()
