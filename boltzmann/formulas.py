#!/usr/bin/env python
# encoding: utf-8

"""
    Conditional probabilities of binary units.

    All functions are pure; `params` is anything that unpacks into
    (weights, v_biases, h_biases) with weights of shape
    (num_hidden, num_visible).
"""

import numpy as np

from .logcfg import log
from .errors import ShapeMismatch
from . import utils

__all__ = [
        "cond_prob",
        "cond_probs_full",
        "probs_h_given_v",
        "probs_v_given_h",
    ]


def cond_prob(weights, biases, other_state, index):
    """
        P(unit `index` = 1 | state of the other layer)

        `weights` has one row per unit of the layer `index` belongs to.
    """
    return float(utils.sigmoid(
        biases[index] + np.dot(weights[index], other_state)))


def cond_probs_full(weights, biases, state):
    """
        Conditional probabilities of all units at once, each given the state
        of all other units.

        Intended for the full (quadratic, zero diagonal) weight format.
    """
    state = np.asarray(state, dtype=np.float64)
    _check_state(weights, state)
    return utils.sigmoid(biases + weights.dot(state))


def probs_h_given_v(params, v_state):
    weights, v_biases, h_biases = params
    v_state = np.asarray(v_state, dtype=np.float64)
    _check_state(weights, v_state)
    return np.array([cond_prob(weights, h_biases, v_state, i)
                     for i in range(len(h_biases))])


def probs_v_given_h(params, h_state):
    weights, v_biases, h_biases = params
    h_state = np.asarray(h_state, dtype=np.float64)
    weights_t = weights.T
    _check_state(weights_t, h_state)
    return np.array([cond_prob(weights_t, v_biases, h_state, j)
                     for j in range(len(v_biases))])


def _check_state(weights, state):
    if state.shape != (weights.shape[1],):
        msg = "State of shape {} does not fit weights of shape {}".format(
            state.shape, weights.shape)
        log.error(msg)
        raise ShapeMismatch(msg)
