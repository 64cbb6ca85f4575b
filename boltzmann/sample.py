#!/usr/bin/env python
# encoding: utf-8

import numpy as np

from .logcfg import log
from .errors import InvalidProbability

__all__ = [
        "create_seeded_rand",
        "sample_binary",
    ]


def create_seeded_rand(seed):
    """
        Deterministic random number generator for `seed`.

        Every training or sampling run owns one of these, the global numpy
        random state is never touched.
    """
    return np.random.RandomState(seed)


def sample_binary(prng, probs):
    """
        Draw an independent Bernoulli sample for each entry in `probs`.

        Returns a float array of zeros and ones with the shape of `probs`.
    """
    probs = np.asarray(probs, dtype=np.float64)

    # NaN fails both comparisons
    valid = (probs >= 0.) & (probs <= 1.)
    if not valid.all():
        msg = "Cannot sample from invalid probabilities: {}".format(
            probs[~valid])
        log.error(msg)
        raise InvalidProbability(msg)

    return (prng.random_sample(probs.shape) < probs).astype(np.float64)
