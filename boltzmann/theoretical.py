#!/usr/bin/env python
# encoding: utf-8

import numpy as np

from .logcfg import log
from .errors import ShapeMismatch
from .formulas import cond_probs_full
from .sample import create_seeded_rand, sample_binary
from . import matrix
from . import meta
from . import protocols
from . import training

__all__ = [
        "TheoreticalRBM",
        "create_theoretical_rbm",
        "sample_with_configuration",
    ]


class TheoreticalRBM(protocols.RestrictedBoltzmannMachine,
                     protocols.ContrastiveDivergence,
                     protocols.GibbsSampling):
    """
        Restricted Boltzmann machine in theoretical units, trained via
        contrastive divergence in plain numpy.

        Instances are immutable, `train_cd` returns a new machine.
    """

    def __init__(self, restricted_weights, v_biases, h_biases):
        self._parameters = training.make_parameters(
                restricted_weights, v_biases, h_biases)

        self._weights = matrix.full_matrix(self._parameters.weights)
        self._weights.setflags(write=False)
        self._biases = matrix.full_biases(self._parameters.v_biases,
                                          self._parameters.h_biases)
        self._biases.setflags(write=False)

        log.debug("Created {} with {} visible and {} hidden units.".format(
            self.__class__.__name__, self.num_visible, self.num_hidden))

    ######################
    # regular attributes #
    ######################
    @property
    def parameters(self):
        """
            Read-only (weights, v_biases, h_biases) tuple with weights of
            shape (num_hidden, num_visible).
        """
        return self._parameters

    @property
    def restricted_weights(self):
        return self._parameters.weights

    @property
    def v_biases(self):
        return self._parameters.v_biases

    @property
    def h_biases(self):
        return self._parameters.h_biases

    @property
    def weights(self):
        """
            Full weight matrix, visible units first.
        """
        return self._weights

    @property
    def biases(self):
        return self._biases

    @property
    def num_visible(self):
        return self.v_biases.size

    @property
    def num_hidden(self):
        return self.h_biases.size

    @property
    def num_units(self):
        return self.num_visible + self.num_hidden

    def __repr__(self):
        return "{}(num_visible={}, num_hidden={})".format(
            self.__class__.__name__, self.num_visible, self.num_hidden)

    ############
    # training #
    ############
    def train_cd(self, batches, epochs, learning_rate_fn, k=1, seed=42,
                 snapshot_sink=None):
        """
            Train with CD-k and return the trained machine as new instance.

            batches:
                Sequence of visible probability vectors. Sequences of batches
                are flattened, every sample yields its own update.

            learning_rate_fn:
                Maps the epoch (starting at 1) to the learning rate.

            snapshot_sink:
                Receives the parameters after every update, see
                `io.emit_snapshot`.
        """
        params = training.train_cd(self.parameters, batches, epochs,
                                   learning_rate_fn, k, seed,
                                   snapshot_sink=snapshot_sink)
        return self.__class__(*params)

    ############
    # sampling #
    ############
    def sample_gibbs(self, iterations, start_state, particles=1, seed=42):
        """
            Run a free-running chain over all units for `iterations` steps.

            `start_state` covers all units (visible first). In each step every
            unit is resampled given the previous state of all units.

            Returns a list of `iterations + 1` states, the first of which is
            `start_state`.

            NOTE: Only a single chain is run, `particles` is accepted for
            interface compatibility.
        """
        start_state = np.array(start_state, dtype=np.float64)
        if start_state.shape != (self.num_units,):
            msg = "Start state of shape {} does not fit {} units.".format(
                start_state.shape, self.num_units)
            log.error(msg)
            raise ShapeMismatch(msg)
        if particles != 1:
            log.warning("Sampling multiple particles is not supported, "
                        "running a single chain.")

        weights = self.weights
        biases = self.biases
        prng = create_seeded_rand(seed)

        chain = [start_state]
        for _ in range(iterations):
            chain.append(sample_binary(prng,
                                       cond_probs_full(weights, biases,
                                                       chain[-1])))
        return chain

    ############
    # plotting #
    ############
    @meta.plot_function("weights_theo")
    def plot_weights(self, cmap="viridis", fig=None, ax=None):
        """
            Full weight matrix with the biases on the diagonal.
        """
        matrix_ = self.weights.copy()
        np.fill_diagonal(matrix_, self.biases)

        imshow = ax.imshow(matrix_, cmap=cmap, interpolation="nearest")
        cbar = fig.colorbar(imshow, ax=ax)
        cbar.set_label("theoretical values")

        ax.axhline(self.num_visible - .5, color="w", lw=.5)
        ax.axvline(self.num_visible - .5, color="w", lw=.5)

        ax.set_xlabel("unit id")
        ax.set_ylabel("unit id")


def create_theoretical_rbm(v_count, h_count, seed=None):
    """
        New RBM with weights and visible biases drawn from a normal
        distribution with standard deviation 0.01 / (v_count + h_count) and
        vanishing hidden biases.
    """
    prng = create_seeded_rand(seed)
    scaled_sd = 0.01 / (v_count + h_count)

    return TheoreticalRBM(
            prng.normal(0., scaled_sd, size=(h_count, v_count)),
            prng.normal(0., scaled_sd, size=v_count),
            np.zeros(h_count))


def sample_with_configuration(rbm, start_state, config):
    return rbm.sample_gibbs(config.iterations, start_state,
                            particles=config.particles, seed=config.seed)
