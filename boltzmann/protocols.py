#!/usr/bin/env python
# encoding: utf-8

"""
    Capabilities of Boltzmann machines.

    A general Boltzmann machine exposes its full weight matrix and bias
    vector. Restricted machines additionally expose their bipartite
    structure. Training and sampling are separate capabilities so that
    machines can offer any combination of them.
"""

import abc

__all__ = [
        "BoltzmannMachine",
        "ContrastiveDivergence",
        "GibbsSampling",
        "RestrictedBoltzmannMachine",
    ]


class BoltzmannMachine(abc.ABC):

    @property
    @abc.abstractmethod
    def weights(self):
        """
            Full, symmetric weight matrix over all units.
        """

    @property
    @abc.abstractmethod
    def biases(self):
        """
            Biases of all units.
        """


class RestrictedBoltzmannMachine(BoltzmannMachine):

    @property
    @abc.abstractmethod
    def restricted_weights(self):
        """
            Weights of shape (num_hidden, num_visible).
        """

    @property
    @abc.abstractmethod
    def v_biases(self):
        pass

    @property
    @abc.abstractmethod
    def h_biases(self):
        pass


class ContrastiveDivergence(abc.ABC):

    @abc.abstractmethod
    def train_cd(self, batches, epochs, learning_rate_fn, k, seed,
                 snapshot_sink=None):
        """
            Return a new machine trained with CD-k on `batches`.
        """


class GibbsSampling(abc.ABC):

    @abc.abstractmethod
    def sample_gibbs(self, iterations, start_state, particles, seed):
        """
            Return a chain of `iterations + 1` states starting at
            `start_state`.
        """
