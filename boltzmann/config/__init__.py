#!/usr/bin/env python
# encoding: utf-8

from .core import Data
from ..logcfg import log
from .. import io
from .. import training

__all__ = [
        "Data",
        "SamplingConfiguration",
        "TrainingConfiguration",
    ]


class TrainingConfiguration(Data):
    """
        Settings for a CD-k training run.

        If `learning_rate_tau` is set, the learning rate decays as
        learning_rate * tau / (tau + epoch), otherwise it stays constant.

        `snapshot_maxsize`/`snapshot_timeout` configure the channel created by
        `create_snapshot_channel`.
    """
    data_attribute_types = {
        "epochs": int,
        "k": int,
        "seed": int,
        "learning_rate": float,
        "learning_rate_tau": float,
        "snapshot_maxsize": int,
        "snapshot_timeout": float,
    }

    data_attribute_defaults = {
        "epochs": 1,
        "k": 1,
        "seed": 42,
        "learning_rate": 0.1,
        "learning_rate_tau": None,
        "snapshot_maxsize": 0,
        "snapshot_timeout": 0.,
    }

    def get_learning_rate_fn(self):
        if self.learning_rate_tau is None:
            return training.constant_rate(self.learning_rate)
        else:
            return training.inverse_decay_rate(self.learning_rate,
                                               self.learning_rate_tau)

    def create_snapshot_channel(self):
        log.debug("Creating snapshot channel (maxsize: {}, timeout: {}s)"
                  .format(self.snapshot_maxsize, self.snapshot_timeout))
        return io.SnapshotChannel(maxsize=self.snapshot_maxsize,
                                  timeout=self.snapshot_timeout)


class SamplingConfiguration(Data):
    data_attribute_types = {
        "iterations": int,
        "particles": int,
        "seed": int,
    }

    data_attribute_defaults = {
        "iterations": 100,
        "particles": 1,
        "seed": 42,
    }
