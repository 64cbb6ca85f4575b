#!/usr/bin/env python
# encoding: utf-8

"""
    Streaming of parameter snapshots from a running training to observers.

    Training pushes one snapshot per processed sample, observers consume them
    concurrently. Pushing never blocks for long: when a bounded channel is
    full, the snapshot is dropped. The result of a training never depends on
    whether snapshots were delivered.
"""

import numpy as np
import queue
import threading

from .logcfg import log
from . import meta

__all__ = [
        "SnapshotChannel",
        "SnapshotObserver",
        "SnapshotRecorder",
        "emit_snapshot",
    ]


class SnapshotChannel(object):
    """
        Ordered channel of parameter snapshots.

        maxsize:
            Maximum number of pending snapshots, 0 means unbounded.

        timeout:
            Seconds `push` waits for free capacity before dropping the
            snapshot. 0 drops immediately.

        poll_interval:
            Seconds a consumer waits between checks whether the channel was
            closed.
    """

    def __init__(self, maxsize=0, timeout=0., poll_interval=0.05):
        self._queue = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self.timeout = timeout
        self.poll_interval = poll_interval

        self.num_pushed = 0
        self.num_dropped = 0
        self._warned_closed = False

    def push(self, snapshot):
        """
            Returns True if the snapshot was enqueued.
        """
        if self.closed:
            self.num_dropped += 1
            if not self._warned_closed:
                log.warning("Pushing to closed snapshot channel, dropping "
                            "this and all further snapshots.")
                self._warned_closed = True
            else:
                log.debug("Dropped snapshot #{} on closed channel.".format(
                    self.num_pushed + self.num_dropped))
            return False

        try:
            if self.timeout > 0.:
                self._queue.put(snapshot, timeout=self.timeout)
            else:
                self._queue.put_nowait(snapshot)
        except queue.Full:
            self.num_dropped += 1
            log.debug("Snapshot channel full, dropped snapshot #{}.".format(
                self.num_pushed + self.num_dropped))
            return False

        self.num_pushed += 1
        return True

    def get(self, timeout=None):
        """
            Retrieve the next snapshot, raises queue.Empty after `timeout`.
        """
        return self._queue.get(timeout=timeout)

    def close(self):
        """
            Mark the end of the stream, pending snapshots can still be read.
        """
        self._closed.set()

    @property
    def closed(self):
        return self._closed.is_set()

    def __len__(self):
        return self._queue.qsize()

    def __iter__(self):
        """
            Yield snapshots in push order until the channel is closed and
            drained.
        """
        while True:
            try:
                yield self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                if self.closed and self._queue.empty():
                    return


def emit_snapshot(sink, snapshot):
    """
        Hand `snapshot` to `sink` without blocking the caller indefinitely.

        `sink` can be None, a SnapshotChannel, a queue.Queue or a callable.
    """
    if sink is None:
        return False

    if isinstance(sink, SnapshotChannel):
        return sink.push(snapshot)

    if isinstance(sink, queue.Queue):
        try:
            sink.put_nowait(snapshot)
        except queue.Full:
            log.debug("Snapshot queue full, dropping snapshot.")
            return False
        return True

    if callable(sink):
        sink(snapshot)
        return True

    raise TypeError("Unsupported snapshot sink: {}".format(type(sink)))


class SnapshotObserver(threading.Thread):
    """
        Consumes a SnapshotChannel in a background thread and calls
        `callback(index, snapshot)` for every snapshot in order.

        Typical usage:

            channel = SnapshotChannel()
            recorder = SnapshotRecorder(steps_per_snapshot=10)
            with SnapshotObserver(channel, recorder):
                rbm = rbm.train_cd(samples, ..., snapshot_sink=channel)
    """

    def __init__(self, channel, callback, name="SnapshotObserver"):
        super(SnapshotObserver, self).__init__(name=name)
        self.daemon = True
        self.channel = channel
        self.callback = callback
        self.num_received = 0

    @meta.log_exception
    def run(self):
        for snapshot in self.channel:
            self.callback(self.num_received, snapshot)
            self.num_received += 1
        log.debug("{} received {} snapshots.".format(
            self.name, self.num_received))

    def stop(self, timeout=None):
        """
            Close the channel and wait until all pending snapshots have been
            consumed.
        """
        self.channel.close()
        self.join(timeout)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()
        return False


class SnapshotRecorder(object):
    """
        Snapshot callback keeping copies of every `steps_per_snapshot`-th
        snapshot (the first one is always kept).
    """

    def __init__(self, steps_per_snapshot=1):
        if steps_per_snapshot < 1:
            msg = "steps_per_snapshot has to be positive, got {}".format(
                steps_per_snapshot)
            log.error(msg)
            raise ValueError(msg)
        self.steps_per_snapshot = steps_per_snapshot
        self.indices = []
        self._snapshots = []

    def __call__(self, index, snapshot):
        if index % self.steps_per_snapshot == 0:
            self.indices.append(index)
            self._snapshots.append(snapshot)

    def __len__(self):
        return len(self._snapshots)

    @property
    def snapshots(self):
        return list(self._snapshots)

    @property
    def weights(self):
        return self._stack(0)

    @property
    def v_biases(self):
        return self._stack(1)

    @property
    def h_biases(self):
        return self._stack(2)

    @meta.plot_function("weight_evolution")
    def plot_weight_evolution(self, fig=None, ax=None):
        """
            Plot the trajectory of every restricted weight over the recorded
            snapshots.
        """
        if len(self) == 0:
            log.warning("No snapshots recorded, nothing to plot.")
            return

        weights = self.weights.reshape(len(self), -1)
        ax.plot(self.indices, weights, lw=.5)
        ax.set_xlabel("update")
        ax.set_ylabel("weight")

    def _stack(self, idx):
        if len(self._snapshots) == 0:
            return np.array([])
        return np.array([s[idx] for s in self._snapshots])
