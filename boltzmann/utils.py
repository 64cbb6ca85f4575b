#!/usr/bin/env python
# encoding: utf-8

import numpy as np
from scipy.special import expit
import collections as c
from collections import abc
import time

__all__ = [
    "check_list_array",
    "fill_diagonal",
    "format_time",
    "get_elapsed_str",
    "get_eta_str",
    "get_time_tuple",
    "sigmoid",
]


def sigmoid(x):
    """
        Logistic function, saturates to 0/1 instead of overflowing for large
        arguments.
    """
    return expit(x)


def fill_diagonal(array, value=0):
    """
        Fill the diagonal of `array` with `value`.
    """
    # ensure quadratic form
    for s in array.shape:
        assert s == array.shape[0]

    index = np.arange(array.shape[0], dtype=int)

    indices = tuple(index for s in array.shape)

    array[indices] = value

    return array


def check_list_array(obj):
    return isinstance(obj, abc.Sequence) or isinstance(obj, np.ndarray)


TimeTuple = c.namedtuple("duration", "d h m s ms".split())

# durations in seconds
TIME_DELTAS = TimeTuple(24*3600, 3600, 60, 1, .001)

def make_time_closure_writable(timediff):
    timediff = [timediff]
    def sub(s):
        # closures need mutable objects to write to, but
        # numbers in themselves are immutable
        t = timediff[0]
        timediff[0] = np.mod(t, s)
        return int(np.floor(t/s))
    return sub


def get_time_tuple(timediff):
    return TimeTuple(*map(make_time_closure_writable(timediff), TIME_DELTAS))


def format_time(timediff):
    fmtd = get_time_tuple(timediff)
    formatted = " ".join(
            ("{0}{1}".format(getattr(fmtd, s), s) for s in fmtd._fields
                if getattr(fmtd, s) > 0.))
    return formatted if len(formatted) > 0 else "0ms"


def get_eta_str(t_start, current, total):
    """
       Return the estimated time remaining as pre-formatted string.

       `t_start` is the actual time.time() when operations began, `current` is
       the amount of work already done and `total` is the total amount of work
       to do.

       Example:
           t_start = time.time()
           num_epochs = 10
           for i in range(num_epochs):
               # <do some work>
               get_eta_str(t_start, i, num_epochs)
    """
    t_elapsed = time.time() - t_start
    if current > 0 and current < total:
        return format_time(t_elapsed / current * (total - current))
    else:
        return "N/A"


def get_elapsed_str(t_start):
    """
        Return time elapsed from `t_start` as preformatted string.
    """
    return format_time(time.time() - t_start)
