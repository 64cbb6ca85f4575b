#!/usr/bin/env python
# encoding: utf-8

__all__ = [
        "BoltzmannError",
        "EmptySampleSet",
        "InvalidProbability",
        "ShapeMismatch",
    ]


class BoltzmannError(Exception):
    pass


class ShapeMismatch(BoltzmannError, ValueError):
    """
        Weights, biases or states whose dimensions do not agree with the
        number of visible/hidden units.
    """
    pass


class InvalidProbability(BoltzmannError, ValueError):
    """
        An activation outside of [0, 1] (or NaN) was handed to the binary
        sampler.
    """
    pass


class EmptySampleSet(BoltzmannError, UserWarning):
    """
        Issued (as warning) when training is invoked without any samples.
    """
    pass
