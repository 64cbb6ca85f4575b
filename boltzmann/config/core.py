#!/usr/bin/env python
# encoding: utf-8

import numpy as np
import copy
import os.path as osp
import json
from pprint import pformat as pf

from ..logcfg import log

__all__ = [
        "Data",
    ]


def join_base_dicts(bases, dct, attribute):
    """
        Join dictionaries from base classes and then update with dct.
    """
    joined = {}

    for d in (b.__dict__.get(attribute, {})
              for b in bases):
        joined.update(d)

    joined.update(dct.get(attribute, {}))

    return joined


class MetaData(type):
    """
        Meta class collecting the attribute types/defaults along the class
        hierarchy.
    """

    def __new__(cls, name, bases, dct):
        for attr in ["data_attribute_types", "data_attribute_defaults"]:
            dct[attr] = join_base_dicts(bases, dct, attribute=attr)

        return super(MetaData, cls).__new__(cls, name, bases, dct)


class Data(object, metaclass=MetaData):
    """
        Baseclass for all configuration objects.

        Subclasses declare their attributes in `data_attribute_types`
        (name -> type) and optionally `data_attribute_defaults`. Unspecified
        attributes fall back to their default (or None), setting undeclared
        attributes raises a ValueError.
    """
    # dict mapping data attribute names to types
    data_attribute_types = {}
    # dict for default values for unspecified attributes
    data_attribute_defaults = {}

    @classmethod
    def load(cls, filepath):
        log.debug("Loading {} from {}".format(cls.__name__, filepath))

        with open(filepath, "r") as f:
            datadict = json.load(f)

        if datadict.get("_type", cls.__name__) != cls.__name__:
            log.warning("Using json data for type {} to create type {}".format(
                datadict["_type"], cls.__name__))
        datadict.pop("_type", None)

        return cls(**datadict)

    def __init__(self, **attributes):
        self.from_dict(attributes)

        # set all those attributes that werent specified
        for name in self.data_attribute_types:
            if not hasattr(self, name):
                setattr(self, name, self.data_attribute_defaults.get(name))

    def __str__(self):
        return pf(self.to_dict())

    def __setattr__(self, name, value):
        """
            Make sure that the attribute we set is part of our default
            dictionary.
        """
        if name not in self.data_attribute_types:
            error_msg = "{} not part of {}'s data-attributes!".format(
                name, self.__class__.__name__)
            log.error(error_msg)
            raise ValueError(error_msg)

        desired_type = self.data_attribute_types[name]
        if value is not None and desired_type in (int, float):
            value = desired_type(value)
        elif value is not None and desired_type is np.ndarray:
            value = np.array(value)

        return object.__setattr__(self, name, value)

    def write(self, path):
        """
            Write as JSON to `path` (".json" is appended if missing) and
            return the path written to.
        """
        if osp.splitext(path)[1] != ".json":
            path += ".json"

        with open(path, "w") as f:
            json.dump(self.to_dict(), f,
                      ensure_ascii=False, indent=2)

        return path

    def copy(self):
        return self.__class__(**self.to_dict())

    def to_dict(self, with_type=True):
        """
            If `with_type` is True, the returned dictionary
            contains a special "_type" field and is JSON-compatible.
        """
        dikt = {d: self._convert_attr(d, with_type=with_type)
                for d in self.data_attribute_types}
        if with_type:
            dikt["_type"] = self.__class__.__name__
        return dikt

    def _convert_attr(self, name, with_type):
        d = getattr(self, name)

        if isinstance(d, np.ndarray):
            if with_type:
                return d.tolist()
            else:
                return d.copy()

        return copy.deepcopy(d)

    def from_dict(self, dikt):
        """
            Set attributes from `dikt`, unknown names raise a ValueError.
        """
        for name, d in dikt.items():
            if name == "_type":
                continue
            setattr(self, name, d)

    def __ne__(self, other):
        return not (self == other)

    def __eq__(self, other):
        if not isinstance(other, Data):
            return False

        return self.to_dict() == other.to_dict()

    __hash__ = None
