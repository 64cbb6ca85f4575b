#!/usr/bin/env python
# encoding: utf-8

"""
    Boltzmann - Restricted Boltzmann machines trained via contrastive
    divergence
"""

from .logcfg import log        # noqa: F401
from .version import __version__
__version__ = ".".join(map(str, __version__))

from . import config           # noqa: F401
from . import errors           # noqa: F401
from . import formulas         # noqa: F401
from . import io               # noqa: F401
from . import matrix           # noqa: F401
from . import meta             # noqa: F401
from . import protocols        # noqa: F401
from . import sample           # noqa: F401
from . import theoretical      # noqa: F401
from . import training         # noqa: F401
from . import utils            # noqa: F401

from .theoretical import TheoreticalRBM, create_theoretical_rbm  # noqa: F401
