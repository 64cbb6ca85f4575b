#!/usr/bin/env python
# encoding: utf-8

"""
    Decorators shared by the plotting and observer code.
"""

import matplotlib.pyplot as plt
import functools as ft
import os.path as osp

from .logcfg import log

__all__ = [
        "log_exception",
        "plot_function",
    ]


def plot_function(plotname, dpi=300):
    """
        Decorated plotting methods take `fig`/`ax` as keyword arguments and
        get fresh ones if they are not supplied.

        Additional keyword arguments understood by the wrapper:

            save:       write the figure to `plotname` (inside `plotfolder` if
                        given) and close it instead of showing it
            show:       show the figure if it was created here (default True)
            plotname:   overrides the default filename
            plotfolder: folder to save the figure to
    """
    def decorator(plot):
        @ft.wraps(plot)
        def wrapped(*args, **kwargs):
            save = kwargs.pop("save", False)
            filename = kwargs.pop("plotname", None) or plotname
            plotfolder = kwargs.pop("plotfolder", None)
            if plotfolder is not None:
                filename = osp.join(plotfolder, filename)

            # only show figures we created ourselves
            show = kwargs.pop("show", True) and not save\
                and kwargs.get("fig") is None

            if kwargs.get("fig") is None:
                kwargs["fig"] = plt.figure()
            fig = kwargs["fig"]
            if kwargs.get("ax") is None:
                kwargs["ax"] = fig.add_subplot(111)

            log.info("Plotting {}..".format(filename))
            retval = plot(*args, **kwargs)

            if save:
                fig.savefig(filename, dpi=dpi)
                plt.close(fig)
            elif show:
                fig.show()

            return retval

        return wrapped

    return decorator


def log_exception(f):
    """
        Log exceptions raised in `f` with traceback before passing them on.

        Used for observer threads, whose exceptions would otherwise only end
        up on stderr.
    """
    @ft.wraps(f)
    def wrapped(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except Exception:
            log.exception("Exception in {}:".format(f.__name__))
            raise
    return wrapped
