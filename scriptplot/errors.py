from __future__ import annotations


class PlotError(Exception):
    """Base class for scriptplot failures."""


class PlotInputError(PlotError, ValueError):
    """Script supplied a value the binding could not coerce."""


class PlotRenderError(PlotError):
    """Drawing backend failed; the current render call is aborted."""


class PlotConfigError(PlotError, ValueError):
    pass
