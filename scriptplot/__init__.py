from scriptplot.binding import PlotBindings, make_module
from scriptplot.commands import PlotCommand, PlotXY, Title, Xlim, Ylim
from scriptplot.config import RenderConfig, load_render_config
from scriptplot.errors import PlotConfigError, PlotError, PlotInputError, PlotRenderError
from scriptplot.interpreter import ChartState, render
from scriptplot.recorder import CommandRecorder
from scriptplot.session import PlotSession
from scriptplot.surface import ChartRegion, DrawingSurface, RasterSurface

__all__ = [
    "ChartRegion",
    "ChartState",
    "CommandRecorder",
    "DrawingSurface",
    "PlotBindings",
    "PlotCommand",
    "PlotConfigError",
    "PlotError",
    "PlotInputError",
    "PlotRenderError",
    "PlotSession",
    "PlotXY",
    "RasterSurface",
    "RenderConfig",
    "Title",
    "Xlim",
    "Ylim",
    "load_render_config",
    "make_module",
    "render",
]
