from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from typing import assert_never

from .commands import PlotCommand, PlotXY, Title, Xlim, Ylim
from .config import RenderConfig
from .errors import PlotRenderError
from .surface import DrawingSurface


LOGGER = logging.getLogger(__name__)


@dataclass
class ChartState:
    """Title and bounds in effect at the current point of a replay."""

    title: str = ""
    xlim: tuple[float, float] = (-1.0, 1.0)
    ylim: tuple[float, float] = (-1.0, 1.0)


def render(
    surface: DrawingSurface,
    commands: Iterable[PlotCommand],
    *,
    config: RenderConfig | None = None,
) -> None:
    """Replay ``commands`` in order onto ``surface`` and present the result.

    The surface is filled once before any command runs and presented once at
    the end, so an empty command list yields a blank frame. Every ``PlotXY``
    builds its own chart region from the title and bounds current at that
    point. The first backend failure stops the replay and is raised as
    :class:`PlotRenderError`; nothing is retried.

    Colours and the legend toggle come from ``config``, else from the
    surface's own ``config`` attribute, else from the defaults.
    """
    cfg = config or getattr(surface, "config", None) or RenderConfig()
    state = ChartState()
    index = -1
    try:
        surface.fill(cfg.background)
        for index, command in enumerate(commands):
            LOGGER.debug("replaying command %d: %r", index, command)
            _apply(surface, state, command, cfg)
        index = -1
        surface.present()
    except PlotRenderError as exc:
        _log_failure(index, exc)
        raise
    except AssertionError:
        raise
    except Exception as exc:
        _log_failure(index, exc)
        raise PlotRenderError(str(exc)) from exc


def _apply(surface: DrawingSurface, state: ChartState, command: PlotCommand, cfg: RenderConfig) -> None:
    if isinstance(command, Title):
        state.title = command.text
    elif isinstance(command, Xlim):
        state.xlim = (command.left, command.right)
    elif isinstance(command, Ylim):
        state.ylim = (command.bottom, command.top)
    elif isinstance(command, PlotXY):
        _draw_plot(surface, state, command, cfg)
    else:
        assert_never(command)


def _draw_plot(surface: DrawingSurface, state: ChartState, command: PlotXY, cfg: RenderConfig) -> None:
    chart = surface.build_chart(title=state.title, x_range=state.xlim, y_range=state.ylim)
    chart.draw_mesh()
    chart.draw_series(command.points(), cfg.accent_color, label=command.label)
    if cfg.draw_legend:
        chart.draw_series_labels(background=cfg.legend_background, border=cfg.legend_border)


def _log_failure(index: int, exc: Exception) -> None:
    if index >= 0:
        LOGGER.error("render aborted at command %d: %s", index, exc)
    else:
        LOGGER.error("render aborted: %s", exc)
