from __future__ import annotations

import builtins
from collections.abc import Mapping
import logging
from pathlib import Path
import types
from typing import Any

import numpy as np

from .binding import MODULE_NAME, PlotBindings, make_module
from .commands import PlotCommand
from .config import RenderConfig
from .interpreter import render
from .recorder import CommandRecorder
from .surface import DrawingSurface, RasterSurface
from .targets import MemoryTarget, PngFileTarget


LOGGER = logging.getLogger(__name__)


class PlotSession:
    """One script owner: its recorder, its ``pyplotter`` module, and its render cycle.

    Sessions never share state, so independent sessions may run on separate
    threads. A single session is not meant to be used from two threads at once.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.recorder = CommandRecorder()
        self.bindings = PlotBindings(self.recorder)
        self.module = make_module(self.bindings)

    def run_script(
        self,
        source: str,
        filename: str = "<script>",
        *,
        namespace: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute script code; ``import pyplotter`` inside it reaches this session.

        Exceptions raised by the script propagate unchanged. Commands recorded
        before the failure stay in the log.

        Only import statements compiled from ``source`` resolve ``pyplotter``.
        The module is never placed in ``sys.modules``, so
        ``importlib.import_module("pyplotter")`` and modules imported by the
        script that import ``pyplotter`` themselves raise
        ``ModuleNotFoundError``. Hand such helpers the module object instead,
        for example through ``namespace``.
        """
        code = compile(source, filename, "exec")
        scope: dict[str, Any] = {
            "__name__": "__main__",
            "__file__": filename,
            "__builtins__": self._script_builtins(),
        }
        if namespace:
            scope.update(namespace)
        exec(code, scope)
        LOGGER.debug("script %s recorded %d pending command(s)", filename, len(self.recorder))
        return scope

    def run_file(self, path: str | Path) -> dict[str, Any]:
        script_path = Path(path)
        if not script_path.exists():
            raise FileNotFoundError(f"plot script not found: {script_path}")
        return self.run_script(script_path.read_text(encoding="utf-8"), filename=str(script_path))

    def drain(self) -> list[PlotCommand]:
        return self.recorder.drain()

    def render(self, surface: DrawingSurface) -> list[PlotCommand]:
        """Drain the log and replay it onto ``surface``.

        The log is consumed even when rendering fails; the drained commands
        are returned on success.
        """
        commands = self.drain()
        render(surface, commands, config=self.config)
        return commands

    def render_to_file(self, path: str | Path, *, make_parents: bool = False) -> Path:
        target = PngFileTarget(path, make_parents=make_parents)
        self.render(RasterSurface(self.config, target))
        return target.path

    def render_to_array(self) -> np.ndarray:
        target = MemoryTarget()
        self.render(RasterSurface(self.config, target))
        return target.last_rgba().numpy()

    def _script_builtins(self) -> dict[str, Any]:
        real_import = builtins.__import__
        module = self.module

        def _import(name: str, globals=None, locals=None, fromlist=(), level: int = 0) -> types.ModuleType:
            if level == 0 and name == MODULE_NAME:
                return module
            return real_import(name, globals, locals, fromlist, level)

        scoped = dict(vars(builtins))
        scoped["__import__"] = _import
        return scoped
