from __future__ import annotations

import logging

from .commands import PlotCommand


LOGGER = logging.getLogger(__name__)


class CommandRecorder:
    """Ordered command log for a single owner.

    Each session owns its recorder; nothing is shared between owners, so no
    locking happens here. Payloads are stored as given: validation belongs to
    the scripting binding.
    """

    def __init__(self) -> None:
        self._commands: list[PlotCommand] = []

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def pending(self) -> tuple[PlotCommand, ...]:
        """Snapshot of the log without consuming it."""
        return tuple(self._commands)

    def append(self, command: PlotCommand) -> None:
        self._commands.append(command)

    def drain(self) -> list[PlotCommand]:
        """Hand over the current log and start a fresh, empty one."""
        commands, self._commands = self._commands, []
        LOGGER.debug("drained %d plot command(s)", len(commands))
        return commands
