"""A command console: an output log plus an input line with history."""

from __future__ import annotations

from typing import Callable, Optional

from chatmarkup.editor import Editor

WELCOME_TEXT = (
    "[::b]### Welcome back. ###\n"
    "\tIf you need to know more, run the [::b]man[::-] command.\n"
)


class CommandView:
    """Holds the command output, the input editor and the command history.

    Confirmed commands are passed, stripped of surrounding whitespace, to
    ``on_execute`` and stored unstripped in the history, most recent last.
    """

    def __init__(self, on_execute: Callable[[str], None], *, width: int = 80) -> None:
        self.on_execute = on_execute
        self.input = Editor(width)
        self.output = WELCOME_TEXT
        self.history: list[str] = []
        self.visible = True
        self._history_index: Optional[int] = None

    @property
    def history_index(self) -> Optional[int]:
        """Position in the history being cycled through, or None."""
        return self._history_index

    def enter(self) -> None:
        """Run the command in the input line and record it in the history."""
        self._history_index = None
        command = self.input.get_text()
        if not command:
            return
        self.on_execute(command.strip())
        self.input.set_text("")
        self.history.append(command)

    def history_up(self) -> Optional[str]:
        """Recall the previous command; return it, or None when there is none."""
        if self._history_index is None:
            index = len(self.history) - 1
        else:
            index = self._history_index - 1
        if index < 0:
            self._history_index = None
            return None
        self._history_index = index
        command = self.history[index]
        self.input.set_text(command)
        return command

    def history_down(self) -> Optional[str]:
        """Recall the next command; return it, or None past the newest one."""
        last = len(self.history) - 1
        if self._history_index is None:
            index = 0
        elif self._history_index > last:
            index = 0
        else:
            index = self._history_index + 1
        if index > last:
            self._history_index = index
            return None
        self._history_index = index
        command = self.history[index]
        self.input.set_text(command)
        return command

    def write(self, text: str) -> int:
        """Append text to the output and return the number of characters written."""
        self.output += text.replace("\r\n", "\n")
        return len(text)