"""A minimal text editor model with a caret, a selection and mention tracking."""

from __future__ import annotations

from typing import Callable, Optional

from chatmarkup.textlayout import calculate_necessary_height

SELECTION_CHAR = "\u205f"
"""Placeholder shown as the caret when nothing is selected at the end of the text."""

_WORD_BREAKS = (" ", "\n")
_BORDER_ROWS = 2
_INITIAL_HEIGHT = 3


class Editor:
    """Text split into the part left of the selection, the selection and the rest.

    The selection is never empty: when the caret sits behind the last
    character it holds :data:`SELECTION_CHAR`.
    """

    def __init__(
        self,
        width: int = 80,
        *,
        on_mention_show: Optional[Callable[[str], None]] = None,
        on_mention_hide: Optional[Callable[[], None]] = None,
        on_height_change: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.width = width
        self.on_mention_show = on_mention_show
        self.on_mention_hide = on_mention_hide
        self.on_height_change = on_height_change
        self.left = ""
        self.selection = SELECTION_CHAR
        self.right = ""
        self.requested_height = _INITIAL_HEIGHT
        self._mention_begin = 0
        self._mention_end = 0

    @property
    def mention_indices(self) -> tuple[int, int]:
        """Start and end index of the mention currently being typed."""
        return self._mention_begin, self._mention_end

    def _set(self, left: str, selection: str, right: str, *, fix: bool = True) -> None:
        if fix and all(char == SELECTION_CHAR for char in selection):
            left = left.rstrip(SELECTION_CHAR)
            selection = SELECTION_CHAR
        self.left, self.selection, self.right = left, selection, right

    def _changed(self) -> None:
        self.update_mention()
        self._request_height()

    def _request_height(self) -> None:
        if self.on_height_change is None:
            return
        height = calculate_necessary_height(self.width, self.get_text()) + _BORDER_ROWS
        if height != self.requested_height:
            self.requested_height = height
            self.on_height_change(height)

    @staticmethod
    def _break_left_of(text: str) -> int:
        """Index of the last word break, ignoring the final character; 0 if none."""
        for index in range(len(text) - 2, -1, -1):
            if text[index] in _WORD_BREAKS:
                return index
        return 0

    @staticmethod
    def _break_right_of(text: str) -> int:
        """Index of the first word break after the first character; last index if none."""
        for index in range(1, len(text) - 1):
            if text[index] in _WORD_BREAKS:
                return index
        return len(text) - 1

    def _caret_free_selection(self) -> str:
        return "" if self.selection == SELECTION_CHAR else self.selection

    def move_cursor_left(self) -> None:
        """Move the caret one character to the left, collapsing the selection."""
        left, selection, right = self.left, self.selection, self.right
        if left:
            self._set(left[:-1], left[-1], self._caret_free_selection() + right, fix=False)
        elif selection:
            self._set("", selection[0], selection[1:] + right)
        self._changed()

    def move_cursor_right(self) -> None:
        """Move the caret one character to the right, collapsing the selection."""
        left, selection, right = self.left, self.selection, self.right
        if right:
            self._set(left + selection, right[0], right[1:])
        else:
            self._set(left + selection.removesuffix(SELECTION_CHAR), SELECTION_CHAR, "")
        self._changed()

    def expand_selection_to_left(self) -> None:
        """Grow the selection by the character left of it."""
        left, right = self.left, self.right
        if left:
            self._set(left[:-1], left[-1] + self._caret_free_selection(), right, fix=False)
        self._changed()

    def expand_selection_to_right(self) -> None:
        """Grow the selection by the character right of it."""
        left, selection, right = self.left, self.selection, self.right
        if right:
            self._set(left, selection + right[0], right[1:])
        elif selection.endswith(SELECTION_CHAR):
            self._set(left, selection, "")
        else:
            self._set(left, selection + SELECTION_CHAR, "")
        self._changed()

    def select_word_left(self) -> None:
        """Extend the selection to the start of the word left of it."""
        left, selection, right = self.left, self.selection, self.right
        if left:
            start = self._break_left_of(left)
            if start:
                self._set(left[: start + 1], left[start + 1 :] + selection, right)
            else:
                self._set("", left + selection, right)
        self._changed()

    def select_word_right(self) -> None:
        """Extend the selection to the end of the word right of it."""
        left, selection, right = self.left, self.selection, self.right
        if right:
            end = self._break_right_of(right)
            if end != len(right) - 1:
                self._set(left, selection + right[:end], right[end:])
            else:
                self._set(left, selection + right, "")
        self._changed()

    def move_cursor_word_left(self) -> None:
        """Move the caret to the word break left of it."""
        left, selection, right = self.left, self.selection, self.right
        if left:
            at = self._break_left_of(left)
            self._set(left[:at], left[at], left[at + 1 :] + selection + right)
        self._changed()

    def move_cursor_word_right(self) -> None:
        """Move the caret to the word break right of it."""
        left, selection, right = self.left, self.selection, self.right
        if right:
            at = self._break_right_of(right)
            if at != len(right) - 1:
                self._set(left + selection + right[:at], right[at], right[at + 1 :])
            else:
                self._set(left + selection + right, SELECTION_CHAR, "")
        self._changed()

    def select_all(self) -> None:
        """Select the whole text."""
        if self.left or self.right:
            self._set("", self.left + self.selection + self.right, "")
        self._changed()

    def delete_right(self) -> None:
        """Delete the selection, or the character under the caret."""
        left, selection, right = self.left, self.selection, self.right
        if selection.endswith(SELECTION_CHAR):
            self._set(left, SELECTION_CHAR, "")
        elif selection != SELECTION_CHAR:
            self._set(left, right[0] if right else SELECTION_CHAR, right[1:])
        self._changed()

    def backspace(self) -> None:
        """Delete the selection, or the character left of the caret."""
        left, selection, right = self.left, self.selection, self.right
        if len(selection) == 1 and left:
            self._set(left[:-1], selection, right, fix=False)
        elif len(selection) > 1:
            self._set(left, right[0] if right else SELECTION_CHAR, right[1:])
        self._changed()

    def insert_character(self, character: str) -> None:
        """Insert a character at the caret, replacing a multi-character selection."""
        if len(character) != 1:
            raise ValueError(f"expected a single character, got {character!r}")
        left, selection, right = self.left + character, self.selection, self.right
        if len(selection) == 1:
            self._set(left, selection, right)
        elif right:
            self._set(left, right[0], right[1:])
        else:
            self._set(left, SELECTION_CHAR, "")
        self._changed()

    def paste(self, content: str) -> None:
        """Insert pasted text at the caret, replacing a multi-character selection."""
        left, selection, right = self.left + content, self.selection, self.right
        if selection == SELECTION_CHAR:
            self._set(left, selection, "")
        elif len(selection) == 1:
            self._set(left, selection, right)
        elif right:
            self._set(left, right[0], right[1:])
        else:
            self._set(left, SELECTION_CHAR, "")
        self._request_height()

    def set_text(self, text: str) -> None:
        """Replace the content, placing the caret behind the last character."""
        self._set(text, SELECTION_CHAR, "", fix=False)
        self._request_height()

    def get_text(self) -> str:
        """Return the plain text without the caret placeholder."""
        if not self.right and self.selection == SELECTION_CHAR:
            return self.left
        return self.left + self.selection + self.right

    def find_at_symbol_index(self) -> int:
        """Index of the last '@' left of the caret that starts a word, or -1."""
        text = self.left
        for index in range(len(text) - 1, -1, -1):
            if text[index] == "@" and (index == 0 or text[index - 1] in _WORD_BREAKS):
                return index
        return -1

    def update_mention(self) -> None:
        """Notify the mention handlers whether a mention is being typed."""
        at = self.find_at_symbol_index()
        if at == -1:
            self._mention_begin = self._mention_end = 0
            if self.on_mention_hide is not None:
                self.on_mention_hide()
            return
        keyword = self.left[at + 1 :]
        self._mention_begin = at + 1
        self._mention_end = len(keyword) + at
        if self.on_mention_show is not None:
            self.on_mention_show(keyword)