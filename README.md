# chatmarkup

This package provides building blocks for a terminal chat client. It draws nothing on screen.
Its output is text with inline style tags such as `[::b]`, `[::u]` and `[#ff0000]`. A text UI
layer that understands those tags renders the text.

## Modules

- `chatmarkup.colors`
  - `color_to_hex(color)` returns a lower-case `#rrggbb` string.
  - The colour can be a packed `0xRRGGBB` integer or an `(r, g, b)` tuple.
  - Values out of range raise `ValueError`.
- `chatmarkup.textlayout`
  - `calculate_necessary_height(width, text)` returns how many rows a text needs in a
    component of the given width.
  - Each line counts as one row. A line also gets one extra row for every full `width` of
    its UTF-8 bytes.
- `chatmarkup.markdown`
  - `parse_bold_and_underline(text)` turns `**bold**` and `__underline__` into `[::b]`,
    `[::u]` and `[::-]` tags. It leaves markers that are never closed as they are. It
    repeats open styles after each newline.
  - `remove_leading_whitespace_in_code(code)` strips the indentation that all non-empty
    lines share. It tries spaces first and tabs after that.
  - `trim_common_prefix(char, text)` does the same for one given character. It returns the
    trimmed text and the number of characters it removed from each line.
- `chatmarkup.messageformat`
  - `MessageFormatter.format_text(message)` renders a `Message` using a `Theme`. It handles:
    - the `@everyone` and `@here` mentions;
    - user, role and channel mentions;
    - attachments;
    - fenced code blocks;
    - bold and underline;
    - spoilers.

    Messages that are not ordinary messages get a one-line info text, for example a member
    joining.
  - Names for roles, channels and guild nicknames come from plain mappings that you pass to
    the formatter.
  - You can pass a `highlighter` callable for code blocks. The default, `plain_highlighter`,
    gives all code a single colour.
  - An optional `shorten` callable shortens long links.
  - Spoilers stay hidden until `toggle_spoiler(message_id)` reveals them.
  - `escape(text)` protects bracketed text from being read as a tag.
- `chatmarkup.editor`
  - `Editor` keeps its text in three parts: `left`, `selection` and `right`.
  - The selection is never empty. When the caret is at the end of the text, the selection
    holds the placeholder `SELECTION_CHAR`.
  - Editing methods:
    - moving the caret by character or by word;
    - extending the selection;
    - `select_all`;
    - `backspace` and `delete_right`;
    - `insert_character`;
    - `paste(content)`;
    - `set_text` and `get_text`.
  - `find_at_symbol_index` and `update_mention` detect an `@mention` as it is typed. The
    `on_mention_show` and `on_mention_hide` callbacks are called when one starts or ends.
  - `on_height_change` reports how many rows the text needs, borders included.
- `chatmarkup.commandview`
  - `CommandView` holds a command input (an `Editor`), an output text and a command history.
  - `enter()` runs the current command: it passes the text, stripped of surrounding
    whitespace, to `on_execute`.
  - `history_up()` and `history_down()` step through the earlier commands.
  - `write(text)` appends text to the output.
- `chatmarkup.guildlist`
  - `GuildList` keeps guilds as `TreeNode`s below a root node.
  - Methods:
    - `add_guild`;
    - `remove_guild`;
    - `update_name`;
    - `select(node)`, which calls `on_guild_select` with the node and the guild ID.
  - When guilds are passed in at construction, those with an empty name are skipped.

## Example

```python
from chatmarkup.markdown import parse_bold_and_underline
from chatmarkup.messageformat import Message, MessageFormatter

print(parse_bold_and_underline("**Hallo Welt**"))   # [::b]Hallo Welt[::-]

formatter = MessageFormatter()
print(formatter.format_text(Message(content="gimme ||secret stuff|| pls")))
```

The editor keeps its state as plain text:

```python
from chatmarkup.editor import Editor

editor = Editor()
for ch in "hi @al":
    editor.insert_character(ch)
editor.move_cursor_left()
print(editor.get_text())              # hi @al
print(editor.find_at_symbol_index())  # 3
```

## What the package does not do

The package contains no client. In particular, it:

- does not connect to a chat service;
- stores no messages;
- draws no screen;
- reads no keyboard input;
- does not touch the system clipboard;
- does not include a syntax highlighter or a link-shortening service.

The code that calls the package does all of these jobs. The clipboard text goes to
`Editor.paste`. The highlighting and link-shortening functions are passed to
`MessageFormatter`.

## Running the tests

```
pip install -e .[test]
pytest
```