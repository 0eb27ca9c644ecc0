"""Rendering of chat messages into terminal markup."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional

from chatmarkup.colors import Color, color_to_hex
from chatmarkup.markdown import parse_bold_and_underline, remove_leading_whitespace_in_code

MESSAGE_TYPE_DEFAULT = 0
MESSAGE_TYPE_RECIPIENT_ADD = 1
MESSAGE_TYPE_RECIPIENT_REMOVE = 2
MESSAGE_TYPE_CALL = 3
MESSAGE_TYPE_CHANNEL_NAME_CHANGE = 4
MESSAGE_TYPE_CHANNEL_ICON_CHANGE = 5
MESSAGE_TYPE_CHANNEL_PINNED_MESSAGE = 6
MESSAGE_TYPE_GUILD_MEMBER_JOIN = 7
MESSAGE_TYPE_CHANNEL_FOLLOW_ADD = 12

_MAX_MATCHES = 1000
_CODE_PREFIX = "[#c9dddc]▐ "
_FALLBACK_CODE_COLOR = "[#ffffff]"

_CODE_BLOCK = re.compile(r"(^|.)?(```(.*?)?\n(.+?)```)($|.)", re.S | re.M)
_COLOR_TAG = re.compile(r"\[#.{6}\]", re.S)
_CHANNEL_MENTION = re.compile(r"<#[0-9]*>")
_URL = re.compile(r"<?(https?://)(.+?)(/.+?)?(\Z|\s|\||>)", re.S | re.ASCII)
_SPOILER = re.compile(r"\|\|(.+?)\|\|", re.S)
_ROLE_MENTION = re.compile(r"<@&[0-9]*>")
_NON_ESCAPE = re.compile(r'(\[[a-zA-Z0-9_,;: \-."#]+\[*)\]')

_CODE_ESCAPES = str.maketrans({"*": "\\*", "_": "\\_", "|": "\\|"})

Highlighter = Callable[[str, str], str]


def plain_highlighter(code: str, language: str) -> str:
    """Return the code in a single plain colour, whatever its language."""
    return _FALLBACK_CODE_COLOR + code


def escape(text: str) -> str:
    """Escape bracketed sequences so they are not read as markup tags."""
    return _NON_ESCAPE.sub(r"\1[]", text)


def _replace_all(text: str, pairs: Iterable[tuple[str, str]]) -> str:
    """Replace all keys in one left-to-right pass; earlier keys win ties."""
    replacements: dict[str, str] = {}
    for old, new in pairs:
        if old:
            replacements.setdefault(old, new)
    if not replacements:
        return text
    pattern = re.compile("|".join(re.escape(old) for old in replacements))
    return pattern.sub(lambda match: replacements[match.group(0)], text)


@dataclass(frozen=True)
class Theme:
    """Colours used when rendering messages."""

    primary_text: Color = 0xFFFFFF
    attention: Color = 0xFFA500
    link: Color = 0x6495ED
    info_message: Color = 0x808080


@dataclass
class Message:
    """A chat message; ``mentions`` maps user IDs to user names in order."""

    id: str = ""
    content: str = ""
    guild_id: str = ""
    type: int = MESSAGE_TYPE_DEFAULT
    mentions: dict[str, str] = field(default_factory=dict)
    attachments: list[str] = field(default_factory=list)


class MessageFormatter:
    """Turns message content into coloured, styled markup text."""

    def __init__(
        self,
        theme: Optional[Theme] = None,
        *,
        own_user_id: str = "",
        role_names: Optional[Mapping[str, str]] = None,
        channel_names: Optional[Mapping[str, str]] = None,
        nicknames: Optional[Mapping[tuple[str, str], str]] = None,
        highlighter: Highlighter = plain_highlighter,
        shorten: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.theme = theme or Theme()
        self.own_user_id = own_user_id
        self.role_names = dict(role_names or {})
        self.channel_names = dict(channel_names or {})
        self.nicknames = dict(nicknames or {})
        self.highlighter = highlighter
        self.shorten = shorten
        self._revealed: set[str] = set()

    def toggle_spoiler(self, message_id: str) -> bool:
        """Flip whether spoilers of the message are shown; return the new state."""
        if message_id in self._revealed:
            self._revealed.discard(message_id)
            return False
        self._revealed.add(message_id)
        return True

    def format_text(self, message: Message) -> str:
        """Render the text part of a message according to its type."""
        if message.type == MESSAGE_TYPE_DEFAULT:
            return self._format_default(message)

        info = f"[{color_to_hex(self.theme.info_message)}]"
        if message.type == MESSAGE_TYPE_GUILD_MEMBER_JOIN:
            return info + "joined the server."
        if message.type == MESSAGE_TYPE_CALL:
            return info + "has started a call."
        if message.type == MESSAGE_TYPE_CHANNEL_ICON_CHANGE:
            return info + "changed the channel icon."
        if message.type == MESSAGE_TYPE_CHANNEL_NAME_CHANGE:
            return f"{info}changed the channel name to {message.content}."
        if message.type == MESSAGE_TYPE_CHANNEL_PINNED_MESSAGE:
            return info + "pinned a message."
        if message.type == MESSAGE_TYPE_RECIPIENT_ADD:
            return f"{info}added {self._first_mention(message)} to the group."
        if message.type == MESSAGE_TYPE_RECIPIENT_REMOVE:
            return f"{info}removed {self._first_mention(message)} from the group."
        if message.type == MESSAGE_TYPE_CHANNEL_FOLLOW_ADD:
            return f"{info}has added '{message.content}' to this channel"
        return info + "message couldn't be rendered."

    @staticmethod
    def _first_mention(message: Message) -> str:
        try:
            return next(iter(message.mentions.values()))
        except StopIteration:
            raise ValueError("message of this type must mention a user") from None

    def _display_name(self, guild_id: str, user_id: str, username: str) -> str:
        if guild_id:
            nickname = self.nicknames.get((guild_id, user_id), "")
            if nickname:
                return nickname
        return username

    def _format_default(self, message: Message) -> str:
        link = f"[{color_to_hex(self.theme.link)}]"
        primary = f"[{color_to_hex(self.theme.primary_text)}]"
        attention = f"[{color_to_hex(self.theme.attention)}]"

        text = escape(message.content)

        def render_role(match: re.Match[str]) -> str:
            role_id = match.group(0)[3:-1]
            name = self.role_names.get(role_id)
            return match.group(0) if name is None else f"{link}@{name}{primary}"

        text = _ROLE_MENTION.sub(render_role, text)
        text = _replace_all(
            text,
            [
                ("@everyone", f"{link}@everyone{primary}"),
                ("@here", f"{link}@here{primary}"),
            ],
        )

        for user_id, username in message.mentions.items():
            name = self._display_name(message.guild_id, user_id, username)
            color = attention if user_id == self.own_user_id else link
            replacement = f"{color}@{name}{primary}"
            text = _replace_all(
                text, [(f"<@{user_id}>", replacement), (f"<@!{user_id}>", replacement)]
            )

        def render_channel(match: re.Match[str]) -> str:
            channel_id = match.group(0)[2:-1]
            name = self.channel_names.get(channel_id)
            return match.group(0) if name is None else f"{link}#{name}{primary}"

        text = _CHANNEL_MENTION.sub(render_channel, text)

        if message.attachments:
            joined = " ".join(message.attachments)
            text = f"{text}\n{joined}" if text else joined

        if self.shorten is not None:
            text = self._shorten_links(text)

        text = self._render_code_blocks(text)

        text = _replace_all(
            parse_bold_and_underline(text),
            [("\\*", "*"), ("\\_", "_"), ("\\`", "`")],
        )

        if message.id not in self._revealed:
            hidden = f"{attention}!SPOILER!{primary}"
            text = _SPOILER.sub(lambda _match: hidden, text)
        return text.replace("\\|", "|")

    def _shorten_links(self, text: str) -> str:
        assert self.shorten is not None
        matches = list(_URL.finditer(text))[:_MAX_MATCHES]
        for match in matches:
            scheme, host, path, end = (group or "" for group in match.groups())
            new_url = scheme + host + path
            if len(host.encode("utf-8")) + 35 < len(new_url.encode("utf-8")):
                new_url = f"({host}) {self.shorten(new_url)}"
            new_url += end.removesuffix(">")
            text = text.replace(match.group(0), new_url, 1)
        return text

    def _render_code_blocks(self, text: str) -> str:
        blocks = list(_CODE_BLOCK.finditer(text))[:_MAX_MATCHES]
        for block in blocks:
            before = block.group(1) or ""
            whole = block.group(2)
            language = block.group(3) or ""
            after = block.group(5) or ""

            code = block.group(4).replace("\r", "").removesuffix("\n")
            code = remove_leading_whitespace_in_code(code)

            try:
                highlighted = self.highlighter(code, language)
            except ValueError:
                continue

            escaped = highlighted.translate(_CODE_ESCAPES)
            surplus = escaped.count("\n") - code.count("\n")
            for _ in range(max(surplus, 0)):
                escaped = escaped[: escaped.rfind("\n")]

            lines = escaped.split("\n")
            rendered = [_CODE_PREFIX + lines[0]]
            last_color = ""
            for previous, line in zip(lines, lines[1:]):
                colors = _COLOR_TAG.findall(previous)
                if colors:
                    last_color = colors[-1]
                rendered.append(_CODE_PREFIX + last_color + line)
            formatted = "\n".join(rendered)

            if before != "\n":
                formatted = "\n" + formatted
            if after and after != "\n":
                formatted += "\n"

            text = text.replace(whole, formatted, 1)
        return text