import pytest

from chatmarkup.colors import color_to_hex
from chatmarkup.messageformat import (
    MESSAGE_TYPE_CHANNEL_NAME_CHANGE,
    MESSAGE_TYPE_GUILD_MEMBER_JOIN,
    MESSAGE_TYPE_RECIPIENT_ADD,
    Message,
    MessageFormatter,
    Theme,
    escape,
    plain_highlighter,
)

THEME = Theme()
ATTENTION = "[" + color_to_hex(THEME.attention) + "]"
LINK = "[" + color_to_hex(THEME.link) + "]"
INFO = "[" + color_to_hex(THEME.info_message) + "]"
PRIMARY = "[#ffffff]"
SPOILER = ATTENTION + "!SPOILER!" + PRIMARY


CASES = [
    ("", ""),
    ("simple", "simple"),
    ("simple\nsimple", "simple\nsimple"),
    ("**simple**", "[::b]simple[::-]"),
    ("__simple__", "[::u]simple[::-]"),
    ("a **simple** b", "a [::b]simple[::-] b"),
    ("a __simple__ b", "a [::u]simple[::-] b"),
    ("a **__simple__** b", "a [::b][::bu]simple[::b][::-] b"),
    ("a **fat__simple__fat** b", "a [::b]fat[::bu]simple[::b]fat[::-] b"),
    (
        "a __underline**fat**underline__ b",
        "a [::u]underline[::ub]fat[::u]underline[::-] b",
    ),
    (
        "a __underline**fatunderline__ b",
        "a [::u]underline**fatunderline[::-] b",
    ),
    ("||simple||", SPOILER),
    ("gimme ||simple|| pls", "gimme " + SPOILER + " pls"),
    ("gimme ||**simple**|| pls", "gimme " + SPOILER + " pls"),
    ("owo ||spoiler", "owo ||spoiler"),
    ("gimme **||simple||** pls", "gimme [::b]" + SPOILER + "[::-] pls"),
    (
        "```\none\ntwo\nthree\n```",
        "\n[#c9dddc]▐ [#ffffff]one\n[#c9dddc]▐ [#ffffff]two\n[#c9dddc]▐ [#ffffff]three",
    ),
    ("test\n```\none\n```\ntest", "test\n[#c9dddc]▐ [#ffffff]one\ntest"),
    ("test```\none\n```test", "test\n[#c9dddc]▐ [#ffffff]one\ntest"),
    ("```\none\n```test", "\n[#c9dddc]▐ [#ffffff]one\ntest"),
    ("```\none\n```", "\n[#c9dddc]▐ [#ffffff]one"),
    ("```owowhatsthis\none\n```", "\n[#c9dddc]▐ [#ffffff]one"),
    (
        "```\none\n```\n```\none\n```",
        "\n[#c9dddc]▐ [#ffffff]one\n[#c9dddc]▐ [#ffffff]one",
    ),
    ("```\nowo ||Spoiler|| owo\n```", "\n[#c9dddc]▐ [#ffffff]owo ||Spoiler|| owo"),
    ("```\nowo **bold** owo\n```", "\n[#c9dddc]▐ [#ffffff]owo **bold** owo"),
    (
        "```\nowo __underline__ owo\n```",
        "\n[#c9dddc]▐ [#ffffff]owo __underline__ owo",
    ),
    ("||```\nowo\n```||", SPOILER),
    (
        "```\nowo\n```f```\nowo\n```",
        "\n[#c9dddc]▐ [#ffffff]owo\nf\n[#c9dddc]▐ [#ffffff]owo",
    ),
    ("\\`\\*\\_", "`*_"),
    ("\\\\`\\*\\_", "\\`*_"),
]


@pytest.mark.parametrize("content, expected", CASES)
def test_format_text_source_cases(content, expected):
    formatter = MessageFormatter()
    assert formatter.format_text(Message(id="OwO", content=content)) == expected


def test_revealed_spoiler_around_code_block():
    formatter = MessageFormatter()
    assert formatter.toggle_spoiler("OwO") is True
    message = Message(id="OwO", content="||```\nowo\n```||")
    assert formatter.format_text(message) == "||\n[#c9dddc]▐ [#ffffff]owo\n||"


def test_toggle_spoiler_twice_hides_again():
    formatter = MessageFormatter()
    formatter.toggle_spoiler("m1")
    assert formatter.toggle_spoiler("m1") is False
    assert formatter.format_text(Message(id="m1", content="||x||")) == SPOILER


def test_highlighter_receives_language():
    seen = []

    def highlighter(code, language):
        seen.append(language)
        return "[#efef8b]" + code

    formatter = MessageFormatter(highlighter=highlighter)
    result = formatter.format_text(Message(content="```go\none\n```"))
    assert result == "\n[#c9dddc]▐ [#efef8b]one"
    assert seen == ["go"]


def test_highlighter_trailing_newlines_are_trimmed_and_colour_carried():
    def highlighter(code, language):
        assert code == "one\n\n"
        return "[#ffffff]one[#ffffff]\n\n\n"

    formatter = MessageFormatter(highlighter=highlighter)
    result = formatter.format_text(Message(content="```cpp\none\n\n\n```"))
    assert result == "\n[#c9dddc]▐ [#ffffff]one[#ffffff]\n[#c9dddc]▐ [#ffffff]\n[#c9dddc]▐ [#ffffff]"


def test_highlighter_value_error_leaves_block_raw():
    def highlighter(code, language):
        raise ValueError("cannot tokenise")

    formatter = MessageFormatter(highlighter=highlighter)
    assert formatter.format_text(Message(content="```\none\n```")) == "```\none\n```"


def test_code_indentation_is_removed():
    formatter = MessageFormatter()
    result = formatter.format_text(Message(content="```\n  a\n    b\n```"))
    assert result == "\n[#c9dddc]▐ [#ffffff]a\n[#c9dddc]▐ [#ffffff]  b"


def test_plain_highlighter_ignores_language():
    assert plain_highlighter("x = 1", "python") == "[#ffffff]x = 1"
    assert plain_highlighter("x = 1", "") == "[#ffffff]x = 1"


def test_escape_brackets():
    assert escape("[red]") == "[red[]"
    assert escape("a [b] c") == "a [b[] c"
    assert escape("no tags") == "no tags"


def test_content_brackets_are_escaped():
    formatter = MessageFormatter()
    assert formatter.format_text(Message(content="[red]hi")) == "[red[]hi"


def test_everyone_and_here():
    formatter = MessageFormatter()
    result = formatter.format_text(Message(content="@everyone and @here"))
    assert result == f"{LINK}@everyone{PRIMARY} and {LINK}@here{PRIMARY}"


def test_role_mention_known_and_unknown():
    formatter = MessageFormatter(role_names={"11": "Mods"})
    result = formatter.format_text(Message(content="<@&11> <@&22>"))
    assert result == f"{LINK}@Mods{PRIMARY} <@&22>"


def test_channel_mention_known_and_unknown():
    formatter = MessageFormatter(channel_names={"5": "general"})
    result = formatter.format_text(Message(content="see <#5> and <#6>"))
    assert result == f"see {LINK}#general{PRIMARY} and <#6>"


def test_user_mentions_use_nickname_and_attention_for_self():
    formatter = MessageFormatter(
        own_user_id="1",
        nicknames={("g", "2"): "Nick"},
    )
    message = Message(
        content="<@1> <@!2>",
        guild_id="g",
        mentions={"1": "me", "2": "other"},
    )
    assert formatter.format_text(message) == f"{ATTENTION}@me{PRIMARY} {LINK}@Nick{PRIMARY}"


def test_nickname_ignored_without_guild():
    formatter = MessageFormatter(nicknames={("g", "2"): "Nick"})
    message = Message(content="<@2>", mentions={"2": "other"})
    assert formatter.format_text(message) == f"{LINK}@other{PRIMARY}"


def test_attachments_appended():
    formatter = MessageFormatter()
    message = Message(
        content="look",
        attachments=["https://cdn.example.com/a.png", "https://cdn.example.com/b.png"],
    )
    assert formatter.format_text(message) == (
        "look\nhttps://cdn.example.com/a.png https://cdn.example.com/b.png"
    )
    only = Message(attachments=["https://cdn.example.com/a.png"])
    assert formatter.format_text(only) == "https://cdn.example.com/a.png"


def test_long_links_are_shortened():
    shortened = []

    def shorten(url):
        shortened.append(url)
        return "https://short.example.com/1"

    formatter = MessageFormatter(shorten=shorten)
    url = "https://example.com/a/very/long/path/that/goes/on/and/on/forever"
    result = formatter.format_text(Message(content=f"see {url} ok"))
    assert result == "see (example.com) https://short.example.com/1 ok"
    assert shortened == [url]


def test_short_links_are_kept():
    def shorten(url):
        raise AssertionError("should not shorten")

    formatter = MessageFormatter(shorten=shorten)
    assert formatter.format_text(Message(content="https://example.com/x")) == "https://example.com/x"


def test_info_message_types():
    formatter = MessageFormatter()
    joined = Message(type=MESSAGE_TYPE_GUILD_MEMBER_JOIN)
    assert formatter.format_text(joined) == INFO + "joined the server."
    renamed = Message(type=MESSAGE_TYPE_CHANNEL_NAME_CHANGE, content="lobby")
    assert formatter.format_text(renamed) == INFO + "changed the channel name to lobby."
    added = Message(type=MESSAGE_TYPE_RECIPIENT_ADD, mentions={"9": "alice"})
    assert formatter.format_text(added) == INFO + "added alice to the group."


def test_unknown_type():
    formatter = MessageFormatter()
    assert formatter.format_text(Message(type=99)) == INFO + "message couldn't be rendered."


def test_recipient_add_without_mentions_raises():
    formatter = MessageFormatter()
    with pytest.raises(ValueError):
        formatter.format_text(Message(type=MESSAGE_TYPE_RECIPIENT_ADD))