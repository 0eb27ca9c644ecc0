"""Chat message markup rendering, a region-based text editor and small chat UI models."""

__version__ = "0.1.0"
__all__ = ["colors", "textlayout", "markdown", "messageformat", "editor", "commandview", "guildlist"]