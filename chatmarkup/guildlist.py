"""The list of guilds a user belongs to, kept as a tree of nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from chatmarkup.messageformat import escape


@dataclass(eq=False)
class TreeNode:
    """A node showing some text and referring to an object by its identifier."""

    text: str
    reference: Optional[str] = None
    children: list[TreeNode] = field(default_factory=list)
    selectable: bool = True

    def add_child(self, node: TreeNode) -> None:
        self.children.append(node)


class GuildList:
    """Guild nodes below an invisible root, selectable by the user."""

    def __init__(
        self,
        guilds: Iterable[tuple[str, str]] = (),
        on_guild_select: Optional[Callable[[TreeNode, str], None]] = None,
    ) -> None:
        self.root = TreeNode("")
        self.on_guild_select = on_guild_select
        self.current: Optional[TreeNode] = None
        for guild_id, name in guilds:
            # Guilds without a name are incomplete and not shown yet.
            if not name:
                continue
            self.add_guild(guild_id, name)
        if self.root.children:
            self.current = self.root

    @property
    def nodes(self) -> list[TreeNode]:
        return self.root.children

    def _find(self, guild_id: str) -> Optional[TreeNode]:
        return next((node for node in self.root.children if node.reference == guild_id), None)

    def add_guild(self, guild_id: str, name: str) -> TreeNode:
        """Append a node for the guild and return it."""
        node = TreeNode(escape(name), guild_id)
        self.root.add_child(node)
        return node

    def remove_guild(self, guild_id: str) -> None:
        """Remove the first node referring to the guild, if any."""
        node = self._find(guild_id)
        if node is not None:
            self.root.children.remove(node)

    def update_name(self, guild_id: str, new_name: str) -> None:
        """Change the shown name of the guild, if it is listed."""
        node = self._find(guild_id)
        if node is not None:
            node.text = escape(new_name)

    def select(self, node: TreeNode) -> None:
        """Make the node current and report the selected guild to the handler."""
        self.current = node
        if node.reference is not None and self.on_guild_select is not None:
            self.on_guild_select(node, node.reference)