"""An ordered tree of tags and values, as produced by the XML parser."""

from __future__ import annotations

import bisect
import enum
import io
from dataclasses import dataclass, field
from typing import Iterator, Optional, TextIO


class NodeType(enum.Enum):
    """The role a node plays in an :class:`XmlTree`."""

    UNSPECIFIED = "unspecified"
    ROOT = "root"
    INTERMEDIATE = "intermediate"
    LEAF = "leaf"
    END = "end"


@dataclass(eq=False)
class XmlTreeNode:
    """A single node: a tag (intermediate) or a value (leaf)."""

    identifier: str = ""
    type: NodeType = NodeType.UNSPECIFIED
    parent: Optional["XmlTreeNode"] = None
    children: list["XmlTreeNode"] = field(default_factory=list)
    leaves: int = 0

    def find_child(self, tag: str) -> Optional["XmlTreeNode"]:
        """Return the first child named ``tag``, or None."""
        return next((c for c in self.children if c.identifier == tag), None)

    def next_sibling(self) -> Optional["XmlTreeNode"]:
        """Return the sibling that follows this node, or None."""
        if self.parent is None or self.type in (NodeType.ROOT, NodeType.END):
            return None
        siblings = self.parent.children
        position = siblings.index(self) + 1
        return siblings[position] if position < len(siblings) else None

    def _add_child(self, child: "XmlTreeNode") -> None:
        # Equal tags keep insertion order, new ones go after existing ones.
        position = bisect.bisect_right(
            self.children, child.identifier, key=lambda n: n.identifier
        )
        self.children.insert(position, child)


class XmlTreeCursor:
    """A position in an :class:`XmlTree`, moved in pre-order."""

    __slots__ = ("node",)

    def __init__(self, node: XmlTreeNode) -> None:
        self.node = node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XmlTreeCursor):
            return NotImplemented
        return self.node is other.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        return f"XmlTreeCursor({self.node.type.value}:{self.node.identifier!r})"

    @property
    def at_end(self) -> bool:
        return self.node.type is NodeType.END

    def advance(self) -> "XmlTreeCursor":
        """Move to the next node in pre-order; stay put at the end."""
        node = self.node
        if node.type is NodeType.END:
            return self
        if node.children:
            self.node = node.children[0]
            return self
        current = node
        while True:
            if current.type is NodeType.ROOT:
                self.node = current.parent
                return self
            sibling = current.next_sibling()
            if sibling is not None:
                self.node = sibling
                return self
            current = current.parent

    def descend(self, tag: str) -> "XmlTreeCursor":
        """Move to the first child named ``tag``, or to the end if none."""
        child = self.node.find_child(tag)
        if child is None:
            while self.node.type is not NodeType.END:
                self.node = self.node.parent
        else:
            self.node = child
        return self

    def ascend(self) -> "XmlTreeCursor":
        """Move to the parent node; the root ascends to the end."""
        if self.node.type is not NodeType.END:
            self.node = self.node.parent
        return self

    def leaf(self) -> str:
        """Return the value held by this node's leaf child."""
        for child in self.node.children:
            if child.type is NodeType.LEAF:
                return child.identifier
        raise LookupError(f"node {self.node.identifier!r} holds no value")

    def mapping(self) -> dict[str, str]:
        """Map each single-valued child tag to its first child's identifier."""
        result: dict[str, str] = {}
        for child in self.node.children:
            if child.leaves == 1 and child.children:
                result.setdefault(child.identifier, child.children[0].identifier)
        return result

    def copy(self) -> "XmlTreeCursor":
        return XmlTreeCursor(self.node)


def _clone(node: XmlTreeNode, parent: XmlTreeNode) -> XmlTreeNode:
    twin = XmlTreeNode(identifier=node.identifier, type=node.type, parent=parent)
    twin.children = [_clone(child, twin) for child in node.children]
    twin.leaves = sum(1 for c in twin.children if c.type is NodeType.LEAF)
    return twin


class XmlTree:
    """A tree with a root, tag nodes and at most one value leaf per tag."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._end = XmlTreeNode(type=NodeType.END)
        self._end.parent = self._end
        self._root = XmlTreeNode(type=NodeType.ROOT, parent=self._end)

    def __iter__(self) -> Iterator[XmlTreeNode]:
        """Yield every node below the root in pre-order."""
        cursor = self.begin().advance()
        while not cursor.at_end:
            yield cursor.node
            cursor.advance()

    def begin(self) -> XmlTreeCursor:
        return XmlTreeCursor(self._root)

    def end(self) -> XmlTreeCursor:
        return XmlTreeCursor(self._end)

    def insert(
        self,
        tag: str,
        base: Optional[XmlTreeCursor] = None,
        node_type: NodeType = NodeType.UNSPECIFIED,
    ) -> XmlTreeCursor:
        """Add ``tag`` below ``base`` and return a cursor on the new node.

        An unspecified type becomes a leaf if the parent has no value yet,
        otherwise an intermediate node.
        """
        if node_type in (NodeType.ROOT, NodeType.END):
            raise ValueError(f"cannot insert a node of type {node_type.value}")
        parent = self._root if base is None else base.node
        if parent.type is NodeType.END:
            raise ValueError("cannot insert at the end of the tree")

        if node_type is NodeType.UNSPECIFIED:
            node_type = NodeType.LEAF if parent.leaves == 0 else NodeType.INTERMEDIATE
        elif node_type is NodeType.LEAF and parent.leaves != 0:
            raise ValueError(f"node {parent.identifier!r} already holds a value")
        if node_type is NodeType.LEAF:
            parent.leaves += 1

        if parent.find_child(tag) is None and parent.type is NodeType.LEAF:
            parent.type = NodeType.INTERMEDIATE
            if parent.parent.leaves > 0:
                parent.parent.leaves -= 1

        node = XmlTreeNode(identifier=tag, type=node_type, parent=parent)
        parent._add_child(node)
        return XmlTreeCursor(node)

    def erase(self, cursor: XmlTreeCursor) -> XmlTreeCursor:
        """Remove the leaf under ``cursor``; return a cursor on the next node.

        The given cursor is moved to the end.
        """
        node = cursor.node
        if node.type is not NodeType.LEAF:
            raise ValueError("only leaf nodes can be erased")
        result = cursor.copy().advance()
        parent = node.parent
        parent.children.remove(node)
        if parent.leaves > 0:
            parent.leaves -= 1
        if not parent.children and parent.type is not NodeType.ROOT:
            parent.type = NodeType.LEAF
        cursor.node = self._end
        return result

    def clear(self) -> None:
        """Remove every node, leaving an empty tree."""
        self._reset()

    def copy(self) -> "XmlTree":
        """Return an independent copy of the whole tree."""
        tree = XmlTree()
        tree._root.identifier = self._root.identifier
        tree._root.children = [_clone(c, tree._root) for c in self._root.children]
        tree._root.leaves = sum(
            1 for c in tree._root.children if c.type is NodeType.LEAF
        )
        return tree

    def subtree(self, base: XmlTreeCursor) -> "XmlTree":
        """Return a new tree holding ``base`` and its descendants."""
        if base.node.type is NodeType.ROOT:
            return self.copy()
        tree = XmlTree()
        if base.node.type is NodeType.END:
            return tree
        tree._root.children = [_clone(base.node, tree._root)]
        if base.node.type is NodeType.LEAF:
            tree._root.leaves = 1
        return tree

    def write(self, stream: TextIO) -> None:
        """Write the tree as indented XML text."""
        self._write_children(self._root, 0, stream)

    def _write_children(self, node: XmlTreeNode, depth: int, stream: TextIO) -> None:
        tab = "\t" * depth
        for child in node.children:
            if child.type is NodeType.LEAF:
                stream.write(f"{tab}{child.identifier}\n")
            else:
                stream.write(f"{tab}<{child.identifier}>\n")
                self._write_children(child, depth + 1, stream)
                stream.write(f"{tab}</{child.identifier}>\n")

    def to_string(self) -> str:
        buffer = io.StringIO()
        self.write(buffer)
        return buffer.getvalue()