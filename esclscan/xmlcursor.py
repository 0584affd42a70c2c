"Forward-only cursor over an ElementTree, with scoped descent into children"

import re
from contextlib import contextmanager
from const import NAMESPACES


class XmlError(ValueError):
    "Raised for invalid node values or unbalanced traversal"


class XmlCursor:
    """Walk the siblings at one level of the tree at a time.

    The cursor keeps a stack of (siblings, index) pairs. enter() pushes the
    children of the current node, leave() pops back to the parent, leaving
    the cursor on the node that was entered. Loops advance with next().

    Prefer descend() or each_child() to calling enter() and leave() by hand,
    as they restore the stack even if the body raises."""

    def __init__(self, root, namespaces=None):
        self.namespaces = NAMESPACES if namespaces is None else namespaces
        self._stack = [([root], 0)]

    def __str__(self):
        return f"XmlCursor({self.name}, depth={self.depth})"

    @property
    def depth(self):
        "number of enter() calls not yet matched by leave()"
        return len(self._stack) - 1

    @property
    def node(self):
        "current element, or None at end of siblings"
        siblings, i = self._stack[-1]
        if i < len(siblings):
            return siblings[i]
        return None

    @property
    def name(self):
        "qualified name of the current node, e.g. scan:ColorMode"
        node = self.node
        if node is None:
            return None
        regex = re.search(r"^\{(.*)\}(.*)$", node.tag)
        if regex:
            for prefix, uri in self.namespaces.items():
                if uri == regex.group(1):
                    return f"{prefix}:{regex.group(2)}"
            return regex.group(2)
        return node.tag

    def at_end(self):
        "return whether there are no more siblings at the current depth"
        return self.node is None

    def next(self):
        "move to the next sibling"
        siblings, i = self._stack[-1]
        if i < len(siblings):
            self._stack[-1] = (siblings, i + 1)

    def enter(self):
        "descend into the children of the current node"
        node = self.node
        if node is None:
            raise XmlError("XML: cannot enter past the last node")
        self._stack.append((list(node), 0))

    def leave(self):
        "return to the parent of the current level"
        if len(self._stack) < 2:
            raise XmlError("XML: cannot leave the root node")
        self._stack.pop()

    @contextmanager
    def descend(self):
        "enter() the current node, and leave() it on exit from the block"
        self.enter()
        try:
            yield self
        finally:
            self.leave()

    def each_child(self):
        """an iterator over the children of the current node. The cursor is
        positioned on each child in turn and returned to the parent when the
        loop ends"""
        with self.descend():
            while not self.at_end():
                yield self
                self.next()

    def match(self, name):
        "return whether the current node has the given prefix:Local name"
        node = self.node
        if node is None:
            return False
        prefix, _sep, local = name.rpartition(":")
        if prefix:
            if prefix not in self.namespaces:
                return False
            return node.tag == f"{{{self.namespaces[prefix]}}}{local}"
        return node.tag == local

    def value(self):
        "text of the current node, stripped of surrounding whitespace"
        node = self.node
        if node is None or node.text is None:
            return ""
        return node.text.strip()

    def value_uint(self):
        "text of the current node as a non-negative integer"
        text = self.value()
        if not re.search(r"^\d+$", text, re.ASCII):
            raise XmlError(f"{self.name}: invalid numerical value")
        return int(text)
