"""
Document tree produced by the builder, rewritten by the include expander and
consumed by the HTML serializer.
"""
from typing import List, Optional, Sequence, Tuple

# Tags that never get a closing tag nor any content in the output.
VOID_ELEMENTS = frozenset([
    'area', 'base', 'br', 'col', 'command', 'embed', 'hr', 'img',
    'input', 'keygen', 'link', 'meta', 'param', 'source', 'track', 'wbr',
])


def is_void_element(name: str) -> bool:
    return name in VOID_ELEMENTS


class Node:
    """Base class of tree nodes; equality is structural."""

    children: Sequence['Node'] = ()

    def _fields(self) -> tuple:
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._fields() == other._fields()

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(repr(f) for f in self._fields())})"


class Document(Node):
    """Root of a template; renders nothing but its children."""

    def __init__(self, children: Optional[List[Node]] = None):
        self.children: List[Node] = list(children or [])

    def _fields(self):
        return (self.children,)


class Element(Node):
    def __init__(self, name: str = 'div', id: Optional[str] = None,
                 classes: Optional[List[str]] = None,
                 attributes: Optional[List[Tuple[str, Optional[str]]]] = None,
                 children: Optional[List[Node]] = None):
        self.name = name
        self.id = id
        self.classes: List[str] = list(classes or [])
        # (key, raw value text) pairs other than id/class, in declaration order
        self.attributes: List[Tuple[str, Optional[str]]] = list(attributes or [])
        self.children: List[Node] = list(children or [])

    @property
    def is_void(self) -> bool:
        return is_void_element(self.name)

    def _fields(self):
        return (self.name, self.id, self.classes, self.attributes, self.children)


class Text(Node):
    def __init__(self, text: str):
        self.text = text

    def _fields(self):
        return (self.text,)


class Doctype(Node):
    def __init__(self, text: str):
        self.text = text

    def _fields(self):
        return (self.text,)


class Include(Node):
    """Placeholder for an included template; must be expanded before rendering."""

    def __init__(self, target: str):
        self.target = target

    def _fields(self):
        return (self.target,)


def iter_includes(node: Node):
    """Yields every Include node under `node` in document order."""
    if isinstance(node, Include):
        yield node
        return
    for child in node.children:
        yield from iter_includes(child)
