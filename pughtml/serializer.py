import io
from typing import TextIO

from .errors import InternalError, OutputError, UnexpandedIncludeError
from .nodes import Doctype, Document, Element, Include, Node, Text


class HtmlSerializer:
    """
    Writes an expanded tree to `sink` as HTML.

    Adjacent Text siblings are joined with a line break; void elements get
    neither content nor a closing tag. Text and attribute values are written
    verbatim, with no escaping.
    """

    def __init__(self, sink: TextIO):
        self.sink = sink

    def _write(self, data: str):
        try:
            self.sink.write(data)
        except (OSError, ValueError) as e:
            raise OutputError(f"Failed to write HTML output: {e}") from e

    def serialize(self, node: Node):
        if isinstance(node, Element):
            self._element(node)
        elif isinstance(node, Include):
            raise UnexpandedIncludeError(node.target)
        elif isinstance(node, Document):
            self._children(node)
        elif isinstance(node, Text):
            self._write(node.text)
        elif isinstance(node, Doctype):
            self._write(f"<!DOCTYPE {node.text}>")
        else:
            raise InternalError(f"Cannot serialize {node!r}")

    def _children(self, node: Node):
        # Merge state is per parent: a nested Document (an expanded include)
        # starts fresh and never joins text with its surrounding siblings.
        previous_was_text = False
        for child in node.children:
            if isinstance(child, Text):
                if previous_was_text:
                    self._write('\n')
                previous_was_text = True
            else:
                previous_was_text = False
            self.serialize(child)

    def _element(self, element: Element):
        parts = ['<', element.name]
        if element.classes:
            parts.append(f' class="{" ".join(element.classes)}"')
        if element.id is not None:
            parts.append(f' id="{element.id}"')
        for key, raw in element.attributes:
            parts.append(f" {key}" if raw is None else f" {key}={raw}")
        parts.append('>')
        self._write(''.join(parts))

        if element.is_void:
            return
        self._children(element)
        self._write(f"</{element.name}>")


def serialize(node: Node, sink: TextIO):
    """Writes `node` as HTML to `sink`."""
    HtmlSerializer(sink).serialize(node)


def to_html(node: Node) -> str:
    """Returns `node` rendered as an HTML string."""
    buffer = io.StringIO()
    HtmlSerializer(buffer).serialize(node)
    return buffer.getvalue()
