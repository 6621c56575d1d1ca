import logging
from typing import Iterable, List, Optional, Tuple

from . import events as ev
from .errors import InternalError
from .nodes import Doctype, Document, Element, Include, Node, Text

logger = logging.getLogger(__name__)


class CommentMode:
    """
    Parser mode while inside a `//` comment block.

    Everything on lines indented deeper than `width` is swallowed; the first
    line at or below `width` ends the comment.
    """

    def __init__(self, width: int):
        self.width = width

    def suppresses(self, width: int) -> bool:
        return width > self.width

    def __repr__(self):
        return f"CommentMode({self.width})"


class TreeBuilder:
    """
    Tree Builder
    Folds the flat event stream into a nested Document.

    Open ancestors live on an explicit stack of (opening indent width, node)
    pairs while `current` is the node being filled. A new line closes every
    ancestor whose own indent is not strictly less than the line's indent, so
    one dedent may close several levels at once.
    """

    def __init__(self):
        self.current_indent: int = 0
        self.comment: Optional[CommentMode] = None
        self.stack: List[Tuple[int, Node]] = []
        self.current: Node = Document()

    def _reset(self):
        self.current_indent = 0
        self.comment = None
        self.stack = []
        self.current = Document()

    def _close(self):
        """Attaches `current` to the innermost open ancestor, which becomes current."""
        _, parent = self.stack.pop()
        parent.children.append(self.current)
        self.current = parent

    def build(self, events: Iterable[ev.Event]) -> Document:
        """Builds a Document from one pass over `events`."""
        self._reset()
        for event in events:
            if isinstance(event, ev.EndOfInput):
                break
            self._handle(event)

        while self.stack:
            self._close()
        document = self.current
        self._reset()
        return document

    def _handle(self, event: ev.Event):
        if isinstance(event, ev.Indent):
            self._on_indent(event.width)
        elif isinstance(event, ev.TagOpen):
            self._on_tag(event)
        elif isinstance(event, ev.Text):
            if self.comment is None:
                self.current.children.append(Text(event.text))
        elif isinstance(event, ev.Doctype):
            if self.comment is None:
                self.current.children.append(Doctype(event.text))
        elif isinstance(event, ev.IncludeTarget):
            if self.comment is None:
                self.current.children.append(Include(event.target))
        elif isinstance(event, ev.Comment):
            # nested comment markers keep the outer watermark
            if self.comment is None:
                self.comment = CommentMode(self.current_indent)
        else:
            raise InternalError(f"Tree builder does not handle event {event!r}")

    def _on_indent(self, width: int):
        if self.comment is not None:
            if self.comment.suppresses(width):
                return
            self.comment = None

        while self.stack and self.stack[-1][0] >= width:
            self._close()
        self.current_indent = width

    def _on_tag(self, event: ev.TagOpen):
        if self.comment is not None:
            return

        element = Element()
        for capture in event.captures:
            if isinstance(capture, ev.ElementName):
                element.name = capture.name
            elif isinstance(capture, ev.ClassName):
                element.classes.append(capture.name)
            elif isinstance(capture, ev.IdName):
                element.id = capture.name
            elif isinstance(capture, ev.Attribute):
                if capture.key == 'id':
                    element.id = capture.value
                elif capture.key == 'class':
                    element.classes.append(capture.value)
                else:
                    element.attributes.append((capture.key, capture.raw))
            else:
                raise InternalError(f"Unknown tag capture {capture!r} on line {event.line}")

        self.stack.append((self.current_indent, self.current))
        self.current = element


def build(events: Iterable[ev.Event]) -> Document:
    """Builds a Document tree from structural events."""
    document = TreeBuilder().build(events)
    logger.debug("Built document with %d top-level nodes", len(document.children))
    return document
