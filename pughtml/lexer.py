import re
import logging
from typing import List, Optional

from .errors import PugSyntaxError
from .events import (
    Attribute, ClassName, Comment, Doctype, ElementName, EndOfInput, Event,
    IdName, Indent, IncludeTarget, TagOpen, Text,
)

logger = logging.getLogger(__name__)

INDENT_RE = re.compile(r"[ \t]*")
DOCTYPE_RE = re.compile(r"doctype(?:[ \t]+(.*))?$")
INCLUDE_RE = re.compile(r"include(?:[ \t]+(.*))?$")
ELEMENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9_:-]*")
SHORTHAND_RE = re.compile(r"([.#])([A-Za-z0-9_-]+)")
ATTR_SEPARATOR_RE = re.compile(r"[\s,]*")
ATTR_KEY_RE = re.compile(r"[^\s=,()'\"]+")
ATTR_EQUALS_RE = re.compile(r"[ \t]*=[ \t]*")
ATTR_BARE_VALUE_RE = re.compile(r"[^\s,()]+")


class PugLexer:
    """
    Pug Lexer
    Turns template source into the flat stream of structural events consumed
    by the tree builder, one group of events per logical line.

    Recognised lines:
    - blank lines (no events at all)
    - `doctype <text>`
    - `include <target>`
    - `//` comments (the rest of the line is ignored)
    - `| text` piped text, one space after the pipe dropped
    - tag declarations: `name.class#id(key="value", flag) inline text`,
      where the attribute list may continue over several lines

    Every non-blank line starts with an Indent event measuring its leading
    whitespace in characters. Nesting is decided later, not here.
    """

    def __init__(self, source: str):
        self.source: str = source.replace('\r\n', '\n').replace('\r', '\n')
        self.pos: int = 0
        self.line_number: int = 1
        self.line_start: int = 0
        self.events: List[Event] = []

    def _fatal_error(self, message: str, pos: Optional[int] = None):
        """Raises a syntax error located at `pos` (default: current position)."""
        if pos is None:
            pos = self.pos
        raise PugSyntaxError(message, self.line_number, pos - self.line_start + 1)

    def _line_end(self, pos: int) -> int:
        end = self.source.find('\n', pos)
        return len(self.source) if end == -1 else end

    def _next_line(self, line_end: int):
        """Moves past the newline at `line_end`."""
        self.pos = line_end + 1
        self.line_number += 1
        self.line_start = self.pos

    def _advance_to(self, pos: int):
        """Moves to `pos`, keeping line bookkeeping for any newlines skipped."""
        skipped = self.source.count('\n', self.pos, pos)
        if skipped:
            self.line_number += skipped
            self.line_start = self.source.rfind('\n', self.pos, pos) + 1
        self.pos = pos

    def tokenize(self) -> List[Event]:
        """Lexes the whole source and returns its events, ending with EndOfInput."""
        source = self.source
        while self.pos < len(source):
            line_end = self._line_end(self.pos)
            if not source[self.pos:line_end].strip():
                self._next_line(line_end)
                continue

            indent = INDENT_RE.match(source, self.pos)
            self.events.append(Indent(len(indent.group(0)), self.line_number))
            self.pos = indent.end()
            self._lex_line(line_end)

        self.events.append(EndOfInput(self.line_number))
        return self.events

    def _lex_line(self, line_end: int):
        source = self.source
        line = self.line_number
        content = source[self.pos:line_end]

        if content.startswith('//'):
            self.events.append(Comment(line))
            self._next_line(line_end)
            return

        if content.startswith('|'):
            text = content[1:]
            if text.startswith(' '):
                text = text[1:]
            self.events.append(Text(text, line))
            self._next_line(line_end)
            return

        doctype = DOCTYPE_RE.match(content)
        if doctype:
            self.events.append(Doctype((doctype.group(1) or 'html').strip(), line))
            self._next_line(line_end)
            return

        include = INCLUDE_RE.match(content)
        if include:
            target = (include.group(1) or '').strip()
            if not target:
                self._fatal_error("Include target missing after 'include'.")
            self.events.append(IncludeTarget(target, line))
            self._next_line(line_end)
            return

        self._lex_tag()

    def _lex_tag(self):
        """Lexes a tag declaration starting at the current position."""
        source = self.source
        line = self.line_number
        captures = []

        element = ELEMENT_RE.match(source, self.pos)
        if element:
            captures.append(ElementName(element.group(0)))
            self.pos = element.end()

        while True:
            shorthand = SHORTHAND_RE.match(source, self.pos)
            if not shorthand:
                break
            if shorthand.group(1) == '.':
                captures.append(ClassName(shorthand.group(2)))
            else:
                captures.append(IdName(shorthand.group(2)))
            self.pos = shorthand.end()

        if not captures:
            self._fatal_error(
                "Expected a tag, '|' text, '//' comment, 'doctype' or 'include'.")

        if source.startswith('(', self.pos):
            captures.extend(self._lex_attributes())

        events: List[Event] = [TagOpen(captures, line)]

        line_end = self._line_end(self.pos)
        remainder = source[self.pos:line_end]
        if remainder:
            if remainder[0] not in ' \t':
                self._fatal_error(f"Unexpected character {remainder[0]!r} in tag declaration.")
            text = remainder[1:]
            if text:
                events.append(Text(text, self.line_number))

        self.events.extend(events)
        self._next_line(line_end)

    def _lex_attributes(self) -> List[Attribute]:
        """Lexes a parenthesised attribute list; the current position is at '('."""
        source = self.source
        open_pos, open_line, open_line_start = self.pos, self.line_number, self.line_start
        self.pos += 1
        attributes: List[Attribute] = []

        while True:
            self._advance_to(ATTR_SEPARATOR_RE.match(source, self.pos).end())
            if self.pos >= len(source):
                raise PugSyntaxError("Unterminated attribute list.",
                                     open_line, open_pos - open_line_start + 1)
            if source[self.pos] == ')':
                self.pos += 1
                return attributes

            key = ATTR_KEY_RE.match(source, self.pos)
            if not key:
                self._fatal_error(f"Invalid attribute name starting with {source[self.pos]!r}.")
            self.pos = key.end()

            equals = ATTR_EQUALS_RE.match(source, self.pos)
            if not equals:
                attributes.append(Attribute(key.group(0)))
                continue
            self.pos = equals.end()
            attributes.append(Attribute(key.group(0), self._lex_attribute_value(key.group(0))))

    def _lex_attribute_value(self, key: str) -> str:
        source = self.source
        start = self.pos
        quote = source[start:start + 1]
        if quote in ('"', "'"):
            end = source.find(quote, start + 1)
            if end == -1:
                self._fatal_error(f"Unterminated quoted value for attribute '{key}'.")
            self._advance_to(end + 1)
            return source[start:end + 1]

        value = ATTR_BARE_VALUE_RE.match(source, start)
        if not value:
            self._fatal_error(f"Missing value for attribute '{key}'.")
        self.pos = value.end()
        return value.group(0)


def tokenize(source: str) -> List[Event]:
    """Lexes template source into structural events."""
    events = PugLexer(source).tokenize()
    logger.debug("Lexed %d events", len(events))
    return events
