"""
Structural events produced by the lexer, one group per logical source line.

The tree builder trusts their classification; it only makes nesting decisions.
"""
from typing import List, Optional, Union


class Event:
    __slots__ = ('line',)

    def __init__(self, line: int = 0):
        self.line = line

    def _fields(self) -> tuple:
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._fields() == other._fields()

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(repr(f) for f in self._fields())})"


class Indent(Event):
    __slots__ = ('width',)

    def __init__(self, width: int, line: int = 0):
        super().__init__(line)
        self.width = width

    def _fields(self):
        return (self.width,)


class Doctype(Event):
    __slots__ = ('text',)

    def __init__(self, text: str, line: int = 0):
        super().__init__(line)
        self.text = text

    def _fields(self):
        return (self.text,)


class IncludeTarget(Event):
    __slots__ = ('target',)

    def __init__(self, target: str, line: int = 0):
        super().__init__(line)
        self.target = target

    def _fields(self):
        return (self.target,)


class Comment(Event):
    __slots__ = ()


class Text(Event):
    __slots__ = ('text',)

    def __init__(self, text: str, line: int = 0):
        super().__init__(line)
        self.text = text

    def _fields(self):
        return (self.text,)


class EndOfInput(Event):
    __slots__ = ()


# --- Tag declaration sub-captures, kept in source order ---

class ElementName:
    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, ElementName) and self.name == other.name

    def __repr__(self):
        return f"ElementName({self.name!r})"


class ClassName:
    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, ClassName) and self.name == other.name

    def __repr__(self):
        return f"ClassName({self.name!r})"


class IdName:
    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, IdName) and self.name == other.name

    def __repr__(self):
        return f"IdName({self.name!r})"


class Attribute:
    """
    One entry of a parenthesised attribute list.

    `raw` is the value exactly as written, quotes included, or None for a
    boolean attribute written without `=`.
    """
    __slots__ = ('key', 'raw')

    def __init__(self, key: str, raw: Optional[str] = None):
        self.key = key
        self.raw = raw

    @property
    def value(self) -> str:
        """The value with one pair of matching outer quotes removed."""
        raw = self.raw
        if raw is None:
            return ''
        if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
            return raw[1:-1]
        return raw

    def __eq__(self, other):
        return isinstance(other, Attribute) and (self.key, self.raw) == (other.key, other.raw)

    def __repr__(self):
        return f"Attribute({self.key!r}, {self.raw!r})"


Capture = Union[ElementName, ClassName, IdName, Attribute]


class TagOpen(Event):
    __slots__ = ('captures',)

    def __init__(self, captures: List[Capture], line: int = 0):
        super().__init__(line)
        self.captures = list(captures)

    def _fields(self):
        return (self.captures,)
