import logging
import posixpath
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .builder import build
from .errors import IncludeError
from .expander import DEFAULT_MAX_INCLUDE_DEPTH, IncludeExpander, Resolver
from .lexer import tokenize
from .nodes import Document, Element, Include, Node, Text, iter_includes
from .serializer import serialize, to_html

logger = logging.getLogger(__name__)


class PugCompiler:
    """
    Pug Compiler
    Compiles Pug-style indented markup to HTML.

    Features:
    - Indentation-based hierarchy, one dedent may close several tags
    - Tag shorthand: `tag.class#id(attr="value") inline text`
    - `| text` lines, adjacent ones joined by line breaks
    - `//` comments dropping the whole indented block below them
    - `doctype` declarations
    - `include` directives, resolved through a caller-supplied resolver
    - Void elements rendered without content or closing tag
    - No HTML escaping: text and attribute values are emitted as written
    """

    def __init__(self, resolver: Optional[Resolver] = None,
                 max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        self.resolver = resolver
        self.max_include_depth = max_include_depth

    def parse(self, source: str) -> Document:
        """Parses template source into an unexpanded Document."""
        return build(tokenize(source + '\n'))

    def expand(self, document: Node) -> Node:
        """Resolves every include in `document`."""
        if self.resolver is None:
            include = next(iter_includes(document), None)
            if include is not None:
                raise IncludeError(include.target,
                                   f"Cannot include '{include.target}': no include resolver configured")
            return document
        return IncludeExpander(self.resolver, self.max_include_depth).expand(document)

    def render(self, node: Node, sink: TextIO):
        """Writes an expanded tree to `sink`."""
        serialize(node, sink)

    def compile(self, source: str) -> str:
        """Compiles Pug source code to HTML."""
        return to_html(self.expand(self.parse(source)))


def compile_string(source: str, resolver: Optional[Resolver] = None) -> str:
    """Compiles `source` to HTML, resolving includes with `resolver`."""
    return PugCompiler(resolver).compile(source)


class FileIncludeResolver:
    """
    Resolves include targets to files under `base_dir`.

    A target without a suffix refers to a `.pug` template. Templates are
    parsed into Documents whose own include targets are rewritten relative to
    `base_dir`, so nested includes resolve against the including file.
    Any other file is included as raw text.
    """

    def __init__(self, base_dir, extensions: Sequence[str] = ('.pug', '.jade'),
                 compiler: Optional[PugCompiler] = None):
        self.base_dir = Path(base_dir).resolve()
        self.extensions = tuple(extensions)
        self.compiler = compiler or PugCompiler()

    def _path_for(self, target: str) -> Path:
        relative = posixpath.normpath(target.replace('\\', '/'))
        if not posixpath.splitext(relative)[1]:
            relative += self.extensions[0]
        path = (self.base_dir / relative).resolve()
        if path != self.base_dir and self.base_dir not in path.parents:
            raise IncludeError(target, f"Include '{target}' points outside of {self.base_dir}")
        return path

    def __call__(self, target: str) -> Node:
        path = self._path_for(target)
        logger.debug("Including %s", path)
        content = path.read_text(encoding='utf-8')

        if path.suffix not in self.extensions:
            if content.endswith('\n'):
                content = content[:-1]
            return Text(content)

        document = self.compiler.parse(content)
        directory = posixpath.dirname(path.relative_to(self.base_dir).as_posix())
        if directory:
            _rebase_includes(document, directory)
        return document


def _rebase_includes(node: Node, directory: str):
    for child in node.children:
        if isinstance(child, Include):
            child.target = posixpath.normpath(posixpath.join(directory, child.target))
        elif isinstance(child, (Document, Element)):
            _rebase_includes(child, directory)
