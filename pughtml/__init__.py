"""Compile Pug-style indented markup into HTML."""
from .builder import TreeBuilder, build
from .compiler import FileIncludeResolver, PugCompiler, compile_string
from .errors import (
    ConfigError, IncludeCycleError, IncludeDepthError, IncludeError, InternalError,
    OutputError, PugError, PugSyntaxError, UnexpandedIncludeError,
)
from .expander import IncludeExpander, expand
from .lexer import PugLexer, tokenize
from .nodes import VOID_ELEMENTS, Doctype, Document, Element, Include, Node, Text
from .serializer import HtmlSerializer, serialize, to_html

__version__ = "0.1.0"
