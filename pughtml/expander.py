import logging
from typing import Callable, List

from .errors import IncludeCycleError, IncludeDepthError, IncludeError
from .nodes import Document, Element, Include, Node

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Node]

DEFAULT_MAX_INCLUDE_DEPTH = 32


class IncludeExpander:
    """
    Replaces every Include node with the tree its resolver returns, expanding
    the returned tree with the same resolver before splicing it in.

    A target that is still being expanded further up the include chain, or a
    chain longer than `max_depth`, aborts the expansion.
    """

    def __init__(self, resolve: Resolver, max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        self.resolve = resolve
        self.max_depth = max_depth
        self._chain: List[str] = []

    def expand(self, node: Node) -> Node:
        """Returns a fully expanded copy of `node`; `node` itself is not modified."""
        self._chain = []
        return self._expand(node)

    def _expand(self, node: Node) -> Node:
        if isinstance(node, Include):
            return self._expand_include(node.target)
        if isinstance(node, Document):
            return Document([self._expand(child) for child in node.children])
        if isinstance(node, Element):
            return Element(node.name, node.id, node.classes, node.attributes,
                           [self._expand(child) for child in node.children])
        return node

    def _expand_include(self, target: str) -> Node:
        if target in self._chain:
            raise IncludeCycleError(target, self._chain)
        if len(self._chain) >= self.max_depth:
            raise IncludeDepthError(target, self.max_depth)

        logger.debug("Resolving include '%s' (depth %d)", target, len(self._chain) + 1)
        try:
            resolved = self.resolve(target)
        except IncludeError:
            raise
        except Exception as e:
            raise IncludeError(target, f"Cannot include '{target}': {e}") from e
        if not isinstance(resolved, Node):
            raise IncludeError(
                target, f"Resolver returned {type(resolved).__name__} for '{target}', expected a Node")

        self._chain.append(target)
        try:
            return self._expand(resolved)
        finally:
            self._chain.pop()


def expand(node: Node, resolve: Resolver, max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH) -> Node:
    """Expands every include under `node` using `resolve`."""
    return IncludeExpander(resolve, max_depth).expand(node)
