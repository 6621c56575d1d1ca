from typing import Optional


class PugError(Exception):
    """Base class of every error raised while compiling a template."""


class PugSyntaxError(PugError, ValueError):
    """The template source does not match the surface grammar."""

    def __init__(self, message: str, line: int, column: Optional[int] = None):
        self.line = line
        self.column = column
        if column is None:
            where = f"Line {line}"
        else:
            where = f"Line {line}, Column {column}"
        super().__init__(f"Pug Syntax Error ({where}): {message}")


class IncludeError(PugError):
    """An include target could not be resolved."""

    def __init__(self, target: str, message: Optional[str] = None):
        self.target = target
        super().__init__(message or f"Cannot include '{target}'")


class IncludeCycleError(IncludeError):
    def __init__(self, target: str, chain):
        self.chain = list(chain)
        path = " -> ".join(self.chain + [target])
        super().__init__(target, f"Include cycle detected: {path}")


class IncludeDepthError(IncludeError):
    def __init__(self, target: str, max_depth: int):
        self.max_depth = max_depth
        super().__init__(target, f"Includes nested deeper than {max_depth} levels at '{target}'")


class OutputError(PugError, OSError):
    """Writing rendered HTML to the output sink failed."""


class InternalError(PugError, RuntimeError):
    """A tree or event stream that correct callers never produce."""


class UnexpandedIncludeError(InternalError):
    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Include '{target}' reached the serializer; expand the tree first")


class ConfigError(PugError, ValueError):
    """The watch configuration file is missing or malformed."""
