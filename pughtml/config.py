from pathlib import Path
from typing import Dict, Optional, Set

import yaml

from .errors import ConfigError
from .expander import DEFAULT_MAX_INCLUDE_DEPTH


class WatchConfig:
    """Settings for watch mode, read from a YAML file."""

    def __init__(self, write_pairs: Dict[Path, Path], header_paths: Set[Path] = None,
                 watch_paths: Set[Path] = None, include_dir: Optional[Path] = None,
                 max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        self.write_pairs = write_pairs      # {src template: dst html}
        self.header_paths = header_paths or set()   # compiled on change, never written
        self.watch_paths = watch_paths or set()     # only trigger rebuilds
        self.include_dir = include_dir
        self.max_include_depth = max_include_depth

    @property
    def source_paths(self) -> Set[Path]:
        return set(self.write_pairs) | self.header_paths | self.watch_paths


def _globs(cfg: dict, key: str, base_path: Path) -> Set[Path]:
    patterns = cfg.get(key) or []
    if isinstance(patterns, str):
        patterns = [patterns]
    if not isinstance(patterns, list):
        raise ConfigError(f"'{key}' must be a list of glob patterns")
    return {path for pattern in patterns for path in base_path.glob(str(pattern))}


def parse_config(cfg, base_path: Path = Path('.')) -> WatchConfig:
    """Validates a loaded YAML mapping and builds a WatchConfig from it."""
    if not isinstance(cfg, dict):
        raise ConfigError("Configuration must be a mapping")

    write = cfg.get('write')
    if not write or not isinstance(write, list):
        raise ConfigError("'write' must be a non-empty list of {src, dst} entries")
    write_pairs = {}
    for to_write in write:
        if not isinstance(to_write, dict) or 'src' not in to_write or 'dst' not in to_write:
            raise ConfigError(f"Invalid 'write' entry {to_write!r}: expected src and dst")
        write_pairs[base_path / to_write['src']] = base_path / to_write['dst']

    include_dir = cfg.get('include_dir')
    max_include_depth = cfg.get('max_include_depth', DEFAULT_MAX_INCLUDE_DEPTH)
    if not isinstance(max_include_depth, int) or isinstance(max_include_depth, bool) \
            or max_include_depth < 1:
        raise ConfigError("'max_include_depth' must be a positive integer")

    return WatchConfig(
        write_pairs,
        header_paths=_globs(cfg, 'headers', base_path),
        watch_paths=_globs(cfg, 'watch', base_path),
        include_dir=base_path / include_dir if include_dir else None,
        max_include_depth=max_include_depth,
    )


def load_config(path) -> WatchConfig:
    """Reads a YAML watch configuration; relative paths resolve from the working directory."""
    try:
        with open(path, "r") as f:
            cfg = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return parse_config(cfg)
