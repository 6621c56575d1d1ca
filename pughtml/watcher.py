from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
import logging
from pathlib import Path
from .compiler import FileIncludeResolver, PugCompiler
from .config import WatchConfig
from .errors import PugError

logger = logging.getLogger(__name__)


def compiler_for(config: WatchConfig, src: Path) -> PugCompiler:
    """Builds a compiler whose includes resolve from the include dir, or next to `src`."""
    include_dir = config.include_dir or src.parent
    compiler = PugCompiler(max_include_depth=config.max_include_depth)
    compiler.resolver = FileIncludeResolver(include_dir, compiler=compiler)
    return compiler


def trigger_recompile(config: WatchConfig) -> int:
    """Compiles every header and writes every src -> dst pair. Returns the number of failures."""
    failures = 0
    for h in sorted(config.header_paths):
        try:
            compiler_for(config, h).compile(h.read_text(encoding='utf-8'))
        except (PugError, OSError, UnicodeError) as e:
            logger.error("Failed to compile header %s: %s", h, e)
            failures += 1
    for (k, v) in config.write_pairs.items():
        try:
            html = compiler_for(config, k).compile(k.read_text(encoding='utf-8'))
            with open(v, "w+", encoding='utf-8') as f:
                f.write(html)
            logger.info("Wrote %s", v)
        except (PugError, OSError, UnicodeError) as e:
            logger.error("Failed to build %s -> %s: %s", k, v, e)
            failures += 1
    return failures


class ChangeHandler(FileSystemEventHandler):
    def __init__(self, config: WatchConfig):
        self.config = config
        self.files_to_watch = {x.resolve() for x in config.source_paths}
        logger.info("Handler initialized. Monitoring for changes...")

    def on_modified(self, event):
        if event.is_directory:
            return

        src_path_abs = Path(event.src_path).resolve()
        if src_path_abs in self.files_to_watch:
            logger.info("Detected modification in: %s", src_path_abs)
            trigger_recompile(self.config)

    on_created = on_modified


def run_watcher(config: WatchConfig):
    """Sets up and runs the watchdog observer."""
    dirs_to_watch = {p.resolve().parent for p in config.source_paths}

    if not dirs_to_watch:
        logger.error("No valid directories provided to watch.")
        return

    event_handler = ChangeHandler(config)
    observer = Observer()

    scheduled_count = 0
    for dir_path in sorted(dirs_to_watch):
        if not dir_path.is_dir():
            logger.warning("Directory '%s' does not exist. Cannot watch.", dir_path)
            continue

        # non-recursive: only files directly inside dir_path
        observer.schedule(event_handler, str(dir_path), recursive=False)
        scheduled_count += 1
        logger.info("Scheduled watcher for directory: %s", dir_path)

    if scheduled_count == 0:
        logger.error("No watchers were successfully scheduled. Exiting.")
        return

    trigger_recompile(config)
    observer.start()
    logger.info("Watching for file changes in %d director%s. Press Ctrl+C to stop.",
                scheduled_count, 'y' if scheduled_count == 1 else 'ies')

    try:
        while observer.is_alive():
            observer.join(timeout=1)
    except KeyboardInterrupt:
        logger.info("Stopping watcher (Ctrl+C pressed)...")
    finally:
        if observer.is_alive():
            observer.stop()
        observer.join()
        logger.info("Watcher stopped completely.")
