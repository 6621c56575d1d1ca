import argparse
import logging
import os
import sys
import time

from .compiler import FileIncludeResolver, PugCompiler
from .config import load_config
from .errors import ConfigError, PugError
from .watcher import run_watcher

logger = logging.getLogger('pughtml')


def compile_stdin(stdin=None, stdout=None) -> int:
    """Compiles a template read from stdin to stdout; includes resolve from the working directory."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    compiler = PugCompiler()
    compiler.resolver = FileIncludeResolver(os.getcwd(), compiler=compiler)
    try:
        html = compiler.compile(stdin.read())
        stdout.write(html + '\n')
        stdout.flush()
    except (PugError, OSError, UnicodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def watch(config_path: str):
    while True:
        try:
            run_watcher(load_config(config_path))
            return
        except ConfigError as e:
            logger.error("Error: %s", e)
            logger.error("Please check your configuration and try again, attempting to reload in 3 seconds...")
            time.sleep(3)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
                        prog='pughtml',
                        description='Compile Pug-style indented markup to HTML',
                        epilog='Without --watch, reads a template on stdin and writes HTML to stdout.')
    parser.add_argument('--watch', metavar='CONFIG',
                        help='YAML config listing templates to rebuild whenever they change')
    args = parser.parse_args(argv)

    if args.watch is None:
        return compile_stdin()

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')
    watch(args.watch)
    return 0


if __name__ == '__main__':
    sys.exit(main())
