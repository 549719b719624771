"""Click CLI entry point.

Flags keep the single-dash spelling of the original Go tool
(``-f``, ``-mode``, ``-modified``) so existing editor integrations can
invoke this command unchanged; the ``--`` spellings work as well.
"""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click

from gooutline import __version__
from gooutline.config import DEFAULT_MODE, OutlineConfig, ParseMode

# Same layout as Go's log package: "2009/11/10 23:00:00 message".
LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send go-outline diagnostics to the current stderr.

    Replaces any handler installed by a previous call, so repeated
    in-process invocations never write to a stale stream.
    """
    logger = logging.getLogger("gooutline")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


@click.command("go-outline", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="go-outline")
@click.option("-f", "--file", "path", required=True, help="The path to the file to outline")
@click.option(
    "-mode",
    "--mode",
    "mode",
    type=click.IntRange(min=0),
    default=int(DEFAULT_MODE),
    show_default=True,
    help="Go parser mode bitmask (1 package clause only, 2 imports only, 4 comments, 8 trace)",
)
@click.option(
    "-modified",
    "--modified",
    "modified",
    is_flag=True,
    help="Read an archive of the modified file from standard input",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug diagnostics to stderr")
def cli(path, mode, modified, verbose):
    """Outline the top-level declarations of a Go file as JSON.

    Prints one JSON array of declarations (package, imports, functions,
    types, variables, constants) with their source positions. With
    -modified, the file content is taken from an overlay archive on stdin
    instead of the disk.

    \b
    Exit codes:
      0  Outline written to stdout.
      1  The file could not be read or parsed.
      2  Invalid arguments.

    \b
    Examples:
      go-outline -f main.go
      go-outline -f main.go -mode 2
      go-outline -f /abs/main.go -modified < archive.txt
    """
    configure_logging(verbose)

    from gooutline.api import outline
    from gooutline.output.formatter import encode_declarations

    config = OutlineConfig(path=path, mode=ParseMode.from_bits(mode), modified=modified)
    stdin = click.get_binary_stream("stdin") if config.modified else None
    decls = outline(config, stdin)
    click.echo(encode_declarations(decls))
