"""Programmatic Python API for outlining Go files in-process.

Editors and tools embedding go-outline can call these functions instead
of spawning a process per request. Errors are raised as the exceptions
in :mod:`gooutline.exit_codes`.
"""

from __future__ import annotations

from typing import BinaryIO

from gooutline.config import DEFAULT_MODE, OutlineConfig, ParseMode
from gooutline.index.parser import parse_file
from gooutline.languages.go_lang import GoExtractor
from gooutline.model import Declaration
from gooutline.overlay import resolve_source


def outline(config: OutlineConfig, stdin: BinaryIO | None = None) -> list[Declaration]:
    """Outline ``config.path``, reading the overlay archive from *stdin* if enabled."""
    source = resolve_source(config, stdin)
    parsed = parse_file(config.path, source, config.mode)
    return GoExtractor(trace=config.trace).extract_declarations(parsed)


def outline_source(
    source: bytes | str,
    path: str = "<input>",
    mode: ParseMode = DEFAULT_MODE,
) -> list[Declaration]:
    """Outline Go source held in memory; *path* is only used in messages."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    parsed = parse_file(path, source, mode)
    return GoExtractor(trace=bool(mode & ParseMode.TRACE)).extract_declarations(parsed)
