"""Shared test fixtures and helpers for go-outline tests.

Provides:
- Source helpers: outline_text(), span_of(), make_archive()
- File fixture: go_file factory writing Go sources under tmp_path
- CliRunner fixtures: cli_runner, invoke_cli()
- JSON validation helper: parse_json_output()
"""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

# ===========================================================================
# Source helpers
# ===========================================================================


def outline_text(source, mode=None):
    """Outline Go source text in-process and return the declaration list."""
    from gooutline.api import outline_source
    from gooutline.config import DEFAULT_MODE

    return outline_source(source, "test.go", DEFAULT_MODE if mode is None else mode)


def span_of(source: str, text: str, occurrence: int = 1) -> tuple[int, int]:
    """Return the (start, end) source positions of *text* inside ASCII *source*."""
    idx = -1
    for _ in range(occurrence):
        idx = source.index(text, idx + 1)
    return idx + 1, idx + len(text) + 1


def make_archive(entries: dict) -> bytes:
    """Build an overlay archive from a ``{path: content}`` dict."""
    out = b""
    for name, content in entries.items():
        if isinstance(content, str):
            content = content.encode("utf-8")
        out += name.encode("utf-8") + b"\n" + str(len(content)).encode() + b"\n" + content
    return out


def kinds(decls):
    return [d.kind.value for d in decls]


def labels(decls):
    return [d.label for d in decls]


# ===========================================================================
# Fixtures
# ===========================================================================


@pytest.fixture(autouse=True)
def _reset_gooutline_logger():
    """Undo CLI logging setup so caplog sees records from every test."""
    yield
    logger = logging.getLogger("gooutline")
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def go_file(tmp_path):
    """Factory writing a Go source file and returning its path."""

    def _write(content: str, name: str = "main.go"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner with stderr kept apart (Click 8.2+ compatible)."""
    try:
        return CliRunner(mix_stderr=False)
    except TypeError:
        return CliRunner()


def invoke_cli(runner, args, input=None):
    """Invoke the go-outline CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["-f", "main.go"])
        input: optional bytes fed to stdin
    Returns:
        click.testing.Result
    """
    from gooutline.cli import cli

    return runner.invoke(cli, [str(a) for a in args], input=input, catch_exceptions=False)


def parse_json_output(result):
    """Parse the JSON array printed on stdout by a successful invocation."""
    assert result.exit_code == 0, f"go-outline failed (exit {result.exit_code}):\n{result.stderr}"
    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON: {e}\nOutput was:\n{result.stdout[:500]}")
    assert isinstance(data, list), f"Expected a JSON array, got {type(data)}"
    return data
