"""go-outline: top-level declaration outlines for Go source files."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("go-outline")
except PackageNotFoundError:
    __version__ = "dev"
