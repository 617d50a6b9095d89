"""Bulk assignment of catalog classification terms from delimited files."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("taxoport")
except metadata.PackageNotFoundError:
    # running from a source tree that was never installed
    __version__ = "0.0.0+local"
