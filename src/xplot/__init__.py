"""
xplot - single-variable expression compiler and sampler for function plotting.

Parses expressions such as ``-x + 1 * 2`` or ``log(10, x)`` into an immutable
tree and evaluates them point by point, reporting points outside the
function's domain as None.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.errors import ConfigError, ParseError, XplotError
from .core.expression_lang import Segment, parse, sample, sample_points, try_parse


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("xplot")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ConfigError",
    "ParseError",
    "Segment",
    "XplotError",
    "parse",
    "sample",
    "sample_points",
    "try_parse",
]
