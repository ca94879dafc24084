"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import propres` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def rejoin_continuations(lines: list[str]) -> str:
    """Join rendered physical lines the way a reader does (drop `\\` + indent)."""
    out = lines[0]
    for line in lines[1:]:
        assert out.endswith("\\")
        out = out[:-1] + line.lstrip(" \t\f")
    return out


def whitespace_segmenter(text: str, locale: str) -> list[str]:
    """Deterministic segmenter: alternating runs of spaces and non-spaces."""
    segments: list[str] = []
    for ch in text:
        if segments and (segments[-1][-1] == " ") == (ch == " "):
            segments[-1] += ch
        else:
            segments.append(ch)
    return segments
