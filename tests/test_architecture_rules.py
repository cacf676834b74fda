"""Architecture enforcement tests for the package layering.

This module provides lightweight, repository-local invariants to ensure the
inward-only dependency direction of ``crux_streaming``:

1) ``crux_streaming.base`` (errors, transport, SSE decoding, accumulators) must
   not import the prompt model or the OpenAI adapters.
2) ``crux_streaming.prompt`` must not import the OpenAI adapters.

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "crux_streaming"


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files under the provided root, skipping
        ``__pycache__`` directories.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    """Read a file as UTF-8 text, replacing undecodable bytes."""

    return path.read_text(encoding="utf-8", errors="replace")


def _import_pattern(*packages: str) -> re.Pattern:
    names = "|".join(packages)
    return re.compile(rf"^\s*(?:from|import)\s+(?:crux_streaming\.|\.{{2,}})(?:{names})\b", re.MULTILINE)


def _offenders(root: Path, pattern: re.Pattern) -> List[str]:
    offenders: List[str] = []
    for py in _iter_python_files(root):
        for match in pattern.finditer(_read_text(py)):
            offenders.append(f"{py}: {match.group(0).strip()}")
    return offenders


@pytest.mark.parametrize(
    "layer, forbidden",
    [
        ("base", ("openai", "prompt")),
        ("prompt", ("openai",)),
    ],
)
def test_inner_layers_do_not_import_outer_layers(layer: str, forbidden: tuple) -> None:
    """Scan ``layer`` for imports of ``forbidden`` sibling packages.

    Failure mode
    ------------
    The test fails listing each offending file and import statement.
    """

    root = PACKAGE_ROOT / layer
    if not root.is_dir():
        pytest.skip(f"{root} not found; skipping boundary check")

    offenders = _offenders(root, _import_pattern(*forbidden))
    if offenders:
        pytest.fail(f"crux_streaming.{layer} must not import {', '.join(forbidden)}.\n" + "\n".join(offenders))
