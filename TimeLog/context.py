"""
Best-effort code context around a cursor position.

This is a character-window and regex heuristic, not a parser. It only has to
be good enough to give the summary model something to describe and to name
the function the developer is probably in.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

log = logging.getLogger(__name__)

DEFAULT_RADIUS = 1000

_FUNCTION_PATTERNS = [
    re.compile(r"^\s*(?:async\s+)?def\s+([A-Za-z_][A-Za-z0-9_]*)\s*\("),
    re.compile(r"(?:async\s+)?function\s*\*?\s*([A-Za-z_$][A-Za-z0-9_$]*)\s*\("),
    re.compile(r"(?:const|let|var)\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*=\s*(?:async\s*)?(?:\([^)]*\)|[A-Za-z_$][A-Za-z0-9_$]*)\s*=>"),
    re.compile(r"(?:const|let|var)\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*=\s*(?:async\s*)?function\b"),
    re.compile(r"^\s*(?:(?:public|private|protected|static|async|override)\s+)*([A-Za-z_$][A-Za-z0-9_$]*)\s*\([^)]*\)\s*(?::\s*[^{]+)?\{"),
]

# Control-flow keywords look like calls followed by a block.
_NOT_FUNCTIONS = {"if", "for", "while", "switch", "catch", "with", "return", "function"}


def infer_method_name(lines: List[str], line_index: int) -> str:
    """Scan upward from ``line_index`` for the nearest function definition."""
    if not lines:
        return ""
    line_index = max(0, min(line_index, len(lines) - 1))
    for i in range(line_index, -1, -1):
        text = lines[i]
        for pattern in _FUNCTION_PATTERNS:
            match = pattern.search(text)
            if match and match.group(1) not in _NOT_FUNCTIONS:
                return match.group(1)
    return ""


def snippet_around(text: str, offset: int, radius: int = DEFAULT_RADIUS) -> str:
    """Up to ``radius`` characters either side of ``offset``."""
    offset = max(0, min(offset, len(text)))
    start = max(0, offset - radius)
    end = min(len(text), offset + radius)
    return text[start:end]


def read_code_context(
    path: Path,
    line: Optional[int] = None,
    radius: int = DEFAULT_RADIUS,
    selection: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Return ``(snippet, method)`` for a 1-based ``line`` in ``path``.

    A non-empty ``selection`` is used verbatim as the snippet. An unreadable
    file yields empty context rather than an error; the entry is still logged.
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning(f"Could not read {path} for code context: {e}")
        return (selection or ""), ""

    lines = text.splitlines()
    line_index = (line - 1) if line else 0
    method = infer_method_name(lines, line_index)

    if selection and selection.strip():
        return selection, method

    offset = sum(len(l) + 1 for l in lines[:max(0, line_index)])
    return snippet_around(text, offset, radius), method
