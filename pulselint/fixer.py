"""
Automatic fix application.

Applies the textual fixes carried by diagnostics to the original source.
Fixes are applied bottom-up, one line at a time; a fix whose `old_text`
is no longer on its reported line is skipped without error.

Author: xwest
"""

import logging
from typing import Iterable, List, Tuple

from .analyzer.errors import Diagnostic

logger = logging.getLogger(__name__)


def fixable_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Diagnostics carrying a complete fix, highest line first."""
    fixable = [d for d in diagnostics if d.fix is not None and d.fix.is_complete()]
    # Stable sort: fixes on the same line keep their report order.
    return sorted(fixable, key=lambda d: d.line, reverse=True)


def apply_fixes(source: str, diagnostics: Iterable[Diagnostic]) -> Tuple[str, int]:
    """
    Apply every applicable fix to `source`.

    Args:
        source: The original source text
        diagnostics: Diagnostics from an analysis run, in any order

    Returns:
        The patched source and the number of fixes actually applied
    """
    result = source
    applied = 0

    for diagnostic in fixable_diagnostics(diagnostics):
        fix = diagnostic.fix
        lines = result.split("\n")
        index = diagnostic.line - 1

        if index < 0 or index >= len(lines):
            logger.debug("Skipping fix for %s: line %d is out of range",
                         diagnostic.code, diagnostic.line)
            continue
        if fix.old_text not in lines[index]:
            logger.debug("Skipping stale fix for %s on line %d",
                         diagnostic.code, diagnostic.line)
            continue

        # Only the first occurrence on the line is replaced.
        lines[index] = lines[index].replace(fix.old_text, fix.new_text, 1)
        result = "\n".join(lines)
        applied += 1

    return result, applied
