"""
Lint entry points for outer tools.

`lint` runs the analyzer over one component and, on request, applies the
resulting fixes to the original source. `summarize`, `format_diagnostic`
and `format_summary` build the text a command-line front end prints.
Reading files, invoking the parser and printing stay with the caller.

Author: xwest
"""

from typing import Dict, Iterable, List, Optional
from dataclasses import dataclass, field

from .analyzer.rules import Severity, RULES
from .analyzer.errors import Diagnostic
from .analyzer.semantic_analyzer import SemanticAnalyzer
from .config import LintConfiguration
from .fixer import apply_fixes


@dataclass
class LintResult:
    """Outcome of linting one component."""
    diagnostics: List[Diagnostic]
    source: Optional[str] = None
    fixed_source: Optional[str] = None
    fixes_applied: int = 0
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        """True when no error-severity diagnostic was reported."""
        return not any(d.is_error for d in self.diagnostics)


def lint(component, source: Optional[str] = None, fix: bool = False,
         config: Optional[LintConfiguration] = None) -> LintResult:
    """
    Analyze one component and optionally apply its fixes.

    Args:
        component: A Component, or the raw mapping the parser emits
        source: Original source text; needed only when `fix` is set
        fix: Apply fixable diagnostics to `source`
        config: Lint configuration; defaults are used when omitted

    Returns:
        LintResult with diagnostics in report order
    """
    analysis = SemanticAnalyzer(config).analyze(component)
    result = LintResult(
        diagnostics=analysis.diagnostics,
        source=source,
        counts=summarize(analysis.diagnostics),
    )

    if fix and source is not None:
        result.fixed_source, result.fixes_applied = apply_fixes(source, analysis.diagnostics)

    return result


def summarize(diagnostics: Iterable[Diagnostic]) -> Dict[str, int]:
    """Count diagnostics per severity, using the severity registered for each code."""
    counts = {severity.value: 0 for severity in Severity}
    for diagnostic in diagnostics:
        rule = RULES.get(diagnostic.code)
        severity = rule.severity if rule is not None else Severity(diagnostic.severity)
        counts[severity.value] += 1
    return counts


def format_diagnostic(diagnostic: Diagnostic, file: Optional[str] = None) -> str:
    """Render one diagnostic as an aligned report line."""
    prefix = f"{file}:" if file else ""
    location = f"{prefix}{diagnostic.line}:{diagnostic.column}"
    severity = str(diagnostic.severity).upper()
    return f"  {location:<20} {severity:<7} {diagnostic.message} ({diagnostic.code})"


def format_summary(counts: Dict[str, int], files: int = 1) -> str:
    """One-line totals for a run over `files` files."""
    parts = []
    if counts.get("error"):
        parts.append(f"{counts['error']} error(s)")
    if counts.get("warning"):
        parts.append(f"{counts['warning']} warning(s)")
    if counts.get("info"):
        parts.append(f"{counts['info']} info")

    if not parts:
        return f"✓ {files} file(s) passed"
    return f"✗ {', '.join(parts)} in {files} file(s)"
