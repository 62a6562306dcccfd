"""
Diagnostics for Pulse component analysis.

Provides the diagnostic record every pass reports into, the textual fix
that can ride along with a diagnostic, and the collector that stamps
severities from the rule registry.

Author: xwest
"""

import logging
from typing import Optional, List, Iterable, Iterator, Set
from dataclasses import dataclass

from ..tree.errors import LintError
from .rules import Severity, get_rule, is_fixable

logger = logging.getLogger(__name__)


class ConfigurationError(LintError):
    """Raised for an invalid lint configuration."""


@dataclass(frozen=True)
class Fix:
    """A textual patch: replace `old_text` with `new_text` on the reported line."""
    old_text: Optional[str]
    new_text: Optional[str]
    description: str = ""
    type: str = "replace"

    def is_complete(self) -> bool:
        return self.old_text is not None and self.new_text is not None


@dataclass
class Diagnostic:
    """One reported finding."""
    severity: Severity
    code: str
    message: str
    line: int = 1
    column: int = 1
    fix: Optional[Fix] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        result = f"{self.severity.value.upper()}: {self.message} ({self.code})\n"
        result += f"  --> {self.line}:{self.column}\n"
        if self.fix is not None:
            result += f"  fix: {self.fix.description}\n"
        return result


def _position(value: Optional[int]) -> int:
    """Locations are 1-based; missing or non-positive values collapse to 1."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        return 1
    return value


class DiagnosticCollector:
    """
    Accumulates diagnostics for one analysis run, in report order.

    Severity always comes from the rule registry. A fix offered for a rule
    that is not registered as fixable is dropped.
    """

    def __init__(self, disabled_rules: Optional[Iterable[str]] = None):
        self.diagnostics: List[Diagnostic] = []
        self.disabled_rules: Set[str] = set(disabled_rules or ())

    def report(self, code: str, message: str,
               line: Optional[int] = None, column: Optional[int] = None,
               fix: Optional[Fix] = None) -> Optional[Diagnostic]:
        """Record a diagnostic; returns it, or None if the rule is disabled."""
        rule = get_rule(code)
        if code in self.disabled_rules:
            return None

        if fix is not None and not is_fixable(code):
            logger.debug("Dropping fix for non-fixable rule %s", code)
            fix = None

        diagnostic = Diagnostic(
            severity=rule.severity,
            code=code,
            message=message,
            line=_position(line),
            column=_position(column),
            fix=fix,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)


# Helper functions for the semantic diagnostics, so passes share wording

def create_duplicate_declaration(collector: DiagnosticCollector, kind: str, name: str,
                                 line: Optional[int], column: Optional[int]) -> Optional[Diagnostic]:
    """Report a second declaration of `name` within one namespace."""
    messages = {
        "import": f"'{name}' is already declared",
        "state": f"State variable '{name}' is already declared",
        "action": f"Action '{name}' is already declared",
    }
    return collector.report(
        "duplicate-declaration",
        messages.get(kind, f"'{name}' is already declared"),
        line, column,
    )


def create_undefined_reference(collector: DiagnosticCollector, name: str,
                               line: Optional[int], column: Optional[int],
                               component: bool = False) -> Optional[Diagnostic]:
    """Report a name used in the view that resolves to nothing."""
    if component:
        message = f"Component '{name}' is not defined. Did you forget to import it?"
    else:
        message = f"'{name}' is not defined"
    return collector.report("undefined-reference", message, line, column)


def create_unused_symbol(collector: DiagnosticCollector, kind: str, name: str,
                         line: Optional[int], column: Optional[int]) -> Optional[Diagnostic]:
    """Report a symbol that no reference pass ever touched."""
    if kind == "import":
        message = f"'{name}' is imported but never used"
    elif kind == "state":
        message = f"State variable '{name}' is declared but never used"
    else:
        message = f"Action '{name}' is declared but never called"
    return collector.report(f"unused-{kind}", message, line, column)
