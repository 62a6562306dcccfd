"""
Main semantic analyzer for Pulse components.

Coordinates the analysis passes, always in this order:
- Declaration collection (symbol table construction)
- Reference resolution (usage marking, undefined names)
- Unused symbol detection
- Style checks
- Security checks
- Accessibility checks

Unused detection reads the usage flags reference resolution sets, so the
first three passes are strictly ordered. The last three are independent
of each other and of the symbol table.

Author: xwest
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from ..tree.nodes import Component
from ..tree.loader import load_component
from ..config import LintConfiguration
from .rules import Severity
from .symbol_table import SymbolTable
from .errors import Diagnostic, DiagnosticCollector
from .declarations import DeclarationCollector
from .references import ReferenceResolver
from .unused import UnusedDetector
from .style import StyleChecker
from .security import SecurityChecker
from .accessibility import AccessibilityChecker

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    component: Component
    symbol_table: SymbolTable
    diagnostics: List[Diagnostic]

    def _with_severity(self, severity: Severity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> List[Diagnostic]:
        return self._with_severity(Severity.ERROR)

    @property
    def warnings(self) -> List[Diagnostic]:
        return self._with_severity(Severity.WARNING)

    @property
    def infos(self) -> List[Diagnostic]:
        return self._with_severity(Severity.INFO)

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return any(d.is_error for d in self.diagnostics)

    def has_warnings(self) -> bool:
        """Check if analysis found any warnings."""
        return any(d.severity == Severity.WARNING for d in self.diagnostics)


class SemanticAnalyzer:
    """
    Main semantic analyzer for Pulse components.

    The analyzer itself holds only configuration. Every call to `analyze`
    builds its own symbol table and diagnostic collector, so one analyzer
    can be reused across files and runs never see each other's state.
    """

    def __init__(self, config: Optional[LintConfiguration] = None):
        self.config = config or LintConfiguration()

    def analyze(self, component) -> AnalysisResult:
        """
        Perform complete semantic analysis on a component tree.

        Args:
            component: A Component, or the raw mapping the parser emits

        Returns:
            AnalysisResult with the symbol table and diagnostics in report order
        """
        component = load_component(component)
        symbols = SymbolTable()
        diagnostics = DiagnosticCollector(self.config.disabled_rules)

        # Pass 1: Declarations
        DeclarationCollector(symbols, diagnostics).collect(component)
        logger.debug("Declared %d symbols", len(symbols))

        # Pass 2: References
        ReferenceResolver(symbols, diagnostics, self.config.extra_builtins).resolve(component)

        # Pass 3: Unused symbols
        unused = UnusedDetector(symbols, diagnostics).report()
        logger.debug("Found %d unused symbols", unused)

        # Passes 4-6: independent checkers
        if self.config.check_style:
            StyleChecker(diagnostics).check(component)
        if self.config.check_security:
            SecurityChecker(diagnostics).check(component)
        if self.config.check_accessibility:
            AccessibilityChecker(diagnostics).check(component)

        logger.debug("Analysis finished with %d diagnostics", len(diagnostics))
        return AnalysisResult(
            component=component,
            symbol_table=symbols,
            diagnostics=list(diagnostics),
        )


def analyze(component, config: Optional[LintConfiguration] = None) -> List[Diagnostic]:
    """Analyze one component and return its diagnostics in report order."""
    return SemanticAnalyzer(config).analyze(component).diagnostics
