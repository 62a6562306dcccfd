"""
Declaration collection for Pulse components.

Pass 1 of the analyzer: every import specifier, state property and action
function becomes a symbol. A second declaration within one namespace is
reported as `duplicate-declaration` at the second site. Collisions between
namespaces (an import and a state variable with the same name) are not
reported.

Author: xwest
"""

from ..tree.nodes import Component
from .symbol_table import SymbolTable, DeclareResult
from .errors import DiagnosticCollector, create_duplicate_declaration


def _loc(value) -> int:
    return value or 1


class DeclarationCollector:
    """Populates a symbol table from the script blocks of a component."""

    def __init__(self, symbols: SymbolTable, diagnostics: DiagnosticCollector):
        self.symbols = symbols
        self.diagnostics = diagnostics

    def collect(self, component: Component) -> None:
        """Declare imports, state and actions, in that order."""
        self._collect_imports(component)
        self._collect_state(component)
        self._collect_actions(component)

    def _check(self, result: DeclareResult, kind: str, name: str, line, column) -> None:
        if result.is_duplicate:
            create_duplicate_declaration(self.diagnostics, kind, name, line, column)

    def _collect_imports(self, component: Component) -> None:
        for imp in component.imports:
            for spec in imp.specifiers:
                result = self.symbols.declare_import(
                    spec.local, imp.source, _loc(imp.line), _loc(imp.column)
                )
                self._check(result, "import", spec.local, imp.line, imp.column)

    def _collect_state(self, component: Component) -> None:
        for prop in component.state_properties:
            result = self.symbols.declare_state(prop.name, _loc(prop.line), _loc(prop.column))
            self._check(result, "state", prop.name, prop.line, prop.column)

    def _collect_actions(self, component: Component) -> None:
        for fn in component.action_functions:
            result = self.symbols.declare_action(fn.name, _loc(fn.line), _loc(fn.column))
            self._check(result, "action", fn.name, fn.line, fn.column)
