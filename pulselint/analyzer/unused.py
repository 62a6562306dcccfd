"""
Unused symbol detection.

Pass 3 of the analyzer. Runs strictly after reference resolution has
finished marking usage; every symbol still unmarked becomes a warning.
"""

from .symbol_table import SymbolTable
from .errors import DiagnosticCollector, create_unused_symbol


class UnusedDetector:
    """Sweeps a symbol table for declarations nothing referenced."""

    def __init__(self, symbols: SymbolTable, diagnostics: DiagnosticCollector):
        self.symbols = symbols
        self.diagnostics = diagnostics

    def report(self) -> int:
        """Report every unused symbol; returns how many were found."""
        unused = self.symbols.get_unused()
        for symbol in unused:
            create_unused_symbol(
                self.diagnostics, symbol.kind.value, symbol.name, symbol.line, symbol.column
            )
        return len(unused)
