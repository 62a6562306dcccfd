"""
Pulse Semantic Analyzer Package

Implements static analysis of parsed Pulse components:
- Symbol collection and reference resolution
- Unused import, state and action detection
- Style, security and accessibility checks
- Diagnostics with optional textual fixes

Author: xwest
"""

from .rules import (
    Severity, RuleCategory, Rule, RULES, RULES_VERSION,
    get_rule, is_fixable, severity_of, rules_by_severity,
)
from .errors import Diagnostic, DiagnosticCollector, Fix, ConfigurationError
from .symbol_table import SymbolTable, Symbol, SymbolKind
from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze",

    # Symbol management
    "SymbolTable", "Symbol", "SymbolKind",

    # Diagnostics
    "Diagnostic", "DiagnosticCollector", "Fix", "ConfigurationError",

    # Rule registry
    "Severity", "RuleCategory", "Rule", "RULES", "RULES_VERSION",
    "get_rule", "is_fixable", "severity_of", "rules_by_severity",
]
