"""
pulselint - static analysis for Pulse single-file components

Checks a parsed `.pulse` component for structural mistakes, unused
declarations, style drift, XSS-prone code and accessibility problems, and
applies the fixes some rules can propose.

Architecture:
    pulselint/
    ├── tree/            # Component tree model and loader
    ├── analyzer/        # Rule registry, symbol table and analysis passes
    ├── config.py        # Lint configuration
    ├── fixer.py         # Automatic fix application
    └── lint.py          # Entry points for outer tools

Author: xwest
License: MIT
"""

from ._version import __version__

__author__ = "xwest"
__license__ = "MIT"

# Analyzer first: the configuration module imports from it
from .analyzer import (
    SemanticAnalyzer, AnalysisResult, analyze,
    Diagnostic, DiagnosticCollector, Fix, ConfigurationError,
    Severity, RULES, RULES_VERSION, get_rule, is_fixable,
)
from .tree import Component, load_component, LintError, TreeFormatError
from .config import LintConfiguration
from .fixer import apply_fixes
from .lint import lint, LintResult, summarize, format_diagnostic, format_summary

__all__ = [
    # Core entry points
    "lint", "analyze", "apply_fixes", "LintResult",
    "SemanticAnalyzer", "AnalysisResult", "LintConfiguration",

    # Diagnostics and rules
    "Diagnostic", "DiagnosticCollector", "Fix", "Severity",
    "RULES", "RULES_VERSION", "get_rule", "is_fixable",

    # Reporting
    "summarize", "format_diagnostic", "format_summary",

    # Component tree
    "Component", "load_component",

    # Error handling
    "LintError", "TreeFormatError", "ConfigurationError",

    # Version info
    "__version__",
]
