"""
Lint rule registry for Pulse components.

Every diagnostic code the analyzer can emit is registered here with its
severity and whether an automatic fix may be attached. The table is fixed
when the package is built; outer tools read it to build summaries without
re-deriving severity from individual diagnostics.

Author: xwest
"""

from typing import Dict, List
from dataclasses import dataclass
from enum import Enum


RULES_VERSION = "1.2"


class Severity(str, Enum):
    """Diagnostic severity levels."""
    ERROR = "error"      # Structural problem, the run should fail
    WARNING = "warning"  # Usage, security and accessibility findings
    INFO = "info"        # Style advice

    def __str__(self) -> str:
        return self.value


class RuleCategory(Enum):
    """Rule families, used for grouping in reports."""
    SEMANTIC = "semantic"
    USAGE = "usage"
    STYLE = "style"
    SECURITY = "security"
    ACCESSIBILITY = "accessibility"


@dataclass(frozen=True)
class Rule:
    """Definition of a single lint rule."""
    code: str
    severity: Severity
    fixable: bool
    category: RuleCategory
    description: str

    def __str__(self) -> str:
        return f"{self.code} ({self.severity.value})"


_RULE_LIST = [
    # Semantic rules (errors)
    Rule("undefined-reference", Severity.ERROR, False, RuleCategory.SEMANTIC,
         "Identifier used in the view is not declared or imported"),
    Rule("duplicate-declaration", Severity.ERROR, False, RuleCategory.SEMANTIC,
         "Name declared twice in the same namespace"),

    # Usage rules (warnings)
    Rule("unused-import", Severity.WARNING, True, RuleCategory.USAGE,
         "Imported name is never used"),
    Rule("unused-state", Severity.WARNING, False, RuleCategory.USAGE,
         "State variable is never used"),
    Rule("unused-action", Severity.WARNING, False, RuleCategory.USAGE,
         "Action is never called"),

    # Style rules (info)
    Rule("naming-page", Severity.INFO, False, RuleCategory.STYLE,
         "Page names should be PascalCase"),
    Rule("naming-state", Severity.INFO, False, RuleCategory.STYLE,
         "State variables should be camelCase"),
    Rule("empty-block", Severity.INFO, False, RuleCategory.STYLE,
         "Block is present but empty"),
    Rule("import-order", Severity.INFO, True, RuleCategory.STYLE,
         "Imports should be sorted by source"),

    # Security rules (warnings)
    Rule("xss-vulnerability", Severity.WARNING, False, RuleCategory.SECURITY,
         "Code renders or evaluates untrusted strings"),

    # Accessibility rules (warnings)
    Rule("a11y-img-alt", Severity.WARNING, True, RuleCategory.ACCESSIBILITY,
         "Images must have alternative text"),
    Rule("a11y-button-text", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Buttons must have an accessible name"),
    Rule("a11y-link-text", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Links must have an accessible name"),
    Rule("a11y-input-label", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Form controls must have a label"),
    Rule("a11y-click-key", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Click handlers on non-interactive elements need keyboard support"),
    Rule("a11y-no-autofocus", Severity.WARNING, True, RuleCategory.ACCESSIBILITY,
         "Avoid autofocus"),
    Rule("a11y-no-positive-tabindex", Severity.WARNING, True, RuleCategory.ACCESSIBILITY,
         "Avoid positive tabindex values"),
    Rule("a11y-heading-order", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Heading levels should not be skipped"),
    Rule("a11y-aria-props", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "ARIA attributes must be valid"),
    Rule("a11y-role-props", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Roles must carry their required ARIA attributes"),
    Rule("a11y-redundant-role", Severity.WARNING, False, RuleCategory.ACCESSIBILITY,
         "Role repeats the element's implicit role"),
]

RULES: Dict[str, Rule] = {rule.code: rule for rule in _RULE_LIST}


def get_rule(code: str) -> Rule:
    """Look up a rule; raises KeyError for unknown codes."""
    return RULES[code]


def is_fixable(code: str) -> bool:
    """Whether a fix may be attached to diagnostics of this rule."""
    rule = RULES.get(code)
    return rule is not None and rule.fixable


def severity_of(code: str) -> Severity:
    return RULES[code].severity


def rules_by_severity() -> Dict[Severity, List[Rule]]:
    """Group the registry by severity, preserving registration order."""
    grouped: Dict[Severity, List[Rule]] = {severity: [] for severity in Severity}
    for rule in _RULE_LIST:
        grouped[rule.severity].append(rule)
    return grouped
