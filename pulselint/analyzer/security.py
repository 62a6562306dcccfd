"""
Security checks for Pulse components.

Lexical pattern matching over action bodies and view directives for the
usual ways untrusted strings end up parsed as HTML or evaluated as code.
There is no control-flow or taint tracking: a match is a prompt to look,
not proof of a vulnerability, and code that builds the same sink
indirectly goes unnoticed.

Author: xwest
"""

import re
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass

from ..tree.nodes import Component, ViewNode, Element, Directive, child_nodes
from ..tree.expressions import (
    ExpressionNode, MemberExpression, Identifier, Literal, CallExpression,
    BinaryExpression, LogicalExpression, UnaryExpression, UpdateExpression,
    ConditionalExpression, ArrayExpression, ObjectExpression,
)
from .errors import DiagnosticCollector


@dataclass(frozen=True)
class RiskPattern:
    """A sink to look for in action code, with the advice to give."""
    name: str
    pattern: re.Pattern
    message: str


# Checked in this order; each match yields one diagnostic.
RISK_PATTERNS: Tuple[RiskPattern, ...] = (
    RiskPattern(
        "html-assignment",
        # Assignment (or +=) whose whole right-hand side is not an empty string literal.
        re.compile(
            r"\b(innerHTML|outerHTML)\s*\+?=(?!=)"
            r"(?!\s*(?:\"\"|''|``)\s*(?:;|\n|\)|,|\}|$))"
        ),
        "Assigning to {0} can lead to XSS - use textContent or sanitize the value first",
    ),
    RiskPattern(
        "document-write",
        re.compile(r"\bdocument\.write(?:ln)?\s*\("),
        "document.write() can lead to XSS - build DOM nodes instead",
    ),
    RiskPattern(
        "insert-adjacent-html",
        re.compile(r"\binsertAdjacentHTML\s*\("),
        "insertAdjacentHTML() can lead to XSS - use insertAdjacentText() or sanitize the markup",
    ),
    RiskPattern(
        "eval",
        re.compile(r"\beval\s*\("),
        "eval() executes arbitrary code - avoid it entirely",
    ),
    RiskPattern(
        "function-constructor",
        re.compile(r"\bnew\s+Function\s*\("),
        "new Function() executes arbitrary code - avoid it entirely",
    ),
    RiskPattern(
        "string-timer",
        re.compile(r"\b(setTimeout|setInterval)\s*\(\s*['\"`]"),
        "{0}() with a string argument evaluates code - pass a function instead",
    ),
)

HTML_SINK_PATTERN = re.compile(r"\b(innerHTML|outerHTML)\b")

RAW_HTML_DIRECTIVES = frozenset({"html"})


def scan_code(code: str) -> List[Tuple[RiskPattern, re.Match]]:
    """Return every risk pattern match in `code`, pattern by pattern."""
    matches = []
    for risk in RISK_PATTERNS:
        for match in risk.pattern.finditer(code):
            matches.append((risk, match))
    return matches


def _member_sinks(node) -> Iterable[str]:
    """Yield innerHTML/outerHTML property names used in a structured expression."""
    if node is None or not isinstance(node, ExpressionNode):
        return
    if isinstance(node, MemberExpression):
        prop = node.property
        if isinstance(prop, Identifier) and prop.name in ("innerHTML", "outerHTML"):
            yield prop.name
        elif isinstance(prop, Literal) and prop.value in ("innerHTML", "outerHTML"):
            yield prop.value
        yield from _member_sinks(node.object)
    elif isinstance(node, CallExpression):
        yield from _member_sinks(node.callee)
        for argument in node.arguments:
            yield from _member_sinks(argument)
    elif isinstance(node, (BinaryExpression, LogicalExpression)):
        yield from _member_sinks(node.left)
        yield from _member_sinks(node.right)
    elif isinstance(node, (UnaryExpression, UpdateExpression)):
        yield from _member_sinks(node.argument)
    elif isinstance(node, ConditionalExpression):
        for branch in (node.test, node.consequent, node.alternate):
            yield from _member_sinks(branch)
    elif isinstance(node, ArrayExpression):
        for element in node.elements:
            yield from _member_sinks(element)
    elif isinstance(node, ObjectExpression):
        for prop in node.properties:
            yield from _member_sinks(prop.value)


class SecurityChecker:
    """Flags XSS-prone sinks in action code and view directives."""

    def __init__(self, diagnostics: DiagnosticCollector):
        self.diagnostics = diagnostics

    def check(self, component: Component) -> None:
        for fn in component.action_functions:
            self._check_action(fn.body, fn.line, fn.column)
        for node in component.view_children:
            self._visit(node)

    def _check_action(self, body: str, line: Optional[int], column: Optional[int]) -> None:
        if not body:
            return
        for risk, match in scan_code(body):
            detail = match.group(1) if match.groups() else match.group(0)
            self.diagnostics.report(
                "xss-vulnerability", risk.message.format(detail), line, column
            )

    def _visit(self, node: ViewNode) -> None:
        if isinstance(node, Element):
            for directive in node.directives:
                self._check_directive(directive, node)
        for child in child_nodes(node):
            self._visit(child)

    def _check_directive(self, directive: Directive, element: Element) -> None:
        line = directive.line or element.line
        column = directive.column or element.column

        if directive.name in RAW_HTML_DIRECTIVES:
            self.diagnostics.report(
                "xss-vulnerability",
                f"@{directive.name} renders raw HTML and can lead to XSS - "
                "make sure the content is trusted or sanitized",
                line, column,
            )

        for expression in (directive.handler, directive.expression):
            if isinstance(expression, str):
                sinks = HTML_SINK_PATTERN.findall(expression)
            else:
                sinks = list(_member_sinks(expression))
            for sink in dict.fromkeys(sinks):
                self.diagnostics.report(
                    "xss-vulnerability",
                    f"Directive @{directive.name} uses {sink} - "
                    "use text bindings or sanitize the value",
                    line, column,
                )
