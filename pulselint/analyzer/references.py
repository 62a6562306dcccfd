"""
Reference resolution for Pulse components.

Pass 2 of the analyzer. Walks the view tree and checks every expression
against the symbol table, marking what it finds as used and reporting
`undefined-reference` for names that resolve to nothing. Action bodies are
walked token by token only to mark usage; they never produce errors.

Expressions reach this pass in two shapes and both are kept:
- raw source text, scanned for identifiers with a boundary pattern that
  skips member-expression properties (anything right after a `.`)
- structured sub-expression nodes, matched by kind

Loop items introduced by `@each` are not declared as symbols. Whether a
loop body may use them without an error depends on the built-in
allow-list, which carries the common loop and event variable names.

Author: xwest
"""

import re
from typing import Iterable, List, Optional, Tuple

from ..tree.nodes import (
    Component, ViewNode, Element, TextNode, IfDirective, EachDirective,
    SlotElement, UnknownNode, Interpolation, Token,
)
from ..tree.expressions import (
    Expression, Identifier, MemberExpression, CallExpression, BinaryExpression,
    LogicalExpression, UnaryExpression, UpdateExpression, ConditionalExpression,
    ArrayExpression, ObjectExpression,
)
from .symbol_table import SymbolTable
from .errors import DiagnosticCollector, create_undefined_reference


KEYWORDS = frozenset({
    'true', 'false', 'null', 'undefined', 'NaN', 'Infinity',
    'if', 'else', 'for', 'while', 'do', 'switch', 'case', 'break',
    'continue', 'return', 'throw', 'try', 'catch', 'finally',
    'function', 'class', 'const', 'let', 'var', 'new', 'this',
    'typeof', 'instanceof', 'in', 'of', 'delete', 'void',
    'async', 'await', 'yield',
})

BUILTINS = frozenset({
    # Browser and language globals
    'console', 'window', 'document', 'navigator', 'location',
    'localStorage', 'sessionStorage', 'fetch', 'setTimeout', 'setInterval',
    'clearTimeout', 'clearInterval', 'Promise', 'Array', 'Object',
    'String', 'Number', 'Boolean', 'Date', 'Math', 'JSON', 'Map', 'Set',
    'parseInt', 'parseFloat', 'isNaN', 'isFinite', 'encodeURI', 'decodeURI',
    'encodeURIComponent', 'decodeURIComponent', 'alert', 'confirm', 'prompt',
    # Common loop and event variables
    'event', 'e', 'item', 'index', 'key', 'value',
})

# Identifier start not preceded by a word character, `$` or `.`; a `${` is never one
IDENTIFIER_PATTERN = re.compile(r"(?<![.A-Za-z0-9_$])(?!\$\{)([A-Za-z_$][A-Za-z0-9_$]*)")

# Leading tag name of an element selector, e.g. `Button` in `Button.primary#save`
TAG_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9-]*)")


def _skip_quoted(text: str, start: int) -> int:
    """Index just past the '...' or "..." literal opening at `start`."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote or text[i] == "\n":
            return i + 1
        i += 1
    return len(text)


def _blank_literals(text: str, start: int = 0, in_substitution: bool = False) -> Tuple[str, int]:
    """
    Blank out string contents so only code remains.

    Quoted strings collapse to `""`. Template literals keep the code inside
    each `${...}` and lose their static text. Inside a substitution the scan
    stops at the matching `}`; returns the code and the index after it.
    """
    out: List[str] = []
    depth = 0
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "'\"":
            out.append('""')
            i = _skip_quoted(text, i)
        elif ch == "`":
            out.append(" ")
            i += 1
            while i < len(text) and text[i] != "`":
                if text[i] == "\\":
                    i += 2
                elif text.startswith("${", i):
                    code, i = _blank_literals(text, i + 2, in_substitution=True)
                    out.append(f" {code} ")
                else:
                    i += 1
            out.append(" ")
            i += 1
        elif in_substitution and ch == "{":
            depth += 1
            out.append(ch)
            i += 1
        elif in_substitution and ch == "}":
            if depth == 0:
                return "".join(out), i + 1
            depth -= 1
            out.append(ch)
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out), i


def extract_identifiers(expression: str) -> List[str]:
    """
    Extract candidate identifiers from raw expression text.

    Member-expression properties, keywords and string contents are skipped.
    Names come back once each, in order of first appearance.
    """
    text, _ = _blank_literals(expression)

    # A spread operand is a reference, not a property.
    text = text.replace("...", " ")

    identifiers: List[str] = []
    seen = set()
    for match in IDENTIFIER_PATTERN.finditer(text):
        name = match.group(1)
        if name in KEYWORDS or name in seen:
            continue
        seen.add(name)
        identifiers.append(name)
    return identifiers


def element_tag(element: Element) -> str:
    """The tag name an element was written with, or '' if it has none."""
    match = TAG_PATTERN.match(element.selector or element.tag or "")
    return match.group(1) if match else ""


def is_component_tag(tag: str) -> bool:
    return bool(tag) and tag[0].isupper()


class ReferenceResolver:
    """
    Resolves view and action references against a symbol table.

    Every name that resolves marks its symbol used; names that neither
    resolve nor appear in the keyword or built-in lists are reported.
    """

    def __init__(self, symbols: SymbolTable, diagnostics: DiagnosticCollector,
                 extra_builtins: Iterable[str] = ()):
        self.symbols = symbols
        self.diagnostics = diagnostics
        self.builtins = BUILTINS | frozenset(extra_builtins)

    def resolve(self, component: Component) -> None:
        """Check the view tree, then mark usage from action bodies."""
        for node in component.view_children:
            self.visit(node)

        for fn in component.action_functions:
            self.mark_tokens(fn.body_tokens)

    # ========================================================================
    # View tree
    # ========================================================================

    def visit(self, node: ViewNode) -> None:
        """Check a single view node and everything nested under it."""
        if isinstance(node, Element):
            self._visit_element(node)

        elif isinstance(node, TextNode):
            for interpolation in node.interpolations:
                self._check_interpolation(interpolation, node)

        elif isinstance(node, IfDirective):
            self.check_expression(node.condition, node.line, node.column)
            self._visit_all(node.consequent)
            if node.alternate is not None:
                self._visit_all(node.alternate)

        elif isinstance(node, EachDirective):
            # Only the iterable is checked here; `node.item` is never declared.
            self.check_expression(node.iterable, node.line, node.column)
            self._visit_all(node.body)

        elif isinstance(node, SlotElement):
            # The slot name is not a reference.
            if node.fallback:
                self._visit_all(node.fallback)

        elif isinstance(node, UnknownNode):
            self._visit_all(node.children)

    def _visit_all(self, nodes: Iterable[ViewNode]) -> None:
        for child in nodes:
            self.visit(child)

    def _visit_element(self, element: Element) -> None:
        tag = element_tag(element)
        if is_component_tag(tag):
            if not self.symbols.reference(tag).found:
                create_undefined_reference(
                    self.diagnostics, tag, element.line, element.column, component=True
                )

        for directive in element.directives:
            self.check_expression(directive.value, directive.line or element.line,
                                  directive.column or element.column)

        for item in element.text_content:
            if isinstance(item, Interpolation):
                self._check_interpolation(item, element)

        self._visit_all(element.children)

    def _check_interpolation(self, interpolation: Interpolation, owner: ViewNode) -> None:
        line = interpolation.line if interpolation.line is not None else owner.line
        column = interpolation.column if interpolation.column is not None else owner.column
        self.check_expression(interpolation.expression, line, column)

    # ========================================================================
    # Expressions
    # ========================================================================

    def check_expression(self, expression: Optional[Expression],
                         line: Optional[int], column: Optional[int]) -> None:
        """Check a raw-text or structured expression."""
        if expression is None or expression == "":
            return

        if isinstance(expression, str):
            for name in extract_identifiers(expression):
                self._resolve_name(name, line, column)
        else:
            self._check_node(expression, line, column)

    def _check_node(self, node, line: Optional[int], column: Optional[int]) -> None:
        if node is None:
            return
        if isinstance(node, str):
            # Parsers sometimes leave sub-expressions unparsed.
            self.check_expression(node, line, column)
            return

        # Prefer the node's own location, fall back to the enclosing one.
        line = node.line if node.line is not None else line
        column = node.column if node.column is not None else column

        if isinstance(node, Identifier):
            self._resolve_name(node.name, line, column)

        elif isinstance(node, MemberExpression):
            # Properties are never references, computed or not.
            self._check_node(node.object, line, column)

        elif isinstance(node, CallExpression):
            self._check_node(node.callee, line, column)
            for argument in node.arguments:
                self._check_node(argument, line, column)

        elif isinstance(node, (BinaryExpression, LogicalExpression)):
            self._check_node(node.left, line, column)
            self._check_node(node.right, line, column)

        elif isinstance(node, (UnaryExpression, UpdateExpression)):
            self._check_node(node.argument, line, column)

        elif isinstance(node, ConditionalExpression):
            self._check_node(node.test, line, column)
            self._check_node(node.consequent, line, column)
            self._check_node(node.alternate, line, column)

        elif isinstance(node, ArrayExpression):
            for element in node.elements:
                self._check_node(element, line, column)

        elif isinstance(node, ObjectExpression):
            for prop in node.properties:
                self._check_node(prop.value, line, column)

        # Literals and unknown kinds reference nothing.

    def _resolve_name(self, name: str, line: Optional[int], column: Optional[int]) -> None:
        if name in KEYWORDS:
            return
        # Resolve first so a declared name that shadows a built-in is still marked used.
        if self.symbols.reference(name).found:
            return
        if name in self.builtins:
            return
        create_undefined_reference(self.diagnostics, name, line, column)

    # ========================================================================
    # Action bodies
    # ========================================================================

    def mark_tokens(self, tokens: Iterable[Token]) -> None:
        """Mark every identifier token's symbol as used. Never reports."""
        for token in tokens:
            if token.is_identifier:
                self.symbols.reference(token.value)
