"""
Pulse Component Tree Package

Dataclass model of a parsed `.pulse` file and the loader that builds it
from the parser's mapping output.

Key pieces:
- Script blocks (imports, state, actions) with source locations
- View tree as a tagged union of node classes
- Structured sub-expressions alongside raw expression text

Author: xwest
"""

from .expressions import *
from .nodes import *
from .loader import load_component, load_view_node, load_expression
from .errors import LintError, TreeFormatError

__all__ = [
    # Component
    "Component", "ImportDecl", "ImportSpecifier", "StateBlock", "StateProperty",
    "ActionsBlock", "ActionFunction", "Token", "StyleBlock", "PageDecl", "RouteDecl",

    # View nodes
    "ViewBlock", "ViewNode", "Element", "TextNode", "IfDirective", "EachDirective",
    "SlotElement", "UnknownNode", "Directive", "Interpolation", "child_nodes",

    # Expressions
    "Expression", "ExpressionNode", "Identifier", "Literal", "MemberExpression",
    "CallExpression", "BinaryExpression", "LogicalExpression", "UnaryExpression",
    "UpdateExpression", "ConditionalExpression", "ArrayExpression",
    "ObjectExpression", "Property", "UnknownExpression",

    # Loading
    "load_component", "load_view_node", "load_expression",

    # Error handling
    "LintError", "TreeFormatError",
]
