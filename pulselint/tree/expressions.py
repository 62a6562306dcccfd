"""
Structured sub-expression nodes for Pulse component trees.

The parser hands some expressions over as raw source text and others as
parsed sub-expressions. This module defines the parsed form: a small tagged
union modelled on ESTree, covering exactly the node kinds the analyzer
knows how to walk.

Author: xwest
"""

from typing import List, Optional, Any, Union
from dataclasses import dataclass, field


class ExpressionNode:
    """Base class for structured sub-expressions."""

    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class Identifier(ExpressionNode):
    """A bare name reference, e.g. `count`."""
    name: str


@dataclass
class Literal(ExpressionNode):
    """A literal value (string, number, boolean, null)."""
    value: Any = None
    raw: Optional[str] = None


@dataclass
class MemberExpression(ExpressionNode):
    """`object.property` or `object[property]`."""
    object: 'ExpressionNode'
    property: Optional['ExpressionNode'] = None
    computed: bool = False


@dataclass
class CallExpression(ExpressionNode):
    """`callee(arg, ...)`."""
    callee: 'ExpressionNode'
    arguments: List['ExpressionNode'] = field(default_factory=list)


@dataclass
class BinaryExpression(ExpressionNode):
    """Arithmetic and comparison operators."""
    operator: str
    left: 'ExpressionNode'
    right: 'ExpressionNode'


@dataclass
class LogicalExpression(ExpressionNode):
    """`&&`, `||` and `??`."""
    operator: str
    left: 'ExpressionNode'
    right: 'ExpressionNode'


@dataclass
class UnaryExpression(ExpressionNode):
    """Prefix operators such as `!`, `-` and `typeof`."""
    operator: str
    argument: 'ExpressionNode'


@dataclass
class UpdateExpression(ExpressionNode):
    """`++` / `--` in prefix or postfix position."""
    operator: str
    argument: 'ExpressionNode'
    prefix: bool = False


@dataclass
class ConditionalExpression(ExpressionNode):
    """`test ? consequent : alternate`."""
    test: 'ExpressionNode'
    consequent: 'ExpressionNode'
    alternate: 'ExpressionNode'


@dataclass
class ArrayExpression(ExpressionNode):
    """`[a, b, c]`; holes are kept as `None`."""
    elements: List[Optional['ExpressionNode']] = field(default_factory=list)


@dataclass
class Property(ExpressionNode):
    """One `key: value` entry of an object literal."""
    key: Any
    value: Optional['ExpressionNode'] = None


@dataclass
class ObjectExpression(ExpressionNode):
    """`{key: value, ...}`."""
    properties: List[Property] = field(default_factory=list)


@dataclass
class UnknownExpression(ExpressionNode):
    """An expression kind the analyzer does not understand. Inert."""
    kind: str = "Unknown"


# An expression is either unparsed source text or a structured node.
Expression = Union[str, ExpressionNode]
