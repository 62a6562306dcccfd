"""
Component tree node definitions for Pulse single-file components.

A component tree is what the Pulse parser produces for one `.pulse` file:
imports, a state block, an actions block, a view tree and a few metadata
blocks. The view tree is a tagged union of node classes; anything the
parser emits that is not modelled here becomes an `UnknownNode`, which
every rule skips but whose children are still visited.

Author: xwest
"""

from typing import List, Optional, Any, Union, Dict
from dataclasses import dataclass, field

from .expressions import Expression


# ============================================================================
# Script-side blocks
# ============================================================================

@dataclass
class ImportSpecifier:
    """One name brought in by an import (`local` is the name used in the file)."""
    local: str
    imported: Optional[str] = None


@dataclass
class ImportDecl:
    """`import { A, B as C } from './source.pulse'`."""
    source: str
    specifiers: List[ImportSpecifier] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class StateProperty:
    """A single reactive state variable."""
    name: str
    value: Any = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class StateBlock:
    properties: List[StateProperty] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class Token:
    """A lexer token from an action body."""
    type: str
    value: str
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def is_identifier(self) -> bool:
        return self.type == "IDENTIFIER"


@dataclass
class ActionFunction:
    """A function declared in the actions block."""
    name: str
    params: List[str] = field(default_factory=list)
    body: str = ""
    body_tokens: List[Token] = field(default_factory=list)
    is_async: bool = False
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class ActionsBlock:
    functions: List[ActionFunction] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class StyleBlock:
    rules: List[Any] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class PageDecl:
    name: str
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class RouteDecl:
    path: str
    line: Optional[int] = None
    column: Optional[int] = None


# ============================================================================
# View tree
# ============================================================================

@dataclass
class Directive:
    """
    An inline directive attached to an element.

    Event directives are named after the event (`click`, `keydown`, ...).
    `@attr(name, value)` and `@bind(name, expr)` carry the attribute name in
    `argument`; `@html(expr)` renders its expression as raw HTML.
    """
    name: str
    expression: Optional[Expression] = None
    handler: Optional[Expression] = None
    argument: Optional[str] = None
    modifiers: List[str] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def value(self) -> Optional[Expression]:
        """The handler if there is one, otherwise the bound expression."""
        return self.handler if self.handler is not None else self.expression


@dataclass
class Interpolation:
    """`{expression}` embedded in text."""
    expression: Expression
    line: Optional[int] = None
    column: Optional[int] = None


class ViewNode:
    """Base class of the view-node tagged union."""

    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class Element(ViewNode):
    """
    An element such as `button.primary[type=submit] @click(save()) "Save"`.

    `selector` keeps the full selector text (tag, classes, id and bracket
    attributes). `tag` is set by parsers that already split it out.
    """
    selector: str = ""
    tag: Optional[str] = None
    directives: List[Directive] = field(default_factory=list)
    text_content: List[Union[str, Interpolation]] = field(default_factory=list)
    children: List[ViewNode] = field(default_factory=list)
    props: Dict[str, Any] = field(default_factory=dict)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class TextNode(ViewNode):
    interpolations: List[Interpolation] = field(default_factory=list)
    text: str = ""
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class IfDirective(ViewNode):
    condition: Optional[Expression] = None
    consequent: List[ViewNode] = field(default_factory=list)
    alternate: Optional[List[ViewNode]] = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class EachDirective(ViewNode):
    """`@each(item in items) { ... }`. `item` is not declared as a symbol."""
    item: str = ""
    iterable: Optional[Expression] = None
    body: List[ViewNode] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class SlotElement(ViewNode):
    name: str = "default"
    fallback: Optional[List[ViewNode]] = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class UnknownNode(ViewNode):
    """A node kind the analyzer does not model; only its children are visited."""
    kind: str = "Unknown"
    children: List[ViewNode] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class ViewBlock:
    children: List[ViewNode] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


# ============================================================================
# Whole component
# ============================================================================

@dataclass
class Component:
    """
    The parsed representation of one `.pulse` file.

    Absent blocks are `None`; a block that is present but empty is an
    instance with an empty collection.
    """
    imports: List[ImportDecl] = field(default_factory=list)
    state: Optional[StateBlock] = None
    actions: Optional[ActionsBlock] = None
    view: Optional[ViewBlock] = None
    style: Optional[StyleBlock] = None
    page: Optional[PageDecl] = None
    route: Optional[RouteDecl] = None

    @property
    def state_properties(self) -> List[StateProperty]:
        return self.state.properties if self.state else []

    @property
    def action_functions(self) -> List[ActionFunction]:
        return self.actions.functions if self.actions else []

    @property
    def view_children(self) -> List[ViewNode]:
        return self.view.children if self.view else []


def child_nodes(node: ViewNode) -> List[ViewNode]:
    """
    Return the nodes nested directly under `node`, in document order.

    Both branches of an `IfDirective` are included, consequent first.
    """
    if isinstance(node, (Element, UnknownNode)):
        return list(node.children)
    if isinstance(node, IfDirective):
        return list(node.consequent) + list(node.alternate or [])
    if isinstance(node, EachDirective):
        return list(node.body)
    if isinstance(node, SlotElement):
        return list(node.fallback or [])
    return []
