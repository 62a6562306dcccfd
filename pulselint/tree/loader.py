"""
Build component trees from the parser's JSON-like output.

The Pulse parser emits plain mappings with camelCase keys and `type`
tags. `load_component` turns one of those into the dataclass tree in
`pulselint.tree.nodes`. Absent or malformed parts degrade quietly:
missing optional fields become empty collections or `None`, and unknown
node kinds are kept as inert placeholders.

Author: xwest
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .expressions import (
    Expression, ExpressionNode, Identifier, Literal, MemberExpression,
    CallExpression, BinaryExpression, LogicalExpression, UnaryExpression,
    UpdateExpression, ConditionalExpression, ArrayExpression, ObjectExpression,
    Property, UnknownExpression,
)
from .nodes import (
    Component, ImportDecl, ImportSpecifier, StateBlock, StateProperty,
    ActionsBlock, ActionFunction, Token, StyleBlock, PageDecl, RouteDecl,
    ViewBlock, ViewNode, Element, TextNode, IfDirective, EachDirective,
    SlotElement, UnknownNode, Directive, Interpolation,
)
from .errors import TreeFormatError

logger = logging.getLogger(__name__)


def _location(data: Mapping[str, Any]) -> Dict[str, Optional[int]]:
    return {"line": data.get("line"), "column": data.get("column")}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


# ============================================================================
# Expressions
# ============================================================================

def load_expression(data: Any) -> Optional[Expression]:
    """Load a raw-text or structured expression. Strings pass through untouched."""
    if data is None or isinstance(data, str):
        return data
    if isinstance(data, ExpressionNode):
        return data
    if not isinstance(data, Mapping):
        # Numbers, booleans and the like are literal values.
        return Literal(value=data)

    kind = data.get("type", "")
    node: ExpressionNode

    if kind == "Identifier":
        node = Identifier(data.get("name", ""))
    elif kind == "Literal":
        node = Literal(value=data.get("value"), raw=data.get("raw"))
    elif kind == "MemberExpression":
        node = MemberExpression(
            load_expression(data.get("object")),
            load_expression(data.get("property")),
            bool(data.get("computed", False)),
        )
    elif kind == "CallExpression":
        node = CallExpression(
            load_expression(data.get("callee")),
            [load_expression(arg) for arg in _as_list(data.get("arguments"))],
        )
    elif kind == "BinaryExpression":
        node = BinaryExpression(
            data.get("operator", ""),
            load_expression(data.get("left")),
            load_expression(data.get("right")),
        )
    elif kind == "LogicalExpression":
        node = LogicalExpression(
            data.get("operator", ""),
            load_expression(data.get("left")),
            load_expression(data.get("right")),
        )
    elif kind == "UnaryExpression":
        node = UnaryExpression(data.get("operator", ""), load_expression(data.get("argument")))
    elif kind == "UpdateExpression":
        node = UpdateExpression(
            data.get("operator", ""),
            load_expression(data.get("argument")),
            bool(data.get("prefix", False)),
        )
    elif kind == "ConditionalExpression":
        node = ConditionalExpression(
            load_expression(data.get("test")),
            load_expression(data.get("consequent")),
            load_expression(data.get("alternate")),
        )
    elif kind == "ArrayExpression":
        node = ArrayExpression([load_expression(el) for el in _as_list(data.get("elements"))])
    elif kind == "ObjectExpression":
        properties = []
        for prop in _as_list(data.get("properties")):
            if isinstance(prop, Mapping):
                properties.append(Property(prop.get("key"), load_expression(prop.get("value"))))
        node = ObjectExpression(properties)
    else:
        logger.debug("Keeping unknown expression kind %r as inert", kind)
        node = UnknownExpression(kind or "Unknown")

    node.line = data.get("line")
    node.column = data.get("column")
    return node


# ============================================================================
# View tree
# ============================================================================

def _load_branch(value: Any) -> List[ViewNode]:
    """A branch is either a list of nodes or a node that carries `children`."""
    if value is None:
        return []
    if isinstance(value, Mapping) and "type" not in value:
        return _load_nodes(value.get("children"))
    if isinstance(value, Mapping) and value.get("type") in ("ViewBlock", "Block", "Fragment"):
        return _load_nodes(value.get("children"))
    return _load_nodes(_as_list(value))


def _load_nodes(items: Any) -> List[ViewNode]:
    return [node for node in (load_view_node(item) for item in _as_list(items)) if node is not None]


def _load_directive(data: Any) -> Optional[Directive]:
    if isinstance(data, Directive):
        return data
    if not isinstance(data, Mapping):
        return None
    name = data.get("name") or data.get("event") or data.get("type", "")
    return Directive(
        name=name,
        expression=load_expression(data.get("expression")),
        handler=load_expression(data.get("handler")),
        argument=data.get("argument", data.get("attribute")),
        modifiers=list(data.get("modifiers") or []),
        **_location(data),
    )


def _load_interpolation(data: Any) -> Optional[Interpolation]:
    if isinstance(data, Interpolation):
        return data
    if isinstance(data, Mapping):
        return Interpolation(load_expression(data.get("expression")), **_location(data))
    return None


def _load_text_content(items: Any) -> List[Any]:
    content: List[Any] = []
    for item in _as_list(items):
        if isinstance(item, str):
            content.append(item)
        elif isinstance(item, Mapping) and item.get("type") == "Interpolation":
            content.append(_load_interpolation(item))
        elif isinstance(item, Mapping) and item.get("type") == "TextNode":
            # Text nodes nested in text content contribute their parts.
            content.extend(i for i in map(_load_interpolation, _as_list(item.get("interpolations"))) if i)
            for part in _as_list(item.get("parts")):
                if isinstance(part, str):
                    content.append(part)
                elif isinstance(part, Mapping):
                    content.append(_load_interpolation(part))
        elif isinstance(item, Interpolation):
            content.append(item)
    return content


def _load_props(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    props: Dict[str, Any] = {}
    for prop in _as_list(value):
        if isinstance(prop, Mapping) and "name" in prop:
            props[prop["name"]] = prop.get("value")
    return props


def load_view_node(data: Any) -> Optional[ViewNode]:
    """Load one view node; returns None for values that are not nodes at all."""
    if isinstance(data, ViewNode):
        return data
    if not isinstance(data, Mapping):
        return None

    kind = data.get("type", "")
    location = _location(data)

    if kind == "Element":
        return Element(
            selector=data.get("selector") or "",
            tag=data.get("tag"),
            directives=[d for d in map(_load_directive, _as_list(data.get("directives"))) if d],
            text_content=_load_text_content(data.get("textContent", data.get("text_content"))),
            children=_load_nodes(data.get("children")),
            props=_load_props(data.get("props")),
            **location,
        )

    if kind == "TextNode":
        interpolations = [i for i in map(_load_interpolation, _as_list(data.get("interpolations"))) if i]
        text_parts = []
        for part in _as_list(data.get("parts")):
            if isinstance(part, str):
                text_parts.append(part)
            elif isinstance(part, Mapping) and part.get("type") == "Interpolation":
                interpolations.append(_load_interpolation(part))
        text = data.get("text") or "".join(text_parts)
        return TextNode(interpolations=interpolations, text=text, **location)

    if kind == "IfDirective":
        alternate = data.get("alternate")
        return IfDirective(
            condition=load_expression(data.get("condition")),
            consequent=_load_branch(data.get("consequent")),
            alternate=_load_branch(alternate) if alternate is not None else None,
            **location,
        )

    if kind == "EachDirective":
        return EachDirective(
            item=data.get("item", data.get("itemName", "")) or "",
            iterable=load_expression(data.get("iterable")),
            body=_load_branch(data.get("body", data.get("template"))),
            **location,
        )

    if kind == "SlotElement":
        fallback = data.get("fallback")
        return SlotElement(
            name=data.get("name") or "default",
            fallback=_load_branch(fallback) if fallback is not None else None,
            **location,
        )

    logger.debug("Keeping unknown view node kind %r (children are still visited)", kind)
    return UnknownNode(kind=kind or "Unknown", children=_load_nodes(data.get("children")), **location)


# ============================================================================
# Component
# ============================================================================

def _load_imports(items: Any) -> List[ImportDecl]:
    imports = []
    for imp in _as_list(items):
        if not isinstance(imp, Mapping):
            continue
        specifiers = []
        for spec in _as_list(imp.get("specifiers")):
            if isinstance(spec, Mapping) and spec.get("local"):
                specifiers.append(ImportSpecifier(spec["local"], spec.get("imported")))
            elif isinstance(spec, str):
                specifiers.append(ImportSpecifier(spec))
        imports.append(ImportDecl(imp.get("source", ""), specifiers, **_location(imp)))
    return imports


def _load_state(data: Any) -> Optional[StateBlock]:
    if not isinstance(data, Mapping):
        return None
    properties = [
        StateProperty(prop.get("name", ""), prop.get("value"), **_location(prop))
        for prop in _as_list(data.get("properties"))
        if isinstance(prop, Mapping)
    ]
    return StateBlock(properties, **_location(data))


def _load_token(data: Any) -> Optional[Token]:
    if isinstance(data, Token):
        return data
    if isinstance(data, Mapping):
        return Token(str(data.get("type", "")), str(data.get("value", "")), **_location(data))
    return None


def _load_actions(data: Any) -> Optional[ActionsBlock]:
    if not isinstance(data, Mapping):
        return None
    functions = []
    for fn in _as_list(data.get("functions")):
        if not isinstance(fn, Mapping):
            continue
        tokens = [t for t in map(_load_token, _as_list(fn.get("bodyTokens", fn.get("body_tokens")))) if t]
        functions.append(ActionFunction(
            name=fn.get("name", ""),
            params=list(fn.get("params") or []),
            body=fn.get("body") or "",
            body_tokens=tokens,
            is_async=bool(fn.get("async", fn.get("is_async", False))),
            **_location(fn),
        ))
    return ActionsBlock(functions, **_location(data))


def load_component(data: Mapping[str, Any]) -> Component:
    """
    Build a `Component` from the parser's mapping output.

    Args:
        data: Top-level mapping with optional `imports`, `state`, `actions`,
            `view`, `style`, `page` and `route` entries.

    Returns:
        The component tree.

    Raises:
        TreeFormatError: If `data` is not a mapping.
    """
    if isinstance(data, Component):
        return data
    if not isinstance(data, Mapping):
        raise TreeFormatError(
            f"Component tree must be a mapping, got {type(data).__name__}"
        )

    view = data.get("view")
    style = data.get("style")
    page = data.get("page")
    route = data.get("route")

    return Component(
        imports=_load_imports(data.get("imports")),
        state=_load_state(data.get("state")),
        actions=_load_actions(data.get("actions")),
        view=ViewBlock(_load_nodes(view.get("children")), **_location(view)) if isinstance(view, Mapping) else None,
        style=StyleBlock(list(style.get("rules") or []), **_location(style)) if isinstance(style, Mapping) else None,
        page=PageDecl(page.get("name", ""), **_location(page)) if isinstance(page, Mapping) else None,
        route=RouteDecl(route.get("path", ""), **_location(route)) if isinstance(route, Mapping) else None,
    )
