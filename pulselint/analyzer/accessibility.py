"""
Accessibility checks for Pulse components.

Walks the view tree depth-first and applies WCAG-oriented rules to every
plain HTML element (component tags are skipped, their children are not).
Attributes are gathered from three places and merged into one lookup:

- bracket attributes in the selector, e.g. `img.logo[alt="Logo"]`
- `@attr(name, value)` and `@bind(name, expr)` directives
- the element's prop map

A single heading-level counter runs across the whole traversal in
document order, so both branches of an `@if`/`@else` feed the same
counter.

Author: xwest
"""

import re
from typing import Dict, List, Optional, Set, Any
from dataclasses import dataclass

from ..tree.nodes import Component, ViewNode, Element, TextNode, Interpolation, child_nodes
from ..tree.expressions import Literal, ExpressionNode
from .references import element_tag, is_component_tag
from .errors import DiagnosticCollector, Fix
from .rules import is_fixable


# ============================================================================
# Reference tables
# ============================================================================

ACCESSIBLE_NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")

IMAGE_NAME_ATTRIBUTES = ("alt", "aria-label", "aria-labelledby")

FORM_CONTROLS = frozenset({"input", "select", "textarea"})

UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})

INTERACTIVE_TAGS = frozenset({
    "a", "button", "input", "select", "textarea", "option",
    "details", "summary", "label",
})

CLICK_EVENTS = frozenset({"click", "dblclick"})
KEY_EVENTS = frozenset({"keydown", "keyup", "keypress"})

ATTRIBUTE_DIRECTIVES = frozenset({"attr", "bind"})

HEADING_PATTERN = re.compile(r"^h([1-6])$")

# WAI-ARIA 1.2 states and properties
ARIA_ATTRIBUTES = frozenset({
    "aria-activedescendant", "aria-atomic", "aria-autocomplete", "aria-braillelabel",
    "aria-brailleroledescription", "aria-busy", "aria-checked", "aria-colcount",
    "aria-colindex", "aria-colindextext", "aria-colspan", "aria-controls",
    "aria-current", "aria-describedby", "aria-description", "aria-details",
    "aria-disabled", "aria-dropeffect", "aria-errormessage", "aria-expanded",
    "aria-flowto", "aria-grabbed", "aria-haspopup", "aria-hidden", "aria-invalid",
    "aria-keyshortcuts", "aria-label", "aria-labelledby", "aria-level", "aria-live",
    "aria-modal", "aria-multiline", "aria-multiselectable", "aria-orientation",
    "aria-owns", "aria-placeholder", "aria-posinset", "aria-pressed", "aria-readonly",
    "aria-relevant", "aria-required", "aria-roledescription", "aria-rowcount",
    "aria-rowindex", "aria-rowindextext", "aria-rowspan", "aria-selected",
    "aria-setsize", "aria-sort", "aria-valuemax", "aria-valuemin", "aria-valuenow",
    "aria-valuetext",
})

ROLE_REQUIRED_ATTRIBUTES: Dict[str, List[str]] = {
    "checkbox": ["aria-checked"],
    "combobox": ["aria-expanded"],
    "heading": ["aria-level"],
    "menuitemcheckbox": ["aria-checked"],
    "menuitemradio": ["aria-checked"],
    "meter": ["aria-valuenow"],
    "option": ["aria-selected"],
    "radio": ["aria-checked"],
    "scrollbar": ["aria-controls", "aria-valuenow"],
    "slider": ["aria-valuenow"],
    "switch": ["aria-checked"],
}

IMPLICIT_ROLES: Dict[str, str] = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dialog": "dialog",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading", "h2": "heading", "h3": "heading",
    "h4": "heading", "h5": "heading", "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "img": "img",
    "li": "listitem",
    "main": "main",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "progress": "progressbar",
    "section": "region",
    "select": "combobox",
    "table": "table",
    "td": "cell",
    "textarea": "textbox",
    "th": "columnheader",
    "tr": "row",
    "ul": "list",
}

INPUT_IMPLICIT_ROLES: Dict[str, str] = {
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
}

SELECTOR_ATTRIBUTE_PATTERN = re.compile(
    r"\[\s*([A-Za-z_:][-\w:.]*)\s*"
    r"(?:=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\]]*?)))?\s*\]"
)

QUOTED_LITERAL_PATTERN = re.compile(r"^\s*(?:\"([^\"]*)\"|'([^']*)'|`([^`$]*)`)\s*$")

SELECTOR_ID_PATTERN = re.compile(r"#([A-Za-z_][-\w]*)")


# ============================================================================
# Attribute reconstruction
# ============================================================================

@dataclass
class Attribute:
    """
    One reconstructed attribute.

    `value` is None when the value is only known at runtime. `text` holds
    the exact bracket text for attributes written in the selector.
    """
    name: str
    value: Optional[str]
    source: str  # "selector", "directive" or "prop"
    text: str = ""


def _literal_value(expression: Any) -> Optional[str]:
    """Static string value of a directive expression, or None if dynamic."""
    if expression is None:
        return ""
    if isinstance(expression, str):
        match = QUOTED_LITERAL_PATTERN.match(expression)
        if match:
            return next(group for group in match.groups() if group is not None)
        stripped = expression.strip()
        if re.match(r"^-?\d+$", stripped) or stripped in ("true", "false"):
            return stripped
        return None
    if isinstance(expression, Literal):
        return "" if expression.value is None else str(expression.value)
    if isinstance(expression, ExpressionNode):
        return None
    return str(expression)


def collect_attributes(element: Element) -> Dict[str, Attribute]:
    """Merge selector, directive and prop attributes; later sources win."""
    attributes: Dict[str, Attribute] = {}
    selector = element.selector or ""

    # `#id` shorthand, looked for outside the bracket attributes
    id_match = SELECTOR_ID_PATTERN.search(SELECTOR_ATTRIBUTE_PATTERN.sub("", selector))
    if id_match:
        attributes["id"] = Attribute("id", id_match.group(1), "selector", id_match.group(0))

    for match in SELECTOR_ATTRIBUTE_PATTERN.finditer(selector):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attributes[name] = Attribute(name, value.strip(), "selector", match.group(0))

    for directive in element.directives:
        if directive.name in ATTRIBUTE_DIRECTIVES and directive.argument:
            name = directive.argument.lower()
            if directive.name == "bind":
                value = None
            else:
                value = _literal_value(directive.expression)
            attributes[name] = Attribute(name, value, "directive")

    for name, value in element.props.items():
        key = str(name).lower()
        literal = value if isinstance(value, str) else _literal_value(value)
        attributes[key] = Attribute(key, literal, "prop")

    return attributes


def has_text(node: ViewNode) -> bool:
    """Whether a node renders any text, static or interpolated."""
    if isinstance(node, TextNode):
        return bool(node.text.strip()) or bool(node.interpolations)
    if isinstance(node, Element):
        for item in node.text_content:
            if isinstance(item, Interpolation):
                return True
            if isinstance(item, str) and item.strip():
                return True
    return any(has_text(child) for child in child_nodes(node))


def tag_name(element: Element) -> str:
    """Lower-case HTML tag; bare class/id selectors denote a div."""
    tag = element_tag(element)
    if not tag and (element.selector or "").startswith((".", "#", "[")):
        return "div"
    return tag.lower()


# ============================================================================
# Checker
# ============================================================================

class AccessibilityChecker:
    """Applies accessibility rules to the view tree of one component."""

    def __init__(self, diagnostics: DiagnosticCollector):
        self.diagnostics = diagnostics
        self.last_heading_level = 0
        self.label_depth = 0
        self.label_targets: Set[str] = set()

    def check(self, component: Component) -> None:
        self.last_heading_level = 0
        self.label_depth = 0
        self.label_targets = set()
        for node in component.view_children:
            self._collect_label_targets(node)
        for node in component.view_children:
            self._visit(node)

    def _collect_label_targets(self, node: ViewNode) -> None:
        if isinstance(node, Element) and tag_name(node) == "label":
            target = collect_attributes(node).get("for")
            if target is not None and target.value:
                self.label_targets.add(target.value)
        for child in child_nodes(node):
            self._collect_label_targets(child)

    def _visit(self, node: ViewNode) -> None:
        if isinstance(node, Element) and not is_component_tag(element_tag(node)):
            tag = tag_name(node)
            self._check_element(node, tag)
            if tag == "label":
                self.label_depth += 1
                try:
                    self._visit_children(node)
                finally:
                    self.label_depth -= 1
                return
        self._visit_children(node)

    def _visit_children(self, node: ViewNode) -> None:
        for child in child_nodes(node):
            self._visit(child)

    def _report(self, code: str, message: str, element: Element,
                fix: Optional[Fix] = None) -> None:
        if fix is not None and not is_fixable(code):
            fix = None
        self.diagnostics.report(code, message, element.line, element.column, fix)

    def _check_element(self, element: Element, tag: str) -> None:
        attrs = collect_attributes(element)
        events = {directive.name for directive in element.directives}

        if tag == "img":
            self._check_image(element, attrs)
        elif tag == "button":
            self._check_button(element, attrs)
        elif tag == "a":
            self._check_link(element, attrs)

        if tag in FORM_CONTROLS:
            self._check_form_control(element, tag, attrs)

        self._check_click_key(element, tag, attrs, events)
        self._check_autofocus(element, attrs)
        self._check_tabindex(element, attrs)
        self._check_heading(element, tag)
        self._check_aria_attributes(element, attrs)
        self._check_role(element, tag, attrs)

    # ------------------------------------------------------------------------
    # Accessible names
    # ------------------------------------------------------------------------

    def _check_image(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        if any(name in attrs for name in IMAGE_NAME_ATTRIBUTES):
            return
        selector = element.selector or element.tag or ""
        fix = None
        if selector:
            fix = Fix(selector, selector + '[alt=""]', 'Add alt="" (mark image as decorative)')
        self._report(
            "a11y-img-alt",
            "Image is missing alternative text - add alt, aria-label or aria-labelledby "
            '(use alt="" for decorative images)',
            element, fix,
        )

    def _check_button(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        if has_text(element) or any(name in attrs for name in ACCESSIBLE_NAME_ATTRIBUTES):
            return
        self._report(
            "a11y-button-text",
            "Button has no accessible name - add text content, aria-label or aria-labelledby",
            element,
        )

    def _check_link(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        if has_text(element) or any(name in attrs for name in ACCESSIBLE_NAME_ATTRIBUTES):
            return
        if self._contains_image_with_alt(element):
            return
        self._report(
            "a11y-link-text",
            "Link has no accessible name - add text content, aria-label or an image with alt text",
            element,
        )

    def _contains_image_with_alt(self, node: ViewNode) -> bool:
        for child in child_nodes(node):
            if isinstance(child, Element) and tag_name(child) == "img":
                if "alt" in collect_attributes(child):
                    return True
            if self._contains_image_with_alt(child):
                return True
        return False

    def _check_form_control(self, element: Element, tag: str,
                            attrs: Dict[str, Attribute]) -> None:
        if tag == "input":
            input_type = attrs.get("type")
            if input_type is not None and (input_type.value or "").lower() in UNLABELLED_INPUT_TYPES:
                return

        if any(name in attrs for name in ACCESSIBLE_NAME_ATTRIBUTES):
            return
        element_id = attrs.get("id")
        if element_id is not None and element_id.value in self.label_targets:
            return
        if self.label_depth > 0:
            return

        if "placeholder" in attrs:
            message = ("Form control uses a placeholder but has no label "
                       "(placeholder is not a label substitute)")
        else:
            message = "Form control is missing an associated label"
        self._report("a11y-input-label", message, element)

    # ------------------------------------------------------------------------
    # Keyboard and focus
    # ------------------------------------------------------------------------

    def _check_click_key(self, element: Element, tag: str,
                         attrs: Dict[str, Attribute], events: Set[str]) -> None:
        if tag in INTERACTIVE_TAGS or not (events & CLICK_EVENTS):
            return
        if events & KEY_EVENTS or "role" in attrs:
            return
        self._report(
            "a11y-click-key",
            f"Click handler on non-interactive <{tag}> needs a keyboard handler and a role "
            "- consider using a <button>",
            element,
        )

    def _check_autofocus(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        attr = attrs.get("autofocus")
        if attr is None:
            return
        fix = None
        if attr.source == "selector" and element.selector:
            fix = Fix(
                element.selector,
                element.selector.replace(attr.text, "", 1),
                "Remove autofocus",
            )
        self._report(
            "a11y-no-autofocus",
            "Avoid autofocus - it can disorient screen reader and keyboard users",
            element, fix,
        )

    def _check_tabindex(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        attr = attrs.get("tabindex")
        if attr is None or attr.value is None:
            return
        try:
            tabindex = int(attr.value.strip())
        except ValueError:
            return
        if tabindex <= 0:
            return
        fix = None
        if attr.source == "selector":
            fix = Fix(attr.text, '[tabindex="0"]', 'Use tabindex="0"')
        self._report(
            "a11y-no-positive-tabindex",
            f"Avoid positive tabindex ({tabindex}) - it breaks the natural tab order",
            element, fix,
        )

    # ------------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------------

    def _check_heading(self, element: Element, tag: str) -> None:
        match = HEADING_PATTERN.match(tag)
        if not match:
            return
        level = int(match.group(1))
        last = self.last_heading_level
        if last and level > last + 1:
            self._report(
                "a11y-heading-order",
                f"Heading level skipped (h{last} to h{level}) - headings should not skip levels",
                element,
            )
        self.last_heading_level = level

    # ------------------------------------------------------------------------
    # ARIA
    # ------------------------------------------------------------------------

    def _check_aria_attributes(self, element: Element, attrs: Dict[str, Attribute]) -> None:
        for name in attrs:
            if name.startswith("aria-") and name not in ARIA_ATTRIBUTES:
                self._report(
                    "a11y-aria-props",
                    f"Unknown ARIA attribute '{name}'",
                    element,
                )

    def _check_role(self, element: Element, tag: str, attrs: Dict[str, Attribute]) -> None:
        attr = attrs.get("role")
        if attr is None or not attr.value:
            return
        role = attr.value.split()[0].lower()

        missing = [name for name in ROLE_REQUIRED_ATTRIBUTES.get(role, []) if name not in attrs]
        if missing:
            self._report(
                "a11y-role-props",
                f"Role '{role}' requires {', '.join(missing)}",
                element,
            )

        if role == self._implicit_role(tag, attrs):
            self._report(
                "a11y-redundant-role",
                f"Role '{role}' is redundant - <{tag}> already has this role",
                element,
            )

    @staticmethod
    def _implicit_role(tag: str, attrs: Dict[str, Attribute]) -> Optional[str]:
        if tag == "a":
            return "link" if "href" in attrs else None
        if tag == "input":
            input_type = attrs.get("type")
            kind = (input_type.value or "text").lower() if input_type else "text"
            return INPUT_IMPLICIT_ROLES.get(kind)
        return IMPLICIT_ROLES.get(tag)
