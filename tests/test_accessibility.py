"""
Test suite for the accessibility checker.

Tests cover:
- Accessible names for images, buttons, links and form controls
- Keyboard and focus rules, with their fixes
- Heading order across the whole view
- ARIA attribute and role checks

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from pulselint.tree import load_component, Element, Directive
from pulselint.analyzer.errors import DiagnosticCollector
from pulselint.analyzer.accessibility import AccessibilityChecker, collect_attributes


def el(selector, text=None, children=None, directives=None, props=None, line=None):
    node = {"type": "Element", "selector": selector}
    if text is not None:
        node["textContent"] = text
    if children is not None:
        node["children"] = children
    if directives is not None:
        node["directives"] = directives
    if props is not None:
        node["props"] = props
    if line is not None:
        node["line"] = line
        node["column"] = 5
    return node


class AccessibilityTestCase(unittest.TestCase):

    def check(self, *nodes, disabled=None):
        component = load_component({"view": {"children": list(nodes)}})
        diagnostics = DiagnosticCollector(disabled)
        AccessibilityChecker(diagnostics).check(component)
        return diagnostics.diagnostics

    def codes(self, *nodes):
        return [d.code for d in self.check(*nodes)]


class TestAccessibleNames(AccessibilityTestCase):
    """Images, buttons, links and form controls need a name or label."""

    def test_image_without_alt(self):
        diagnostics = self.check(el("img.logo", line=4))
        self.assertEqual(len(diagnostics), 1)

        diagnostic = diagnostics[0]
        self.assertEqual(diagnostic.code, "a11y-img-alt")
        self.assertEqual((diagnostic.line, diagnostic.column), (4, 5))
        self.assertEqual(diagnostic.fix.old_text, "img.logo")
        self.assertEqual(diagnostic.fix.new_text, 'img.logo[alt=""]')

    def test_image_name_sources(self):
        """Any of alt, aria-label or aria-labelledby clears the warning."""
        self.assertEqual(self.codes(el('img[alt="Company logo"]')), [])
        self.assertEqual(self.codes(el("img", directives=[
            {"name": "attr", "argument": "aria-label", "expression": "'Logo'"},
        ])), [])
        self.assertEqual(self.codes(el("img", props={"aria-labelledby": "caption"})), [])
        self.assertEqual(self.codes(el("img", directives=[
            {"name": "bind", "argument": "alt", "expression": "photo.caption"},
        ])), [])

    def test_button_needs_name(self):
        self.assertEqual(self.codes(el("button.icon")), ["a11y-button-text"])
        self.assertEqual(self.codes(el("button", text=["Save"])), [])
        self.assertEqual(self.codes(el("button[title=Close]")), [])
        self.assertEqual(self.codes(el("button", text=[
            {"type": "Interpolation", "expression": "label"},
        ])), [])
        self.assertEqual(self.codes(el("button", children=[
            el("span.label", text=["Delete"]),
        ])), [])

    def test_link_needs_name(self):
        self.assertEqual(self.codes(el('a[href="/home"]')), ["a11y-link-text"])
        self.assertEqual(self.codes(el('a[href="/home"]', text=["Home"])), [])
        self.assertEqual(self.codes(el('a[href="/home"]', children=[el('img[alt="Home"]')])), [])

    def test_form_control_without_label(self):
        diagnostics = self.check(el("input#email[type=email]"))
        self.assertEqual([d.code for d in diagnostics], ["a11y-input-label"])
        self.assertNotIn("placeholder", diagnostics[0].message)

    def test_placeholder_is_not_a_label(self):
        diagnostics = self.check(el('input[placeholder="Search"]'))
        self.assertEqual([d.code for d in diagnostics], ["a11y-input-label"])
        self.assertIn("placeholder", diagnostics[0].message)

    def test_label_association(self):
        """A label[for] anywhere in the view, a wrapping label or aria-label all count."""
        self.assertEqual(self.codes(
            el("input#email[type=email]"),
            el("label[for=email]", text=["Email"]),
        ), [])
        self.assertEqual(self.codes(el("label", text=["Name"], children=[el("input")])), [])
        self.assertEqual(self.codes(el('textarea[aria-label="Comment"]')), [])
        self.assertEqual(self.codes(el("select#size"), el("label[for=colour]")), ["a11y-input-label"])

    def test_title_names_form_control(self):
        self.assertEqual(self.codes(el('input[title="Search"]')), [])
        self.assertEqual(self.codes(el('select[title="Size"]')), [])

    def test_exempt_input_types(self):
        for input_type in ("hidden", "submit", "button", "reset", "image"):
            self.assertEqual(self.codes(el(f"input[type={input_type}]")), [], input_type)


class TestKeyboardAndFocus(AccessibilityTestCase):

    def test_click_without_key_handler(self):
        diagnostics = self.check(el("div.card", directives=[{"name": "click", "handler": "open()"}]))
        self.assertEqual([d.code for d in diagnostics], ["a11y-click-key"])
        self.assertIn("<div>", diagnostics[0].message)

    def test_class_selector_is_a_div(self):
        self.assertEqual(
            self.codes(el(".card", directives=[{"name": "click", "handler": "open()"}])),
            ["a11y-click-key"],
        )

    def test_click_with_key_handler_or_role(self):
        click = {"name": "click", "handler": "open()"}
        self.assertEqual(self.codes(el("div", directives=[click, {"name": "keydown", "handler": "open()"}])), [])
        self.assertEqual(self.codes(el("div[role=button]", directives=[click])), [])
        self.assertEqual(self.codes(el("button", text=["Open"], directives=[click])), [])

    def test_autofocus_removed_from_selector(self):
        diagnostics = self.check(el('input[autofocus][aria-label="Search"]'))
        self.assertEqual([d.code for d in diagnostics], ["a11y-no-autofocus"])
        fix = diagnostics[0].fix
        self.assertEqual(fix.old_text, 'input[autofocus][aria-label="Search"]')
        self.assertEqual(fix.new_text, 'input[aria-label="Search"]')

    def test_autofocus_from_directive_has_no_fix(self):
        diagnostics = self.check(el("div", directives=[
            {"name": "attr", "argument": "autofocus", "expression": "true"},
        ]))
        self.assertEqual([d.code for d in diagnostics], ["a11y-no-autofocus"])
        self.assertIsNone(diagnostics[0].fix)

    def test_positive_tabindex(self):
        diagnostics = self.check(el("div.item[tabindex=3]"))
        self.assertEqual([d.code for d in diagnostics], ["a11y-no-positive-tabindex"])
        self.assertEqual(diagnostics[0].fix.old_text, "[tabindex=3]")
        self.assertEqual(diagnostics[0].fix.new_text, '[tabindex="0"]')

    def test_zero_and_negative_tabindex(self):
        self.assertEqual(self.codes(el("div[tabindex=0]")), [])
        self.assertEqual(self.codes(el('div[tabindex="-1"]')), [])

    def test_tabindex_from_directive(self):
        diagnostics = self.check(el("div", directives=[
            {"name": "attr", "argument": "tabindex", "expression": "5"},
        ]))
        self.assertEqual([d.code for d in diagnostics], ["a11y-no-positive-tabindex"])
        self.assertIsNone(diagnostics[0].fix)

    def test_disabled_fix_rule(self):
        diagnostics = self.check(el("img"), disabled={"a11y-img-alt"})
        self.assertEqual(diagnostics, [])


class TestHeadingOrder(AccessibilityTestCase):

    def test_skipped_level(self):
        diagnostics = self.check(el("h1", text=["Title"]), el("h3", text=["Details"]))
        self.assertEqual([d.code for d in diagnostics], ["a11y-heading-order"])
        self.assertIn("h1 to h3", diagnostics[0].message)

    def test_sequential_levels(self):
        self.assertEqual(self.codes(
            el("h1", text=["A"]), el("h2", text=["B"]), el("h3", text=["C"]),
        ), [])

    def test_first_heading_never_flagged(self):
        self.assertEqual(self.codes(el("h4", text=["Deep"])), [])

    def test_going_up_is_allowed(self):
        self.assertEqual(self.codes(
            el("h2", text=["A"]), el("h3", text=["B"]), el("h1", text=["C"]), el("h2", text=["D"]),
        ), [])

    def test_nested_headings(self):
        section = el("section", children=[el("h2", text=["Intro"])])
        self.assertEqual(self.codes(el("h1", text=["Page"]), section, el("h4", text=["Note"])),
                         ["a11y-heading-order"])

    def test_counter_shared_across_branches(self):
        """Both branches of a conditional feed one counter, in document order."""
        conditional = {
            "type": "IfDirective", "condition": "ready",
            "consequent": [el("h1", text=["Ready"])],
            "alternate": [el("h3", text=["Waiting"])],
        }
        self.assertEqual(self.codes(conditional), ["a11y-heading-order"])


class TestAria(AccessibilityTestCase):

    def test_unknown_aria_attribute(self):
        diagnostics = self.check(el("div[aria-lable=Menu]"))
        self.assertEqual([d.message for d in diagnostics], ["Unknown ARIA attribute 'aria-lable'"])

    def test_known_aria_attributes(self):
        self.assertEqual(self.codes(el('div[aria-hidden="true"][aria-live=polite]')), [])

    def test_role_required_attributes(self):
        diagnostics = self.check(el("div[role=checkbox]"))
        self.assertEqual([d.message for d in diagnostics], ["Role 'checkbox' requires aria-checked"])
        self.assertEqual(self.codes(el("div[role=checkbox][aria-checked=false]")), [])

    def test_redundant_role(self):
        self.assertEqual(self.codes(el("button[role=button]", text=["Go"])), ["a11y-redundant-role"])
        self.assertEqual(self.codes(el("nav[role=navigation]")), ["a11y-redundant-role"])
        self.assertEqual(self.codes(el("a[role=link]", text=["Menu"])), [])


class TestTraversal(AccessibilityTestCase):

    def test_component_tags_skipped_children_checked(self):
        avatar = el("Avatar", children=[el("img.photo")])
        self.assertEqual(self.codes(avatar), ["a11y-img-alt"])

    def test_unknown_node_children_checked(self):
        portal = {"type": "Portal", "children": [el("img")]}
        self.assertEqual(self.codes(portal), ["a11y-img-alt"])

    def test_each_body_checked(self):
        loop = {"type": "EachDirective", "item": "item", "iterable": "items", "body": [el("img")]}
        self.assertEqual(self.codes(loop), ["a11y-img-alt"])

    def test_attribute_merge_order(self):
        """Props override directives, directives override the selector."""
        element = Element(
            selector="div[role=list]#menu",
            directives=[Directive("attr", expression="'tree'", argument="role")],
            props={"role": "grid"},
        )
        attributes = collect_attributes(element)
        self.assertEqual(attributes["role"].value, "grid")
        self.assertEqual(attributes["role"].source, "prop")
        self.assertEqual(attributes["id"].value, "menu")


if __name__ == '__main__':
    unittest.main()
