"""
Test suite for the security checker.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from pulselint.tree import (
    Component, ActionsBlock, ActionFunction, ViewBlock, Element, Directive,
    MemberExpression, Identifier,
)
from pulselint.analyzer.errors import DiagnosticCollector
from pulselint.analyzer.security import SecurityChecker, scan_code


class TestSecurityChecker(unittest.TestCase):
    """Test cases for XSS pattern detection."""

    def _check(self, component):
        diagnostics = DiagnosticCollector()
        SecurityChecker(diagnostics).check(component)
        return diagnostics.diagnostics

    def _check_body(self, body, line=5, column=3):
        action = ActionFunction("render", body=body, line=line, column=column)
        return self._check(Component(actions=ActionsBlock([action])))

    def test_html_assignment(self):
        diagnostics = self._check_body("el.innerHTML = userInput")
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "xss-vulnerability")
        self.assertIn("innerHTML", diagnostics[0].message)
        self.assertEqual((diagnostics[0].line, diagnostics[0].column), (5, 3))

    def test_clearing_html_is_safe(self):
        self.assertEqual(self._check_body('el.innerHTML = ""'), [])
        self.assertEqual(self._check_body("el.outerHTML = ''"), [])
        self.assertEqual(self._check_body("el.innerHTML = '';\nrefresh()"), [])
        self.assertEqual(self._check_body("if (done) { el.innerHTML = \"\" }"), [])

    def test_empty_string_concatenation_is_reported(self):
        diagnostics = self._check_body("el.innerHTML = '' + userInput")
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("innerHTML", diagnostics[0].message)
        self.assertEqual(len(self._check_body('el.outerHTML = "" + row')), 1)

    def test_comparison_is_not_assignment(self):
        self.assertEqual(self._check_body("if (el.innerHTML === before) return"), [])

    def test_append_assignment(self):
        diagnostics = self._check_body("list.outerHTML += row")
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("outerHTML", diagnostics[0].message)

    def test_code_evaluation(self):
        self.assertEqual(len(self._check_body("eval(source)")), 1)
        self.assertEqual(len(self._check_body("const f = new Function('a', body)")), 1)
        self.assertEqual(self._check_body("retrieval(source)"), [])
        self.assertEqual(self._check_body("evaluate(source)"), [])

    def test_qualified_eval(self):
        diagnostics = self._check_body("window.eval(code)")
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("eval()", diagnostics[0].message)

    def test_string_timers(self):
        diagnostics = self._check_body("setTimeout('tick()', 100)")
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("setTimeout", diagnostics[0].message)
        self.assertEqual(self._check_body("setInterval(tick, 100)"), [])

    def test_dom_writers(self):
        self.assertEqual(len(self._check_body("document.write(html)")), 1)
        self.assertEqual(len(self._check_body("document.writeln(html)")), 1)
        self.assertEqual(len(self._check_body("el.insertAdjacentHTML('beforeend', row)")), 1)

    def test_pattern_order(self):
        """Matches come back grouped by pattern, in pattern order."""
        names = [risk.name for risk, _ in scan_code("eval(a); document.write(b)")]
        self.assertEqual(names, ["document-write", "eval"])

    def test_raw_html_directive(self):
        view = ViewBlock([Element(
            selector="div.content",
            directives=[Directive("html", expression="article.body", line=9, column=14)],
        )])
        diagnostics = self._check(Component(view=view))
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("@html", diagnostics[0].message)
        self.assertEqual(diagnostics[0].line, 9)

    def test_directive_handler_text(self):
        view = ViewBlock([Element(
            selector="div",
            directives=[Directive("click", handler="target.innerHTML = message")],
            line=3, column=1,
        )])
        diagnostics = self._check(Component(view=view))
        self.assertEqual([d.message for d in diagnostics], [
            "Directive @click uses innerHTML - use text bindings or sanitize the value",
        ])
        self.assertEqual(diagnostics[0].line, 3)

    def test_structured_member_sink(self):
        expression = MemberExpression(Identifier("node"), Identifier("outerHTML"))
        view = ViewBlock([Element(
            selector="span",
            directives=[Directive("bind", expression=expression, argument="title")],
        )])
        diagnostics = self._check(Component(view=view))
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("outerHTML", diagnostics[0].message)

    def test_nested_elements_scanned(self):
        inner = Element(selector="p", directives=[Directive("html", expression="raw")])
        view = ViewBlock([Element(selector="section", children=[inner])])
        self.assertEqual(len(self._check(Component(view=view))), 1)

    def test_clean_component(self):
        action = ActionFunction("save", body="el.textContent = value; fetch(url)")
        view = ViewBlock([Element(selector="button", directives=[Directive("click", handler="save()")])])
        self.assertEqual(self._check(Component(actions=ActionsBlock([action]), view=view)), [])


if __name__ == '__main__':
    unittest.main()
