"""
Test suite for the style checker.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from pulselint.tree import load_component
from pulselint.analyzer.errors import DiagnosticCollector
from pulselint.analyzer.rules import Severity
from pulselint.analyzer.style import StyleChecker


class TestStyleChecker(unittest.TestCase):
    """Test cases for naming, empty-block and import-order checks."""

    def _check(self, data):
        diagnostics = DiagnosticCollector()
        StyleChecker(diagnostics).check(load_component(data))
        return diagnostics.diagnostics

    def test_page_name(self):
        diagnostics = self._check({"page": {"name": "user-profile", "line": 1, "column": 6}})
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "naming-page")
        self.assertEqual(diagnostics[0].severity, Severity.INFO)
        self.assertEqual(
            diagnostics[0].message,
            "Page name 'user-profile' should be PascalCase (e.g., 'MyComponent')",
        )
        self.assertEqual(self._check({"page": {"name": "UserProfile"}}), [])

    def test_state_names(self):
        diagnostics = self._check({"state": {"properties": [
            {"name": "UserName"}, {"name": "userName"}, {"name": "X"}, {"name": "snake_case"},
        ]}})
        self.assertEqual([d.message for d in diagnostics], [
            "State variable 'UserName' should be camelCase (e.g., 'myVariable')",
        ])

    def test_empty_blocks(self):
        diagnostics = self._check({
            "state": {"properties": []},
            "view": {"children": []},
            "actions": {"functions": []},
        })
        self.assertEqual([d.code for d in diagnostics], ["empty-block"] * 3)
        self.assertIn("state", diagnostics[0].message)
        self.assertIn("view", diagnostics[1].message)
        self.assertIn("actions", diagnostics[2].message)

    def test_absent_blocks_not_reported(self):
        self.assertEqual(self._check({}), [])

    def test_import_order(self):
        diagnostics = self._check({"imports": [
            {"source": "./b.js", "specifiers": [{"local": "b"}], "line": 2, "column": 1},
            {"source": "./a.js", "specifiers": [{"local": "a"}], "line": 3, "column": 1},
            {"source": "./c.js", "specifiers": [{"local": "c"}], "line": 4, "column": 1},
        ]})
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "import-order")
        self.assertEqual(diagnostics[0].line, 2)

    def test_sorted_imports(self):
        self.assertEqual(self._check({"imports": [
            {"source": "./a.js", "specifiers": [{"local": "a"}]},
            {"source": "./b.js", "specifiers": [{"local": "b"}]},
        ]}), [])


if __name__ == '__main__':
    unittest.main()
