#!/usr/bin/env python3
"""
Main test runner for pulselint.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


SAMPLE_COMPONENT = {
    "imports": [
        {"source": "./Card.pulse", "specifiers": [{"local": "Card"}], "line": 1, "column": 1},
        {"source": "./Button.pulse", "specifiers": [{"local": "Button"}], "line": 2, "column": 1},
    ],
    "page": {"name": "Dashboard", "line": 4, "column": 6},
    "state": {"line": 6, "column": 1, "properties": [
        {"name": "count", "value": 0, "line": 7, "column": 3},
    ]},
    "actions": {"line": 10, "column": 1, "functions": [
        {"name": "increment", "body": "count++", "line": 11, "column": 3,
         "bodyTokens": [{"type": "IDENTIFIER", "value": "count"}]},
    ]},
    "view": {"line": 14, "column": 1, "children": [
        {"type": "Element", "selector": "h1", "textContent": ["Dashboard"], "line": 15, "column": 3},
        {"type": "Element", "selector": "Card", "line": 16, "column": 3, "children": [
            {"type": "Element", "selector": "img.logo", "line": 17, "column": 5},
            {"type": "Element", "selector": "button", "line": 18, "column": 5,
             "textContent": [{"type": "Interpolation", "expression": "count"}],
             "directives": [{"name": "click", "handler": "increment()"}]},
        ]},
    ]},
}

SAMPLE_SOURCE = "\n".join([
    "import Card from './Card.pulse'",
    "import Button from './Button.pulse'",
    "",
    "@page Dashboard",
    "",
    "state {",
    "  count: 0",
    "}",
    "",
    "actions {",
    "  increment() { count++ }",
    "}",
    "",
    "view {",
    "  h1 \"Dashboard\"",
    "  Card {",
    "    img.logo",
    "    button @click(increment()) \"{count}\"",
    "  }",
    "}",
])


def run_smoke_lint():
    """Lint a small inline component end to end, fixes included."""
    print("Testing lint pipeline...")
    try:
        from pulselint import lint, format_diagnostic, format_summary

        result = lint(SAMPLE_COMPONENT, source=SAMPLE_SOURCE, fix=True)
        for diagnostic in result.diagnostics:
            print(format_diagnostic(diagnostic, "Dashboard.pulse"))
        print(format_summary(result.counts))
        print(f"  Applied {result.fixes_applied} fix(es)")

        codes = [d.code for d in result.diagnostics]
        expected = ["unused-import", "import-order", "a11y-img-alt"]
        if codes != expected:
            print(f"❌ Unexpected diagnostics: {codes} (expected {expected})")
            return False
        if result.fixes_applied != 1 or 'img.logo[alt=""]' not in result.fixed_source:
            print("❌ Fix was not applied")
            return False

    except Exception as e:
        print(f"❌ Lint pipeline test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False

    print("✅ Lint pipeline test PASSED")
    print()
    return True


def run_all_tests():
    """Run all pulselint tests."""

    print("🚀 pulselint Test Suite")
    print("=" * 60)

    if not run_smoke_lint():
        return False

    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"), top_level_dir=project_root)
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    print()
    if result.wasSuccessful():
        print(f"✅ All {result.testsRun} tests passed")
    else:
        print(f"❌ {len(result.failures)} failures, {len(result.errors)} errors")
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
