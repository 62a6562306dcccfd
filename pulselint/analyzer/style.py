"""
Style checks for Pulse components.

Advisory naming and layout conventions. Nothing here resolves names; the
checker only reads the component tree and appends `info` diagnostics.

Author: xwest
"""

import re

from ..tree.nodes import Component
from .errors import DiagnosticCollector


PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*$")


class StyleChecker:
    """Checks page naming, state naming, empty blocks and import order."""

    def __init__(self, diagnostics: DiagnosticCollector):
        self.diagnostics = diagnostics

    def check(self, component: Component) -> None:
        self._check_page_name(component)
        self._check_state_names(component)
        self._check_empty_blocks(component)
        self._check_import_order(component)

    def _check_page_name(self, component: Component) -> None:
        page = component.page
        if page and page.name and not PASCAL_CASE.match(page.name):
            self.diagnostics.report(
                "naming-page",
                f"Page name '{page.name}' should be PascalCase (e.g., 'MyComponent')",
                page.line, page.column,
            )

    def _check_state_names(self, component: Component) -> None:
        for prop in component.state_properties:
            name = prop.name
            if CAMEL_CASE.match(name) or len(name) <= 1:
                continue
            # Only PascalCase-looking names are flagged; snake_case is tolerated.
            if name[0].isupper():
                self.diagnostics.report(
                    "naming-state",
                    f"State variable '{name}' should be camelCase (e.g., 'myVariable')",
                    prop.line, prop.column,
                )

    def _check_empty_blocks(self, component: Component) -> None:
        state, view, actions = component.state, component.view, component.actions

        if state is not None and not state.properties:
            self.diagnostics.report(
                "empty-block", "Empty state block - consider removing if not needed",
                state.line, state.column,
            )

        if view is not None and not view.children:
            self.diagnostics.report(
                "empty-block", "Empty view block - component will render nothing",
                view.line, view.column,
            )

        if actions is not None and not actions.functions:
            self.diagnostics.report(
                "empty-block", "Empty actions block - consider removing if not needed",
                actions.line, actions.column,
            )

    def _check_import_order(self, component: Component) -> None:
        imports = component.imports
        if len(imports) < 2:
            return
        sources = [imp.source for imp in imports]
        if sources != sorted(sources):
            # One diagnostic for the whole list, anchored at the first import.
            self.diagnostics.report(
                "import-order", "Imports should be sorted alphabetically",
                imports[0].line, imports[0].column,
            )
