"""
Symbol table for Pulse component analysis.

A component has three flat namespaces: imports, state variables and
actions. Names are unique within a namespace but may repeat across them.
Each symbol carries a `used` flag that the reference passes set and the
unused detector sweeps afterwards.

One table belongs to exactly one analysis run; it is never shared between
files or reused for a second run on the same file.

Author: xwest
"""

from typing import Dict, List, Optional, Iterator
from dataclasses import dataclass
from enum import Enum


class SymbolKind(Enum):
    """Namespaces of the symbol table."""
    IMPORT = "import"
    STATE = "state"
    ACTION = "action"


@dataclass
class Symbol:
    """A declared name and its usage state."""
    name: str
    kind: SymbolKind
    line: int = 1
    column: int = 1
    source: Optional[str] = None  # For imports
    used: bool = False

    def mark_used(self) -> None:
        # Usage only ever goes from False to True within a run.
        self.used = True

    def __str__(self) -> str:
        return f"{self.kind.value} {self.name}"


@dataclass(frozen=True)
class DeclareResult:
    """Outcome of a declaration; `existing` is set on a duplicate."""
    success: bool
    existing: Optional[Symbol] = None

    @property
    def is_duplicate(self) -> bool:
        return not self.success


@dataclass(frozen=True)
class ReferenceResult:
    """Outcome of resolving a name."""
    found: bool
    kind: Optional[SymbolKind] = None


# Lookup priority for `reference()`.
RESOLUTION_ORDER = (SymbolKind.STATE, SymbolKind.ACTION, SymbolKind.IMPORT)


class SymbolTable:
    """
    Three-namespace symbol store with mutable usage flags.

    Provides declaration with duplicate detection, name resolution in
    state -> actions -> imports order, and the sweep for unused symbols.
    """

    def __init__(self):
        """Initialize one empty namespace per symbol kind."""
        self.namespaces: Dict[SymbolKind, Dict[str, Symbol]] = {
            SymbolKind.IMPORT: {},
            SymbolKind.STATE: {},
            SymbolKind.ACTION: {},
        }

    def _declare(self, symbol: Symbol) -> DeclareResult:
        namespace = self.namespaces[symbol.kind]
        if symbol.name in namespace:
            # Keep the original; the caller reports the second occurrence.
            return DeclareResult(False, namespace[symbol.name])
        namespace[symbol.name] = symbol
        return DeclareResult(True)

    def declare_import(self, name: str, source: Optional[str] = None,
                       line: int = 1, column: int = 1) -> DeclareResult:
        """Declare an imported name."""
        return self._declare(Symbol(name, SymbolKind.IMPORT, line, column, source=source))

    def declare_state(self, name: str, line: int = 1, column: int = 1) -> DeclareResult:
        """Declare a state variable."""
        return self._declare(Symbol(name, SymbolKind.STATE, line, column))

    def declare_action(self, name: str, line: int = 1, column: int = 1) -> DeclareResult:
        """Declare an action function."""
        return self._declare(Symbol(name, SymbolKind.ACTION, line, column))

    def reference(self, name: str) -> ReferenceResult:
        """
        Resolve `name` and mark the first matching symbol as used.

        Namespaces are searched state first, then actions, then imports.
        """
        for kind in RESOLUTION_ORDER:
            symbol = self.namespaces[kind].get(name)
            if symbol is not None:
                symbol.mark_used()
                return ReferenceResult(True, kind)
        return ReferenceResult(False)

    def lookup(self, name: str, kind: SymbolKind) -> Optional[Symbol]:
        """Look up a symbol in one namespace without marking it used."""
        return self.namespaces[kind].get(name)

    def get_unused(self) -> List[Symbol]:
        """Every symbol never marked used: imports, then state, then actions."""
        unused = []
        for kind in (SymbolKind.IMPORT, SymbolKind.STATE, SymbolKind.ACTION):
            unused.extend(symbol for symbol in self.namespaces[kind].values() if not symbol.used)
        return unused

    def __iter__(self) -> Iterator[Symbol]:
        for namespace in self.namespaces.values():
            yield from namespace.values()

    def __len__(self) -> int:
        return sum(len(namespace) for namespace in self.namespaces.values())

    def __str__(self) -> str:
        counts = ", ".join(f"{len(ns)} {kind.value}" for kind, ns in self.namespaces.items())
        return f"SymbolTable({counts})"
