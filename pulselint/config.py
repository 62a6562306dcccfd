"""
Lint configuration.

Settings a caller can pass to the analyzer to switch whole checkers off,
silence individual rules or extend the built-in identifier allow-list.
Reading configuration files is left to the caller; `from_mapping` accepts
the plain mapping such a file decodes to.

Author: xwest
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Set
from dataclasses import dataclass, field

from .analyzer.errors import ConfigurationError
from .analyzer.rules import RULES


@dataclass
class LintConfiguration:
    """Configuration parameters for one lint run"""

    # Independent checkers; the pass order never changes
    check_style: bool = True
    check_security: bool = True
    check_accessibility: bool = True

    # Rule codes whose diagnostics are not recorded
    disabled_rules: Set[str] = field(default_factory=set)

    # Identifiers treated as globals by the reference resolver
    extra_builtins: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.disabled_rules = _string_set("disabled_rules", self.disabled_rules)
        self.extra_builtins = _string_set("extra_builtins", self.extra_builtins)

        unknown = sorted(code for code in self.disabled_rules if code not in RULES)
        if unknown:
            raise ConfigurationError(f"Unknown rule code(s): {', '.join(unknown)}")

    def is_enabled(self, code: str) -> bool:
        return code not in self.disabled_rules

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "LintConfiguration":
        """
        Build a configuration from a plain mapping.

        Keys may be written in snake_case or camelCase. Unknown keys and
        non-boolean checker switches raise ConfigurationError.
        """
        if mapping is None:
            return cls()
        if not isinstance(mapping, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(mapping).__name__}"
            )

        options: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise ConfigurationError(f"Unknown configuration option '{key}'")
            if name in _BOOLEAN_OPTIONS and not isinstance(value, bool):
                raise ConfigurationError(f"Option '{key}' must be true or false")
            options[name] = value
        return cls(**options)


_BOOLEAN_OPTIONS = ("check_style", "check_security", "check_accessibility")

_OPTION_ALIASES = {
    "check_style": "check_style",
    "checkStyle": "check_style",
    "check_security": "check_security",
    "checkSecurity": "check_security",
    "check_accessibility": "check_accessibility",
    "checkAccessibility": "check_accessibility",
    "disabled_rules": "disabled_rules",
    "disabledRules": "disabled_rules",
    "extra_builtins": "extra_builtins",
    "extraBuiltins": "extra_builtins",
}


def _string_set(option: str, values: Iterable[str]) -> Set[str]:
    # A bare string would otherwise be split into characters.
    if values is None:
        return set()
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ConfigurationError(f"Option '{option}' must be a list of strings")
    result = set()
    for value in values:
        if not isinstance(value, str):
            raise ConfigurationError(f"Option '{option}' must be a list of strings")
        result.add(value)
    return result
