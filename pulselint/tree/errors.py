"""
Exceptions shared by the Pulse lint toolchain.

Author: xwest
"""


class LintError(Exception):
    """Base class for errors raised by pulselint itself.

    Findings about the analyzed component are never raised; they are
    reported as diagnostics. These exceptions signal misuse of the API.
    """


class TreeFormatError(LintError):
    """Raised when the input handed to the tree loader is not a component tree."""
