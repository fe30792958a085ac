"""Perch exception hierarchy.

Shared across the pattern compiler, node binding, and the CLI so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a node or tree configuration is invalid.

    Always raised while the tree is built or bound, never during a
    traversal.
    """
