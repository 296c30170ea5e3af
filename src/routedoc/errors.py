"""Routedoc exception hierarchy.

Shared across the registration API, the walker, and the CLI so every
module raises and catches the same types.
"""


class RoutedocError(Exception):
    """Base for all routedoc-specific errors."""


class RegistrationError(RoutedocError):
    """Raised when a registration call receives invalid arguments.

    Typically raised at import time, while an app's routes are being
    declared: bad path syntax, a non-string router name, or a router
    registered twice.
    """


class StructuralError(RoutedocError):
    """Raised when the routing tree violates a structural invariant.

    Fatal to a walk. A malformed node, a container whose children are
    not a sequence, or a second application container all mean the
    registration side built an invalid tree, so the walk aborts rather
    than skipping the offending node.
    """
