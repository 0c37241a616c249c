"""Exception hierarchy for the account selection core.

All errors inherit from AccessTreeError and carry a stable ``code``.

Toggling, removing and searching never raise these during normal use:
unknown ids and disabled nodes degrade to no-ops, and an empty search
result is a valid outcome. The seed-data errors below are raised only
when the store is built with strict validation enabled.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    # Base hierarchy
    "AccessTreeError",
    "ConfigurationError",
    "SeedDataError",
    "UnknownNodeReferenceError",
    "CyclicTreeError",
]

# ---- Exception Hierarchy ----------------------------------------------------


class AccessTreeError(Exception):
    """Base exception for the account selection core.

    Attributes:
        code: Stable error code string (e.g. "SEED_DATA_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(AccessTreeError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class SeedDataError(AccessTreeError):
    """The static tree definitions are not a consistent forest."""

    code: str = "SEED_DATA_ERROR"
    message: str = "Seed data is inconsistent"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        defects = kwargs.get("defects")
        if message is None and defects:
            message = f"{len(defects)} seed defect(s): " + "; ".join(str(d) for d in defects)
        super().__init__(message, code, **kwargs)


class UnknownNodeReferenceError(SeedDataError):
    """A children/parent id does not resolve in the store."""

    code: str = "UNKNOWN_NODE_REFERENCE"


class CyclicTreeError(SeedDataError):
    """Parent links loop back on themselves."""

    code: str = "CYCLIC_TREE"
