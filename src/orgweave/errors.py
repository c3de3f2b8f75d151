"""Exception classes for orgweave.

Grammar mismatches are never exceptions: a block form that does not match
returns None and the dispatcher moves on. The classes here report misuse of
the API.
"""

from __future__ import annotations


class OrgweaveError(Exception):
    """Base exception for all orgweave errors."""

    pass


class ConfigError(OrgweaveError):
    """Invalid parse configuration.

    Raised when a ParseConfig is constructed with values the parser cannot
    work with (e.g. a tab stop below one column).
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            field: Name of the offending ParseConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"ParseConfig.{field}: {message}")


class StateError(OrgweaveError):
    """Parse state used outside its phase.

    Raised when a frozen parse state is mutated, or when a deferred value is
    resolved against a state that is still being scanned.
    """

    pass
