"""Error types raised by wpgh."""

from __future__ import annotations


class WpghError(Exception):
    """Base class for wpgh errors."""


class InvalidArguments(WpghError):
    """Unknown asset kind, operation, or a malformed message template."""


class MissingPriorState(WpghError):
    """An update message was requested for an asset with no previous version."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"no previous version recorded for {identifier!r}")


class ExternalMutationFailure(WpghError):
    """The WP-CLI install/update call failed."""

    def __init__(self, message: str, returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message)


class VersionControlFailure(WpghError):
    """Staging or committing an asset failed."""

    def __init__(self, message: str, path: str = "", stderr: str = ""):
        self.path = path
        self.stderr = stderr
        super().__init__(message)
