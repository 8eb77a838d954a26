"""Custom exceptions for site provisioning."""

from __future__ import annotations


class SiteSetupError(Exception):
    """Base exception for all provisioning failures."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class MissingArgument(SiteSetupError):
    """A flag expects a value and none follows."""


class InvalidOption(SiteSetupError):
    """Unrecognized command-line option or stray argument."""


class MissingDomain(SiteSetupError):
    """No --domain was given."""


class InvalidDomain(SiteSetupError):
    """Domain fails the syntax check."""


class UnsupportedServer(SiteSetupError):
    """Requested server type is not apache, nginx or auto."""


class AutoDetectionFailed(SiteSetupError):
    """Neither Apache nor Nginx could be found in auto mode."""


class MissingTemplate(SiteSetupError):
    """Bundled server config template is absent."""


class MissingDependency(SiteSetupError):
    """A required external command is not on the search path."""


class CommandFailed(SiteSetupError):
    """An external command exited with a nonzero status."""


class InternalStateError(SiteSetupError):
    """Plan holds a value that resolution should have ruled out."""


class FilesystemError(SiteSetupError):
    """A directory, file copy or symlink could not be written."""
