from __future__ import annotations


class ExtrepoError(Exception):
    """Base class for all extrepo domain errors."""


class InvalidExtensionDescriptorError(ValueError, ExtrepoError):
    """Raised when a raw record cannot supply a usable extension identity."""


class InvalidVersionError(ValueError, ExtrepoError):
    """Raised when a version string cannot be parsed."""


class RepositoryRequestError(RuntimeError, ExtrepoError):
    """Raised when a remote extension repository request fails."""


class LicenseRegistryError(ValueError, ExtrepoError):
    """Raised when a license registry file cannot be loaded."""
