"""Custom exceptions for ecosystem generation."""


class EcosystemError(Exception):
    """Base exception for ecosystem errors."""

    pass


class ConfigurationError(EcosystemError, ValueError):
    """Raised when grid dimensions or generation options are invalid."""

    pass
