class ResolverError(Exception):
    """Base exception for the breakdown resolver."""


class ConfigurationError(ResolverError):
    """Raised when resolver configuration is missing or invalid."""


class FamilyTableError(ResolverError):
    """Raised when a synonym family table is malformed (e.g. overlapping families)."""
