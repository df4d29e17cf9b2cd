"""Custom exceptions for the brag log."""


class BragError(Exception):
    """Base exception for brag log errors."""
    pass


class SectionNotFoundError(BragError):
    """Raised when a ``## <name>`` heading is absent from a document.

    Carries the section name so callers can report which heading is missing.
    """

    def __init__(self, section_name: str) -> None:
        super().__init__(f'Section "{section_name}" not found')
        self.section_name = section_name


class InvalidFormatError(BragError):
    """Raised when a date or year-month string fails validation."""
    pass


class PathTraversalError(BragError):
    """Raised when a resolved path escapes its base directory."""
    pass


class GenerationError(BragError):
    """Raised when the text generation call fails."""
    pass


class StorageError(BragError):
    """File read/write failure. The message names the offending path."""
    pass


class ConfigError(BragError):
    """Missing or invalid configuration."""
    pass
