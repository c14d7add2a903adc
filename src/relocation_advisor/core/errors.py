"""Custom exceptions for the relocation advisor."""

class RelocationAdvisorError(Exception):
    """Base error for the relocation advisor."""


class ValidationError(RelocationAdvisorError):
    """Raised when preferences or destination attributes are invalid or incomplete."""
