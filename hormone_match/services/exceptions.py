"""
Service-level exceptions.

This module contains exceptions that can be raised by the scoring and
recommendation services.
"""

class HormoneMatchError(Exception):
    """Base exception for engine errors."""
    pass

class CorpusError(HormoneMatchError):
    """Base exception for research corpus loading errors."""
    pass

class CorpusValidationError(CorpusError):
    """Raised when the research corpus fails schema validation at load time."""
    pass
