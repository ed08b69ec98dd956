"""Exception hierarchy for the hadith categorizer."""


class CategorizationError(Exception):
    """Base exception for categorization errors."""
    pass


class TaxonomyError(CategorizationError):
    """Raised when the taxonomy asset is missing, unparsable or invalid."""
    pass


class PipelineError(CategorizationError):
    """Raised when a categorization run cannot start."""
    pass
