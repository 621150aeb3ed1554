"""Domain exceptions for variations app."""


class VariationsServiceError(Exception):
    """Base exception for all variations service errors."""
    pass


class VariationOrderNotFoundError(VariationsServiceError):
    """Variation order does not exist."""
    pass


class InvalidVariationOrderError(VariationsServiceError):
    """Variation order fields are invalid or not recognised."""
    pass
