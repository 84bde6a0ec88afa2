class ExtractionError(Exception):
    """Base exception for extraction provider failures."""


class ConfigurationError(ExtractionError):
    """Raised when a provider lacks the configuration it needs."""


class ProviderError(ExtractionError):
    """Raised when the upstream provider call fails or returns nothing usable."""


class ParseError(ExtractionError):
    """Raised when a provider response is empty or not valid JSON."""
