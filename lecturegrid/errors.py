class ValidationError(ValueError):
    """Raised when input records are missing required fields or are malformed."""


class ConfigurationError(ValueError):
    """Raised for run settings (days, rooms, periods) that cannot build a grid."""
