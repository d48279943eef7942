"""Domain error types."""


class ConfigLoadError(Exception):
    """Raised when the config document cannot be read or is not a key/value mapping."""
