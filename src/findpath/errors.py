"""
Exception types for findpath.
"""


class ConfigurationError(Exception):
    """Raised when search options or configuration files are invalid."""
    pass
