"""
Defines custom exception classes for the application.
"""

class GitAIException(Exception):
    """Base exception class for gitai application."""
    pass

class CollectorError(GitAIException):
    """Raised when an error occurs while collecting raw git data."""
    pass

class FormatterError(GitAIException):
    """Raised when an error occurs while rendering a report or prompt."""
    pass

class ConfigError(GitAIException):
    """Raised when there is a configuration error."""
    pass
