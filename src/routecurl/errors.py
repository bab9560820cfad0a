"""routecurl exception hierarchy.

The resolver core never raises for missing information; these cover the
host side: reading sources and picking the method to inspect.
"""


class RoutecurlError(Exception):
    """Base for all routecurl-specific errors."""


class SourceParseError(RoutecurlError):
    """Raised when a source file can't be read at all."""


class MethodNotFoundError(RoutecurlError):
    """Raised when no method matches the requested name or source line."""
