"""
Errors raised while building a parser.

Parsing itself never raises; only construction does.
"""

from typing import Any


class ParserError(Exception):
    """Base class for every parser construction failure."""
    pass


class SourceError(ParserError):
    """Raised when the pattern file cannot be read."""
    pass


class SchemaError(ParserError):
    """Raised when the pattern file is not valid YAML or has the wrong shape."""
    pass


class PatternError(ParserError):
    """
    Raised when a single pattern record cannot be compiled.

    Attributes:
        family: "device", "os" or "user_agent"
        record: The offending pattern record
    """
    family = ""

    def __init__(self, message: str, record: Any):
        super().__init__(f"{self.family} pattern {record!r}: {message}")
        self.record = record


class DevicePatternError(PatternError):
    family = "device"


class OSPatternError(PatternError):
    family = "os"


class UserAgentPatternError(PatternError):
    family = "user_agent"
