"""
Rule-based user-agent parsing driven by uap-core style pattern files.

Usage:
    from ua_extract import Parser

    parser = Parser.from_yaml("regexes.yaml")
    client = parser.parse(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    client.user_agent.family   # "Chrome"
    client.user_agent.version  # "91.0.4472"
"""

from .config import ParserConfig
from .errors import (
    DevicePatternError,
    OSPatternError,
    ParserError,
    PatternError,
    SchemaError,
    SourceError,
    UserAgentPatternError,
)
from .extractors import DeviceExtractor, OSExtractor, UserAgentExtractor
from .loader import RegexFile, load_regexes
from .parser import Parser
from .types import (
    OS,
    Client,
    Device,
    DeviceOverride,
    DevicePattern,
    OSPattern,
    UserAgent,
    UserAgentPattern,
)

__version__ = "0.1.0"
__all__ = [
    "Parser",
    "ParserConfig",
    "RegexFile",
    "load_regexes",
    "UserAgentExtractor",
    "OSExtractor",
    "DeviceExtractor",
    "UserAgentPattern",
    "OSPattern",
    "DevicePattern",
    "DeviceOverride",
    "UserAgent",
    "OS",
    "Device",
    "Client",
    "ParserError",
    "SourceError",
    "SchemaError",
    "PatternError",
    "DevicePatternError",
    "OSPatternError",
    "UserAgentPatternError",
]
