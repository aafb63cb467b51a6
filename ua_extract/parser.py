"""
Top-level user-agent parser.

Usage:
    from ua_extract import Parser

    parser = Parser.from_yaml("regexes.yaml")
    client = parser.parse(request.headers["User-Agent"])
    client.user_agent.family  # "Chrome"
    client.os.version         # "10"

A parser is read-only once built and can be shared between threads.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import IO

from .config import ParserConfig
from .errors import SourceError
from .extractors import DeviceExtractor, OSExtractor, UserAgentExtractor
from .loader import RegexFile, load_regexes
from .types import OS, Client, Device, UserAgent

logger = logging.getLogger(__name__)


class Parser:
    """Delegates each facet of a user-agent string to its extractor."""

    def __init__(
        self,
        device: DeviceExtractor,
        os: OSExtractor,
        user_agent: UserAgentExtractor,
    ):
        self.device = device
        self.os = os
        self.user_agent = user_agent

    def parse(self, user_agent: str) -> Client:
        """Return device, OS and user agent of ``user_agent``."""
        return Client(
            device=self.parse_device(user_agent),
            os=self.parse_os(user_agent),
            user_agent=self.parse_user_agent(user_agent),
        )

    def parse_device(self, user_agent: str) -> Device:
        return self.device.extract(user_agent) or Device()

    def parse_os(self, user_agent: str) -> OS:
        return self.os.extract(user_agent) or OS()

    def parse_user_agent(self, user_agent: str) -> UserAgent:
        return self.user_agent.extract(user_agent) or UserAgent()

    @classmethod
    def from_regexes(cls, regex_file: RegexFile, config: ParserConfig | None = None) -> "Parser":
        """
        Compile all three families.

        Either every record compiles and a complete parser is returned, or
        the first PatternError is raised.
        """
        config = config or ParserConfig()

        if not config.parallel:
            parser = cls(
                DeviceExtractor(regex_file.device_parsers),
                OSExtractor(regex_file.os_parsers),
                UserAgentExtractor(regex_file.user_agent_parsers),
            )
        else:
            with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
                parser = cls(
                    DeviceExtractor(regex_file.device_parsers, executor=executor),
                    OSExtractor(regex_file.os_parsers, executor=executor),
                    UserAgentExtractor(regex_file.user_agent_parsers, executor=executor),
                )

        logger.debug(
            f"Compiled {len(parser.device)} device, {len(parser.os)} os and "
            f"{len(parser.user_agent)} user agent patterns"
        )
        return parser

    @classmethod
    def from_yaml(cls, path: str | os.PathLike, config: ParserConfig | None = None) -> "Parser":
        """Build a parser from the pattern file at ``path``."""
        try:
            with open(path, "rb") as f:
                regex_file = load_regexes(f)
        except OSError as e:
            raise SourceError(f"cannot read {os.fspath(path)!r}: {e}") from e
        return cls.from_regexes(regex_file, config)

    @classmethod
    def from_file(cls, file: IO[bytes] | IO[str], config: ParserConfig | None = None) -> "Parser":
        """Build a parser from an open pattern file."""
        try:
            regex_file = load_regexes(file)
        except OSError as e:
            raise SourceError(f"cannot read pattern file: {e}") from e
        return cls.from_regexes(regex_file, config)

    @classmethod
    def from_bytes(cls, data: bytes, config: ParserConfig | None = None) -> "Parser":
        """Build a parser from the raw contents of a pattern file."""
        return cls.from_regexes(load_regexes(data), config)

    def __repr__(self) -> str:
        return f"Parser(device={self.device!r}, os={self.os!r}, user_agent={self.user_agent!r})"
