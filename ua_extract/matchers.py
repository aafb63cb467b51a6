"""
Compiled matchers for the three pattern families.

A matcher owns one compiled regular expression and the output templates of
its record. ``extract`` either returns a populated result or ``None``.

Templates reference capture groups as ``$1``..``$9``. Missing or
non-participating groups substitute as an empty string, the result is
stripped, and an empty value is reported as absent (``None``).
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from .errors import (
    DevicePatternError,
    OSPatternError,
    PatternError,
    UserAgentPatternError,
)
from .types import (
    DEFAULT_FAMILY,
    OS,
    Device,
    DeviceOverride,
    DevicePattern,
    OSPattern,
    UserAgent,
    UserAgentPattern,
)

logger = logging.getLogger(__name__)

_GROUP_REFERENCE = re.compile(r"\$([1-9])")

REGEX_FLAGS = {"i": re.IGNORECASE}
OVERRIDE_FIELDS = ("device", "brand", "model")
OVERRIDE_SOURCES = ("field", "user_agent")


def none_if_empty(value: str | None) -> str | None:
    return value or None


def replace(template: str, match: re.Match) -> str:
    """
    Substitute ``$N`` placeholders in ``template`` with groups of ``match``.

    Unknown or non-participating groups become "". The result is stripped.

        >>> replace("$1 $2", re.search(r"(\\w+)/(\\d+)", "Chrome/91"))
        'Chrome 91'
    """
    if "$" not in template:
        return template.strip()

    groups = match.groups()

    def group(reference: re.Match) -> str:
        index = int(reference.group(1))
        if index > len(groups):
            return ""
        return groups[index - 1] or ""

    return _GROUP_REFERENCE.sub(group, template).strip()


def group_value(match: re.Match, index: int) -> str | None:
    """Text of group ``index`` when it exists and participated, else None."""
    if index > match.re.groups:
        return None
    value = match.group(index)
    return none_if_empty(value.strip()) if value is not None else None


def field_value(template: str | None, match: re.Match, default_group: int | None) -> str | None:
    """Apply ``template`` if configured, else read ``default_group``."""
    if template is not None:
        return none_if_empty(replace(template, match))
    if default_group is None:
        return None
    return group_value(match, default_group)


class Matcher(ABC):
    """Base for the per-family matchers."""

    family: ClassVar[str]
    error: ClassVar[type[PatternError]]

    __slots__ = ("regex",)

    def __init__(self, regex: re.Pattern):
        self.regex = regex

    @classmethod
    def compile(cls, source: Any, record: Any, flags: int = 0) -> re.Pattern:
        if not isinstance(source, str):
            raise cls.error("regex must be a string", record)
        try:
            return re.compile(source, flags)
        except re.error as e:
            raise cls.error(str(e), record) from e

    def search(self, regex: re.Pattern, s: str) -> re.Match | None:
        """``regex.search`` where an engine failure counts as no match."""
        try:
            return regex.search(s)
        except RuntimeError as e:
            logger.debug(f"{self.family} pattern {regex.pattern!r} failed on input: {e}")
            return None

    @abstractmethod
    def extract(self, s: str):
        """Populated result for ``s``, or None when the regex does not match."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.regex.pattern!r})"


class UserAgentMatcher(Matcher):
    family = "user_agent"
    error = UserAgentPatternError

    __slots__ = ("family_replacement", "major_replacement", "minor_replacement", "patch_replacement")

    def __init__(self, regex, family_replacement=None, major_replacement=None,
                 minor_replacement=None, patch_replacement=None):
        super().__init__(regex)
        self.family_replacement = family_replacement
        self.major_replacement = major_replacement
        self.minor_replacement = minor_replacement
        self.patch_replacement = patch_replacement

    @classmethod
    def from_pattern(cls, record) -> "UserAgentMatcher":
        try:
            pattern = UserAgentPattern(*record)
        except TypeError as e:
            raise cls.error(str(e), record) from e
        return cls(
            cls.compile(pattern.regex, record),
            *_templates(pattern[1:]),
        )

    def extract(self, s: str) -> UserAgent | None:
        match = self.search(self.regex, s)
        if match is None:
            return None
        return UserAgent(
            family=field_value(self.family_replacement, match, 1) or DEFAULT_FAMILY,
            major=field_value(self.major_replacement, match, 2),
            minor=field_value(self.minor_replacement, match, 3),
            patch=field_value(self.patch_replacement, match, 4),
        )


class OSMatcher(Matcher):
    family = "os"
    error = OSPatternError

    __slots__ = ("templates",)

    def __init__(self, regex, templates=(None, None, None, None, None)):
        super().__init__(regex)
        # family, major, minor, patch, patch_minor
        self.templates = tuple(templates)

    @classmethod
    def from_pattern(cls, record) -> "OSMatcher":
        try:
            pattern = OSPattern(*record)
        except TypeError as e:
            raise cls.error(str(e), record) from e
        return cls(cls.compile(pattern.regex, record), _templates(pattern[1:]))

    def extract(self, s: str) -> OS | None:
        match = self.search(self.regex, s)
        if match is None:
            return None
        family, major, minor, patch, patch_minor = (
            field_value(template, match, group)
            for group, template in enumerate(self.templates, start=1)
        )
        return OS(
            family=family or DEFAULT_FAMILY,
            major=major,
            minor=minor,
            patch=patch,
            patch_minor=patch_minor,
        )


class _Override:
    __slots__ = ("field", "regex", "replacement", "source")

    def __init__(self, field, regex, replacement, source):
        self.field = field
        self.regex = regex
        self.replacement = replacement
        self.source = source


class DeviceMatcher(Matcher):
    """
    Device matcher with optional override rules.

    Overrides run in order after the primary match and may rewrite the
    device family, brand or model. They never change whether the record
    matched.
    """

    family = "device"
    error = DevicePatternError

    __slots__ = ("device_replacement", "brand_replacement", "model_replacement", "overrides")

    def __init__(self, regex, device_replacement=None, brand_replacement=None,
                 model_replacement=None, overrides=()):
        super().__init__(regex)
        self.device_replacement = device_replacement
        self.brand_replacement = brand_replacement
        self.model_replacement = model_replacement
        self.overrides = tuple(overrides)

    @classmethod
    def from_pattern(cls, record) -> "DeviceMatcher":
        try:
            pattern = DevicePattern(*record)
            overrides = [DeviceOverride(*override) for override in pattern.overrides or ()]
        except TypeError as e:
            raise cls.error(str(e), record) from e

        regex = cls.compile(pattern.regex, record, cls.flags(pattern.regex_flag, record))
        compiled = []
        for override in overrides:
            if override.field not in OVERRIDE_FIELDS:
                raise cls.error(f"unknown override field {override.field!r}", record)
            if override.source not in OVERRIDE_SOURCES:
                raise cls.error(f"unknown override source {override.source!r}", record)
            if not isinstance(override.replacement, str):
                raise cls.error("override replacement must be a string", record)
            compiled.append(_Override(
                override.field,
                cls.compile(override.regex, record, cls.flags(override.regex_flag, record)),
                override.replacement,
                override.source,
            ))

        return cls(regex, *_templates(pattern[2:5]), overrides=compiled)

    @classmethod
    def flags(cls, regex_flag, record) -> int:
        if regex_flag is None:
            return 0
        try:
            return REGEX_FLAGS[regex_flag]
        except (KeyError, TypeError):
            raise cls.error(f"unsupported regex flag {regex_flag!r}", record) from None

    def extract(self, s: str) -> Device | None:
        match = self.search(self.regex, s)
        if match is None:
            return None

        values = {
            "device": field_value(self.device_replacement, match, 1),
            "brand": field_value(self.brand_replacement, match, None),
            "model": field_value(self.model_replacement, match, 1),
        }
        for override in self.overrides:
            subject = s if override.source == "user_agent" else values[override.field]
            if subject is None:
                continue
            found = self.search(override.regex, subject)
            if found is not None:
                values[override.field] = none_if_empty(replace(override.replacement, found))

        return Device(
            family=values["device"] or DEFAULT_FAMILY,
            brand=values["brand"],
            model=values["model"],
        )


def _templates(values) -> tuple[str | None, ...]:
    # YAML may hand us numbers, e.g. `os_v1_replacement: 10`
    return tuple(None if value is None else str(value) for value in values)
