"""
Reading uap-core style ``regexes.yaml`` pattern files.

The file holds three ordered lists, ``user_agent_parsers``, ``os_parsers``
and ``device_parsers``. Each entry is turned into the matching pattern
record; keys this package does not use are ignored.
"""

import logging
from dataclasses import dataclass, field
from typing import IO, Any

try:
    from yaml import CSafeLoader as SafeLoader, YAMLError, load
except ImportError:
    from yaml import SafeLoader, YAMLError, load  # type: ignore

from .errors import SchemaError
from .types import DeviceOverride, DevicePattern, OSPattern, UserAgentPattern

logger = logging.getLogger(__name__)


@dataclass
class RegexFile:
    """Pattern records of all three families, in file order."""
    user_agent_parsers: list[UserAgentPattern] = field(default_factory=list)
    os_parsers: list[OSPattern] = field(default_factory=list)
    device_parsers: list[DevicePattern] = field(default_factory=list)


def load_regexes(stream: IO[bytes] | IO[str] | bytes | str) -> RegexFile:
    """
    Parse a pattern file.

    Args:
        stream: Open file or the raw document

    Raises:
        SchemaError: If the document is not YAML or not shaped like
            a regexes file
    """
    try:
        contents = load(stream, Loader=SafeLoader)
    except YAMLError as e:
        raise SchemaError(f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        # text-mode streams decode before the YAML reader sees them
        raise SchemaError(f"pattern file is not valid text: {e}") from e
    return to_regex_file(contents)


def to_regex_file(contents: Any) -> RegexFile:
    """Build a RegexFile from an already deserialized document."""
    if not isinstance(contents, dict):
        raise SchemaError("pattern file must be a mapping")

    regex_file = RegexFile(
        user_agent_parsers=[
            UserAgentPattern(
                t["regex"],
                t.get("family_replacement"),
                t.get("v1_replacement"),
                t.get("v2_replacement"),
                t.get("v3_replacement"),
            )
            for t in _entries(contents, "user_agent_parsers")
        ],
        os_parsers=[
            OSPattern(
                t["regex"],
                t.get("os_replacement"),
                t.get("os_v1_replacement"),
                t.get("os_v2_replacement"),
                t.get("os_v3_replacement"),
                t.get("os_v4_replacement"),
            )
            for t in _entries(contents, "os_parsers")
        ],
        device_parsers=[
            DevicePattern(
                t["regex"],
                t.get("regex_flag"),
                t.get("device_replacement"),
                t.get("brand_replacement"),
                t.get("model_replacement"),
                _overrides(t),
            )
            for t in _entries(contents, "device_parsers")
        ],
    )
    logger.debug(
        f"Loaded {len(regex_file.user_agent_parsers)} user agent, "
        f"{len(regex_file.os_parsers)} os and "
        f"{len(regex_file.device_parsers)} device patterns"
    )
    return regex_file


def _entries(contents: dict, key: str) -> list[dict]:
    if key not in contents:
        raise SchemaError(f"missing {key!r}")
    entries = contents[key]
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise SchemaError(f"{key!r} must be a list")

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SchemaError(f"{key}[{i}] must be a mapping")
        if not isinstance(entry.get("regex"), str):
            raise SchemaError(f"{key}[{i}] needs a string 'regex'")
    return entries


def _overrides(entry: dict) -> tuple[DeviceOverride, ...]:
    rules = entry.get("overrides") or []
    if not isinstance(rules, list):
        raise SchemaError(f"overrides of {entry['regex']!r} must be a list")

    overrides = []
    for rule in rules:
        if not isinstance(rule, dict):
            raise SchemaError(f"override of {entry['regex']!r} must be a mapping")
        try:
            regex, replacement = rule["regex"], rule["replacement"]
            target = rule["field"]
        except KeyError as e:
            raise SchemaError(f"override of {entry['regex']!r} is missing {e}") from e
        if not isinstance(regex, str):
            raise SchemaError(f"override of {entry['regex']!r} needs a string 'regex'")
        # numbers are fine, null and collections are not
        if replacement is None or isinstance(replacement, (dict, list)):
            raise SchemaError(f"override of {entry['regex']!r} needs a scalar 'replacement'")
        overrides.append(DeviceOverride(
            target,
            regex,
            str(replacement),
            rule.get("source", "field"),
            rule.get("regex_flag"),
        ))
    return tuple(overrides)
