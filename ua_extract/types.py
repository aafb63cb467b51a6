"""
Pattern records and parse results.

Records mirror the entries of a uap-core ``regexes.yaml`` file. They are
``NamedTuple``s so plain tuples in the same positional order work as well.
Results are frozen dataclasses; a family of ``"Other"`` means no pattern
matched.
"""

from dataclasses import dataclass
from typing import Literal, NamedTuple

DEFAULT_FAMILY = "Other"


class UserAgentPattern(NamedTuple):
    regex: str
    family_replacement: str | None = None
    v1_replacement: str | None = None
    v2_replacement: str | None = None
    v3_replacement: str | None = None


class OSPattern(NamedTuple):
    regex: str
    os_replacement: str | None = None
    os_v1_replacement: str | None = None
    os_v2_replacement: str | None = None
    os_v3_replacement: str | None = None
    os_v4_replacement: str | None = None


class DeviceOverride(NamedTuple):
    """
    Secondary rule applied after a device pattern matched.

    Attributes:
        field: Result field to rewrite ("device", "brand" or "model")
        regex: Pattern evaluated against the subject
        replacement: Template for the new value, may reference ``$1``..``$9``
        source: "field" to match the current value of ``field``,
            "user_agent" to match the original input string
        regex_flag: "i" for case-insensitive matching
    """
    field: Literal["device", "brand", "model"]
    regex: str
    replacement: str
    source: Literal["field", "user_agent"] = "field"
    regex_flag: Literal["i"] | None = None


class DevicePattern(NamedTuple):
    regex: str
    regex_flag: Literal["i"] | None = None
    device_replacement: str | None = None
    brand_replacement: str | None = None
    model_replacement: str | None = None
    overrides: tuple[DeviceOverride, ...] = ()


def _join_version(*parts: str | None) -> str | None:
    leading = []
    for part in parts:
        if part is None:
            break
        leading.append(part)
    return ".".join(leading) or None


@dataclass(frozen=True)
class UserAgent:
    """Browser or other user-agent software."""
    family: str = DEFAULT_FAMILY
    major: str | None = None
    minor: str | None = None
    patch: str | None = None

    @property
    def version(self) -> str | None:
        """Dotted version from the leading known components, e.g. "91.0.4472"."""
        return _join_version(self.major, self.minor, self.patch)


@dataclass(frozen=True)
class OS:
    """Operating system."""
    family: str = DEFAULT_FAMILY
    major: str | None = None
    minor: str | None = None
    patch: str | None = None
    patch_minor: str | None = None

    @property
    def version(self) -> str | None:
        return _join_version(self.major, self.minor, self.patch, self.patch_minor)


@dataclass(frozen=True)
class Device:
    """Hardware the request came from."""
    family: str = DEFAULT_FAMILY
    brand: str | None = None
    model: str | None = None


@dataclass(frozen=True)
class Client:
    """
    Combined parse result.

    Each facet is matched independently, so combinations such as an iOS
    ``os`` with an Android ``device`` are possible.
    """
    device: Device
    os: OS
    user_agent: UserAgent

    def to_dict(self) -> dict:
        """Convert to nested dictionaries for storage."""
        return {
            "device": {
                "family": self.device.family,
                "brand": self.device.brand,
                "model": self.device.model,
            },
            "os": {
                "family": self.os.family,
                "major": self.os.major,
                "minor": self.os.minor,
                "patch": self.os.patch,
                "patch_minor": self.os.patch_minor,
            },
            "user_agent": {
                "family": self.user_agent.family,
                "major": self.user_agent.major,
                "minor": self.user_agent.minor,
                "patch": self.user_agent.patch,
            },
        }
