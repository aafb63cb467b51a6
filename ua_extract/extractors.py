"""
First-match-wins evaluation over an ordered list of matchers.

Order is exactly the order of the records given at construction; earlier
records take precedence. No reordering by specificity is done.
"""

from collections.abc import Iterable, Iterator
from concurrent.futures import Executor
from typing import Generic, TypeVar

from .matchers import DeviceMatcher, Matcher, OSMatcher, UserAgentMatcher
from .types import (
    OS,
    Device,
    DevicePattern,
    OSPattern,
    UserAgent,
    UserAgentPattern,
)

M = TypeVar("M", bound=Matcher)


class Extractor(Generic[M]):
    """Holds the compiled matchers of one family."""

    matcher_class: type[M]

    def __init__(self, it: Iterable, /, executor: Executor | None = None) -> None:
        """
        Compile every record of ``it``.

        Args:
            it: Pattern records (or equivalent tuples) in precedence order
            executor: Optional executor to compile records concurrently.
                ``Executor.map`` yields in submission order, so precedence
                is kept. The first compile error is raised.
        """
        build = executor.map if executor is not None else map
        self.matchers: tuple[M, ...] = tuple(build(self.matcher_class.from_pattern, it))

    def extract(self, s: str, /):
        for matcher in self.matchers:
            result = matcher.extract(s)
            if result is not None:
                return result
        return None

    def __len__(self) -> int:
        return len(self.matchers)

    def __iter__(self) -> Iterator[M]:
        return iter(self.matchers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{len(self)} patterns>)"


class UserAgentExtractor(Extractor[UserAgentMatcher]):
    matcher_class = UserAgentMatcher

    def __init__(self, it: Iterable[UserAgentPattern], /, executor: Executor | None = None) -> None:
        super().__init__(it, executor=executor)

    def extract(self, s: str, /) -> UserAgent | None:
        return super().extract(s)


class OSExtractor(Extractor[OSMatcher]):
    matcher_class = OSMatcher

    def __init__(self, it: Iterable[OSPattern], /, executor: Executor | None = None) -> None:
        super().__init__(it, executor=executor)

    def extract(self, s: str, /) -> OS | None:
        return super().extract(s)


class DeviceExtractor(Extractor[DeviceMatcher]):
    matcher_class = DeviceMatcher

    def __init__(self, it: Iterable[DevicePattern], /, executor: Executor | None = None) -> None:
        super().__init__(it, executor=executor)

    def extract(self, s: str, /) -> Device | None:
        return super().extract(s)
