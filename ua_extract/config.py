"""
Configuration for parser construction.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Controls how pattern records are compiled.

    Usage:
        config = ParserConfig(max_workers=4)
        parser = Parser.from_yaml("regexes.yaml", config=config)
    """

    # Compile records on a thread pool
    parallel: bool = True
    # Pool size, None lets the executor choose
    max_workers: int | None = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(
                f"max_workers must be at least 1. Got {self.max_workers}."
            )
