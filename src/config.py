"""
Configuration for the zoo population report pipeline.

Settings are grouped into validated dataclasses. File locations and the log
level can be overridden through environment variables (or a .env file).
"""

import codecs
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class InputConfig:
    """Locations of the two input feeds."""
    name_catalog_path: Path = Path("animalNames.txt")
    arrivals_path: Path = Path("arrivingAnimals.txt")
    encoding: str = "utf-8"

    def __post_init__(self):
        self.name_catalog_path = Path(self.name_catalog_path)
        self.arrivals_path = Path(self.arrivals_path)
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown input encoding: {self.encoding!r}") from None


@dataclass
class ParserConfig:
    """Field layout of the arrivals feed and the name catalog."""
    delimiter: str = ","
    quotechar: str = '"'
    min_fields: int = 8
    catalog_header_suffix: str = " Names:"

    def __post_init__(self):
        if len(self.delimiter) != 1 or len(self.quotechar) != 1:
            raise ValueError("Delimiter and quote character must be single characters")
        if self.delimiter == self.quotechar:
            raise ValueError("Delimiter and quote character must differ")
        # species, age, sex, color, weight, origin, arrival date, birth season
        if self.min_fields < 8:
            raise ValueError("Minimum field count must be at least 8")
        if not self.catalog_header_suffix.strip():
            raise ValueError("Catalog header suffix must not be blank")


@dataclass
class ReportConfig:
    """Output report settings."""
    report_path: Path = Path("zooPopulation.txt")
    id_counter_width: int = 2
    include_summary: bool = False

    def __post_init__(self):
        self.report_path = Path(self.report_path)
        if self.id_counter_width < 1:
            raise ValueError("ID counter width must be positive")


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        self.level = self.level.upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Invalid log level: {self.level}")

    @property
    def numeric_level(self) -> int:
        return logging.getLevelName(self.level)


class Config:
    """Top-level configuration composed of the section dataclasses."""

    def __init__(self, input: Optional[InputConfig] = None,
                 parser: Optional[ParserConfig] = None,
                 report: Optional[ReportConfig] = None,
                 logging: Optional[LoggingConfig] = None,
                 load_env: bool = True):
        if load_env:
            load_dotenv()

        try:
            self.input = input or self._input_from_env(load_env)
            self.parser = parser or ParserConfig()
            self.report = report or self._report_from_env(load_env)
            self.logging = logging or self._logging_from_env(load_env)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _input_from_env(use_env: bool) -> InputConfig:
        if not use_env:
            return InputConfig()
        defaults = InputConfig()
        return InputConfig(
            name_catalog_path=os.getenv("ANIMAL_NAMES_PATH", str(defaults.name_catalog_path)),
            arrivals_path=os.getenv("ARRIVING_ANIMALS_PATH", str(defaults.arrivals_path)),
        )

    @staticmethod
    def _report_from_env(use_env: bool) -> ReportConfig:
        if not use_env:
            return ReportConfig()
        defaults = ReportConfig()
        summary = os.getenv("ZOO_REPORT_SUMMARY")
        return ReportConfig(
            report_path=os.getenv("ZOO_REPORT_PATH", str(defaults.report_path)),
            include_summary=(summary.strip().lower() in _TRUTHY) if summary else defaults.include_summary,
        )

    @staticmethod
    def _logging_from_env(use_env: bool) -> LoggingConfig:
        if not use_env:
            return LoggingConfig()
        return LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def create_test_config(cls, base_dir: Optional[Path] = None, **overrides) -> "Config":
        """Create a configuration rooted in base_dir that ignores the environment."""
        base = Path(base_dir) if base_dir is not None else Path(".")
        input_config = InputConfig(
            name_catalog_path=base / "animalNames.txt",
            arrivals_path=base / "arrivingAnimals.txt",
        )
        report_config = ReportConfig(report_path=base / "zooPopulation.txt")
        sections = {
            "input": input_config,
            "parser": ParserConfig(),
            "report": report_config,
            "logging": LoggingConfig(level="DEBUG"),
        }
        sections.update(overrides)
        return cls(load_env=False, **sections)
