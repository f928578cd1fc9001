"""
Consolidated data models for the zoo population report pipeline.

This module contains all dataclasses used across the system for:
- Arriving animal records and their habitats
- Parse results (accepted records plus rejected lines)
- The summary of a whole pipeline run
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional, List, Dict

# Species name -> ordered pool of display names
NameCatalog = Dict[str, List[str]]


# =============================================================================
# Animal Models
# =============================================================================

@dataclass
class AnimalRecord:
    """One accepted line of the arrivals feed."""
    species: str
    age: int
    sex: str
    color: str
    weight: float
    origin: str
    arrival_date: date
    birth_season: str
    name: Optional[str] = None
    unique_id: Optional[str] = None
    line_number: int = 0


@dataclass
class Habitat:
    """All animals of one species, in arrival order."""
    species: str
    animals: List[AnimalRecord] = field(default_factory=list)

    def add_animal(self, animal: AnimalRecord) -> None:
        self.animals.append(animal)

    @property
    def population(self) -> int:
        return len(self.animals)


# =============================================================================
# Parsing Models
# =============================================================================

@dataclass
class ParseFailure:
    """A rejected arrivals line and why it was rejected."""
    line_number: int
    raw_line: str
    kind: str  # field_count, number, date, tokenize or unexpected
    message: str


@dataclass
class ParseReport:
    """Outcome of parsing a whole arrivals file."""
    records: List[AnimalRecord] = field(default_factory=list)
    failures: List[ParseFailure] = field(default_factory=list)
    species_counts: Dict[str, int] = field(default_factory=dict)
    file_error: Optional[str] = None

    @property
    def accepted(self) -> int:
        return len(self.records)

    @property
    def rejected(self) -> int:
        return len(self.failures)


# =============================================================================
# Pipeline Models
# =============================================================================

@dataclass
class PipelineResult:
    """Summary of one pipeline run."""
    report_path: Path
    report_written: bool
    accepted: int = 0
    rejected: int = 0
    habitat_count: int = 0
    code_collisions: Dict[str, List[str]] = field(default_factory=dict)
    stage_timings: Dict[str, float] = field(default_factory=dict)
