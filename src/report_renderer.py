"""
Population report rendering.

The report has one block per habitat, in the order species were first seen,
with a blank line after each block::

    Lion Habitat (2 animals):
      Leo; ID: LI01; age 3; sex M; color Golden; weight 180.5; origin Serengeti, Tanzania; arrived 2023-05-01; born in Spring
      Mia; ID: LI02; age 2; sex F; color Golden; weight 150.0; origin Kenya; arrived 2023-06-10; born in Summer

An optional summary block with the species tally and rejected line count can
be appended.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from config import Config
from exceptions import ReportWriteError
from models import AnimalRecord, Habitat, ParseFailure

logger = logging.getLogger(__name__)


class ReportFormatter:
    """Text formatting for report blocks."""

    @staticmethod
    def format_animal(animal: AnimalRecord) -> str:
        return (f"{animal.name}; ID: {animal.unique_id}; age {animal.age}; sex {animal.sex}; "
                f"color {animal.color}; weight {animal.weight}; origin {animal.origin}; "
                f"arrived {animal.arrival_date.isoformat()}; born in {animal.birth_season}")

    @staticmethod
    def format_habitat(habitat: Habitat) -> str:
        count = habitat.population
        noun = "animal" if count == 1 else "animals"
        lines = [f"{habitat.species} Habitat ({count} {noun}):"]
        lines.extend(f"  {ReportFormatter.format_animal(a)}" for a in habitat.animals)
        return "\n".join(lines) + "\n"

    @staticmethod
    def format_summary(species_counts: Dict[str, int],
                       failures: Optional[List[ParseFailure]] = None) -> str:
        lines = ["Summary:"]
        lines.extend(f"  {species}: {count}" for species, count in species_counts.items())
        lines.append(f"  Total animals: {sum(species_counts.values())}")
        lines.append(f"  Rejected lines: {len(failures or [])}")
        return "\n".join(lines) + "\n"


class ReportRenderer:
    """Writes the population report file."""

    def __init__(self, config: Config):
        self.config = config

    def render(self, habitats: Iterable[Habitat],
               species_counts: Optional[Dict[str, int]] = None,
               failures: Optional[List[ParseFailure]] = None) -> List[str]:
        """Return the report blocks in output order."""
        blocks = [ReportFormatter.format_habitat(h) for h in habitats]
        if self.config.report.include_summary and species_counts is not None:
            blocks.append(ReportFormatter.format_summary(species_counts, failures))
        return blocks

    def write_report(self, habitats: Dict[str, Habitat], path: Optional[Path] = None,
                     species_counts: Optional[Dict[str, int]] = None,
                     failures: Optional[List[ParseFailure]] = None) -> bool:
        """Write the report; returns False (after logging) if it could not be written."""
        path = Path(path) if path is not None else self.config.report.report_path
        blocks = self.render(habitats.values(), species_counts, failures)
        try:
            self._write_blocks(path, blocks)
        except ReportWriteError as e:
            logger.error(f"Error writing zoo report: {e}")
            return False

        logger.info(f"Wrote {len(habitats)} habitats to {path}")
        return True

    @staticmethod
    def _write_blocks(path: Path, blocks: List[str]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                for block in blocks:
                    f.write(block)
                    f.write("\n")
        except OSError as e:
            raise ReportWriteError(f"{path}: {e}") from e
