"""
Unique ID generation.

IDs are a two-letter species code plus a per-species counter, e.g. LI01.
Species sharing their first two letters (Lion, Lizard) share a code, so their
IDs can collide; find_code_collisions() reports such pairs without altering
the IDs.
"""

import logging
from typing import Dict, Iterable, List

from models import AnimalRecord

logger = logging.getLogger(__name__)

CODE_LENGTH = 2


def species_code(species: str) -> str:
    """Uppercased first two characters of the species name (or the whole name if shorter)."""
    return species[:CODE_LENGTH].upper()


def find_code_collisions(species_names: Iterable[str]) -> Dict[str, List[str]]:
    """Map each species code shared by distinct species to those species."""
    by_code: Dict[str, List[str]] = {}
    for species in species_names:
        members = by_code.setdefault(species_code(species), [])
        if species not in members:
            members.append(species)
    return {code: members for code, members in by_code.items() if len(members) > 1}


class IdGenerator:
    """Assigns <CODE><counter> IDs with one counter per species."""

    def __init__(self, width: int = 2):
        self.width = width

    def assign(self, records: List[AnimalRecord]) -> List[AnimalRecord]:
        counters: Dict[str, int] = {}
        for record in records:
            count = counters.get(record.species, 0) + 1
            counters[record.species] = count
            record.unique_id = self.format_id(record.species, count)
        logger.debug(f"Generated IDs for {len(records)} animals across {len(counters)} species")
        return records

    def format_id(self, species: str, count: int) -> str:
        return f"{species_code(species)}{count:0{self.width}d}"
