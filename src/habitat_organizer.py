"""
Grouping of animals into per-species habitats.
"""

import logging
from typing import Dict, List

from models import AnimalRecord, Habitat

logger = logging.getLogger(__name__)


class HabitatOrganizer:
    """Groups records by species; habitats keep first-seen order."""

    def organize(self, records: List[AnimalRecord]) -> Dict[str, Habitat]:
        habitats: Dict[str, Habitat] = {}
        for record in records:
            habitat = habitats.get(record.species)
            if habitat is None:
                habitat = habitats[record.species] = Habitat(record.species)
            habitat.add_animal(record)
        logger.debug(f"Organized {len(records)} animals into {len(habitats)} habitats")
        return habitats
