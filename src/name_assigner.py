"""
Display name assignment for arriving animals.
"""

import logging
from typing import Dict, List

from models import AnimalRecord, NameCatalog

logger = logging.getLogger(__name__)


class NameAssigner:
    """
    Hands out catalog names per species in arrival order.

    Species missing from the catalog get "Unnamed <Species>". Once a species'
    names run out, later animals get "<Species> #<k>" with k counting the
    overflow from 1.
    """

    def assign(self, records: List[AnimalRecord], catalog: NameCatalog) -> List[AnimalRecord]:
        cursors: Dict[str, int] = {}
        placeholders = 0

        for record in records:
            species = record.species
            names = catalog.get(species)
            if names is None:
                record.name = self.unnamed(species)
                placeholders += 1
                continue

            index = cursors.get(species, 0)
            if index < len(names):
                record.name = names[index]
            else:
                record.name = self.overflow_name(species, index + 1 - len(names))
                placeholders += 1
            cursors[species] = index + 1

        if placeholders:
            logger.info(f"Assigned placeholder names to {placeholders} of {len(records)} animals")
        return records

    @staticmethod
    def unnamed(species: str) -> str:
        return f"Unnamed {species}"

    @staticmethod
    def overflow_name(species: str, k: int) -> str:
        return f"{species} #{k}"
