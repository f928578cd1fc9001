"""
Unit tests for unique ID generation.
"""

import pytest
from datetime import date

import sys
sys.path.append('src')

from id_generator import IdGenerator, species_code, find_code_collisions
from models import AnimalRecord


def make_animal(species):
    return AnimalRecord(
        species=species, age=2, sex="M", color="Tawny", weight=50.0,
        origin="Somewhere", arrival_date=date(2024, 3, 1), birth_season="Summer"
    )


class TestSpeciesCode:
    """Test species code derivation."""

    def test_two_letter_prefix(self):
        assert species_code("Lion") == "LI"
        assert species_code("hyena") == "HY"

    def test_short_species_name(self):
        assert species_code("X") == "X"

    def test_multi_word_species(self):
        assert species_code("Snow Leopard") == "SN"


class TestIdGenerator:
    """Test per-species counters and formatting."""

    def test_sequential_ids(self):
        animals = [make_animal("Lion") for _ in range(3)]

        IdGenerator().assign(animals)

        assert [a.unique_id for a in animals] == ["LI01", "LI02", "LI03"]

    def test_counters_are_per_species(self):
        animals = [make_animal("Lion"), make_animal("Tiger"), make_animal("Lion")]

        IdGenerator().assign(animals)

        assert [a.unique_id for a in animals] == ["LI01", "TI01", "LI02"]

    def test_counter_past_padding(self):
        animals = [make_animal("Bear") for _ in range(100)]

        IdGenerator().assign(animals)

        assert animals[8].unique_id == "BE09"
        assert animals[98].unique_id == "BE99"
        assert animals[99].unique_id == "BE100"

    def test_custom_width(self):
        animals = [make_animal("Bear")]

        IdGenerator(width=3).assign(animals)

        assert animals[0].unique_id == "BE001"

    def test_shared_prefix_ids_collide(self):
        """Test species sharing a code keep independent counters (known collision)."""
        animals = [make_animal("Lion"), make_animal("Lizard")]

        IdGenerator().assign(animals)

        assert animals[0].unique_id == "LI01"
        assert animals[1].unique_id == "LI01"

    def test_ids_unique_within_species(self):
        animals = [make_animal(s) for s in ["Lion", "Tiger", "Lion", "Lion", "Tiger"]]

        IdGenerator().assign(animals)

        lion_ids = [a.unique_id for a in animals if a.species == "Lion"]
        assert len(set(lion_ids)) == len(lion_ids)


class TestFindCodeCollisions:
    """Test reporting of species that share a code."""

    def test_no_collisions(self):
        assert find_code_collisions(["Lion", "Tiger", "Bear"]) == {}

    def test_collision_reported(self):
        collisions = find_code_collisions(["Lion", "Tiger", "Lizard"])
        assert collisions == {"LI": ["Lion", "Lizard"]}

    def test_same_species_repeated_is_not_collision(self):
        assert find_code_collisions(["Lion", "Lion"]) == {}


if __name__ == '__main__':
    pytest.main([__file__])
