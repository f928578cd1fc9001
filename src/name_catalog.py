"""
Name catalog loading.

The catalog file is made of blocks like::

    Lion Names:
    Leo, Mia, Simba

Each header starts (or resumes) a species block and the following lines hold
comma-separated display names for that species.
"""

import logging
from pathlib import Path
from typing import Optional

from config import Config
from exceptions import InputFileError, LineDecodeError
from models import NameCatalog
from utils import decode_line

logger = logging.getLogger(__name__)


class NameCatalogLoader:
    """Reads the per-species name pool used by the name assigner."""

    def __init__(self, config: Config):
        self.config = config
        self.header_suffix = config.parser.catalog_header_suffix
        self.delimiter = config.parser.delimiter

    def load(self, path: Optional[Path] = None) -> NameCatalog:
        """Load the catalog, returning an empty one if the file is unreadable."""
        path = Path(path) if path is not None else self.config.input.name_catalog_path
        try:
            catalog = self._read_catalog(path)
        except InputFileError as e:
            logger.error(f"Error loading animal names: {e}")
            return {}

        total = sum(len(names) for names in catalog.values())
        logger.info(f"Loaded {total} names for {len(catalog)} species from {path}")
        return catalog

    def _read_catalog(self, path: Path) -> NameCatalog:
        catalog: NameCatalog = {}
        current_species = None
        try:
            with open(path, "rb") as f:
                for line_number, raw_line in enumerate(f, start=1):
                    try:
                        line = decode_line(raw_line, self.config.input.encoding).strip()
                    except LineDecodeError as e:
                        logger.warning(f"Skipping catalog line {line_number}: {e}")
                        continue
                    if not line:
                        continue
                    species = self.parse_header(line)
                    if species is not None:
                        current_species = species
                        catalog.setdefault(species, [])
                    elif current_species is None:
                        logger.debug(f"Ignoring line {line_number} outside a names block: {line!r}")
                    else:
                        catalog[current_species].extend(self.split_names(line))
        except OSError as e:
            raise InputFileError(f"{path}: {e}") from e
        return catalog

    def parse_header(self, line: str) -> Optional[str]:
        """Return the species named by a header line, or None."""
        if line.endswith(self.header_suffix):
            species = line[:-len(self.header_suffix)].strip()
            return species or None
        return None

    def split_names(self, line: str):
        return [name.strip() for name in line.split(self.delimiter) if name.strip()]
