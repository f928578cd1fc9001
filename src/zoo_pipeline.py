#!/usr/bin/env python3
"""
Zoo population report pipeline.
Loads the name catalog, parses arriving animals, names them, gives them IDs,
groups them into habitats and writes the population report.
"""

import logging
import sys
from typing import Dict, List, Optional

from config import Config
from exceptions import ConfigurationError
from models import AnimalRecord, Habitat, NameCatalog, ParseReport, PipelineResult
from name_catalog import NameCatalogLoader
from arrival_parser import ArrivalParser
from name_assigner import NameAssigner
from id_generator import IdGenerator, find_code_collisions
from habitat_organizer import HabitatOrganizer
from report_renderer import ReportRenderer
from utils import StageTimer

logger = logging.getLogger(__name__)


class ZooPipeline:
    """
    Owns the state of one report run and passes it between the stages.
    Every stage absorbs its own errors, so run() always returns a result.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

        self.catalog_loader = NameCatalogLoader(self.config)
        self.parser = ArrivalParser(self.config)
        self.name_assigner = NameAssigner()
        self.id_generator = IdGenerator(self.config.report.id_counter_width)
        self.organizer = HabitatOrganizer()
        self.renderer = ReportRenderer(self.config)

        # Run state
        self.catalog: NameCatalog = {}
        self.parse_report = ParseReport()
        self.habitats: Dict[str, Habitat] = {}

    @property
    def animals(self) -> List[AnimalRecord]:
        return self.parse_report.records

    def run(self) -> PipelineResult:
        timings: Dict[str, float] = {}

        with StageTimer("load_names", timings):
            self.catalog = self.catalog_loader.load()

        with StageTimer("parse_arrivals", timings):
            self.parse_report = self.parser.parse_file()

        with StageTimer("assign_names", timings):
            self.name_assigner.assign(self.animals, self.catalog)

        with StageTimer("generate_ids", timings):
            self.id_generator.assign(self.animals)

        collisions = find_code_collisions(self.parse_report.species_counts)
        for code, species in collisions.items():
            logger.warning(f"Species code {code} is shared by {', '.join(species)}; "
                           f"their IDs may collide")

        with StageTimer("organize_habitats", timings):
            self.habitats = self.organizer.organize(self.animals)

        with StageTimer("write_report", timings):
            written = self.renderer.write_report(
                self.habitats,
                species_counts=self.parse_report.species_counts,
                failures=self.parse_report.failures,
            )

        logger.info(f"Processed {self.parse_report.accepted} animals "
                    f"({self.parse_report.rejected} lines rejected) "
                    f"into {len(self.habitats)} habitats")

        return PipelineResult(
            report_path=self.config.report.report_path,
            report_written=written,
            accepted=self.parse_report.accepted,
            rejected=self.parse_report.rejected,
            habitat_count=len(self.habitats),
            code_collisions=collisions,
            stage_timings=timings,
        )


def main() -> int:
    try:
        config = Config()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Cannot start zoo pipeline: {e}")
        return 0

    logging.basicConfig(
        level=config.logging.numeric_level,
        format=config.logging.format
    )

    result = ZooPipeline(config).run()
    if result.report_written:
        print(f"Zoo population report generated successfully in {result.report_path}")
    else:
        logger.error(f"Zoo population report could not be written to {result.report_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
