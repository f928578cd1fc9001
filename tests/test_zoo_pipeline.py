"""
End-to-end tests for the zoo population report pipeline.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import sys
sys.path.append('src')

from zoo_pipeline import ZooPipeline, main
from config import Config, ReportConfig

CATALOG = "Lion Names:\nLeo,Mia\n"
ARRIVALS = (
    'Lion,3,M,Golden,180.5,"Serengeti, Tanzania",2023-05-01,Spring\n'
    'Lion,2,F,Golden,150.0,Kenya,2023-06-10,Summer\n'
)


class TestZooPipeline:
    """Test a complete pipeline run against temporary files."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config = Config.create_test_config(self.temp_dir)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_inputs(self, catalog=CATALOG, arrivals=ARRIVALS):
        if catalog is not None:
            self.config.input.name_catalog_path.write_text(catalog, encoding="utf-8")
        if arrivals is not None:
            self.config.input.arrivals_path.write_text(arrivals, encoding="utf-8")

    def read_report(self):
        return self.config.report.report_path.read_text(encoding="utf-8")

    def test_lion_round_trip(self):
        """Test two lions get catalog names, IDs and reconstructed origins."""
        self.write_inputs()

        result = ZooPipeline(self.config).run()

        assert result.report_written is True
        assert result.accepted == 2
        assert result.habitat_count == 1
        report = self.read_report()
        assert report.startswith("Lion Habitat (2 animals):")
        lines = report.splitlines()
        assert lines[1].startswith("  Leo; ID: LI01;")
        assert "origin Serengeti, Tanzania;" in lines[1]
        assert lines[2].startswith("  Mia; ID: LI02;")
        assert "origin Kenya;" in lines[2]

    def test_report_count_matches_accepted_lines(self):
        """Test the report lists exactly the accepted animals."""
        arrivals = (
            'Lion,3,M,Golden,180.5,Kenya,2023-05-01,Spring\n'
            'Tiger,4,F,Orange\n'
            'Bear,x,M,Brown,300.0,Alaska,2023-05-02,Fall\n'
            'Bear,5,M,Brown,300.0,Alaska,2023-05-02,Fall\n'
            'Hyena,2,F,Spotted,60.0,Kenya,2023-02-30,Winter\n'
            'Lion,1,F,Golden,90.0,"Kruger, South Africa",2023-07-01,Summer\n'
        )
        self.write_inputs(arrivals=arrivals)

        pipeline = ZooPipeline(self.config)
        result = pipeline.run()

        assert result.accepted == 3
        assert result.rejected == 3
        assert [f.kind for f in pipeline.parse_report.failures] == ["field_count", "number", "date"]
        member_lines = [l for l in self.read_report().splitlines() if l.startswith("  ")]
        assert len(member_lines) == 3
        assert list(pipeline.habitats) == ["Lion", "Bear"]

    def test_names_and_ids_across_species(self):
        arrivals = (
            'Lion,3,M,Golden,180.5,Kenya,2023-05-01,Spring\n'
            'Bear,5,M,Brown,300.0,Alaska,2023-05-02,Fall\n'
            'Lion,2,F,Golden,150.0,Kenya,2023-06-10,Summer\n'
            'Lion,1,F,Golden,90.0,Kenya,2023-07-01,Summer\n'
        )
        self.write_inputs(arrivals=arrivals)

        pipeline = ZooPipeline(self.config)
        pipeline.run()

        lions = pipeline.habitats["Lion"].animals
        assert [(a.name, a.unique_id) for a in lions] == [
            ("Leo", "LI01"), ("Mia", "LI02"), ("Lion #1", "LI03")
        ]
        bear = pipeline.habitats["Bear"].animals[0]
        assert (bear.name, bear.unique_id) == ("Unnamed Bear", "BE01")

    def test_code_collision_is_reported(self, caplog):
        arrivals = (
            'Lion,3,M,Golden,180.5,Kenya,2023-05-01,Spring\n'
            'Lizard,1,F,Green,0.5,Mexico,2023-05-03,Spring\n'
        )
        self.write_inputs(arrivals=arrivals)

        result = ZooPipeline(self.config).run()

        assert result.code_collisions == {"LI": ["Lion", "Lizard"]}
        assert "Species code LI is shared by Lion, Lizard" in caplog.text

    def test_invalid_bytes_do_not_drop_other_animals(self):
        """Test one undecodable arrivals line leaves the rest of the batch intact."""
        self.write_inputs(arrivals=None)
        good = b'Lion,2,F,Golden,150.0,Kenya,2023-06-10,Summer\n'
        bad = b'Lion,5,M,Golden,190.0,Z\xe9rich,2023-06-11,Summer\n'
        self.config.input.arrivals_path.write_bytes(good * 3 + bad + good * 3)

        result = ZooPipeline(self.config).run()

        assert result.accepted == 6
        assert result.rejected == 1
        assert self.read_report().startswith("Lion Habitat (6 animals):")

    def test_missing_catalog_gives_placeholder_names(self):
        self.write_inputs(catalog=None)

        pipeline = ZooPipeline(self.config)
        result = pipeline.run()

        assert result.report_written is True
        assert [a.name for a in pipeline.animals] == ["Unnamed Lion", "Unnamed Lion"]

    def test_missing_arrivals_writes_empty_report(self):
        self.write_inputs(arrivals=None)

        result = ZooPipeline(self.config).run()

        assert result.report_written is True
        assert result.accepted == 0
        assert self.read_report() == ""

    def test_unwritable_report_does_not_raise(self):
        self.write_inputs()
        blocker = self.temp_dir / "blocker"
        blocker.write_text("file")
        config = Config.create_test_config(
            self.temp_dir, report=ReportConfig(report_path=blocker / "zoo.txt")
        )

        result = ZooPipeline(config).run()

        assert result.report_written is False
        assert result.accepted == 2

    def test_stage_timings_recorded(self):
        self.write_inputs()

        result = ZooPipeline(self.config).run()

        assert set(result.stage_timings) == {
            "load_names", "parse_arrivals", "assign_names",
            "generate_ids", "organize_habitats", "write_report"
        }


class TestMain:
    """Test the command entry point."""

    def test_main_prints_confirmation(self, monkeypatch, tmp_path, capsys):
        (tmp_path / "names.txt").write_text(CATALOG, encoding="utf-8")
        (tmp_path / "arrivals.txt").write_text(ARRIVALS, encoding="utf-8")
        report_path = tmp_path / "report.txt"
        monkeypatch.setenv('ANIMAL_NAMES_PATH', str(tmp_path / "names.txt"))
        monkeypatch.setenv('ARRIVING_ANIMALS_PATH', str(tmp_path / "arrivals.txt"))
        monkeypatch.setenv('ZOO_REPORT_PATH', str(report_path))
        monkeypatch.delenv('ZOO_REPORT_SUMMARY', raising=False)
        monkeypatch.delenv('LOG_LEVEL', raising=False)

        assert main() == 0

        out = capsys.readouterr().out
        assert f"Zoo population report generated successfully in {report_path}" in out
        assert "Leo; ID: LI01" in report_path.read_text(encoding="utf-8")

    def test_main_with_invalid_config_returns_normally(self, monkeypatch, capsys):
        monkeypatch.setenv('LOG_LEVEL', 'LOUD')

        assert main() == 0
        assert "generated successfully" not in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__])
