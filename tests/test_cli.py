"""Tests for the command line interface."""

import os
import subprocess
import sys
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from gearclock.cli import app

EXAMPLE_SPEC = Path(__file__).parent.parent / "examples" / "desk_clock.yaml"
SRC_DIR = Path(__file__).parent.parent / "src"


@pytest.fixture
def runner():
    return CliRunner()


class TestValidate:
    """Tests for the validate command."""

    def test_example_spec(self, runner):
        result = runner.invoke(app, ["validate", str(EXAMPLE_SPEC)])
        assert result.exit_code == 0
        assert "Specification valid: desk_clock" in result.output
        assert "motor 12" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_spec(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"train": {"motor_teeth": 10}}))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "must be 2x motor_teeth" in result.output


class TestGear:
    """Tests for the gear command."""

    def test_dimensions(self, runner):
        result = runner.invoke(app, ["gear", "--teeth", "12", "--width", "3", "--bore", "8"])
        assert result.exit_code == 0
        assert "Spur Gear 12T" in result.output
        assert "pitch_diameter: 27.600" in result.output
        assert "tip_diameter: 32.200" in result.output

    def test_bore_too_large(self, runner):
        result = runner.invoke(app, ["gear", "--teeth", "12", "--bore", "30"])
        assert result.exit_code == 1
        assert "root diameter" in result.output

    def test_export(self, runner, tmp_path):
        out = tmp_path / "gear.stl"
        result = runner.invoke(app, ["gear", "--teeth", "10", "--no-optimize", "-o", str(out)])
        assert result.exit_code == 0
        assert out.exists()

    def test_unsupported_output(self, runner, tmp_path):
        result = runner.invoke(app, ["gear", "-o", str(tmp_path / "gear.obj")])
        assert result.exit_code == 1
        assert "Unsupported format" in result.output


class TestTrain:
    """Tests for the train command."""

    def test_defaults(self, runner):
        result = runner.invoke(app, ["train"])
        assert result.exit_code == 0
        assert "penultimate" in result.output
        assert "24/12" in result.output
        assert "final/penultimate: centre distance 55.20 mm" in result.output

    def test_step(self, runner):
        result = runner.invoke(app, ["train", str(EXAMPLE_SPEC), "--step", "10"])
        assert result.exit_code == 0
        final_line = next(line for line in result.output.splitlines() if line.startswith("final "))
        assert "5.000" in final_line


class TestBuild:
    """Tests for the build command (argument handling only)."""

    def test_unsupported_format(self, runner, tmp_path):
        result = runner.invoke(app, ["build", "-o", str(tmp_path), "--formats", "obj"])
        assert result.exit_code == 1
        assert "Unsupported format" in result.output

    def test_bad_animation_time(self, runner, tmp_path):
        result = runner.invoke(
            app, ["build", "--mode", "animate", "--time", "2", "-o", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "animation time" in result.output

    def test_unknown_mode(self, runner, tmp_path):
        result = runner.invoke(app, ["build", "--mode", "exploded", "-o", str(tmp_path)])
        assert result.exit_code != 0


class TestListParts:
    """Tests for the list-parts command."""

    def test_lists_parts(self, runner):
        result = runner.invoke(app, ["list-parts"])
        assert result.exit_code == 0
        for name in ("base_plate", "final_gear", "clock_face", "enclosure"):
            assert name in result.output


class TestStartup:
    """The CLI module loads without the CAD kernel."""

    def test_import_skips_cadquery(self):
        code = "import sys, gearclock.cli; print('cadquery' in sys.modules)"
        env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}
        result = subprocess.run(
            [sys.executable, "-c", code], capture_output=True, text=True, env=env, check=True
        )
        assert result.stdout.strip() == "False"
