"""Integration tests for full assembly generation."""

import json

import pytest

from gearclock.models.spec import ClockSpec, TrainSpec
from gearclock.assembly.builder import AssemblyBuilder, ViewMode
from gearclock.export.exporter import Exporter


@pytest.fixture(scope="module")
def spec():
    return ClockSpec()


@pytest.fixture(scope="module")
def builder(spec):
    builder = AssemblyBuilder(spec)
    builder.generate_parts()
    return builder


def child_names(assembly):
    return {name for name in assembly.objects if name != assembly.name}


class TestFullAssembly:
    """Integration tests for complete assembly."""

    def test_all_parts_generated(self, builder):
        assert len(builder.parts) == 11
        for part_id, part in builder.parts.items():
            assert part.val().isValid(), part_id

    def test_modeling_view(self, builder):
        assembly = builder.modeling()
        assert assembly.name == "desk_clock"
        assert child_names(assembly) == set(builder.parts)

    def test_modeling_places_gears(self, builder):
        assembly = builder.modeling(0.0)
        bb = assembly.objects["motor_gear"].toCompound().BoundingBox()
        # Pinion sits in the top layer over the motor axis
        assert bb.zmin == pytest.approx(25.0, abs=0.01)
        assert (bb.xmin + bb.xmax) / 2 == pytest.approx(55.2, abs=0.5)

    def test_animate_matches_modeling(self, builder):
        builder.animate(0.5)
        animated = builder.layout.parts["final_gear"].rotation
        builder.modeling(360.0)
        assert builder.layout.parts["final_gear"].rotation == pytest.approx(animated)

    def test_animate_rejects_bad_time(self, builder):
        with pytest.raises(ValueError):
            builder.build(ViewMode.animate, time=1.5)

    def test_build_dispatch(self, builder):
        assembly = builder.build("modeling", step=12.0)
        assert child_names(assembly) == set(builder.parts)
        assert builder.layout.parts["final_gear"].rotation[2] == pytest.approx(6.0)

    def test_print_layout(self, builder):
        assembly = builder.build(ViewMode.print_layout)
        names = child_names(assembly)
        assert "bearing" not in names
        assert len(names) == 10

        boxes = {
            name: assembly.objects[name].toCompound().BoundingBox()
            for name in names
        }
        for bb in boxes.values():
            assert bb.zmin == pytest.approx(0.0, abs=0.01)

        # No two parts overlap on the bed
        items = list(boxes.items())
        for i, (name_a, a) in enumerate(items):
            for name_b, b in items[i + 1:]:
                apart = (
                    a.xmax <= b.xmin or b.xmax <= a.xmin
                    or a.ymax <= b.ymin or b.ymax <= a.ymin
                )
                assert apart, f"{name_a} overlaps {name_b}"

    def test_bom(self, builder):
        bom = builder.get_bom()
        assert len(bom) == 11
        by_id = {entry["part_id"]: entry for entry in bom}
        assert not by_id["bearing"]["printed"]
        assert by_id["final_gear"]["dimensions"]["teeth"] == 36


class TestWithoutAccessories:
    """The clock without hand and enclosure."""

    def test_parts_omitted(self, spec):
        builder = AssemblyBuilder(spec.model_copy(update={"include_accessories": False}))
        model = builder.modeling()
        names = child_names(model)
        assert "hand" not in names
        assert "enclosure" not in names
        assert len(names) == 9


class TestHelicalTrain:
    """Meshing helical gears are built with opposite hands."""

    @pytest.fixture(scope="class")
    def helical_builder(self):
        spec = ClockSpec(train=TrainSpec(helix_angle=15.0), include_accessories=False)
        builder = AssemblyBuilder(spec)
        builder.generate_parts()
        return builder

    @staticmethod
    def placed(builder, part_id):
        placement = builder.layout.parts[part_id]
        return builder.parts[part_id].val().moved(placement.to_location())

    @pytest.mark.parametrize("step", [0.0, 7.3])
    @pytest.mark.parametrize("pair", [
        ("final_gear", "penultimate_gear"),
        ("penultimate_gear", "middle_gear"),
        ("middle_gear", "motor_gear"),
    ])
    def test_meshing_gears_do_not_overlap(self, helical_builder, pair, step):
        helical_builder.modeling(step)
        a = self.placed(helical_builder, pair[0])
        b = self.placed(helical_builder, pair[1])
        assert a.intersect(b).Volume() < 0.01


class TestExport:
    """Tests for Exporter."""

    def test_export(self, builder, tmp_path):
        assembly = builder.modeling()
        exporter = Exporter(tmp_path, ["stl"], facets=120)
        outputs = exporter.export(assembly, builder.parts, builder.metadata, builder.layout)

        assert (tmp_path / "parts" / "final_gear.stl").exists()
        assert (tmp_path / "assembly" / "full_assembly.stl").exists()
        assert outputs["bom.json"].exists()

        bom = json.loads((tmp_path / "bom.json").read_text())
        assert len(bom["parts"]) == 11

        manifest = json.loads((tmp_path / "assembly_manifest.json").read_text())
        assert manifest["resolution"]["facets"] == 120
        assert manifest["parts"]["clock_face"]["axis"] == "final"
        assert manifest["parts"]["final_gear"]["file"] == {"stl": "parts/final_gear.stl"}
        assert len(manifest["mates"]) == 7

    def test_angular_tolerance(self, tmp_path):
        exporter = Exporter(tmp_path, facets=400)
        assert exporter.angular_tolerance == pytest.approx(2 * 3.141592653589793 / 400)

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported format"):
            Exporter(tmp_path, ["obj"])
