"""CLI entry point for the gear clock generator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="gearclock",
    help="Gear clock generator - builds 3D-printable CAD files for a gear-driven desk clock",
)


class ViewMode(str, Enum):
    """Scene view to build."""
    modeling = "modeling"
    print_layout = "print"
    animate = "animate"


def _load_spec(spec_file: Optional[Path]):
    """Load a spec file, or the defaults when no file is given."""
    from pydantic import ValidationError
    from .models import ClockSpec

    if spec_file is None:
        return ClockSpec()

    if not spec_file.exists():
        typer.echo(f"Error: Specification file not found: {spec_file}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Loading specification from {spec_file}...")
    try:
        return ClockSpec.from_yaml(spec_file)
    except ValidationError as e:
        typer.echo(f"Validation error: {e}", err=True)
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def build(
    spec_file: Optional[Path] = typer.Argument(None, help="Path to YAML specification file"),
    mode: ViewMode = typer.Option(ViewMode.modeling, "--mode", help="Scene view to build"),
    step: float = typer.Option(0.0, "--step", help="Gear train step for the modeling view"),
    time: float = typer.Option(0.0, "--time", help="Animation time in [0, 1] for the animate view"),
    output_dir: Path = typer.Option(
        Path("output"), "-o", "--output", help="Output directory for generated files"
    ),
    formats: str = typer.Option(
        "stl,step", "--formats", help="Comma-separated export formats (stl,step)"
    ),
    no_accessories: bool = typer.Option(
        False, "--no-accessories", help="Leave out the hand and enclosure"
    ),
) -> None:
    """Build the clock and export parts, assembly and BOM."""
    from .assembly.builder import AssemblyBuilder
    from .export.exporter import Exporter

    spec = _load_spec(spec_file)
    if no_accessories:
        spec = spec.model_copy(update={"include_accessories": False})

    export_formats = [fmt.strip().lower() for fmt in formats.split(",") if fmt.strip()]
    try:
        exporter = Exporter(
            output_dir,
            export_formats,
            facets=spec.render.facets,
            linear_tolerance=spec.render.linear_tolerance,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Building {mode.value} view: {spec.clock.name}")
    builder = AssemblyBuilder(spec)
    try:
        assembly = builder.build(mode.value, step=step, time=time)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    outputs = exporter.export(assembly, builder.parts, builder.metadata, builder.layout)
    typer.echo(f"Wrote {len(outputs)} files to {output_dir}")


@app.command()
def validate(
    spec_file: Path = typer.Argument(..., help="Path to YAML specification file"),
) -> None:
    """Validate specification file without building."""
    from .models import KinematicModel

    spec = _load_spec(spec_file)
    train = spec.train

    errors = KinematicModel.create_clock(train).verify_mesh_lock()
    if errors:
        for error in errors:
            typer.echo(f"Validation error: {error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Specification valid: {spec.clock.name}")
    typer.echo(f"  Module: {train.module} mm, width {train.width} mm")
    typer.echo(
        f"  Teeth: motor {train.motor_teeth}, "
        f"middle {train.middle_large_teeth}/{train.middle_small_teeth}, "
        f"penultimate {train.penultimate_large_teeth}/{train.penultimate_small_teeth}, "
        f"final {train.final_teeth}"
    )
    typer.echo(f"  Face: {spec.face.diameter} mm, font {spec.face.font}")
    typer.echo(f"  Accessories: {'yes' if spec.include_accessories else 'no'}")


@app.command()
def gear(
    module: float = typer.Option(2.3, "--module", help="Gear module in mm"),
    teeth: int = typer.Option(12, "--teeth", help="Number of teeth"),
    width: float = typer.Option(4.0, "--width", help="Face width in mm"),
    bore: float = typer.Option(0.0, "--bore", help="Bore diameter in mm"),
    pressure_angle: float = typer.Option(20.0, "--pressure-angle", help="Pressure angle in degrees"),
    helix_angle: float = typer.Option(0.0, "--helix-angle", help="Helix angle in degrees"),
    no_optimize: bool = typer.Option(False, "--no-optimize", help="Do not cut weight-reduction holes"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output STL/STEP file (default: print dimensions only)"
    ),
) -> None:
    """Generate a single spur gear and print its dimensions."""
    import cadquery as cq
    from pydantic import ValidationError
    from .models import GearSpec
    from .generators import SpurGearGenerator

    try:
        spec = GearSpec(
            module=module,
            tooth_number=teeth,
            width=width,
            bore=bore,
            pressure_angle=pressure_angle,
            helix_angle=helix_angle,
            optimize=not no_optimize,
        )
    except ValidationError as e:
        typer.echo(f"Validation error: {e}", err=True)
        raise typer.Exit(1)

    generator = SpurGearGenerator(spec)
    metadata = generator.get_metadata()

    typer.echo(f"{metadata.name}")
    for key, value in metadata.dimensions.items():
        typer.echo(f"  {key}: {value:.3f}")

    if output is not None:
        suffix = output.suffix.lower()
        if suffix not in (".stl", ".step"):
            typer.echo(f"Error: Unsupported format: {output.suffix}", err=True)
            raise typer.Exit(1)
        cq.exporters.export(generator.generate(), str(output), exportType=suffix[1:].upper())
        typer.echo(f"Exported to {output}")


@app.command()
def train(
    spec_file: Optional[Path] = typer.Argument(None, help="Path to YAML specification file"),
    step: float = typer.Option(0.0, "--step", help="Gear train step"),
) -> None:
    """Print the gear train: teeth, rotation factors and rotation at a step."""
    from .models import KinematicModel
    from .generators import LayoutCalculator

    spec = _load_spec(spec_file)
    model = KinematicModel.create_clock(spec.train)
    layout = LayoutCalculator.calculate_train_layout(spec)

    typer.echo(f"{'stage':<12} {'teeth':<8} {'factor':>8} {'phase':>8} {'rotation':>10}  axis")
    for name in ("motor", "middle", "penultimate", "final"):
        stage = model.stages[name]
        teeth = "/".join(str(t) for t in stage.teeth)
        x, y = layout.axis(name)
        typer.echo(
            f"{name:<12} {teeth:<8} {stage.factor:>8.3f} {stage.phase:>8.3f} "
            f"{model.rotation(name, step):>10.3f}  ({x:.1f}, {y:.1f})"
        )

    typer.echo("")
    for pair, distance in layout.center_distances.items():
        typer.echo(f"  {pair}: centre distance {distance:.2f} mm")


@app.command()
def list_parts() -> None:
    """List the parts of the clock."""
    typer.echo("Clock parts:\n")

    parts = [
        ("base_plate", "Plate carrying the train, with axle bosses and mounting holes"),
        ("friction_reducer", "Housing for the 608 bearing under the final gear"),
        ("bearing", "608 skate bearing (purchased, not printed)"),
        ("motor_block", "Holder for the N20 gear motor"),
        ("motor_gear", "Motor pinion with D-shaped bore"),
        ("middle_gear", "Middle compound gear"),
        ("penultimate_gear", "Penultimate compound gear"),
        ("final_gear", "Final gear with face spindle"),
        ("clock_face", "Dial with numerals and tick marks"),
        ("hand", "Fixed pointer (accessory)"),
        ("enclosure", "Frame around the base plate (accessory)"),
    ]

    for name, description in parts:
        typer.echo(f"  {name:<20} {description}")

    typer.echo("\nUsage: gearclock build [SPEC] --mode modeling|print|animate")


if __name__ == "__main__":
    app()
