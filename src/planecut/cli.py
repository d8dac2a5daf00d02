"""CLI entry point for planecut.

Usage:
    planecut run                                   # Run full pipeline
    planecut run-step split_plane -i '{...}'       # Run single step
    planecut info                                  # Show pipeline info
    planecut split contour.json --normal 1 0 0 --point 2 0 0
    planecut plot contour.json --normal 1 0 0 --point 2 0 0 -o split.png
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import typer
from rich.console import Console
from rich.table import Table

from planecut.core.logging import setup_logging

app = typer.Typer(name="planecut", help="Split closed planar contours along a plane")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


def _split_file(contour_file: Path, normal: Tuple[float, float, float], point: Tuple[float, float, float]):
    from planecut.contour.split import split_along_plane
    from planecut.core.errors import SplitError
    from planecut.utils.geometry import Plane, Vec3
    from planecut.utils.io import read_contour

    plane = Plane(normal=Vec3(*normal), point=Vec3(*point))
    try:
        contour = read_contour(contour_file)
        pieces = split_along_plane(contour, plane)
    except (SplitError, ValueError) as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(1)
    return contour, plane, pieces


@app.command()
def run(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Run the full pipeline."""
    setup_logging()
    from planecut.core.pipeline_runner import run_pipeline

    run_pipeline(config)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. split_plane)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from planecut.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    if input_json:
        input_data = json.loads(input_json)
    elif entry.inputs:
        input_data = dict(entry.inputs)
    else:
        required = step_cls.required_input_fields()
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  planecut run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)
        input_data = {}

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    output = step_instance.execute(step_input)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from planecut.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


@app.command()
def split(
    contour_file: Path = typer.Argument(..., exists=True, help="Contour JSON or x,y,z CSV"),
    normal: Tuple[float, float, float] = typer.Option((1.0, 0.0, 0.0), help="Plane normal"),
    point: Tuple[float, float, float] = typer.Option((0.0, 0.0, 0.0), help="Point on the plane"),
    output: Path = typer.Option(None, "--output", "-o", help="Write pieces as JSON"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Split a contour file along a plane and list the pieces."""
    setup_logging(log_level)
    from planecut.contour.split import piece_side
    from planecut.core.contracts import PieceRecord
    from planecut.utils.io import contour_to_record, write_pieces_json

    contour, plane, pieces = _split_file(contour_file, normal, point)

    table = Table(title=f"{contour_file.name}: {len(pieces)} piece(s)")
    table.add_column("#", style="dim")
    table.add_column("Side", style="cyan")
    table.add_column("Points", style="green")
    table.add_column("Area", style="yellow")
    table.add_column("Centroid", style="dim")

    records = []
    for i, piece in enumerate(pieces):
        c = piece.centroid()
        area = piece.signed_area()
        side = piece_side(piece, plane)
        table.add_row(str(i), side, str(len(piece)), f"{area:.6g}", f"({c.x:.4g}, {c.y:.4g}, {c.z:.4g})")
        records.append(PieceRecord(
            index=i, side=side, signed_area=area, centroid=c.to_list(), contour=contour_to_record(piece),
        ))
    console.print(table)

    if output:
        write_pieces_json(records, output)
        console.print(f"[green]Saved pieces -> {output}[/green]")


@app.command()
def plot(
    contour_file: Path = typer.Argument(..., exists=True, help="Contour JSON or x,y,z CSV"),
    normal: Tuple[float, float, float] = typer.Option((1.0, 0.0, 0.0), help="Plane normal"),
    point: Tuple[float, float, float] = typer.Option((0.0, 0.0, 0.0), help="Point on the plane"),
    output: Path = typer.Option(..., "--output", "-o", help="Image path (e.g. split.png)"),
) -> None:
    """Plot a contour, its split pieces, and the cut line."""
    setup_logging("WARNING")
    from planecut.utils.visualization import plot_split

    contour, plane, pieces = _split_file(contour_file, normal, point)
    plot_split(contour, pieces, plane, title=contour_file.name, save_path=output)
    console.print(f"[green]Saved plot -> {output}[/green]")


if __name__ == "__main__":
    app()
