"""Command-line interface for meshdecode."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from meshdecode.core import Config, ConfigurationError, MeshDecodeError, MeshFormat
from meshdecode.processing import load_mesh, save_mesh
from meshdecode.utils import get_logger, log_decode_result, setup_logging

app = typer.Typer(
    name="meshdecode",
    help="Decode STL and OFF/COFF files into triangle meshes",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)

FORMAT_CHOICES = {
    "stl": "stl",
    "stl_ascii": MeshFormat.STL_ASCII,
    "stl_binary": MeshFormat.STL_BINARY,
    "off": MeshFormat.OFF,
}


def _load_config(config: Optional[Path]) -> Config:
    try:
        cfg = Config.from_toml(config) if config else Config()
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    setup_logging(cfg.logging)
    return cfg


def _resolve_format(fmt: Optional[str]):
    if fmt is None:
        return None
    if fmt.lower() not in FORMAT_CHOICES:
        console.print(f"[red]Unknown format: {fmt}[/red]")
        console.print(f"Valid formats: {', '.join(FORMAT_CHOICES)}")
        raise typer.Exit(1)
    return FORMAT_CHOICES[fmt.lower()]


def _fmt_vec(v) -> str:
    return f"[{v[0]:.3f}, {v[1]:.3f}, {v[2]:.3f}]"


@app.command()
def info(
    mesh_file: Path = typer.Argument(
        ...,
        exists=True,
        help="Path to STL or OFF file",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Force a format (stl, stl_ascii, stl_binary, off)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Decode a mesh file and display information."""
    cfg = _load_config(config)
    mesh_format = _resolve_format(fmt)

    try:
        mesh = load_mesh(mesh_file, fmt=mesh_format, config=cfg.decoder)
    except MeshDecodeError as e:
        log_decode_result(logger, mesh_file, error=e)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Mesh Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("File", escape(str(mesh_file)))
    table.add_row("Format", mesh.source_format.value if mesh.source_format else "unknown")
    table.add_row("Triangles", f"{mesh.triangle_count:,}")
    table.add_row("Corners", f"{mesh.vertex_count:,}")
    table.add_row("Colors", "yes" if mesh.has_colors else "no")
    table.add_row(
        "Bounding Box",
        f"{_fmt_vec(mesh.bounding_box.min)} to {_fmt_vec(mesh.bounding_box.max)}",
    )
    extents = mesh.bounding_box.extents
    table.add_row("Size", f"{extents[0]:.3f} x {extents[1]:.3f} x {extents[2]:.3f}")
    table.add_row("Sphere Radius", f"{mesh.bounding_sphere.radius:.3f}")

    console.print(table)


@app.command()
def convert(
    mesh_file: Path = typer.Argument(
        ...,
        exists=True,
        help="Path to STL or OFF file",
    ),
    output: Path = typer.Argument(
        ...,
        help="Output STL file",
    ),
    ascii: bool = typer.Option(
        False,
        "--ascii",
        "-a",
        help="Write ASCII instead of binary STL",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Force an input format (stl, stl_ascii, stl_binary, off)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Decode a mesh file and write it back out as centered STL."""
    cfg = _load_config(config)
    mesh_format = _resolve_format(fmt)

    try:
        mesh = load_mesh(mesh_file, fmt=mesh_format, config=cfg.decoder)
    except MeshDecodeError as e:
        log_decode_result(logger, mesh_file, error=e)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if mesh.triangle_count == 0:
        console.print("[yellow]Mesh has no triangles, nothing written[/yellow]")
        raise typer.Exit(1)

    save_mesh(mesh, output, ascii=ascii)
    log_decode_result(logger, mesh_file, mesh=mesh)
    console.print(
        f"Wrote {mesh.triangle_count:,} triangles to [cyan]{output}[/cyan]"
    )


@app.command()
def formats() -> None:
    """List supported input formats."""
    table = Table(title="Supported Formats")
    table.add_column("Format", style="cyan")
    table.add_column("Extension")
    table.add_column("Notes")

    table.add_row("stl_ascii", ".stl", "Detected by a leading 'solid' keyword")
    table.add_row("stl_binary", ".stl", "80-byte header, little-endian records")
    table.add_row("off", ".off", "OFF/COFF polygons, optional per-face color")

    console.print(table)


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
