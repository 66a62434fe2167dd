"""CLI entry point for the Alignment Visualization Server."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from alignviz.config import get_settings
from alignviz.logging_config import configure_logging

app = typer.Typer(
    name="alignviz",
    help="Alignment visualization CLI - Export schema-mapping diagrams",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _load_update(graph_file: Path, deterministic: bool):
    """Load a graph file and wrap it in a visualization update."""
    from alignviz.services.graph_loader import GraphFormatError, load_alignment_file
    from alignviz.services.visualization import AlignmentVisualizationUpdate

    try:
        snapshot = load_alignment_file(graph_file)
    except GraphFormatError as e:
        err_console.print(f"[red]✗ Invalid alignment file:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    return AlignmentVisualizationUpdate(
        worksheet=snapshot.worksheet,
        graph=snapshot.graph,
        workspace_id=snapshot.workspace_id,
        deterministic=deterministic or get_settings().deterministic_ordering,
    )


GraphFileArgument = typer.Argument(
    ...,
    help="Path to the alignment graph JSON file",
    exists=True,
    file_okay=True,
    dir_okay=False,
)


@app.callback()
def main():
    """Configure logging before any command runs."""
    configure_logging()


@app.command()
def export(
    graph_file: Path = GraphFileArgument,
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the document to this file instead of stdout",
    ),
    publish: bool = typer.Option(
        False,
        "--publish",
        help="Write the document into the publish directory",
    ),
    deterministic: bool = typer.Option(
        False,
        "--deterministic",
        help="Sort non-anchor nodes and links by id",
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        help="Pretty-print with this indent",
        min=0,
    ),
):
    """Export the visualization document for an alignment graph."""
    from alignviz.services.published_metadata import AlignmentVisualizationMetadata, PublishPathError
    from alignviz.services.visualization import DocumentEncodingError

    if publish and output is not None:
        err_console.print("[red]✗ --publish and --output cannot be used together[/red]")
        raise typer.Exit(2)

    update = _load_update(graph_file, deterministic)
    if indent is None:
        indent = get_settings().json_indent

    if publish:
        try:
            path = AlignmentVisualizationMetadata().publish(update, indent=indent)
        except (DocumentEncodingError, PublishPathError, OSError) as e:
            err_console.print(f"[red]✗ Export failed:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        err_console.print(f"[green]✓ Published[/green] {path}")
        return

    if output is not None:
        with open(output, "w", encoding="utf-8") as f:
            written = update.generate_json(f, indent=indent)
        if not written:
            output.unlink(missing_ok=True)
            err_console.print("[red]✗ Export failed, nothing written[/red]")
            raise typer.Exit(1)
        err_console.print(f"[green]✓ Wrote[/green] {output}")
        return

    try:
        content = update.to_json(indent=indent)
    except DocumentEncodingError as e:
        err_console.print(f"[red]✗ Export failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    typer.echo(content)


@app.command()
def inspect(
    graph_file: Path = GraphFileArgument,
    deterministic: bool = typer.Option(
        False,
        "--deterministic",
        help="Sort non-anchor nodes and links by id",
    ),
):
    """Show anchors, nodes and links of an alignment's visualization."""
    update = _load_update(graph_file, deterministic)
    document = update.build()

    console.print(f"\n[bold]Alignment: {document.alignment_id}[/bold]")
    console.print(f"  Worksheet: {document.worksheet_id}")

    table = Table(title="Anchors & Nodes")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Label", style="green")
    table.add_column("Node ID")
    table.add_column("Type")
    table.add_column("Header")

    for anchor in document.anchors:
        node_type = "placeholder" if anchor.is_placeholder else anchor.node_type
        table.add_row(str(anchor.index), anchor.label, anchor.node_id, node_type, anchor.hnode_id)
    for node in document.nodes:
        table.add_row(str(node.index), node.label, node.node_id, node.node_type, "")

    console.print(table)

    links_table = Table(title="Links")
    links_table.add_column("ID", style="cyan")
    links_table.add_column("Source", justify="right")
    links_table.add_column("Target", justify="right")
    links_table.add_column("Label", style="green")
    links_table.add_column("Type")
    links_table.add_column("Collection")

    for record in document.links:
        links_table.add_row(
            record.id, str(record.source), str(record.target), record.label, record.link_type, "links"
        )
    for record in document.edge_links:
        links_table.add_row(
            record.id, str(record.source), str(record.target), record.label, record.link_type, "edgeLinks"
        )

    console.print(links_table)

    if document.issues:
        console.print(f"\n[yellow]Dropped links ({len(document.issues)})[/yellow]")
        for issue in document.issues:
            console.print(f"  {escape(str(issue))}")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8003, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the API server."""
    import uvicorn

    console.print("[green]Starting Alignment Visualization API...[/green]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    console.print(f"  Docs: http://localhost:{port}/api/v1/docs")

    uvicorn.run(
        "alignviz.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
