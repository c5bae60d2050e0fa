import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from srcmapper import diagnostics
from srcmapper.config import InitOptions, WriteOptions
from srcmapper.file import File
from srcmapper.pipeline import Outcome, Pipeline
from srcmapper.processor.queue_manager import WorkQueue
from srcmapper.stages import InitStage, WriteStage
from srcmapper.utils.file_ops import OutputFS
from srcmapper.utils.gitignore import GitignoreSpec
from srcmapper.watcher import SourceWatcher

app = typer.Typer(
    name="srcmapper",
    help="srcmapper - attach, load and write source maps for JS and CSS files",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

EXTENSIONS = {".js", ".mjs", ".cjs", ".jsx", ".css"}

HELP_TEXT = """
[bold cyan]srcmapper[/bold cyan] - source map pipeline for build outputs

[bold]COMMANDS[/bold]
  [cyan]build[/cyan]     Load or create maps and write them next to the output
              srcmapper build src -o dist              # Inline maps
              srcmapper build src -o dist -m ../maps   # External .map files
  [cyan]inspect[/cyan]   Show the map a file would be given
  [cyan]watch[/cyan]     Rebuild files as they change

[bold]LOADING[/bold]
  --load-maps      Read existing inline or external maps
  --identity-map   Generate token-level maps for JS/CSS without one

[bold]DEBUGGING[/bold]
  --debug or SRCMAPPER_DEBUG=srcmapper:*   Report missing source content
"""


def _configure_logging(debug: bool) -> None:
    if debug:
        diagnostics.enable("srcmapper:*")
    logging.basicConfig(
        level=logging.INFO if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


def _collect(sources: list[Path], out: Path) -> list[File]:
    files: list[File] = []
    for source in sources:
        resolved = source.resolve()
        if not resolved.exists():
            console.print(f"[red]Error:[/red] Path {resolved} does not exist")
            raise typer.Exit(1)
        if resolved.is_dir():
            extra = []
            if out.resolve().is_relative_to(resolved):
                extra.append(f"{out.resolve().relative_to(resolved).as_posix()}/")
            paths = list(GitignoreSpec(resolved, extra).walk(EXTENSIONS))
            root = resolved
        else:
            paths = [resolved]
            root = resolved.parent
        for path in paths:
            files.append(File(path=path, base=root, cwd=Path.cwd(), contents=path.read_bytes()))
    return files


def _write_outcomes(outcomes: list[Outcome], out: Path) -> int:
    failures = 0
    for outcome in outcomes:
        if outcome.error is not None:
            failures += 1
            console.print(f"[red]✗[/red] {outcome.file.path}: {outcome.error}")
            continue
        target = OutputFS(outcome.file.base or outcome.file.cwd, out).write(outcome.file)
        if target is not None:
            console.print(f"[green]✓[/green] {target}")
    return failures


def _pipeline(
    maps: str | None,
    load_maps: bool,
    identity_map: bool,
    include_content: bool,
    source_root: str | None,
    url_prefix: str | None,
    add_comment: bool,
    debug: bool,
) -> Pipeline:
    return Pipeline(
        InitStage(InitOptions(load_maps=load_maps, identity_map=identity_map, debug=debug)),
        WriteStage(WriteOptions(
            dest_path=maps,
            add_comment=add_comment,
            include_content=include_content,
            source_root=source_root,
            source_mapping_url_prefix=url_prefix,
            debug=debug,
        )),
    )


LoadMapsOpt = Annotated[bool, typer.Option("--load-maps", "-l", help="Load existing inline or external maps")]
IdentityOpt = Annotated[bool, typer.Option("--identity-map", "-i", help="Generate token-level maps")]
MapsOpt = Annotated[str | None, typer.Option("--maps", "-m", help="External map directory, relative to each file")]
NoContentOpt = Annotated[bool, typer.Option("--no-content", help="Leave sourcesContent out of written maps")]
SourceRootOpt = Annotated[str | None, typer.Option("--source-root", help="sourceRoot to set on written maps")]
PrefixOpt = Annotated[str | None, typer.Option("--url-prefix", help="Prefix for external sourceMappingURL comments")]
NoCommentOpt = Annotated[bool, typer.Option("--no-comment", help="Do not add sourceMappingURL comments")]
DebugOpt = Annotated[bool, typer.Option("--debug", "-d", help="Report missing source content")]


@app.command(help="Load or create maps for files and write the results to --out")
def build(
    sources: Annotated[list[Path], typer.Argument(help="Files or directories")],
    out: Annotated[Path, typer.Option("--out", "-o", help="Output directory")],
    maps: MapsOpt = None,
    load_maps: LoadMapsOpt = False,
    identity_map: IdentityOpt = False,
    no_content: NoContentOpt = False,
    source_root: SourceRootOpt = None,
    url_prefix: PrefixOpt = None,
    no_comment: NoCommentOpt = False,
    debug: DebugOpt = False,
    concurrency: Annotated[int, typer.Option("--concurrency", "-c", help="Files processed in parallel")] = 4,
) -> None:
    _configure_logging(debug)
    files = _collect(sources, out)
    if not files:
        console.print("[dim]No JS or CSS files found[/dim]")
        return

    pipeline = _pipeline(maps, load_maps, identity_map, not no_content, source_root, url_prefix, not no_comment, debug)
    queue = WorkQueue(pipeline, concurrency=concurrency)
    queue.extend(files)
    outcomes = asyncio.run(queue.process())

    failures = _write_outcomes(outcomes, out)
    written = sum(1 for o in outcomes if o.ok)
    console.print(f"\n[bold]{written}[/bold] files written, [bold]{failures}[/bold] failed")
    if failures:
        raise typer.Exit(1)


@app.command(name="inspect", help="Show the source map a file would be given")
def inspect_file(
    path: Annotated[Path, typer.Argument(help="File to inspect")],
    load_maps: Annotated[bool, typer.Option("--load-maps/--no-load-maps", help="Load existing maps")] = True,
    identity_map: IdentityOpt = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the map as JSON")] = False,
    debug: DebugOpt = False,
) -> None:
    _configure_logging(debug)
    resolved = path.resolve()
    if not resolved.is_file():
        console.print(f"[red]Error:[/red] File {resolved} does not exist")
        raise typer.Exit(1)

    file = File(path=resolved, base=resolved.parent, cwd=Path.cwd(), contents=resolved.read_bytes())
    InitStage(InitOptions(load_maps=load_maps, identity_map=identity_map, debug=debug))(file)
    source_map = file.source_map
    if source_map is None:
        console.print(f"[red]Error:[/red] No source map for {resolved}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(source_map, indent=2, ensure_ascii=False))
        return

    console.print(f"[bold]file:[/bold]       {source_map.get('file', '')}")
    console.print(f"[bold]sourceRoot:[/bold] {source_map.get('sourceRoot') or '[dim]none[/dim]'}")
    console.print(f"[bold]names:[/bold]      {len(source_map['names'])}")
    console.print(f"[bold]mappings:[/bold]   {len(source_map['mappings'])} chars\n")

    table = Table(title="Sources")
    table.add_column("#", style="dim")
    table.add_column("Source", style="cyan")
    table.add_column("Content", style="green")
    contents = source_map.get("sourcesContent") or []
    for i, source in enumerate(source_map["sources"]):
        content = contents[i] if i < len(contents) else None
        table.add_row(str(i), source, f"{len(content)} chars" if content is not None else "[red]missing[/red]")
    console.print(table)


@app.command(help="Build once, then rebuild files as they change")
def watch(
    source: Annotated[Path, typer.Argument(help="Directory to watch")],
    out: Annotated[Path, typer.Option("--out", "-o", help="Output directory")],
    maps: MapsOpt = None,
    load_maps: LoadMapsOpt = False,
    identity_map: IdentityOpt = False,
    no_content: NoContentOpt = False,
    source_root: SourceRootOpt = None,
    url_prefix: PrefixOpt = None,
    no_comment: NoCommentOpt = False,
    debug: DebugOpt = False,
) -> None:
    _configure_logging(debug)
    root = source.resolve()
    if not root.is_dir():
        console.print(f"[red]Error:[/red] {root} is not a directory")
        raise typer.Exit(1)

    pipeline = _pipeline(maps, load_maps, identity_map, not no_content, source_root, url_prefix, not no_comment, debug)
    _write_outcomes(list(pipeline.run(_collect([root], out))), out)

    def on_change(path: Path) -> None:
        file = File(path=path, base=root, cwd=Path.cwd(), contents=path.read_bytes())
        _write_outcomes(list(pipeline.run([file])), out)

    extra = [f"{out.resolve().relative_to(root).as_posix()}/"] if out.resolve().is_relative_to(root) else []
    watcher = SourceWatcher(GitignoreSpec(root, extra), EXTENSIONS, on_change)
    watcher.start(root)
    console.print(f"[bold blue]srcmapper[/bold blue] watching {root}")
    console.print("Press Ctrl+C to stop\n")
    try:
        while watcher.is_alive():
            time.sleep(0.5)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopping...[/yellow]")
    finally:
        watcher.stop()


@app.command(name="help", help="Show detailed help")
def show_help() -> None:
    console.print(Panel(HELP_TEXT, title="srcmapper Help", border_style="blue"))


if __name__ == "__main__":
    app()
